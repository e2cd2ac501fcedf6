# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Discover a charm's registered capabilities by building and running a probe."""

from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError

from ..config import CharmkitConfig
from ..errors import NoHooksRegisteredError, ProbeBuildError, ProbeOutputError, ProbeRunError
from ..logging import verbose as log_verbose
from ..process_utils import SubprocessExecutionError, run_command
from .compiler import GoCompiler, ProbeCompiler, executable_path
from .models import CapabilityDescriptor
from .template import PROBE_NAME, render_probe_source


def probe_capabilities(
    charm_dir: Path,
    *,
    compiler: ProbeCompiler | None = None,
    config: CharmkitConfig | None = None,
) -> CapabilityDescriptor:
    """Return the hooks, relations and config options ``charm_dir`` registers.

    The charm's own registration code is compiled into a throwaway ``inspect``
    binary, executed, and its JSON output parsed. The binary is removed before
    returning, whatever the outcome.

    Args:
        charm_dir: Charm directory the probe is built in.
        compiler: Compile collaborator. Defaults to :class:`GoCompiler`.
        config: Probe import paths and output settings.

    Returns:
        CapabilityDescriptor: Capabilities reported by the probe.

    Raises:
        ProbeBuildError: When the probe cannot be compiled.
        ProbeRunError: When the probe cannot be started or exits non-zero.
        ProbeOutputError: When the probe output is not a capability document.
        NoHooksRegisteredError: When the charm registers no hooks.
    """

    settings = config or CharmkitConfig()
    verbose = settings.output.verbose
    use_emoji = settings.output.emoji
    builder = compiler or GoCompiler(settings.probe.go_executable)

    source = render_probe_source(settings.probe)
    inspect_path = executable_path(charm_dir, PROBE_NAME)
    log_verbose(f"building {inspect_path}", enabled=verbose, use_emoji=use_emoji)
    try:
        try:
            builder.compile(charm_dir, PROBE_NAME, source, optimize=settings.probe.optimize)
        except ProbeBuildError as exc:
            raise ProbeBuildError(f"cannot build hook inspection code: {exc}", path=exc.path) from exc
        output = _run_probe(inspect_path)
    finally:
        inspect_path.unlink(missing_ok=True)

    descriptor = parse_probe_output(output, path=inspect_path)
    log_verbose(f"registered hooks: {sorted(descriptor.hooks)}", enabled=verbose, use_emoji=use_emoji)
    log_verbose(f"{len(descriptor.relations)} registered relations", enabled=verbose, use_emoji=use_emoji)
    log_verbose(f"{len(descriptor.config)} registered config options", enabled=verbose, use_emoji=use_emoji)
    return descriptor


def _run_probe(inspect_path: Path) -> bytes:
    """Execute the probe, returning stdout; stderr goes straight to the operator."""

    try:
        completed = run_command([str(inspect_path.absolute())], capture_stdout=True, text=False)
    except SubprocessExecutionError as exc:
        raise ProbeRunError(f"failed to run inspect: {exc}", path=inspect_path) from exc
    except OSError as exc:
        raise ProbeRunError(f"failed to run inspect: {exc}", path=inspect_path) from exc
    return completed.stdout or b""


def parse_probe_output(output: str | bytes, *, path: Path | None = None) -> CapabilityDescriptor:
    """Parse the probe's JSON document into a :class:`CapabilityDescriptor`.

    Raises:
        ProbeOutputError: When ``output`` is not a valid capability document,
            including output that is not UTF-8.
        NoHooksRegisteredError: When the document lists no hooks.
    """

    if isinstance(output, bytes):
        try:
            output = output.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ProbeOutputError(f"cannot unmarshal inspect output {output!r}: {exc}", path=path) from exc
    try:
        descriptor = CapabilityDescriptor.model_validate_json(output)
    except ValidationError as exc:
        raise ProbeOutputError(f"cannot unmarshal inspect output {output!r}: {exc}", path=path) from exc
    if not descriptor.hooks:
        raise NoHooksRegisteredError("no hooks registered", path=path)
    return descriptor


__all__ = ["parse_probe_output", "probe_capabilities"]
