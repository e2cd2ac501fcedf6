# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Helper services used by the charmkit CLI commands."""

from __future__ import annotations

import json
from collections.abc import Iterable

from ..errors import CharmkitError
from ..hooks import ReconcileResult, reconcile_hooks
from ..probe import CapabilityDescriptor, GoCompiler, ProbeCompiler, probe_capabilities
from .options import CharmCLIOptions
from .shared import CLIError, CLILogger


def default_compiler(options: CharmCLIOptions) -> ProbeCompiler:
    """Return the compile collaborator used by CLI commands."""

    return GoCompiler(options.config.probe.go_executable)


def perform_inspect(options: CharmCLIOptions) -> CapabilityDescriptor:
    """Probe the charm directory for its registered capabilities.

    Raises:
        CLIError: Raised when the probe fails.
    """

    try:
        return probe_capabilities(
            options.charm_dir,
            compiler=default_compiler(options),
            config=options.config,
        )
    except CharmkitError as exc:
        raise CLIError(str(exc)) from exc


def perform_write_hooks(
    options: CharmCLIOptions,
    hook_names: Iterable[str],
) -> ReconcileResult:
    """Reconcile the charm's hooks directory against ``hook_names``.

    Raises:
        CLIError: Raised when reconciliation fails.
    """

    try:
        return reconcile_hooks(
            options.hooks_dir,
            hook_names,
            verbose=options.verbose,
            use_emoji=options.emoji,
        )
    except CharmkitError as exc:
        raise CLIError(str(exc)) from exc


def perform_build(options: CharmCLIOptions) -> ReconcileResult:
    """Probe the charm and write the hooks it registers."""

    descriptor = perform_inspect(options)
    return perform_write_hooks(options, descriptor.hooks)


def emit_reconcile_summary(result: ReconcileResult, *, logger: CLILogger) -> None:
    """Report what a reconciliation pass changed."""

    if result.skipped:
        skipped = ", ".join(str(path) for path in result.skipped)
        logger.warn(f"Left unregistered hooks in place: {skipped}")
    if not result.changed:
        logger.ok(f"Hooks up to date ({len(result.kept)} registered)")
        return
    logger.ok(f"Created {len(result.created)} hooks, removed {len(result.removed)} hooks")


def render_descriptor(descriptor: CapabilityDescriptor) -> str:
    """Return the descriptor as indented JSON in the probe's layout."""

    return json.dumps(descriptor.to_wire(), indent=2, sort_keys=True)


__all__ = [
    "default_compiler",
    "emit_reconcile_summary",
    "perform_build",
    "perform_inspect",
    "perform_write_hooks",
    "render_descriptor",
]
