# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Compile collaborators that turn probe source into an executable."""

from __future__ import annotations

import os
import shutil
import stat
from pathlib import Path
from typing import Protocol, runtime_checkable

from ..errors import ProbeBuildError
from ..process_utils import SubprocessExecutionError, run_command


@runtime_checkable
class ProbeCompiler(Protocol):
    """Build ``source`` into ``<charm_dir>/bin/<output_name>``."""

    def compile(self, charm_dir: Path, output_name: str, source: str, *, optimize: bool) -> None:
        """Compile ``source`` or raise :class:`ProbeBuildError`."""
        ...


def executable_path(charm_dir: Path, output_name: str) -> Path:
    """Return where compilers place the executable named ``output_name``."""

    return charm_dir / "bin" / output_name


class GoCompiler:
    """Build a single-file Go ``main`` package inside the charm's GOPATH."""

    def __init__(self, go_executable: str = "go") -> None:
        self._go = go_executable

    def compile(self, charm_dir: Path, output_name: str, source: str, *, optimize: bool) -> None:
        """Write ``source`` under ``src/<output_name>`` and run ``go build``.

        ``src/<output_name>`` must not exist beforehand. The generated source
        directory is removed once the build finishes, whether or not it
        succeeded.

        Raises:
            ProbeBuildError: When the toolchain is missing or the build fails.
        """

        if shutil.which(self._go) is None:
            raise ProbeBuildError(f"Go toolchain {self._go!r} is required to build {output_name}")

        source_dir = charm_dir / "src" / output_name
        binary = executable_path(charm_dir, output_name)
        if source_dir.exists() or source_dir.is_symlink():
            raise ProbeBuildError(
                f"refusing to generate {output_name} source: {source_dir} already exists",
                path=source_dir,
            )
        try:
            source_dir.mkdir(parents=True)
        except OSError as exc:
            raise ProbeBuildError(f"cannot create {source_dir}: {exc}", path=source_dir) from exc

        cmd = [self._go, "build", "-o", str(binary)]
        if not optimize:
            cmd.append("-gcflags=all=-N -l")
        cmd.append(f"./src/{output_name}")
        try:
            try:
                (source_dir / "main.go").write_text(source, encoding="utf-8")
                binary.parent.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise ProbeBuildError(f"cannot write {output_name} source: {exc}", path=source_dir) from exc
            run_command(cmd, cwd=charm_dir, env=self._build_env(charm_dir), capture_output=True)
        except SubprocessExecutionError as exc:
            raise ProbeBuildError(
                f"go build failed for {output_name}: {exc.stderr or exc}",
                path=source_dir,
            ) from exc
        finally:
            shutil.rmtree(source_dir, ignore_errors=True)

        if not binary.exists():
            raise ProbeBuildError(f"go build did not produce {binary}", path=binary)
        binary.chmod(binary.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

    @staticmethod
    def _build_env(charm_dir: Path) -> dict[str, str]:
        env = os.environ.copy()
        gopath = env.get("GOPATH")
        env["GOPATH"] = os.pathsep.join([str(charm_dir), gopath]) if gopath else str(charm_dir)
        env.setdefault("GO111MODULE", "off")
        return env


__all__ = ["GoCompiler", "ProbeCompiler", "executable_path"]
