# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

import pytest


@dataclass
class ScriptCompiler:
    """Compile collaborator that installs a shell script as the probe binary."""

    body: str
    calls: list[tuple[Path, str, str, bool]] = field(default_factory=list)

    def compile(self, charm_dir: Path, output_name: str, source: str, *, optimize: bool) -> None:
        self.calls.append((charm_dir, output_name, source, optimize))
        binary = charm_dir / "bin" / output_name
        binary.parent.mkdir(parents=True, exist_ok=True)
        binary.write_text(f"#!/bin/sh\n{self.body}\n", encoding="utf-8")
        binary.chmod(0o755)


def printing(document: str) -> str:
    """Return a shell body that writes ``document`` to stdout without a newline."""

    return f"printf '%s' '{document}'"


@pytest.fixture
def charm_dir(tmp_path: Path) -> Path:
    """Return an empty charm directory."""

    path = tmp_path / "charm"
    path.mkdir()
    return path


@pytest.fixture
def script_compiler() -> Callable[..., ScriptCompiler]:
    """Return a factory for probe compilers.

    ``document`` is printed verbatim by the probe; ``body`` replaces the whole
    script body instead.
    """

    def _factory(document: str = "", *, body: str | None = None) -> ScriptCompiler:
        return ScriptCompiler(body if body is not None else printing(document))

    return _factory
