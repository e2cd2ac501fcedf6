# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Hook stub rendering and content comparison."""

from __future__ import annotations

from pathlib import Path
from typing import Final

# Changing this template orphans stubs written by earlier releases.
HOOK_STUB_TEMPLATE: Final[str] = "#!/bin/sh\n$CHARM_DIR/bin/runhook {name}\n"
HOOK_MODE: Final[int] = 0o755


def hook_stub(name: str) -> bytes:
    """Return the trampoline script contents for hook ``name``.

    Args:
        name: Hook name forwarded to the charm's ``runhook`` binary.

    Returns:
        bytes: Deterministic stub contents for ``name``.
    """

    return HOOK_STUB_TEMPLATE.format(name=name).encode("utf-8")


def file_has_contents(path: Path, contents: bytes) -> bool:
    """Return whether the file at ``path`` holds exactly ``contents``.

    At most ``len(contents) + 1`` bytes are read, which is enough to detect a
    file that is longer than expected.

    Args:
        path: File to inspect.
        contents: Expected bytes.

    Returns:
        bool: ``True`` when the file bytes equal ``contents``.

    Raises:
        FileNotFoundError: When ``path`` does not exist.
        OSError: When ``path`` cannot be opened or read.
    """

    with path.open("rb") as handle:
        data = handle.read(len(contents) + 1)
    return data == contents


__all__ = ["HOOK_MODE", "HOOK_STUB_TEMPLATE", "file_has_contents", "hook_stub"]
