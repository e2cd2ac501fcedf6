# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Dataclasses describing hook reconciliation outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(slots=True)
class ReconcileResult:
    """Aggregate outcome from reconciling a charm's ``hooks`` directory."""

    created: list[Path] = field(default_factory=list)
    kept: list[Path] = field(default_factory=list)
    removed: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        """Return ``True`` when the pass added or removed any file."""

        return bool(self.created or self.removed)


__all__ = ["ReconcileResult"]
