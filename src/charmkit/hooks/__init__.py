# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Hook stub generation and reconciliation services."""

from __future__ import annotations

from .models import ReconcileResult
from .reconciler import reconcile_hooks
from .stub import HOOK_MODE, HOOK_STUB_TEMPLATE, file_has_contents, hook_stub

__all__ = [
    "HOOK_MODE",
    "HOOK_STUB_TEMPLATE",
    "ReconcileResult",
    "file_has_contents",
    "hook_stub",
    "reconcile_hooks",
]
