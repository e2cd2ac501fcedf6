# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""OS service lifecycle helpers."""

from __future__ import annotations

from .manager import OSServiceParams, ServiceManager, ServiceStatus, SystemdServiceManager
from .wrapper import OSService, ServiceState, new_service

__all__ = [
    "OSService",
    "OSServiceParams",
    "ServiceManager",
    "ServiceState",
    "ServiceStatus",
    "SystemdServiceManager",
    "new_service",
]
