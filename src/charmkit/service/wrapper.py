# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Lifecycle wrapper translating service manager status into simple operations."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum

from ..errors import ServiceError, ServiceInvariantError, ServiceNotInstalledError
from .manager import OSServiceParams, ServiceManager, ServiceStatus, SystemdServiceManager


class ServiceState(str, Enum):
    """States the wrapper can report for a service."""

    NOT_INSTALLED = "not-installed"
    RUNNING = "running"
    STOPPED = "stopped"


class OSService:
    """Install, start, stop and remove a service through a :class:`ServiceManager`."""

    def __init__(self, manager: ServiceManager, *, name: str = "") -> None:
        self._manager = manager
        self.name = name

    def state(self) -> ServiceState:
        """Return the service state.

        Raises:
            ServiceInvariantError: When the manager reports an unknown status.
        """

        try:
            status = self._manager.status()
        except ServiceNotInstalledError:
            return ServiceState.NOT_INSTALLED
        if status is ServiceStatus.UNKNOWN:
            raise ServiceInvariantError("service daemon reports an unknown status")
        if status is ServiceStatus.RUNNING:
            return ServiceState.RUNNING
        return ServiceState.STOPPED

    def install(self) -> None:
        """Install the service unless it is already installed."""

        if self.state() is ServiceState.NOT_INSTALLED:
            self._manager.install()

    def start(self) -> None:
        self._manager.start()

    def stop(self) -> None:
        self._manager.stop()

    def running(self) -> bool:
        """Return whether the service is running; status errors propagate."""

        return self.state() is ServiceState.RUNNING

    def stop_and_remove(self) -> None:
        """Stop the service, then uninstall it.

        Raises:
            ServiceError: Wrapping whichever step failed first.
        """

        try:
            self.stop()
        except (ServiceError, OSError) as exc:
            raise ServiceError(f"can not stop service: {exc}") from exc
        try:
            self._manager.uninstall()
        except (ServiceError, OSError) as exc:
            raise ServiceError(f"can not remove service: {exc}") from exc


def _systemd_service(params: OSServiceParams) -> OSService:
    return OSService(SystemdServiceManager(params), name=params.name)


# Replaced in tests to avoid touching the host service manager.
new_service: Callable[[OSServiceParams], OSService] = _systemd_service


__all__ = ["OSService", "ServiceState", "new_service"]
