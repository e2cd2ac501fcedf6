# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""OS service manager interface and a systemd implementation."""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from subprocess import CompletedProcess  # nosec B404
from typing import Final, Protocol

from ..errors import ServiceError, ServiceNotInstalledError
from ..process_utils import SubprocessExecutionError, run_command

DEFAULT_UNIT_DIR: Final[Path] = Path("/etc/systemd/system")


class ServiceStatus(str, Enum):
    """Status values reported by an OS service manager."""

    UNKNOWN = "unknown"
    RUNNING = "running"
    STOPPED = "stopped"


@dataclass(slots=True)
class OSServiceParams:
    """Parameters for creating a new OS service."""

    name: str
    description: str = ""
    exe: str = ""
    # Arguments must be safe to pass to the shell without quoting.
    args: list[str] = field(default_factory=list)


class ServiceManager(Protocol):
    """Narrow view of a platform service manager."""

    def status(self) -> ServiceStatus:
        """Return the current status; raise :class:`ServiceNotInstalledError` when absent."""
        ...

    def install(self) -> None:
        """Register the service with the platform."""
        ...

    def uninstall(self) -> None:
        """Remove the service registration."""
        ...

    def start(self) -> None:
        """Start the installed service."""
        ...

    def stop(self) -> None:
        """Stop the running service."""
        ...


class SystemdServiceManager:
    """Manage a service through a systemd unit file and ``systemctl``."""

    def __init__(self, params: OSServiceParams, *, unit_dir: Path = DEFAULT_UNIT_DIR) -> None:
        self._params = params
        self._unit_dir = unit_dir

    @property
    def unit_path(self) -> Path:
        """Return the unit file location for this service."""

        return self._unit_dir / f"{self._params.name}.service"

    def render_unit(self) -> str:
        """Return the unit file contents for this service."""

        exec_start = " ".join([shlex.quote(self._params.exe), *self._params.args])
        description = self._params.description or self._params.name
        return (
            "[Unit]\n"
            f"Description={description}\n"
            "\n"
            "[Service]\n"
            f"ExecStart={exec_start}\n"
            "Restart=on-failure\n"
            "\n"
            "[Install]\n"
            "WantedBy=multi-user.target\n"
        )

    def status(self) -> ServiceStatus:
        if not self.unit_path.exists():
            raise ServiceNotInstalledError(f"service {self._params.name!r} is not installed")
        completed = self._systemctl("show", "--property=ActiveState", "--value", capture=True)
        state = (completed.stdout or "").strip()
        if state in {"active", "activating", "reloading", "deactivating"}:
            return ServiceStatus.RUNNING
        if state in {"inactive", "failed"}:
            return ServiceStatus.STOPPED
        return ServiceStatus.UNKNOWN

    def install(self) -> None:
        try:
            self.unit_path.write_text(self.render_unit(), encoding="utf-8")
        except OSError as exc:
            raise ServiceError(f"cannot write unit file {self.unit_path}: {exc}") from exc
        self._systemctl("daemon-reload", with_name=False)
        self._systemctl("enable")

    def uninstall(self) -> None:
        self._systemctl("disable")
        try:
            self.unit_path.unlink(missing_ok=True)
        except OSError as exc:
            raise ServiceError(f"cannot remove unit file {self.unit_path}: {exc}") from exc
        self._systemctl("daemon-reload", with_name=False)

    def start(self) -> None:
        self._systemctl("start")

    def stop(self) -> None:
        self._systemctl("stop")

    def _systemctl(self, *args: str, with_name: bool = True, capture: bool = False) -> CompletedProcess[str]:
        cmd = ["systemctl", *args]
        if with_name:
            cmd.append(self._params.name)
        try:
            return run_command(cmd, capture_output=capture)
        except (SubprocessExecutionError, FileNotFoundError) as exc:
            raise ServiceError(f"systemctl {args[0]} failed for {self._params.name!r}: {exc}") from exc


__all__ = [
    "DEFAULT_UNIT_DIR",
    "OSServiceParams",
    "ServiceManager",
    "ServiceStatus",
    "SystemdServiceManager",
]
