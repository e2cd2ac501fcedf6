# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared by the hook, probe and service layers."""

from __future__ import annotations

from pathlib import Path


class CharmkitError(Exception):
    """Base class for failures surfaced to charmkit callers."""


class ConfigError(CharmkitError):
    """Raised when configuration input is invalid."""


class HookConflictError(CharmkitError):
    """Raised when a hook that should be kept holds unexpected contents."""

    def __init__(self, path: Path, hook_name: str, *, reason: str | None = None) -> None:
        detail = reason or "it has unexpected contents"
        super().__init__(f"cannot replace {str(path)!r} because {detail}")
        self.path = path
        self.hook_name = hook_name


class HooksDirectoryError(CharmkitError):
    """Raised when the hooks directory cannot be created or listed."""

    def __init__(self, operation: str, path: Path, cause: OSError) -> None:
        super().__init__(f"failed to {operation} hooks directory {str(path)!r}: {cause}")
        self.operation = operation
        self.path = path


class HookWriteError(CharmkitError):
    """Raised when an individual hook file cannot be created or removed."""

    def __init__(self, operation: str, path: Path, cause: OSError) -> None:
        super().__init__(f"failed to {operation} hook {str(path)!r}: {cause}")
        self.operation = operation
        self.path = path


class ProbeError(CharmkitError):
    """Base class for failures in the build-and-inspect pipeline."""

    step = "probe"

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class ProbeBuildError(ProbeError):
    """Raised when the probe program cannot be compiled."""

    step = "build"


class ProbeRunError(ProbeError):
    """Raised when the compiled probe fails to start or exits non-zero."""

    step = "run"


class ProbeOutputError(ProbeError):
    """Raised when the probe output is not a valid capability document."""

    step = "parse"


class NoHooksRegisteredError(ProbeError):
    """Raised when the probe reports an empty hook set."""

    step = "validate"


class ServiceError(CharmkitError):
    """Raised when an OS service operation fails."""


class ServiceNotInstalledError(ServiceError):
    """Raised by service managers when the service is not installed."""


class ServiceInvariantError(RuntimeError):
    """Raised when the service manager reports a state that cannot be reasoned about.

    Not a :class:`CharmkitError`: command handlers let it propagate and the
    process halts.
    """


__all__ = [
    "CharmkitError",
    "ConfigError",
    "HookConflictError",
    "HookWriteError",
    "HooksDirectoryError",
    "NoHooksRegisteredError",
    "ProbeBuildError",
    "ProbeError",
    "ProbeOutputError",
    "ProbeRunError",
    "ServiceError",
    "ServiceInvariantError",
    "ServiceNotInstalledError",
]
