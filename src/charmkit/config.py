# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and the TOML loader for charm tooling."""

from __future__ import annotations

import os
import re
import tomllib
from collections.abc import Iterable, Mapping, MutableMapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigError

CONFIG_FILENAME: Final[str] = "charmkit.toml"
DEFAULT_INCLUDE_KEY: Final[str] = "include"

DEFAULT_HOOK_PACKAGE: Final[str] = "github.com/juju/gocharm/hook"
DEFAULT_CHARM_PACKAGE: Final[str] = "gopkg.in/juju/charm.v4"
DEFAULT_RUNHOOK_PACKAGE: Final[str] = "runhook"

_ENV_VAR_PATTERN = re.compile(r"\$(\w+)|\$\{([^}]+)\}")


class ProbeSettings(BaseModel):
    """Settings controlling how the capability probe is generated and built."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    hook_package: str = DEFAULT_HOOK_PACKAGE
    charm_package: str = DEFAULT_CHARM_PACKAGE
    runhook_package: str = DEFAULT_RUNHOOK_PACKAGE
    go_executable: str = "go"
    optimize: bool = False


class OutputSettings(BaseModel):
    """Console presentation settings."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    verbose: bool = False
    emoji: bool = True


class CharmkitConfig(BaseModel):
    """Top-level configuration for charmkit commands."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    probe: ProbeSettings = Field(default_factory=ProbeSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)

    def with_overrides(self, *, verbose: bool | None = None, emoji: bool | None = None) -> CharmkitConfig:
        """Return a copy with CLI overrides applied to the output section.

        Args:
            verbose: Optional verbosity override.
            emoji: Optional emoji override.

        Returns:
            CharmkitConfig: Updated configuration copy.
        """

        updates: dict[str, bool] = {}
        if verbose is not None:
            updates["verbose"] = verbose
        if emoji is not None:
            updates["emoji"] = emoji
        if not updates:
            return self
        return self.model_copy(update={"output": self.output.model_copy(update=updates)})


def load_config(
    charm_dir: Path,
    *,
    path: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> CharmkitConfig:
    """Load configuration for ``charm_dir``.

    Args:
        charm_dir: Charm directory searched for ``charmkit.toml``.
        path: Optional explicit configuration file; must exist when given.
        env: Environment used for ``$VAR`` expansion. Defaults to ``os.environ``.

    Returns:
        CharmkitConfig: Validated configuration. Defaults when no file is present.

    Raises:
        ConfigError: When the file is unreadable, malformed or fails validation.
    """

    if path is not None and not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")
    source = path if path is not None else charm_dir / CONFIG_FILENAME
    data = _load_toml(source, (), env if env is not None else os.environ)
    try:
        return CharmkitConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration in {source}: {exc}") from exc


def _load_toml(path: Path, stack: tuple[Path, ...], env: Mapping[str, str]) -> dict[str, Any]:
    if not path.exists():
        return {}
    resolved = path.resolve()
    if resolved in stack:
        include_chain = " -> ".join(str(entry) for entry in (*stack, resolved))
        raise ConfigError(f"Circular include detected: {include_chain}")
    try:
        with resolved.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Malformed TOML in {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read configuration {path}: {exc}") from exc
    document: dict[str, Any] = dict(data)
    includes = document.pop(DEFAULT_INCLUDE_KEY, None)
    merged: dict[str, Any] = {}
    for include_path in _coerce_includes(includes, resolved.parent):
        fragment = _load_toml(include_path, stack + (resolved,), env)
        merged = _deep_merge(merged, fragment)
    merged = _deep_merge(merged, document)
    return _expand_env(merged, env)


def _coerce_includes(raw: Any, base_dir: Path) -> Iterable[Path]:
    if raw is None:
        return []
    if isinstance(raw, str):
        return [_resolve_path(Path(raw), base_dir)]
    if isinstance(raw, list):
        return [_resolve_path(Path(item), base_dir) for item in raw]
    raise ConfigError(f"Unsupported include declaration: {raw!r}")


def _resolve_path(path: Path, base_dir: Path) -> Path:
    return path if path.is_absolute() else (base_dir / path)


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], MutableMapping) and isinstance(value, Mapping):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _expand_env(data: Mapping[str, Any], env: Mapping[str, str]) -> dict[str, Any]:
    return {key: _expand_env_value(value, env) for key, value in data.items()}


def _expand_env_value(value: Any, env: Mapping[str, str]) -> Any:
    if isinstance(value, str):
        return _expand_env_string(value, env)
    if isinstance(value, Mapping):
        return {k: _expand_env_value(v, env) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand_env_value(v, env) for v in value]
    return value


def _expand_env_string(value: str, env: Mapping[str, str]) -> str:
    def _replace(match: re.Match[str]) -> str:
        key = match.group(1) or match.group(2)
        if key is None:
            return match.group(0)
        return env.get(key, match.group(0))

    return _ENV_VAR_PATTERN.sub(_replace, value)


__all__ = [
    "CONFIG_FILENAME",
    "CharmkitConfig",
    "OutputSettings",
    "ProbeSettings",
    "load_config",
]
