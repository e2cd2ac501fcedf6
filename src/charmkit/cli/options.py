# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Option declarations and normalised option records for CLI commands."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer

from ..config import CharmkitConfig, load_config
from ..errors import ConfigError
from .shared import CLIError

DIR_OPTION = Annotated[
    Path,
    typer.Option("--dir", "-d", help="Charm directory."),
]
CONFIG_OPTION = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Configuration file (defaults to <dir>/charmkit.toml)."),
]
VERBOSE_OPTION = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Log each step."),
]
EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji output."),
]


@dataclass(slots=True)
class CharmCLIOptions:
    """Capture options shared by commands that operate on a charm directory."""

    charm_dir: Path
    config: CharmkitConfig

    @property
    def hooks_dir(self) -> Path:
        return self.charm_dir / "hooks"

    @property
    def verbose(self) -> bool:
        return self.config.output.verbose

    @property
    def emoji(self) -> bool:
        return self.config.output.emoji

    @classmethod
    def from_cli(
        cls,
        charm_dir: Path,
        config_path: Path | None,
        *,
        verbose: bool,
        emoji: bool,
    ) -> "CharmCLIOptions":
        """Return options parsed from CLI arguments.

        Flags only tighten the file configuration: ``--verbose`` switches
        verbosity on and ``--no-emoji`` switches emoji off.

        Raises:
            CLIError: When the configuration cannot be loaded.
        """

        resolved = charm_dir.resolve()
        try:
            config = load_config(resolved, path=config_path)
        except ConfigError as exc:
            raise CLIError(str(exc)) from exc
        config = config.with_overrides(
            verbose=True if verbose else None,
            emoji=None if emoji else False,
        )
        return cls(charm_dir=resolved, config=config)


__all__ = [
    "CONFIG_OPTION",
    "DIR_OPTION",
    "EMOJI_OPTION",
    "VERBOSE_OPTION",
    "CharmCLIOptions",
]
