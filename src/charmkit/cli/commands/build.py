# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command that probes a charm and writes its hook stubs."""

from __future__ import annotations

from pathlib import Path

import typer

from ..options import CONFIG_OPTION, DIR_OPTION, EMOJI_OPTION, VERBOSE_OPTION, CharmCLIOptions
from ..services import emit_reconcile_summary, perform_build
from ..shared import CLIError, build_cli_logger


def main(
    charm_dir: DIR_OPTION = Path("."),
    config: CONFIG_OPTION = None,
    verbose: VERBOSE_OPTION = False,
    emoji: EMOJI_OPTION = True,
) -> None:
    """Discover registered hooks and reconcile the charm's hooks directory.

    Raises:
        typer.Exit: Always raised to terminate the command with an exit status.
    """

    logger = build_cli_logger(emoji=emoji)
    try:
        options = CharmCLIOptions.from_cli(charm_dir, config, verbose=verbose, emoji=emoji)
        logger = build_cli_logger(emoji=options.emoji)
        result = perform_build(options)
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc

    emit_reconcile_summary(result, logger=logger)
    raise typer.Exit(code=0)


def register(app: typer.Typer) -> None:
    """Register the ``build`` command on ``app``."""

    app.command(name="build", help="Probe the charm and write its hook stubs.")(main)


__all__ = ["main", "register"]
