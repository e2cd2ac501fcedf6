# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command that prints a charm's registered capabilities."""

from __future__ import annotations

from pathlib import Path

import typer

from ..options import CONFIG_OPTION, DIR_OPTION, EMOJI_OPTION, VERBOSE_OPTION, CharmCLIOptions
from ..services import perform_inspect, render_descriptor
from ..shared import CLIError, build_cli_logger


def main(
    charm_dir: DIR_OPTION = Path("."),
    config: CONFIG_OPTION = None,
    verbose: VERBOSE_OPTION = False,
    emoji: EMOJI_OPTION = True,
) -> None:
    """Build and run the probe, then print its capability document as JSON."""

    logger = build_cli_logger(emoji=emoji)
    try:
        options = CharmCLIOptions.from_cli(charm_dir, config, verbose=verbose, emoji=emoji)
        logger = build_cli_logger(emoji=options.emoji)
        descriptor = perform_inspect(options)
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc

    logger.echo(render_descriptor(descriptor))
    raise typer.Exit(code=0)


def register(app: typer.Typer) -> None:
    """Register the ``inspect`` command on ``app``."""

    app.command(name="inspect", help="Print the hooks, relations and config a charm registers.")(main)


__all__ = ["main", "register"]
