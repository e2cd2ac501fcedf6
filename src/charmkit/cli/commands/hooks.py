# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command that writes hook stubs for an explicit list of hooks."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ..options import CONFIG_OPTION, DIR_OPTION, EMOJI_OPTION, VERBOSE_OPTION, CharmCLIOptions
from ..services import emit_reconcile_summary, perform_write_hooks
from ..shared import CLIError, build_cli_logger

HOOK_NAMES_ARGUMENT = Annotated[
    list[str],
    typer.Argument(help="Hook names the charm registers."),
]


def main(
    hook_names: HOOK_NAMES_ARGUMENT,
    charm_dir: DIR_OPTION = Path("."),
    config: CONFIG_OPTION = None,
    verbose: VERBOSE_OPTION = False,
    emoji: EMOJI_OPTION = True,
) -> None:
    """Reconcile ``<dir>/hooks`` against the given hook names without probing."""

    logger = build_cli_logger(emoji=emoji)
    try:
        options = CharmCLIOptions.from_cli(charm_dir, config, verbose=verbose, emoji=emoji)
        logger = build_cli_logger(emoji=options.emoji)
        result = perform_write_hooks(options, hook_names)
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc

    emit_reconcile_summary(result, logger=logger)
    raise typer.Exit(code=0)


def register(app: typer.Typer) -> None:
    """Register the ``write-hooks`` command on ``app``."""

    app.command(name="write-hooks", help="Write hook stubs for the named hooks.")(main)


__all__ = ["main", "register"]
