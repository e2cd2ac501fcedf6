# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Reconcile a charm's ``hooks`` directory against a registered hook set."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path

from ..errors import HookConflictError, HooksDirectoryError, HookWriteError
from ..logging import verbose as log_verbose
from ..logging import warn
from .models import ReconcileResult
from .stub import HOOK_MODE, file_has_contents, hook_stub


def reconcile_hooks(
    hooks_dir: Path,
    desired: Iterable[str],
    *,
    verbose: bool = False,
    use_emoji: bool = True,
) -> ReconcileResult:
    """Make ``hooks_dir`` hold exactly one stub per name in ``desired``.

    Existing stubs for desired hooks are kept. Stubs for hooks that are no
    longer desired are removed, but only when their bytes still equal the
    stub this module would generate; anything else is left in place with a
    warning. A desired hook whose file holds anything other than its stub is
    a conflict and aborts the pass.

    Args:
        hooks_dir: Directory holding hook scripts; created when missing.
        desired: Hook names the charm registers.
        verbose: Emit progress messages for each step.
        use_emoji: Flag indicating whether emoji output is desired.

    Returns:
        ReconcileResult: Paths created, kept, removed and skipped by this pass.

    Raises:
        HooksDirectoryError: When the directory cannot be created or listed.
        HookConflictError: When a desired hook has unexpected contents.
        HookWriteError: When a hook file cannot be removed or created.
    """

    wanted = frozenset(desired)
    log_verbose(f"writing hooks in {hooks_dir}", enabled=verbose, use_emoji=use_emoji)
    try:
        hooks_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise HooksDirectoryError("create", hooks_dir, exc) from exc
    try:
        with os.scandir(hooks_dir) as scan:
            entries = sorted(scan, key=lambda entry: entry.name)
    except OSError as exc:
        raise HooksDirectoryError("list", hooks_dir, exc) from exc
    log_verbose(f"found {len(entries)} existing hooks", enabled=verbose, use_emoji=use_emoji)

    result = ReconcileResult()
    stale: list[Path] = []
    for entry in entries:
        hook_path = hooks_dir / entry.name
        if not entry.is_file(follow_symlinks=False):
            if entry.name in wanted:
                raise HookConflictError(hook_path, entry.name, reason="it is not a regular file")
            log_verbose(f"ignoring non-file {hook_path}", enabled=verbose, use_emoji=use_emoji)
            continue
        if entry.name in wanted:
            _check_existing(hook_path, entry.name)
            log_verbose(f"found existing hook {hook_path}", enabled=verbose, use_emoji=use_emoji)
            result.kept.append(hook_path)
        elif _is_removable(hook_path, entry.name, use_emoji=use_emoji):
            stale.append(hook_path)
        else:
            result.skipped.append(hook_path)

    # Conflicts are detected above, before anything on disk changes.
    for hook_path in stale:
        log_verbose(f"removing old hook {hook_path}", enabled=verbose, use_emoji=use_emoji)
        try:
            hook_path.unlink()
        except OSError as exc:
            raise HookWriteError("remove", hook_path, exc) from exc
        result.removed.append(hook_path)

    kept_names = {path.name for path in result.kept}
    for name in sorted(wanted - kept_names):
        hook_path = hooks_dir / name
        log_verbose(f"creating new hook {hook_path}", enabled=verbose, use_emoji=use_emoji)
        try:
            hook_path.write_bytes(hook_stub(name))
            hook_path.chmod(HOOK_MODE)
        except OSError as exc:
            raise HookWriteError("create", hook_path, exc) from exc
        result.created.append(hook_path)
    return result


def _check_existing(hook_path: Path, name: str) -> None:
    """Verify that a desired hook already holds its stub."""

    try:
        same = file_has_contents(hook_path, hook_stub(name))
    except OSError as exc:
        raise HookConflictError(
            hook_path,
            name,
            reason=f"its contents cannot be read: {exc}",
        ) from exc
    if not same:
        raise HookConflictError(hook_path, name)


def _is_removable(hook_path: Path, name: str, *, use_emoji: bool) -> bool:
    """Return whether an unregistered hook is an untouched stub that may be removed."""

    try:
        same = file_has_contents(hook_path, hook_stub(name))
    except OSError as exc:
        warn(f"not removing {str(hook_path)!r}: {exc}", use_emoji=use_emoji)
        return False
    if not same:
        warn(
            f"not removing {str(hook_path)!r} because it has unexpected contents",
            use_emoji=use_emoji,
        )
        return False
    return True


__all__ = ["reconcile_hooks"]
