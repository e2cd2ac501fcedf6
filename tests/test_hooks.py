# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for hook stub reconciliation."""

from __future__ import annotations

import stat
from pathlib import Path

import pytest

from charmkit.errors import HookConflictError, HooksDirectoryError, HookWriteError
from charmkit.hooks import file_has_contents, hook_stub, reconcile_hooks


def _snapshot(hooks_dir: Path) -> dict[str, bytes]:
    return {path.name: path.read_bytes() for path in hooks_dir.iterdir() if path.is_file()}


def test_hook_stub_format_is_stable() -> None:
    assert hook_stub("config-changed") == b"#!/bin/sh\n$CHARM_DIR/bin/runhook config-changed\n"
    assert hook_stub("install") == hook_stub("install")


def test_file_has_contents_detects_trailing_bytes(tmp_path: Path) -> None:
    path = tmp_path / "install"
    path.write_bytes(hook_stub("install") + b"echo extra\n")
    assert not file_has_contents(path, hook_stub("install"))
    path.write_bytes(hook_stub("install"))
    assert file_has_contents(path, hook_stub("install"))
    path.write_bytes(hook_stub("install")[:-1])
    assert not file_has_contents(path, hook_stub("install"))


def test_file_has_contents_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        file_has_contents(tmp_path / "absent", b"x")


def test_creates_stubs_in_empty_directory(charm_dir: Path) -> None:
    hooks_dir = charm_dir / "hooks"
    result = reconcile_hooks(hooks_dir, {"install", "start"})

    assert sorted(path.name for path in result.created) == ["install", "start"]
    for name in ("install", "start"):
        path = hooks_dir / name
        assert path.read_bytes() == hook_stub(name)
        assert stat.S_IMODE(path.stat().st_mode) == 0o755


def test_second_run_is_a_no_op(charm_dir: Path) -> None:
    hooks_dir = charm_dir / "hooks"
    reconcile_hooks(hooks_dir, ["install", "start", "stop"])
    before = _snapshot(hooks_dir)

    result = reconcile_hooks(hooks_dir, ["install", "start", "stop"])

    assert not result.changed
    assert sorted(path.name for path in result.kept) == ["install", "start", "stop"]
    assert _snapshot(hooks_dir) == before


def test_removes_unregistered_stub(charm_dir: Path) -> None:
    hooks_dir = charm_dir / "hooks"
    hooks_dir.mkdir()
    (hooks_dir / "config-changed").write_bytes(hook_stub("config-changed"))

    result = reconcile_hooks(hooks_dir, {"install"})

    assert not (hooks_dir / "config-changed").exists()
    assert [path.name for path in result.removed] == ["config-changed"]
    assert (hooks_dir / "install").read_bytes() == hook_stub("install")


def test_refuses_to_overwrite_customised_hook(charm_dir: Path) -> None:
    hooks_dir = charm_dir / "hooks"
    hooks_dir.mkdir()
    (hooks_dir / "install").write_text("echo custom", encoding="utf-8")
    (hooks_dir / "config-changed").write_bytes(hook_stub("config-changed"))
    before = _snapshot(hooks_dir)

    with pytest.raises(HookConflictError) as excinfo:
        reconcile_hooks(hooks_dir, {"install", "start"})

    assert str(hooks_dir / "install") in str(excinfo.value)
    assert excinfo.value.hook_name == "install"
    assert _snapshot(hooks_dir) == before


def test_stub_for_another_name_is_a_conflict(charm_dir: Path) -> None:
    hooks_dir = charm_dir / "hooks"
    hooks_dir.mkdir()
    (hooks_dir / "install").write_bytes(hook_stub("start"))

    with pytest.raises(HookConflictError):
        reconcile_hooks(hooks_dir, {"install"})


def test_keeps_user_authored_unregistered_file(charm_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    hooks_dir = charm_dir / "hooks"
    hooks_dir.mkdir()
    custom = hooks_dir / "upgrade-charm"
    custom.write_text("#!/bin/sh\necho mine\n", encoding="utf-8")

    result = reconcile_hooks(hooks_dir, {"install"}, use_emoji=False)

    assert custom.read_text(encoding="utf-8") == "#!/bin/sh\necho mine\n"
    assert result.skipped == [custom]
    assert "not removing" in capsys.readouterr().out


def test_unreadable_unregistered_file_is_skipped(
    charm_dir: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    hooks_dir = charm_dir / "hooks"
    hooks_dir.mkdir()
    locked = hooks_dir / "stop"
    locked.write_bytes(hook_stub("stop"))

    def _denied(path: Path, contents: bytes) -> bool:
        raise PermissionError(13, "Permission denied", str(path))

    monkeypatch.setattr("charmkit.hooks.reconciler.file_has_contents", _denied)
    result = reconcile_hooks(hooks_dir, set(), use_emoji=False)

    assert locked.exists()
    assert result.skipped == [locked]


def test_unreadable_registered_file_is_a_conflict(
    charm_dir: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    hooks_dir = charm_dir / "hooks"
    hooks_dir.mkdir()
    (hooks_dir / "install").write_bytes(hook_stub("install"))

    def _denied(path: Path, contents: bytes) -> bool:
        raise PermissionError(13, "Permission denied", str(path))

    monkeypatch.setattr("charmkit.hooks.reconciler.file_has_contents", _denied)
    with pytest.raises(HookConflictError, match="cannot be read"):
        reconcile_hooks(hooks_dir, {"install"})


def test_ignores_directories_and_symlinks(charm_dir: Path, tmp_path: Path) -> None:
    hooks_dir = charm_dir / "hooks"
    hooks_dir.mkdir()
    (hooks_dir / "lib").mkdir()
    target = tmp_path / "outside"
    target.write_bytes(hook_stub("stop"))
    (hooks_dir / "stop").symlink_to(target)

    result = reconcile_hooks(hooks_dir, {"install"})

    assert (hooks_dir / "lib").is_dir()
    assert (hooks_dir / "stop").is_symlink()
    assert target.read_bytes() == hook_stub("stop")
    assert not result.removed
    assert not result.skipped


def test_creates_missing_hooks_directory(tmp_path: Path) -> None:
    hooks_dir = tmp_path / "deep" / "charm" / "hooks"
    reconcile_hooks(hooks_dir, ["install"])
    assert (hooks_dir / "install").read_bytes() == hook_stub("install")


def test_hooks_path_that_is_a_file(charm_dir: Path) -> None:
    (charm_dir / "hooks").write_text("not a directory", encoding="utf-8")
    with pytest.raises(HooksDirectoryError) as excinfo:
        reconcile_hooks(charm_dir / "hooks", ["install"])
    assert excinfo.value.operation == "create"


def test_verbose_reports_progress(charm_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    reconcile_hooks(charm_dir / "hooks", ["install"], verbose=True, use_emoji=False)
    captured = capsys.readouterr()
    out = captured.err
    assert "writing hooks in" in out
    assert "creating new hook" in out
    assert captured.out == ""


def test_symlink_under_registered_name_is_a_conflict(charm_dir: Path, tmp_path: Path) -> None:
    hooks_dir = charm_dir / "hooks"
    hooks_dir.mkdir()
    target = tmp_path / "mine"
    target.write_text("echo mine\n", encoding="utf-8")
    target.chmod(0o600)
    (hooks_dir / "install").symlink_to(target)

    with pytest.raises(HookConflictError, match="not a regular file") as excinfo:
        reconcile_hooks(hooks_dir, {"install", "start"})

    assert excinfo.value.hook_name == "install"
    assert target.read_text(encoding="utf-8") == "echo mine\n"
    assert stat.S_IMODE(target.stat().st_mode) == 0o600
    assert (hooks_dir / "install").is_symlink()
    assert not (hooks_dir / "start").exists()


def test_directory_under_registered_name_is_a_conflict(charm_dir: Path) -> None:
    hooks_dir = charm_dir / "hooks"
    (hooks_dir / "install").mkdir(parents=True)

    with pytest.raises(HookConflictError, match="not a regular file"):
        reconcile_hooks(hooks_dir, {"install"})
    assert (hooks_dir / "install").is_dir()


def test_remove_failure_aborts_pass(charm_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    hooks_dir = charm_dir / "hooks"
    hooks_dir.mkdir()
    for name in ("config-changed", "stop"):
        (hooks_dir / name).write_bytes(hook_stub(name))

    def _busy(self: Path, missing_ok: bool = False) -> None:
        raise OSError(16, "Device or resource busy", str(self))

    monkeypatch.setattr(Path, "unlink", _busy)
    with pytest.raises(HookWriteError) as excinfo:
        reconcile_hooks(hooks_dir, {"install"})
    monkeypatch.undo()

    assert excinfo.value.operation == "remove"
    assert excinfo.value.path == hooks_dir / "config-changed"
    assert (hooks_dir / "stop").read_bytes() == hook_stub("stop")
    assert not (hooks_dir / "install").exists()


def test_create_failure_keeps_earlier_progress(charm_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    hooks_dir = charm_dir / "hooks"
    hooks_dir.mkdir()
    (hooks_dir / "config-changed").write_bytes(hook_stub("config-changed"))
    original_write_bytes = Path.write_bytes

    def _disk_full(self: Path, data: bytes) -> int:
        if self.name == "start":
            raise OSError(28, "No space left on device", str(self))
        return original_write_bytes(self, data)

    monkeypatch.setattr(Path, "write_bytes", _disk_full)
    with pytest.raises(HookWriteError) as excinfo:
        reconcile_hooks(hooks_dir, {"install", "start"})
    monkeypatch.undo()

    assert excinfo.value.operation == "create"
    assert excinfo.value.path == hooks_dir / "start"
    assert not (hooks_dir / "config-changed").exists()
    assert (hooks_dir / "install").read_bytes() == hook_stub("install")
    assert not (hooks_dir / "start").exists()
