from pathlib import Path

import pytest

from automatic.errors import AutomaticFileError
from automatic.filesystem import content_equal, copy_path, remove_dir_if_empty


def test_remove_dir_if_empty_removes_only_empty_dirs(tmp_path: Path) -> None:
    empty = tmp_path / "empty"
    empty.mkdir()
    full = tmp_path / "full"
    full.mkdir()
    (full / "keep.txt").write_text("x", encoding="utf-8")

    assert remove_dir_if_empty(empty) is True
    assert remove_dir_if_empty(full) is False
    assert remove_dir_if_empty(tmp_path / "absent") is False
    assert not empty.exists()
    assert full.is_dir()


def test_remove_dir_if_empty_wraps_os_errors(tmp_path: Path, monkeypatch) -> None:
    target = tmp_path / "stuck"
    target.mkdir()

    def _fail(self: Path) -> None:
        raise PermissionError("denied")

    monkeypatch.setattr(Path, "rmdir", _fail)

    with pytest.raises(AutomaticFileError) as excinfo:
        remove_dir_if_empty(target)
    assert excinfo.value.path == target


def test_content_equal_compares_trees(tmp_path: Path) -> None:
    source = tmp_path / "source"
    (source / "refs").mkdir(parents=True)
    (source / "SKILL.md").write_text("# a\n", encoding="utf-8")
    (source / "refs" / "notes.md").write_text("notes\n", encoding="utf-8")
    target = tmp_path / "target"
    copy_path(source, target)

    assert content_equal(source, target) is True

    (target / "refs" / "notes.md").write_text("changed\n", encoding="utf-8")

    assert content_equal(source, target) is False
