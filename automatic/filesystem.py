"""Filesystem helpers for project and registry trees.

Every mutation raises ``AutomaticFileError`` with the offending path, so
callers can isolate failures per agent without inspecting ``OSError``.
"""

import filecmp
import shutil
from pathlib import Path

from automatic.errors import AutomaticFileError


def path_present(path: Path) -> bool:
    """True for existing paths and for dangling symlinks."""
    return path.exists() or path.is_symlink()


def list_entry_names(directory: Path) -> list[str]:
    """Names of subdirectories and symlinks directly under directory."""
    if not directory.is_dir():
        return []
    return [child.name for child in sorted(directory.iterdir()) if child.is_dir() or child.is_symlink()]


def copy_path(source: Path, target: Path) -> None:
    try:
        if source.is_dir():
            shutil.copytree(source, target)
        else:
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(source, target)
    except OSError as exc:
        raise AutomaticFileError(target, f"Failed to copy from {source} ({exc})") from exc


def remove_path(path: Path) -> None:
    try:
        if path.is_symlink() or path.is_file():
            path.unlink()
        elif path.is_dir():
            shutil.rmtree(path)
    except OSError as exc:
        raise AutomaticFileError(path, f"Failed to remove ({exc})") from exc


def replace_with_copy(source: Path, target: Path) -> None:
    if path_present(target):
        remove_path(target)
    copy_path(source, target)


def remove_dir_if_empty(path: Path) -> bool:
    try:
        if path.is_symlink() or not path.is_dir() or any(path.iterdir()):
            return False
        path.rmdir()
    except OSError as exc:
        raise AutomaticFileError(path, f"Failed to remove empty directory ({exc})") from exc
    return True


def content_equal(source: Path, target: Path) -> bool:
    """Byte-wise comparison of two files or two directory trees.

    A symlinked target never counts as equal, so callers replace links
    with real copies.
    """
    if target.is_symlink():
        return False
    if source.is_file() and target.is_file():
        return filecmp.cmp(source, target, shallow=False)
    if source.is_dir() and target.is_dir():
        return _trees_equal(filecmp.dircmp(source, target, ignore=[]))
    return False


def _trees_equal(comparison: filecmp.dircmp) -> bool:
    if comparison.left_only or comparison.right_only or comparison.funny_files:
        return False
    if comparison.common_funny:
        return False
    _, mismatch, errors = filecmp.cmpfiles(
        comparison.left, comparison.right, comparison.common_files, shallow=False
    )
    if mismatch or errors:
        return False
    return all(_trees_equal(sub) for sub in comparison.subdirs.values())
