import os
from enum import Enum
from pathlib import Path

from automatic.errors import AutomaticFileError
from automatic.filesystem import remove_path


class LinkStatus(str, Enum):
    NOOP = "noop"
    CREATE = "create"
    FIX = "fix"
    CONFLICT = "conflict"


def plan_symlink(target: Path, source: Path) -> LinkStatus:
    desired = source.resolve()
    if target.is_symlink():
        if target.resolve() == desired:
            return LinkStatus.NOOP
        return LinkStatus.FIX
    if target.exists():
        return LinkStatus.CONFLICT
    return LinkStatus.CREATE


def ensure_symlink(target: Path, source: Path) -> LinkStatus:
    """Point ``target`` at ``source`` with a relative link, replacing what is there."""
    status = plan_symlink(target, source)
    if status == LinkStatus.NOOP:
        return status
    if status in (LinkStatus.FIX, LinkStatus.CONFLICT):
        remove_path(target)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        relative = os.path.relpath(source.resolve(), target.parent.resolve())
        target.symlink_to(relative, target_is_directory=True)
    except OSError as exc:
        raise AutomaticFileError(target, f"Failed to link to {source} ({exc})") from exc
    return status
