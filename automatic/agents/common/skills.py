"""Skill directory maintenance shared by every agent."""

import logging
from pathlib import Path

from automatic.constants import SKILL_FILENAME
from automatic.filesystem import list_entry_names, remove_path
from automatic.utils import is_valid_name, write_text_if_changed

logger = logging.getLogger(__name__)


def stale_skill_names(
    skill_dir: Path, selected: list[str], local: list[str]
) -> list[str]:
    keep = set(selected) | set(local)
    return [
        name
        for name in list_entry_names(skill_dir)
        if is_valid_name(name) and name not in keep
    ]


def remove_stale_skills(
    skill_dir: Path, selected: list[str], local: list[str]
) -> list[Path]:
    removed: list[Path] = []
    for name in stale_skill_names(skill_dir, selected, local):
        target = skill_dir / name
        logger.debug("Removing stale skill %s", target)
        remove_path(target)
        removed.append(target)
    return removed


def write_skill_documents(
    skill_dir: Path, contents: list[tuple[str, str]], local: list[str]
) -> list[Path]:
    written: list[Path] = []
    local_names = set(local)
    for name, content in contents:
        if not is_valid_name(name) or name in local_names:
            continue
        entry = skill_dir / name
        if entry.is_symlink() and not entry.exists():
            remove_path(entry)
        document = entry / SKILL_FILENAME
        write_text_if_changed(document, content)
        written.append(document)
    return written


def sync_skill_dirs(
    skill_dirs: list[Path],
    contents: list[tuple[str, str]],
    selected: list[str],
    local: list[str],
) -> list[Path]:
    written: list[Path] = []
    for skill_dir in skill_dirs:
        remove_stale_skills(skill_dir, selected, local)
        written.extend(write_skill_documents(skill_dir, contents, local))
    return written
