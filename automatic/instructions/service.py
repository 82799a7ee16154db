import logging
from pathlib import Path

from automatic.constants import UNIFIED_RULES_KEY
from automatic.instructions.regions import (
    LEGACY_SKILLS_MARKERS,
    RULES_MARKERS,
    apply_section,
    strip_region,
    user_body,
)
from automatic.models import InstructionMode, Project
from automatic.rules.repository import RulesRepository
from automatic.utils import unique, write_text_if_changed

logger = logging.getLogger(__name__)


class InstructionFileService:
    """Maintains the per-agent instruction files of a project."""

    def __init__(self, rules: RulesRepository) -> None:
        self._rules = rules

    def rule_ids_for(self, project: Project, filename: str) -> list[str]:
        if project.instruction_mode == InstructionMode.UNIFIED:
            return project.file_rules.get(UNIFIED_RULES_KEY, [])
        return project.file_rules.get(filename, [])

    def read_project_file(self, directory: Path, filename: str) -> str:
        path = directory / filename
        if not path.is_file():
            return ""
        return user_body(path.read_text(encoding="utf-8"))

    def save_project_file(
        self, directory: Path, filename: str, body: str, rule_ids: list[str]
    ) -> Path:
        path = directory / filename
        section = self._rules.build_rules_section(rule_ids)
        write_text_if_changed(path, apply_section(body, RULES_MARKERS, section))
        return path

    def refresh(self, project: Project, directory: Path, filenames: list[str]) -> list[Path]:
        """Strip legacy regions and re-apply rules on existing instruction files."""
        written: list[Path] = []
        for filename in unique(filenames):
            path = directory / filename
            if not path.is_file():
                continue
            try:
                original = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                logger.warning("Cannot read instruction file %s: %s", path, exc)
                continue
            updated = strip_region(original, LEGACY_SKILLS_MARKERS)
            section = self._rules.build_rules_section(self.rule_ids_for(project, filename))
            updated = apply_section(updated, RULES_MARKERS, section)
            if updated != original and write_text_if_changed(path, updated):
                written.append(path)
        return written

    def replicate_unified(
        self, project: Project, directory: Path, filenames: list[str]
    ) -> list[Path]:
        """Copy the first existing file's user body to every other filename."""
        targets = unique(filenames)
        if project.instruction_mode != InstructionMode.UNIFIED or len(targets) < 2:
            return []
        source = next((name for name in targets if (directory / name).is_file()), None)
        if source is None:
            return []

        body = self.read_project_file(directory, source)
        rule_ids = project.file_rules.get(UNIFIED_RULES_KEY, [])
        written: list[Path] = []
        for filename in targets:
            if filename == source:
                continue
            written.append(self.save_project_file(directory, filename, body, rule_ids))
        return written
