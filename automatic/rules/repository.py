"""Repository for rule CRUD operations."""

from __future__ import annotations

import logging
from pathlib import Path

from automatic.config import AutomaticPaths
from automatic.constants import RULES_END_MARKER, RULES_START_MARKER
from automatic.errors import InvalidNameError, NotFoundError
from automatic.rules.models import Rule
from automatic.rules.parser import is_valid_machine_name, parse_rule, serialize_rule
from automatic.utils import write_text

logger = logging.getLogger(__name__)


class RulesRepository:
    def __init__(self, paths: AutomaticPaths) -> None:
        self._rules_dir = paths.rules_dir

    @property
    def rules_dir(self) -> Path:
        return self._rules_dir

    def _path(self, rule_id: str) -> Path:
        if not is_valid_machine_name(rule_id):
            raise InvalidNameError("rule", rule_id)
        return self._rules_dir / f"{rule_id}.md"

    def list_rules(self) -> list[Rule]:
        if not self._rules_dir.exists():
            return []
        rules: list[Rule] = []
        for child in sorted(self._rules_dir.iterdir()):
            if child.suffix == ".md" and is_valid_machine_name(child.stem):
                rules.append(parse_rule(child))
        return rules

    def get_rule(self, rule_id: str) -> Rule | None:
        path = self._path(rule_id)
        if not path.exists():
            return None
        return parse_rule(path)

    def read_rule(self, rule_id: str) -> Rule:
        rule = self.get_rule(rule_id)
        if rule is None:
            raise NotFoundError("Rule", rule_id)
        return rule

    def save_rule(self, rule_id: str, name: str, content: str) -> Rule:
        path = self._path(rule_id)
        rule = Rule(rule_id=rule_id, name=name or rule_id, source_path=path, content=content)
        write_text(path, serialize_rule(rule))
        return rule

    def remove_rule(self, rule_id: str) -> bool:
        path = self._path(rule_id)
        if not path.exists():
            return False
        path.unlink()
        return True

    def build_rules_section(self, rule_ids: list[str]) -> str:
        """Marker-wrapped rules block, or "" when no listed rule has content."""
        blocks: list[str] = []
        for rule_id in rule_ids:
            try:
                rule = self.get_rule(rule_id)
            except InvalidNameError:
                rule = None
            if rule is None:
                logger.warning("Rule '%s' not found, skipping", rule_id)
                continue
            body = rule.content.strip()
            if body:
                blocks.append(f"## {rule.name}\n\n{body}")
        if not blocks:
            return ""
        joined = "\n\n".join(blocks)
        return f"{RULES_START_MARKER}\n{joined}\n{RULES_END_MARKER}"
