"""Parse and serialize rules with YAML frontmatter."""

from __future__ import annotations

import re
from pathlib import Path

import yaml

from automatic.rules.models import Rule

_FRONTMATTER_RE = re.compile(r"^---\s*\n(.*?)\n---\s*\n", re.DOTALL)
_MACHINE_NAME_RE = re.compile(r"^[a-z][a-z0-9]*(?:-[a-z0-9]+)*$")
MAX_MACHINE_NAME_LENGTH = 128


def is_valid_machine_name(value: str) -> bool:
    return len(value) <= MAX_MACHINE_NAME_LENGTH and bool(_MACHINE_NAME_RE.match(value))


def parse_rule(path: Path) -> Rule:
    text = path.read_text(encoding="utf-8")
    rule_id = path.stem

    match = _FRONTMATTER_RE.match(text)
    if match:
        raw = yaml.safe_load(match.group(1)) or {}
        content = text[match.end() :]
    else:
        raw = {}
        content = text
    if not isinstance(raw, dict):
        raw = {}

    return Rule(
        rule_id=rule_id,
        name=str(raw.get("name") or rule_id),
        source_path=path,
        content=content,
    )


def serialize_rule(rule: Rule) -> str:
    fm = {"name": rule.name}
    parts = [
        "---",
        yaml.dump(fm, default_flow_style=False, sort_keys=False).rstrip(),
        "---",
        "",
        rule.content,
    ]
    return "\n".join(parts)
