"""Tests for RulesRepository."""

import pytest

from automatic.config import AutomaticPaths
from automatic.errors import InvalidNameError, NotFoundError
from automatic.rules.repository import RulesRepository


def test_list_empty(paths: AutomaticPaths) -> None:
    assert RulesRepository(paths).list_rules() == []


def test_save_and_list(paths: AutomaticPaths) -> None:
    repo = RulesRepository(paths)
    repo.save_rule("beta", "Beta", "Beta content.\n")
    repo.save_rule("alpha", "", "Alpha content.\n")
    (paths.rules_dir / "Not-Valid.md").write_text("ignored", encoding="utf-8")

    rules = repo.list_rules()
    assert [rule.rule_id for rule in rules] == ["alpha", "beta"]
    assert rules[0].name == "alpha"
    assert rules[1].name == "Beta"


def test_get_nonexistent(paths: AutomaticPaths) -> None:
    repo = RulesRepository(paths)
    assert repo.get_rule("nope") is None
    with pytest.raises(NotFoundError):
        repo.read_rule("nope")


def test_invalid_rule_id(paths: AutomaticPaths) -> None:
    with pytest.raises(InvalidNameError):
        RulesRepository(paths).save_rule("Bad Id", "x", "y")


def test_remove_existing(paths: AutomaticPaths) -> None:
    repo = RulesRepository(paths)
    repo.save_rule("removable", "Removable", "content")
    assert repo.remove_rule("removable") is True
    assert repo.remove_rule("removable") is False
    assert repo.get_rule("removable") is None


def test_build_rules_section(paths: AutomaticPaths) -> None:
    repo = RulesRepository(paths)
    repo.save_rule("style", "Style", "Use four spaces.\n")
    repo.save_rule("blank", "Blank", "   \n")

    section = repo.build_rules_section(["style", "missing", "blank", "Bad Id"])

    assert section == (
        "<!-- automatic:rules:start -->\n"
        "## Style\n\nUse four spaces.\n"
        "<!-- automatic:rules:end -->"
    )
    assert repo.build_rules_section(["missing"]) == ""
