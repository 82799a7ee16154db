from pathlib import Path

import pytest

from automatic.errors import NotFoundError
from automatic.models import Project
from automatic.sync.engine import SyncEngine
from automatic.sync.local_skills import LocalSkillService, run_in_large_stack_worker


def test_find_and_read_local_skill(engine: SyncEngine, make_project, project_dir: Path, write_skill) -> None:
    write_skill("mine", body="local body\n", root=project_dir / "skills")
    service = LocalSkillService(engine)
    project = make_project(agents=["claude"], local_skills=["mine"])

    assert service.find_local_skill(project, "mine") == project_dir / "skills" / "mine"
    assert "local body" in service.read_local_skill(project, "mine")
    with pytest.raises(NotFoundError):
        service.read_local_skill(project, "nope")


def test_skill_dirs_cover_agents_hub_and_generic(engine: SyncEngine, make_project, project_dir: Path) -> None:
    dirs = LocalSkillService(engine).skill_dirs(make_project(agents=["claude", "junie"]))

    assert dirs == [
        project_dir / ".claude" / "skills",
        project_dir / ".junie" / "skills",
        project_dir / ".agents" / "skills",
        project_dir / "skills",
    ]


def test_save_new_local_skill_goes_to_hub(engine: SyncEngine, make_project, project_dir: Path) -> None:
    project = make_project(agents=["claude"])

    path = LocalSkillService(engine).save_local_skill(project, "fresh", "fresh body\n")

    assert path == project_dir / ".agents" / "skills" / "fresh" / "SKILL.md"
    assert project.local_skills == ["fresh"]
    assert engine.projects.read("demo").local_skills == ["fresh"]


def test_save_existing_local_skill_in_place(
    engine: SyncEngine, make_project, project_dir: Path, write_skill
) -> None:
    write_skill("mine", root=project_dir / ".claude" / "skills")
    project = make_project(agents=["claude"], local_skills=["mine"])

    path = LocalSkillService(engine).save_local_skill(project, "mine", "updated\n")

    assert path == project_dir / ".claude" / "skills" / "mine" / "SKILL.md"
    assert path.read_text(encoding="utf-8") == "updated\n"
    assert project.local_skills == ["mine"]


def test_import_local_skill_promotes_to_registry(
    engine: SyncEngine, make_project, project_dir: Path, write_skill
) -> None:
    source = write_skill("mine", root=project_dir / ".claude" / "skills")
    (source / "helper.py").write_text("print()", encoding="utf-8")
    project = make_project(agents=["claude"], local_skills=["mine"])

    updated = LocalSkillService(engine).import_local_skill(project, "mine")

    assert updated.local_skills == []
    assert updated.skills == ["mine"]
    assert engine.skills.exists("mine")
    assert (engine.skills.agents_dir / "mine" / "helper.py").is_file()
    assert engine.projects.read("demo").skills == ["mine"]


def test_sync_local_skills_across_agents(
    engine: SyncEngine, make_project, project_dir: Path, write_skill
) -> None:
    write_skill("mine", root=project_dir / "skills")
    project = make_project(agents=["claude", "junie"], local_skills=["mine", "ghost"])
    service = LocalSkillService(engine)

    created = service.sync_local_skills_across_agents(project)

    assert created == [
        project_dir / ".claude" / "skills" / "mine",
        project_dir / ".junie" / "skills" / "mine",
        project_dir / ".agents" / "skills" / "mine",
    ]
    assert service.sync_local_skills_across_agents(project) == []


def test_sync_local_skills_for_projects(
    engine: SyncEngine, make_project, project_dir: Path, write_skill
) -> None:
    write_skill("mine", root=project_dir / "skills")
    engine.projects.save(make_project(agents=["claude"], local_skills=["mine"]))
    engine.projects.save(Project(name="floating", local_skills=["mine"]))

    created = LocalSkillService(engine).sync_local_skills_for_projects(["demo", "floating"])

    assert created == {"demo": [project_dir / ".claude" / "skills" / "mine"]}


def test_worker_returns_value_and_reraises() -> None:
    assert run_in_large_stack_worker(lambda: 42) == 42

    def _boom() -> None:
        raise NotFoundError("Skill", "x")

    with pytest.raises(NotFoundError):
        run_in_large_stack_worker(_boom)
