import sys
import json
from pathlib import Path
from typing import Any

from click.testing import CliRunner
import pytest


def _ensure_repo_on_path() -> None:
    repo_root = Path(__file__).resolve().parent.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_ensure_repo_on_path()

from automatic.config import AutomaticPaths, Settings, SkillSyncMode  # noqa: E402
from automatic.models import Project  # noqa: E402
from automatic.sync.engine import SyncEngine  # noqa: E402

FAKE_EXECUTABLE = "/opt/automatic/bin/automatic"


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("AUTOMATIC_HOME", raising=False)
    monkeypatch.setattr(Path, "home", lambda: tmp_path)


@pytest.fixture
def paths(tmp_path: Path) -> AutomaticPaths:
    return AutomaticPaths.from_home(tmp_path)


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "work" / "demo"
    directory.mkdir(parents=True)
    return directory


@pytest.fixture
def write_json():
    def _write(path: Path, payload: dict) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload), encoding="utf-8")

    return _write


@pytest.fixture
def write_skill(paths: AutomaticPaths):
    def _write(name: str, body: str = "Do the thing.\n", root: Path | None = None) -> Path:
        skill_dir = (root or paths.agents_skills_dir) / name
        skill_dir.mkdir(parents=True, exist_ok=True)
        (skill_dir / "SKILL.md").write_text(
            f"---\nname: {name}\ndescription: {name} skill\n---\n\n{body}",
            encoding="utf-8",
        )
        return skill_dir

    return _write


@pytest.fixture
def make_engine(paths: AutomaticPaths):
    def _make(mode: SkillSyncMode = SkillSyncMode.SYMLINK) -> SyncEngine:
        return SyncEngine(
            paths,
            settings=Settings(skill_sync_mode=mode),
            executable=FAKE_EXECUTABLE,
        )

    return _make


@pytest.fixture
def engine(make_engine) -> SyncEngine:
    return make_engine()


@pytest.fixture
def make_project(project_dir: Path):
    def _make(**kwargs: Any) -> Project:
        kwargs.setdefault("name", "demo")
        kwargs.setdefault("directory", str(project_dir))
        return Project(**kwargs)

    return _make


@pytest.fixture
def cli_runner(tmp_path: Path) -> CliRunner:
    class HomeCliRunner(CliRunner):
        def invoke(self, cli: Any, args: Any = None, **kwargs: Any):  # type: ignore[override]
            env = dict(kwargs.pop("env", {}) or {})
            env.setdefault("HOME", str(tmp_path))
            env.setdefault("AUTOMATIC_HOME", str(tmp_path))
            kwargs["env"] = env
            return super().invoke(cli, args=args, **kwargs)

    return HomeCliRunner()
