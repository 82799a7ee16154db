from pathlib import Path
from typing import Any

from rich.console import Console
from rich.syntax import Syntax

from automatic.agents.common.framework import RegisteredAgent
from automatic.agents.common.models import MCPServerDTO
from automatic.models import CleanupResult, DriftReport, Project, SyncResult
from automatic.rules.models import Rule
from automatic.skills.models import SkillEntry
from automatic.sync.autodetect import AutodetectResult
from automatic.tui.enums import UIStyle
from automatic.tui.sections import UISection
from automatic.tui.tables import (
    AgentTable,
    DriftTable,
    PathTable,
    ProjectTable,
    RuleTable,
    ServerTable,
    SkillTable,
)
from automatic.utils import compact_home_path, dump_json


class SyncConsoleUI:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_sync_result(self, result: SyncResult, verbose: bool = False) -> None:
        written = len(dict.fromkeys(result.written))
        summary = f"Synced [bold]{result.project.name}[/bold]: {written} path(s) written"
        if result.failures:
            summary += f", {len(result.failures)} failure(s)"
        self.console.print(UISection.outcome("sync", summary, ok=result.ok))

        if verbose and result.written:
            self.console.print(
                UISection.wrap(
                    "written",
                    PathTable.paths_table(list(dict.fromkeys(result.written))),
                    style=UIStyle.CYAN.value,
                )
            )
        if result.notes:
            self.console.print(UISection.bullets("notes", result.notes))
        if result.failures:
            failures = [f"{item.agent_id}: {item.error}" for item in result.failures]
            self.console.print(UISection.bullets("failures", failures, style=UIStyle.RED.value))

    def render_autodetect(self, result: AutodetectResult) -> None:
        rows = [
            ("agents", result.agents),
            ("skills", result.skills),
            ("local skills", result.local_skills),
            ("MCP servers", sorted(result.servers)),
        ]
        lines = [f"[bold]{label}[/bold]: {', '.join(items) or '-'}" for label, items in rows]
        self.console.print(
            UISection.note(f"autodetect {result.project.name}", "\n".join(lines), style=UIStyle.BLUE.value)
        )

    def render_drift(self, project: Project, report: DriftReport) -> None:
        self.console.print(
            UISection.outcome(f"drift {project.name}", DriftTable.drift_group(report), ok=not report.drifted)
        )

    def render_projects(self, projects: list[Project]) -> None:
        if not projects:
            self.console.print(
                UISection.note("projects", "No projects configured.", style=UIStyle.YELLOW.value)
            )
            return
        self.console.print(
            UISection.wrap("projects", ProjectTable.overview_table(projects), style=UIStyle.BLUE.value)
        )

    def render_project(self, project: Project) -> None:
        self.console.print(
            UISection.wrap(project.name, ProjectTable.detail_block(project), style=UIStyle.BLUE.value)
        )

    def render_agents(self, agents: list[RegisteredAgent], selected: list[str] | None = None) -> None:
        self.console.print(
            UISection.wrap("agents", AgentTable.agents_table(agents, selected), style=UIStyle.BLUE.value)
        )
        notes = [f"{agent.label}: {agent.mcp_note}" for agent in agents if agent.mcp_note]
        if notes:
            self.console.print(UISection.bullets("notes", notes))

    def render_cleanup(self, agent_id: str, removed: list[Path], preview: bool = False) -> None:
        title = f"remove {agent_id}" + (" (preview)" if preview else "")
        if not removed:
            self.console.print(UISection.note(title, "Nothing to remove.", style=UIStyle.DIM.value))
            return
        header = "Would remove" if preview else "Removed"
        self.console.print(
            UISection.wrap(
                title,
                PathTable.paths_table(removed, header=header),
                style=UIStyle.YELLOW.value if preview else UIStyle.MAGENTA.value,
            )
        )

    def render_cleanup_result(self, result: CleanupResult) -> None:
        self.render_cleanup(result.agent_id, result.removed)
        if result.sync is not None and result.sync.failures:
            self.render_sync_result(result.sync)

    def render_servers(self, servers: dict[str, MCPServerDTO]) -> None:
        if not servers:
            self.console.print(
                UISection.note("mcp servers", "No MCP servers registered.", style=UIStyle.YELLOW.value)
            )
            return
        self.console.print(
            UISection.wrap("mcp servers", ServerTable.servers_table(servers), style=UIStyle.BLUE.value)
        )

    def render_document(self, title: str, text: str, lexer: str = "markdown") -> None:
        self.console.print(
            UISection.wrap(title, Syntax(text, lexer, word_wrap=True), style=UIStyle.CYAN.value)
        )

    def render_json(self, title: str, payload: Any) -> None:
        self.render_document(title, dump_json(payload), lexer="json")

    def render_skills(self, entries: list[SkillEntry]) -> None:
        if not entries:
            self.console.print(
                UISection.note("skills", "No skills installed.", style=UIStyle.YELLOW.value)
            )
            return
        self.console.print(
            UISection.wrap("skills", SkillTable.skills_table(entries), style=UIStyle.BLUE.value)
        )

    def render_rules(self, rules: list[Rule]) -> None:
        if not rules:
            self.console.print(UISection.note("rules", "No rules defined.", style=UIStyle.YELLOW.value))
            return
        self.console.print(
            UISection.wrap("rules", RuleTable.rules_table(rules), style=UIStyle.BLUE.value)
        )

    def render_saved(self, kind: str, name: str, path: Path | str | None = None, removed: bool = False) -> None:
        verb = "removed" if removed else "saved"
        body = f"{kind.capitalize()} {verb}: [bold]{name}[/bold]"
        if path is not None:
            body += f"\n{compact_home_path(path)}"
        style = UIStyle.YELLOW.value if removed else UIStyle.GREEN.value
        self.console.print(UISection.note(kind, body, style=style))

    def render_paths(self, title: str, paths: list[Path]) -> None:
        if not paths:
            self.console.print(UISection.note(title, "Nothing to do.", style=UIStyle.DIM.value))
            return
        self.console.print(
            UISection.wrap(title, PathTable.paths_table(paths), style=UIStyle.CYAN.value)
        )
