from pathlib import Path

from rich.console import Group
from rich.padding import Padding
from rich.table import Column, Table
from rich.text import Text

from automatic.agents.common.framework import RegisteredAgent
from automatic.agents.common.models import MCPServerDTO, MCPTransport
from automatic.models import DriftReport, Project
from automatic.rules.models import Rule
from automatic.skills.models import SkillEntry
from automatic.tui.enums import DRIFT_REASON_STYLE, UIStyle
from automatic.utils import compact_home_path


def _flag(value: bool) -> str:
    if value:
        return f"[{UIStyle.GREEN.value}]yes[/{UIStyle.GREEN.value}]"
    return f"[{UIStyle.DIM.value}]no[/{UIStyle.DIM.value}]"


class ProjectTable:
    @staticmethod
    def overview_table(projects: list[Project]) -> Table:
        table = Table(
            Column(header="Project", width=20),
            Column(header="Directory", overflow="ellipsis"),
            Column(header="Agents", overflow="fold"),
            Column(header="Skills", width=7, justify="right"),
            Column(header="MCP", width=5, justify="right"),
            expand=True,
            header_style="bold",
        )
        for project in projects:
            directory = compact_home_path(project.directory) if project.directory else "(not set)"
            table.add_row(
                project.name,
                directory,
                ", ".join(project.agents) or "-",
                str(len(project.skills) + len(project.local_skills)),
                str(len(project.mcp_servers)),
            )
        return table

    @staticmethod
    def detail_block(project: Project):
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column(overflow="fold")
        table.add_row("Directory", compact_home_path(project.directory) if project.directory else "(not set)")
        if project.description:
            table.add_row("Description", project.description)
        table.add_row("Agents", ", ".join(project.agents) or "-")
        table.add_row("Skills", ", ".join(project.skills) or "-")
        table.add_row("Local skills", ", ".join(project.local_skills) or "-")
        table.add_row("MCP servers", ", ".join(project.mcp_servers) or "-")
        table.add_row("Instructions", project.instruction_mode.value)
        for filename, rule_ids in sorted(project.file_rules.items()):
            table.add_row(f"Rules {filename}", ", ".join(rule_ids) or "-")
        return table


class AgentTable:
    @staticmethod
    def agents_table(agents: list[RegisteredAgent], selected: list[str] | None = None) -> Table:
        columns = [
            Column(header="Id", width=12),
            Column(header="Agent", width=16),
            Column(header="MCP config", overflow="ellipsis"),
            Column(header="Instructions", overflow="ellipsis"),
        ]
        if selected is not None:
            columns.append(Column(header="Selected", width=9))
        table = Table(*columns, expand=True, header_style="bold")
        for agent in agents:
            row = [
                agent.agent_id.value,
                agent.label,
                agent.config_description(),
                agent.project_file_name,
            ]
            if selected is not None:
                row.append(_flag(agent.agent_id.value in selected))
            table.add_row(*row)
        return table


class ServerTable:
    @staticmethod
    def servers_table(servers: dict[str, MCPServerDTO]) -> Table:
        table = Table(
            Column(header="Server", width=20),
            Column(header="Transport", width=10),
            Column(header="Target", overflow="ellipsis"),
            expand=True,
            header_style="bold",
        )
        for name, server in sorted(servers.items()):
            if server.transport == MCPTransport.STDIO:
                target = " ".join([server.command or "", *server.args]).strip()
            else:
                target = server.url or ""
            table.add_row(name, server.transport.value, target)
        return table


class SkillTable:
    @staticmethod
    def skills_table(entries: list[SkillEntry]) -> Table:
        table = Table(
            Column(header="Skill", width=24),
            Column(header=".agents", width=8),
            Column(header=".claude", width=8),
            Column(header="Resources", width=10),
            Column(header="Source", overflow="ellipsis"),
            Column(header="Description", overflow="ellipsis"),
            expand=True,
            header_style="bold",
        )
        for entry in entries:
            table.add_row(
                entry.name,
                _flag(entry.in_agents),
                _flag(entry.in_claude),
                _flag(entry.has_resources),
                entry.source.source if entry.source else "",
                entry.description,
            )
        return table


class RuleTable:
    @staticmethod
    def rules_table(rules: list[Rule]) -> Table:
        table = Table(
            Column(header="Rule", width=24),
            Column(header="Name", width=24),
            Column(header="Preview", overflow="ellipsis"),
            expand=True,
            header_style="bold",
        )
        for rule in rules:
            preview = rule.content.strip().splitlines()[0] if rule.content.strip() else ""
            table.add_row(rule.rule_id, rule.name, preview)
        return table


class DriftTable:
    @staticmethod
    def drift_group(report: DriftReport):
        blocks = []
        for agent in report.agents:
            if not agent.files:
                continue
            table = Table(
                Column(header="Path", overflow="fold"),
                Column(header="Reason", width=12),
                expand=True,
                header_style="bold",
            )
            for item in agent.files:
                style = DRIFT_REASON_STYLE.get(item.reason, UIStyle.WHITE.value)
                table.add_row(item.path, f"[{style}]{item.reason.value}[/{style}]")
            heading = Text(f"{agent.agent_label} ({agent.agent_id})", style="bold")
            blocks.append(Group(heading, Padding(table, (0, 0, 0, 2))))
        if not blocks:
            return Text("No drift.", style=UIStyle.DIM.value)
        return Group(*blocks)


class PathTable:
    @staticmethod
    def paths_table(paths: list[Path], header: str = "Path") -> Table:
        table = Table(Column(header=header, overflow="fold"), expand=True, header_style="bold")
        for path in paths:
            table.add_row(compact_home_path(path))
        return table
