import functools
import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from automatic import __version__
from automatic.agents.agent_id import AgentCapability, AgentId, agent_ids_by_capability, parse_agent_id
from automatic.agents.common.framework import all_agents, create_registered_agent
from automatic.agents.common.models import MCPTransport
from automatic.config import AutomaticPaths
from automatic.constants import UNIFIED_RULES_KEY
from automatic.errors import AlreadyExistsError, AutomaticError, NotFoundError, UnknownAgentIdError
from automatic.models import InstructionMode, Project
from automatic.remote.fetcher import install_remote_skill
from automatic.sync.cleanup import CleanupManager
from automatic.sync.drift import DriftDetector
from automatic.sync.engine import SyncEngine
from automatic.sync.local_skills import LocalSkillService
from automatic.tui import SyncConsoleUI
from automatic.utils import dump_json


AGENT_VALUES = [agent.value for agent in AgentId]
TRANSPORT_VALUES = [transport.value for transport in MCPTransport]


def _configure_logging(verbose: bool) -> None:
    logger = logging.getLogger("automatic")
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _reports_errors(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except AutomaticError as exc:
            raise click.ClickException(str(exc)) from exc

    return wrapper


def _engine(obj: Dict[str, Any]) -> SyncEngine:
    engine = obj.get("engine")
    if engine is None:
        engine = SyncEngine(obj["paths"])
        obj["engine"] = engine
    return engine


def _parse_pairs(values: tuple[str, ...], option: str) -> dict[str, str]:
    pairs: dict[str, str] = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got '{item}'", param_hint=option)
        pairs[key] = value
    return pairs


def _agent_argument() -> Callable:
    return click.argument("agent", type=click.Choice(AGENT_VALUES, case_sensitive=False))


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--home",
    type=click.Path(path_type=Path, file_okay=False),
    envvar="AUTOMATIC_HOME",
    default=None,
    help="Root holding .automatic, .agents/skills and .claude/skills.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.version_option(__version__, prog_name="automatic")
@click.pass_context
def cli(ctx: click.Context, home: Optional[Path], verbose: bool) -> None:
    """Sync MCP servers, skills and rules into every coding agent of a project."""
    _configure_logging(verbose)
    ctx.obj = {"paths": AutomaticPaths.from_home(home), "verbose": verbose}


@cli.command(help="Autodetect, then render a project into its agents' files.")
@click.argument("project")
@click.option("--no-autodetect", is_flag=True, help="Render the stored state only.")
@click.pass_obj
@_reports_errors
def sync(obj: Dict[str, Any], project: str, no_autodetect: bool) -> None:
    ui = SyncConsoleUI(Console())
    engine = _engine(obj)
    current = engine.projects.read(project)
    if no_autodetect:
        result = engine.sync_without_autodetect(current)
    else:
        result = engine.sync(current)
    ui.render_sync_result(result, verbose=obj["verbose"])
    if not result.ok:
        raise click.exceptions.Exit(1)


@cli.command(help="Show what autodetect finds in a project directory.")
@click.argument("project")
@click.pass_obj
@_reports_errors
def autodetect(obj: Dict[str, Any], project: str) -> None:
    ui = SyncConsoleUI(Console())
    engine = _engine(obj)
    ui.render_autodetect(engine.autodetect(engine.projects.read(project)))


@cli.command(help="Compare rendered output with the files on disk.")
@click.argument("project")
@click.option("--json", "as_json", is_flag=True, help="Print the drift report as JSON.")
@click.pass_obj
@_reports_errors
def drift(obj: Dict[str, Any], project: str, as_json: bool) -> None:
    engine = _engine(obj)
    current = engine.projects.read(project)
    report = DriftDetector(engine).check(current)
    if as_json:
        click.echo(dump_json(report.as_dict()), nl=False)
    else:
        SyncConsoleUI(Console()).render_drift(current, report)
    if report.drifted:
        raise click.exceptions.Exit(1)


@cli.group(help="Manage projects.")
def projects() -> None:
    pass


@projects.command("list", help="List projects.")
@click.pass_obj
@_reports_errors
def projects_list(obj: Dict[str, Any]) -> None:
    SyncConsoleUI(Console()).render_projects(_engine(obj).projects.list_projects())


@projects.command("show", help="Show one project.")
@click.argument("name")
@click.pass_obj
@_reports_errors
def projects_show(obj: Dict[str, Any], name: str) -> None:
    SyncConsoleUI(Console()).render_project(_engine(obj).projects.read(name))


@projects.command("create", help="Create a project.")
@click.argument("name")
@click.option("--dir", "directory", type=click.Path(path_type=Path, file_okay=False), default=None)
@click.option("--description", default="")
@click.option("--agent", "agents", multiple=True, type=click.Choice(AGENT_VALUES, case_sensitive=False))
@click.option("--skill", "skills", multiple=True)
@click.option("--mcp", "servers", multiple=True)
@click.option("--unified", is_flag=True, help="Replicate one instruction body to every agent file.")
@click.pass_obj
@_reports_errors
def projects_create(
    obj: Dict[str, Any],
    name: str,
    directory: Optional[Path],
    description: str,
    agents: tuple[str, ...],
    skills: tuple[str, ...],
    servers: tuple[str, ...],
    unified: bool,
) -> None:
    engine = _engine(obj)
    if engine.projects.exists(name):
        raise AlreadyExistsError("Project", name)
    project = Project(
        name=name,
        directory=str(directory.expanduser().resolve()) if directory else "",
        description=description,
        instruction_mode=InstructionMode.UNIFIED if unified else InstructionMode.PER_AGENT,
    )
    for agent in agents:
        project.merge_agent(agent.lower())
    for skill in skills:
        project.merge_skill(skill)
    for server in servers:
        project.merge_mcp_server(server)
    engine.projects.save(project)
    SyncConsoleUI(Console()).render_saved("project", name, project.directory or None)


@projects.command("delete", help="Delete a project entry. Project files are kept.")
@click.argument("name")
@click.pass_obj
@_reports_errors
def projects_delete(obj: Dict[str, Any], name: str) -> None:
    if not _engine(obj).projects.delete(name):
        raise NotFoundError("Project", name)
    SyncConsoleUI(Console()).render_saved("project", name, removed=True)


@projects.command("rename", help="Rename a project.")
@click.argument("old_name")
@click.argument("new_name")
@click.pass_obj
@_reports_errors
def projects_rename(obj: Dict[str, Any], old_name: str, new_name: str) -> None:
    project = _engine(obj).projects.rename(old_name, new_name)
    SyncConsoleUI(Console()).render_saved("project", project.name, project.directory or None)


@cli.group(help="Inspect and select coding agents.")
def agents() -> None:
    pass


@agents.command("list", help="List supported agents, or the agents of a project.")
@click.argument("project", required=False)
@click.option(
    "--capability",
    type=click.Choice([item.value for item in AgentCapability], case_sensitive=False),
    default=None,
)
@click.pass_obj
@_reports_errors
def agents_list(obj: Dict[str, Any], project: Optional[str], capability: Optional[str]) -> None:
    known = all_agents()
    if capability is not None:
        allowed = set(agent_ids_by_capability(AgentCapability(capability.lower())))
        known = [agent for agent in known if agent.agent_id in allowed]
    selected = _engine(obj).projects.read(project).agents if project else None
    SyncConsoleUI(Console()).render_agents(known, selected)


@agents.command("add", help="Add an agent to a project and render it.")
@click.argument("project")
@_agent_argument()
@click.pass_obj
@_reports_errors
def agents_add(obj: Dict[str, Any], project: str, agent: str) -> None:
    engine = _engine(obj)
    current = engine.projects.read(project)
    current.merge_agent(create_registered_agent(agent).agent_id.value)
    result = engine.sync_without_autodetect(current)
    SyncConsoleUI(Console()).render_sync_result(result, verbose=obj["verbose"])
    if not result.ok:
        raise click.exceptions.Exit(1)


@agents.command("remove", help="Remove an agent from a project and delete its files.")
@click.argument("project")
@_agent_argument()
@click.option("--preview", is_flag=True, help="Only list the paths that would be removed.")
@click.pass_obj
@_reports_errors
def agents_remove(obj: Dict[str, Any], project: str, agent: str, preview: bool) -> None:
    ui = SyncConsoleUI(Console())
    engine = _engine(obj)
    current = engine.projects.read(project)
    agent_id = parse_agent_id(agent)
    if agent_id is None:
        raise UnknownAgentIdError(agent)
    if agent_id.value not in current.agents:
        raise NotFoundError("Agent", f"{agent_id.value} in project {project}")
    manager = CleanupManager(engine)
    if preview:
        ui.render_cleanup(agent_id.value, manager.preview_remove_agent(current, agent_id.value), preview=True)
        return
    result = manager.remove_agent(current, agent_id.value)
    ui.render_cleanup_result(result)
    if result.sync is not None and not result.sync.ok:
        raise click.exceptions.Exit(1)


@cli.group(help="Manage the MCP server registry.")
def mcp() -> None:
    pass


@mcp.command("list", help="List registered MCP servers.")
@click.pass_obj
@_reports_errors
def mcp_list(obj: Dict[str, Any]) -> None:
    SyncConsoleUI(Console()).render_servers(_engine(obj).servers.list_servers())


@mcp.command("show", help="Show one MCP server config.")
@click.argument("name")
@click.pass_obj
@_reports_errors
def mcp_show(obj: Dict[str, Any], name: str) -> None:
    SyncConsoleUI(Console()).render_json(name, _engine(obj).servers.read_raw(name))


@mcp.command("add", help="Add or replace an MCP server.")
@click.argument("name")
@click.option("--type", "transport", type=click.Choice(TRANSPORT_VALUES), default=None)
@click.option("--command", default=None)
@click.option("--arg", "args", multiple=True)
@click.option("--env", "env", multiple=True, metavar="KEY=VALUE")
@click.option("--url", default=None)
@click.option("--header", "headers", multiple=True, metavar="KEY=VALUE")
@click.option("--json", "raw_json", default=None, help="Full canonical config as JSON.")
@click.pass_obj
@_reports_errors
def mcp_add(
    obj: Dict[str, Any],
    name: str,
    transport: Optional[str],
    command: Optional[str],
    args: tuple[str, ...],
    env: tuple[str, ...],
    url: Optional[str],
    headers: tuple[str, ...],
    raw_json: Optional[str],
) -> None:
    if raw_json is not None:
        try:
            payload = json.loads(raw_json)
        except json.JSONDecodeError as exc:
            raise click.BadParameter(str(exc), param_hint="--json")
    else:
        payload = {}
        if transport:
            payload["type"] = transport
        if command:
            payload["command"] = command
        if args:
            payload["args"] = list(args)
        if env:
            payload["env"] = _parse_pairs(env, "--env")
        if url:
            payload["url"] = url
        if headers:
            payload["headers"] = _parse_pairs(headers, "--header")
    path = _engine(obj).servers.save_raw(name, payload)
    SyncConsoleUI(Console()).render_saved("MCP server", name, path)


@mcp.command("remove", help="Remove an MCP server from the registry.")
@click.argument("name")
@click.pass_obj
@_reports_errors
def mcp_remove(obj: Dict[str, Any], name: str) -> None:
    if not _engine(obj).servers.delete(name):
        raise NotFoundError("MCP server", name)
    SyncConsoleUI(Console()).render_saved("MCP server", name, removed=True)


@cli.group(help="Manage global and project-local skills.")
def skills() -> None:
    pass


@skills.command("list", help="List global skills.")
@click.pass_obj
@_reports_errors
def skills_list(obj: Dict[str, Any]) -> None:
    SyncConsoleUI(Console()).render_skills(_engine(obj).skills.list_skills())


@skills.command("show", help="Print a skill document.")
@click.argument("name")
@click.pass_obj
@_reports_errors
def skills_show(obj: Dict[str, Any], name: str) -> None:
    SyncConsoleUI(Console()).render_document(name, _engine(obj).skills.read_skill(name))


@skills.command("delete", help="Delete a skill from both global locations.")
@click.argument("name")
@click.pass_obj
@_reports_errors
def skills_delete(obj: Dict[str, Any], name: str) -> None:
    if not _engine(obj).skills.delete_skill(name):
        raise NotFoundError("Skill", name)
    SyncConsoleUI(Console()).render_saved("skill", name, removed=True)


@skills.command("sync", help="Copy skills into whichever global location lacks them.")
@click.argument("name", required=False)
@click.pass_obj
@_reports_errors
def skills_sync(obj: Dict[str, Any], name: Optional[str]) -> None:
    store = _engine(obj).skills
    created = store.sync_skill(name) if name else store.sync_all_skills()
    SyncConsoleUI(Console()).render_paths("skills sync", created)


@skills.command("import-local", help="Promote a project-local skill to the global registry.")
@click.argument("project")
@click.argument("name")
@click.pass_obj
@_reports_errors
def skills_import_local(obj: Dict[str, Any], project: str, name: str) -> None:
    engine = _engine(obj)
    service = LocalSkillService(engine)
    updated = service.import_local_skill(engine.projects.read(project), name)
    SyncConsoleUI(Console()).render_project(updated)


@skills.command("fetch", help="Install a skill from a GitHub repository (owner/repo).")
@click.argument("source")
@click.argument("name")
@click.pass_obj
@_reports_errors
def skills_fetch(obj: Dict[str, Any], source: str, name: str) -> None:
    path = install_remote_skill(_engine(obj).skills, source, name)
    SyncConsoleUI(Console()).render_saved("skill", name, path)


@cli.group(help="Manage reusable instruction rules.")
def rules() -> None:
    pass


@rules.command("list", help="List rules.")
@click.pass_obj
@_reports_errors
def rules_list(obj: Dict[str, Any]) -> None:
    SyncConsoleUI(Console()).render_rules(_engine(obj).rules.list_rules())


@rules.command("add", help="Add or replace a rule.")
@click.argument("rule_id")
@click.option("--name", default="", help="Display name (defaults to the rule id).")
@click.option("--content", default=None)
@click.option("--file", "source", type=click.Path(path_type=Path, dir_okay=False, exists=True), default=None)
@click.pass_obj
@_reports_errors
def rules_add(
    obj: Dict[str, Any], rule_id: str, name: str, content: Optional[str], source: Optional[Path]
) -> None:
    if (content is None) == (source is None):
        raise click.UsageError("Pass exactly one of --content or --file.")
    if source is not None:
        content = source.read_text(encoding="utf-8")
    rule = _engine(obj).rules.save_rule(rule_id, name, content or "")
    SyncConsoleUI(Console()).render_saved("rule", rule.rule_id, rule.source_path)


@rules.command("remove", help="Remove a rule.")
@click.argument("rule_id")
@click.pass_obj
@_reports_errors
def rules_remove(obj: Dict[str, Any], rule_id: str) -> None:
    if not _engine(obj).rules.remove_rule(rule_id):
        raise NotFoundError("Rule", rule_id)
    SyncConsoleUI(Console()).render_saved("rule", rule_id, removed=True)


@rules.command("attach", help="Attach rules to a project instruction file.")
@click.argument("project")
@click.argument("rule_ids", nargs=-1, required=True)
@click.option("--file", "filename", default=None, help="Instruction file; unified set when omitted.")
@click.pass_obj
@_reports_errors
def rules_attach(obj: Dict[str, Any], project: str, rule_ids: tuple[str, ...], filename: Optional[str]) -> None:
    engine = _engine(obj)
    current = engine.projects.read(project)
    for rule_id in rule_ids:
        engine.rules.read_rule(rule_id)
    key = filename or UNIFIED_RULES_KEY
    attached = current.file_rules.setdefault(key, [])
    for rule_id in rule_ids:
        if rule_id not in attached:
            attached.append(rule_id)
    engine.projects.save(current)
    SyncConsoleUI(Console()).render_project(current)


def main() -> int:
    try:
        cli(standalone_mode=False)
    except click.exceptions.Exit as exc:
        code = exc.exit_code
        return code if isinstance(code, int) else 1
    except click.ClickException as exc:
        exc.show()
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
