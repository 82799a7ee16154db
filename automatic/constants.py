from typing import Final


APP_DIRNAME: Final[str] = ".automatic"
PROJECTS_DIRNAME: Final[str] = "projects"
MCP_SERVERS_DIRNAME: Final[str] = "mcp_servers"
RULES_DIRNAME: Final[str] = "rules"
SKILLS_REGISTRY_FILENAME: Final[str] = "skills.json"
SETTINGS_FILENAME: Final[str] = "settings.json"
PROJECT_CONFIG_FILENAME: Final[str] = "project.json"

SKILL_FILENAME: Final[str] = "SKILL.md"
AGENTS_FILENAME: Final[str] = "AGENTS.md"
CLAUDE_FILENAME: Final[str] = "CLAUDE.md"

HUB_SKILLS_RELATIVE: Final[tuple[str, ...]] = (".agents", "skills")
CLAUDE_SKILLS_RELATIVE: Final[tuple[str, ...]] = (".claude", "skills")
GENERIC_SKILLS_DIRNAME: Final[str] = "skills"

SELF_SERVER_NAME: Final[str] = "automatic"
SELF_SERVER_COMMAND_ARGS: Final[tuple[str, ...]] = ("mcp-serve",)
PROJECT_ENV_VAR: Final[str] = "AUTOMATIC_PROJECT"
EXECUTABLE_NAME: Final[str] = "automatic"

UNIFIED_RULES_KEY: Final[str] = "_unified"

RULES_START_MARKER: Final[str] = "<!-- automatic:rules:start -->"
RULES_END_MARKER: Final[str] = "<!-- automatic:rules:end -->"
SKILLS_START_MARKER: Final[str] = "<!-- automatic:skills:start -->"
SKILLS_END_MARKER: Final[str] = "<!-- automatic:skills:end -->"
