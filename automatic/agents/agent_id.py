from dataclasses import dataclass
from enum import Enum


class AgentId(str, Enum):
    CLAUDE = "claude"
    CURSOR = "cursor"
    COPILOT = "copilot"
    KILO = "kilo"
    JUNIE = "junie"
    CLINE = "cline"
    KIRO = "kiro"
    GEMINI = "gemini"
    ANTIGRAVITY = "antigravity"
    DROID = "droid"
    GOOSE = "goose"
    CODEX = "codex"
    OPENCODE = "opencode"
    WARP = "warp"


class AgentCapability(str, Enum):
    DETECT = "detect"
    MCP_CONFIG = "mcp_config"
    MCP_DISCOVERY = "mcp_discovery"
    SKILLS = "skills"
    INSTRUCTIONS = "instructions"


FULL_CAPABILITIES: frozenset[AgentCapability] = frozenset(AgentCapability)

HUB_SKILLS_DIR = ".agents/skills"


@dataclass(frozen=True)
class AgentMetadata:
    agent_id: AgentId
    label: str
    project_file_name: str
    config_file: str | None
    detect_markers: tuple[str, ...]
    skill_dirs: tuple[str, ...] = (HUB_SKILLS_DIR,)
    owned_dir: str | None = None
    capabilities: frozenset[AgentCapability] = FULL_CAPABILITIES
    mcp_note: str | None = None


AGENT_CATALOG: dict[AgentId, AgentMetadata] = {
    AgentId.CLAUDE: AgentMetadata(
        agent_id=AgentId.CLAUDE,
        label="Claude Code",
        project_file_name="CLAUDE.md",
        config_file=".mcp.json",
        detect_markers=(".mcp.json", ".claude/settings.json", ".claude/skills"),
        skill_dirs=(".claude/skills",),
    ),
    AgentId.CURSOR: AgentMetadata(
        agent_id=AgentId.CURSOR,
        label="Cursor",
        project_file_name=".cursorrules",
        config_file=".cursor/mcp.json",
        detect_markers=(".cursor/mcp.json", ".cursor/rules", ".cursorrules"),
    ),
    AgentId.COPILOT: AgentMetadata(
        agent_id=AgentId.COPILOT,
        label="GitHub Copilot",
        project_file_name=".github/copilot-instructions.md",
        config_file=".vscode/mcp.json",
        detect_markers=(".github/copilot-instructions.md", ".vscode/mcp.json"),
    ),
    AgentId.KILO: AgentMetadata(
        agent_id=AgentId.KILO,
        label="Kilo Code",
        project_file_name="AGENTS.md",
        config_file=".kilocode/mcp.json",
        detect_markers=(".kilocode",),
        owned_dir=".kilocode",
    ),
    AgentId.JUNIE: AgentMetadata(
        agent_id=AgentId.JUNIE,
        label="Junie",
        project_file_name=".junie/guidelines.md",
        config_file=".junie/mcp.json",
        detect_markers=(".junie",),
        skill_dirs=(".junie/skills", HUB_SKILLS_DIR),
        owned_dir=".junie",
    ),
    AgentId.CLINE: AgentMetadata(
        agent_id=AgentId.CLINE,
        label="Cline",
        project_file_name="AGENTS.md",
        config_file=".cline/mcp.json",
        detect_markers=(".cline/mcp.json", ".clinerules", ".cline/skills"),
        skill_dirs=(".cline/skills",),
    ),
    AgentId.KIRO: AgentMetadata(
        agent_id=AgentId.KIRO,
        label="Kiro",
        project_file_name="AGENTS.md",
        config_file=".kiro/settings/mcp.json",
        detect_markers=(".kiro",),
        owned_dir=".kiro",
    ),
    AgentId.GEMINI: AgentMetadata(
        agent_id=AgentId.GEMINI,
        label="Gemini CLI",
        project_file_name="GEMINI.md",
        config_file=".gemini/settings.json",
        detect_markers=("GEMINI.md", ".gemini/settings.json"),
    ),
    AgentId.ANTIGRAVITY: AgentMetadata(
        agent_id=AgentId.ANTIGRAVITY,
        label="Antigravity",
        project_file_name="AGENTS.md",
        config_file=".antigravity/mcp.json",
        detect_markers=(".antigravity",),
        owned_dir=".antigravity",
    ),
    AgentId.DROID: AgentMetadata(
        agent_id=AgentId.DROID,
        label="Droid",
        project_file_name="AGENTS.md",
        config_file=".factory/mcp.json",
        detect_markers=(".factory/mcp.json",),
    ),
    AgentId.GOOSE: AgentMetadata(
        agent_id=AgentId.GOOSE,
        label="Goose",
        project_file_name=".goosehints",
        config_file=".goose/mcp.json",
        detect_markers=(".goosehints", ".goose"),
        owned_dir=".goose",
    ),
    AgentId.CODEX: AgentMetadata(
        agent_id=AgentId.CODEX,
        label="Codex CLI",
        project_file_name="AGENTS.md",
        config_file=".codex/config.toml",
        detect_markers=(".codex/config.toml",),
    ),
    AgentId.OPENCODE: AgentMetadata(
        agent_id=AgentId.OPENCODE,
        label="OpenCode",
        project_file_name="AGENTS.md",
        config_file="opencode.json",
        detect_markers=("opencode.json", ".opencode.json"),
    ),
    AgentId.WARP: AgentMetadata(
        agent_id=AgentId.WARP,
        label="Warp",
        project_file_name="AGENTS.md",
        config_file=None,
        detect_markers=("WARP.md", ".warp"),
        owned_dir=".warp",
        capabilities=frozenset(
            {
                AgentCapability.DETECT,
                AgentCapability.SKILLS,
                AgentCapability.INSTRUCTIONS,
            }
        ),
        mcp_note=(
            "Warp stores MCP servers in its own app settings. Add them from "
            "Settings > AI > MCP Servers; no project file is written."
        ),
    ),
}


def parse_agent_id(value: "AgentId | str") -> AgentId | None:
    if isinstance(value, AgentId):
        return value
    try:
        return AgentId(value)
    except ValueError:
        return None


def agent_metadata(agent: AgentId | str) -> AgentMetadata:
    agent_id = agent if isinstance(agent, AgentId) else AgentId(agent)
    return AGENT_CATALOG[agent_id]


def agent_label(agent: AgentId | str) -> str:
    return agent_metadata(agent).label


def agent_ids_by_capability(capability: AgentCapability) -> list[AgentId]:
    return [
        agent_id
        for agent_id, metadata in AGENT_CATALOG.items()
        if capability in metadata.capabilities
    ]
