from pathlib import Path

from automatic.agents.agent_id import AgentId
from automatic.agents.common.framework import RegisteredAgent
from automatic.agents.common.models import MCPServerDTO


class WarpAgent(RegisteredAgent):
    """Warp keeps MCP servers in app-level settings only.

    Writing is a no-op that returns None; callers surface ``mcp_note``.
    """

    AGENT_ID = AgentId.WARP

    @classmethod
    def create_default(cls) -> "WarpAgent":
        return cls(repository=None, mapper=None)

    def write_mcp_config(
        self, directory: Path, servers: dict[str, MCPServerDTO]
    ) -> Path | None:
        return None

    def discover_mcp_servers(self, directory: Path) -> dict[str, MCPServerDTO]:
        return {}
