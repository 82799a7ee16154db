from automatic.agents.agent_id import AgentId
from automatic.agents.common.formats import STANDARD_FORMAT
from automatic.agents.common.framework import RegisteredAgent
from automatic.agents.common.mapper import TableMCPMapper
from automatic.agents.common.repositories import JsonConfigRepository


class CopilotAgent(RegisteredAgent):
    """GitHub Copilot in VS Code.

    ``.vscode/mcp.json`` may also carry ``inputs`` and other workspace
    keys, so only ``servers`` is replaced on write.
    """

    AGENT_ID = AgentId.COPILOT

    @classmethod
    def create_default(cls) -> "CopilotAgent":
        return cls(
            repository=JsonConfigRepository(
                cls.default_config_file(), root_key="servers", shared=True
            ),
            mapper=TableMCPMapper(STANDARD_FORMAT),
        )
