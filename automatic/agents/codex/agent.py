from automatic.agents.agent_id import AgentId
from automatic.agents.codex.config_repository import CodexConfigRepository
from automatic.agents.codex.mapper import CodexMCPMapper
from automatic.agents.common.framework import RegisteredAgent


class CodexAgent(RegisteredAgent):
    AGENT_ID = AgentId.CODEX

    @classmethod
    def create_default(cls) -> "CodexAgent":
        return cls(
            repository=CodexConfigRepository(cls.default_config_file()),
            mapper=CodexMCPMapper(),
        )
