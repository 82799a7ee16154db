from automatic.agents.agent_id import (
    AGENT_CATALOG,
    AgentCapability,
    AgentId,
    agent_label,
    agent_metadata,
)
from automatic.agents.common.framework import (
    RegisteredAgent,
    all_agents,
    create_registered_agent,
    list_registered_agents,
)

__all__ = [
    "AGENT_CATALOG",
    "AgentCapability",
    "AgentId",
    "RegisteredAgent",
    "agent_label",
    "agent_metadata",
    "all_agents",
    "create_registered_agent",
    "list_registered_agents",
]
