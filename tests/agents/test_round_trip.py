"""Render then rediscover every server shape through every agent."""

from dataclasses import replace
from pathlib import Path

import pytest

from automatic.agents.agent_id import AgentId
from automatic.agents.common.framework import create_registered_agent
from automatic.agents.common.models import MCPServerDTO, MCPTransport

STDIO = MCPTransport.STDIO
HTTP = MCPTransport.HTTP
SSE = MCPTransport.SSE

STANDARD_AGENTS = [
    AgentId.CLAUDE,
    AgentId.CURSOR,
    AgentId.COPILOT,
    AgentId.KILO,
    AgentId.JUNIE,
    AgentId.CLINE,
    AgentId.KIRO,
    AgentId.GEMINI,
    AgentId.ANTIGRAVITY,
    AgentId.GOOSE,
]

STDIO_STRIPPED = frozenset({"enabled", "timeout"})
CODEX_REMOTE_STRIPPED = frozenset({"enabled", "timeout", "oauth"})

# (agent, transport, dropped fields, transport after import, extras kept)
CASES = (
    [(agent, STDIO, STDIO_STRIPPED, STDIO, True) for agent in STANDARD_AGENTS]
    + [(agent, HTTP, frozenset(), HTTP, True) for agent in STANDARD_AGENTS]
    + [(agent, SSE, frozenset(), SSE, True) for agent in STANDARD_AGENTS]
    + [
        (AgentId.DROID, STDIO, STDIO_STRIPPED, STDIO, True),
        (AgentId.DROID, HTTP, frozenset(), HTTP, True),
        (AgentId.DROID, SSE, frozenset(), HTTP, True),
        (AgentId.OPENCODE, STDIO, frozenset({"enabled"}), STDIO, False),
        (AgentId.OPENCODE, HTTP, frozenset(), HTTP, False),
        (AgentId.OPENCODE, SSE, frozenset(), HTTP, False),
        (AgentId.CODEX, STDIO, STDIO_STRIPPED, STDIO, False),
        (AgentId.CODEX, HTTP, CODEX_REMOTE_STRIPPED, HTTP, False),
        (AgentId.CODEX, SSE, CODEX_REMOTE_STRIPPED, SSE, False),
    ]
)


def _server(transport: MCPTransport) -> MCPServerDTO:
    if transport == STDIO:
        return MCPServerDTO(
            name="tools",
            transport=STDIO,
            command="npx",
            args=["-y", "@acme/tools"],
            env={"TOKEN": "secret"},
            enabled=True,
            timeout=30,
            extra={"alwaysAllow": ["read"]},
        )
    return MCPServerDTO(
        name="tools",
        transport=transport,
        url="https://mcp.example.com/mcp",
        headers={"Authorization": "Bearer abc"},
        oauth={"clientId": "client-1"},
        enabled=False,
        timeout=10,
        extra={"note": "remote"},
    )


def _round_trip(agent_id: AgentId, directory: Path, server: MCPServerDTO) -> MCPServerDTO:
    agent = create_registered_agent(agent_id)
    agent.write_mcp_config(directory, {server.name: server})
    discovered = agent.discover_mcp_servers(directory)
    assert list(discovered) == [server.name]
    return discovered[server.name]


@pytest.mark.parametrize(
    ("agent_id", "transport", "dropped", "imported_transport", "keeps_extra"),
    CASES,
    ids=[f"{case[0].value}-{case[1].value}" for case in CASES],
)
def test_round_trip_drops_exactly_the_table_fields(
    tmp_path: Path,
    agent_id: AgentId,
    transport: MCPTransport,
    dropped: frozenset,
    imported_transport: MCPTransport,
    keeps_extra: bool,
) -> None:
    server = _server(transport)

    recovered = _round_trip(agent_id, tmp_path, server)

    expected = replace(
        server,
        transport=imported_transport,
        extra=server.extra if keeps_extra else {},
        **{field_name: None for field_name in dropped},
    )
    assert recovered == expected


@pytest.mark.parametrize(
    ("agent_id", "transport"),
    [(case[0], case[1]) for case in CASES],
    ids=[f"{case[0].value}-{case[1].value}" for case in CASES],
)
def test_second_round_trip_is_a_fixed_point(
    tmp_path: Path, agent_id: AgentId, transport: MCPTransport
) -> None:
    first = _round_trip(agent_id, tmp_path / "first", _server(transport))
    second = _round_trip(agent_id, tmp_path / "second", first)

    assert second == first


@pytest.mark.parametrize("agent_id", [AgentId.CLAUDE, AgentId.CODEX, AgentId.OPENCODE])
def test_stdio_transport_is_inferred_when_type_is_not_written(
    tmp_path: Path, agent_id: AgentId
) -> None:
    server = MCPServerDTO(
        name="nexus",
        transport=STDIO,
        command="/usr/local/bin/nexus",
        args=["mcp-serve"],
    )

    recovered = _round_trip(agent_id, tmp_path, server)

    assert recovered.transport == STDIO
    assert recovered.command == "/usr/local/bin/nexus"
    assert recovered.args == ["mcp-serve"]
