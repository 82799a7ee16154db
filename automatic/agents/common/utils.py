from copy import deepcopy
from typing import Any

from automatic.agents.common.models import (
    COMMON_FIELDS,
    MCPServerDTO,
    MCPTransport,
    transport_fields,
)


def infer_transport(payload: dict[str, Any]) -> MCPTransport | None:
    raw_type = payload.get("type")
    if isinstance(raw_type, str):
        try:
            return MCPTransport(raw_type)
        except ValueError:
            pass
    if isinstance(payload.get("command"), str):
        return MCPTransport.STDIO
    if isinstance(payload.get("url"), str):
        return MCPTransport.HTTP
    return None


def _string_map(value: Any) -> dict[str, str]:
    if not isinstance(value, dict):
        return {}
    return {str(k): str(v) for k, v in value.items()}


def server_from_canonical(name: str, payload: dict[str, Any]) -> MCPServerDTO:
    """Build a DTO from the canonical JSON shape.

    Keys that do not belong to the entry's transport are kept in ``extra``.
    Raises ValueError when the payload does not describe a usable server.
    """
    transport = infer_transport(payload)
    if transport is None:
        raise ValueError(f"cannot determine transport for server '{name}'")

    command: str | None = None
    url: str | None = None
    oauth: dict[str, Any] | None = None
    if transport == MCPTransport.STDIO:
        command = payload.get("command")
        if not isinstance(command, str) or not command:
            raise ValueError(f"stdio server '{name}' has no command")
    else:
        url = payload.get("url")
        if not isinstance(url, str) or not url:
            raise ValueError(f"{transport.value} server '{name}' has no url")
        raw_oauth = payload.get("oauth")
        oauth = deepcopy(raw_oauth) if isinstance(raw_oauth, dict) else None

    raw_args = payload.get("args") if transport == MCPTransport.STDIO else None
    enabled = payload.get("enabled")
    timeout = payload.get("timeout")
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
        timeout = None

    known = {"type", *transport_fields(transport)}
    extra = {k: deepcopy(v) for k, v in payload.items() if k not in known}

    return MCPServerDTO(
        name=name,
        transport=transport,
        command=command,
        args=[str(item) for item in raw_args] if isinstance(raw_args, list) else [],
        env=_string_map(payload.get("env"))
        if transport == MCPTransport.STDIO
        else {},
        url=url,
        headers=_string_map(payload.get("headers"))
        if transport != MCPTransport.STDIO
        else {},
        oauth=oauth,
        enabled=enabled if isinstance(enabled, bool) else None,
        timeout=timeout,
        extra=extra,
    )


def server_to_canonical(server: MCPServerDTO) -> dict[str, Any]:
    item: dict[str, Any] = {"type": server.transport.value}
    if server.transport == MCPTransport.STDIO:
        item["command"] = server.command
        if server.args:
            item["args"] = list(server.args)
        if server.env:
            item["env"] = dict(server.env)
    else:
        item["url"] = server.url
        if server.headers:
            item["headers"] = dict(server.headers)
        if server.oauth is not None:
            item["oauth"] = deepcopy(server.oauth)
    for key in COMMON_FIELDS:
        value = getattr(server, key)
        if value is not None:
            item[key] = value
    for key, value in server.extra.items():
        item.setdefault(key, deepcopy(value))
    return item


def canonical_map_to_dto(payload: dict[str, Any]) -> dict[str, MCPServerDTO]:
    mapped: dict[str, MCPServerDTO] = {}
    for name, raw in payload.items():
        if not isinstance(raw, dict):
            continue
        try:
            mapped[name] = server_from_canonical(name, raw)
        except ValueError:
            continue
    return mapped


def dto_to_canonical_map(servers: dict[str, MCPServerDTO]) -> dict[str, Any]:
    return {name: server_to_canonical(server) for name, server in servers.items()}
