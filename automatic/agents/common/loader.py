_LOADED = False


def load_agent_modules() -> None:
    global _LOADED
    if _LOADED:
        return

    from automatic.agents import antigravity as _antigravity  # noqa: F401
    from automatic.agents import claude as _claude  # noqa: F401
    from automatic.agents import cline as _cline  # noqa: F401
    from automatic.agents import copilot as _copilot  # noqa: F401
    from automatic.agents import cursor as _cursor  # noqa: F401
    from automatic.agents import droid as _droid  # noqa: F401
    from automatic.agents import gemini as _gemini  # noqa: F401
    from automatic.agents import goose as _goose  # noqa: F401
    from automatic.agents import junie as _junie  # noqa: F401
    from automatic.agents import kilo as _kilo  # noqa: F401
    from automatic.agents import kiro as _kiro  # noqa: F401
    from automatic.agents import warp as _warp  # noqa: F401
    from automatic.agents.codex import agent as _codex_agent  # noqa: F401
    from automatic.agents.opencode import agent as _opencode_agent  # noqa: F401

    _LOADED = True
