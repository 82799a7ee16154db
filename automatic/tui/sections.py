from typing import Iterable

from rich.console import RenderableType
from rich.panel import Panel

from automatic.tui.enums import UIStyle


class UISection:
    @staticmethod
    def wrap(title: str, body: RenderableType, style: str = UIStyle.BLUE.value) -> Panel:
        return Panel(body, title=title, title_align="left", border_style=style, padding=(0, 1))

    @staticmethod
    def note(title: str, body: str, style: str = UIStyle.DIM.value) -> Panel:
        return UISection.wrap(title, body, style=style)

    @staticmethod
    def outcome(title: str, body: RenderableType, ok: bool) -> Panel:
        """Green panel on success, yellow when something needs attention."""
        return UISection.wrap(title, body, style=UIStyle.GREEN.value if ok else UIStyle.YELLOW.value)

    @staticmethod
    def bullets(title: str, items: Iterable[str], style: str = UIStyle.DIM.value) -> Panel:
        return UISection.wrap(title, "\n".join(f"- {item}" for item in items), style=style)
