from automatic.tui.renderers import SyncConsoleUI

__all__ = ["SyncConsoleUI"]
