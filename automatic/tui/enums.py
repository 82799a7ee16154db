from enum import Enum

from automatic.models import DriftReason


class UIStyle(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    CYAN = "cyan"
    MAGENTA = "magenta"
    DIM = "dim"
    WHITE = "white"


DRIFT_REASON_STYLE = {
    DriftReason.MISSING: UIStyle.RED.value,
    DriftReason.MODIFIED: UIStyle.YELLOW.value,
    DriftReason.STALE: UIStyle.MAGENTA.value,
    DriftReason.UNREADABLE: UIStyle.RED.value,
}
