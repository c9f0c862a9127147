"""Console logging for the navigation engine's tick log.

Each line carries a bracketed tag and a colour so that flow-field rebuilds,
accepted obstacle changes, rejected placements and level-loading notes can be
told apart at a glance. The tags stay readable when colour is off
(``FLOWGRID_NO_COLOR``) or for colour-blind readers.
"""

import os
from enum import Enum


class Color(Enum):
    """ANSI escapes, one per kind of engine event."""

    BLUE = "\033[94m"      # field rebuilds
    RED = "\033[91m"       # placement refused by the connectivity gate or a zone rule
    GREEN = "\033[92m"     # obstacle placed or removed
    CYAN = "\033[96m"      # level loading

    BOLD = "\033[1m"
    RESET = "\033[0m"


def colored(text: str, color: Color, bold: bool = False) -> str:
    """Return ``text`` wrapped in ``color``, or unchanged when FLOWGRID_NO_COLOR is set."""
    if os.getenv("FLOWGRID_NO_COLOR"):
        return text

    prefix = Color.BOLD.value + color.value if bold else color.value
    return f"{prefix}{text}{Color.RESET.value}"


LOG_TAG_DETERMINISTIC = "[•]"
LOG_TAG_ERROR = "[!]"
LOG_TAG_SUCCESS = "[✓]"
LOG_TAG_INFO = "[i]"


def _emit(tag: str, message: str, color: Color) -> None:
    print(colored(f"{tag} {message}", color))


def log_deterministic(message: str) -> None:
    """Flow-field rebuild (blue)."""
    _emit(LOG_TAG_DETERMINISTIC, message, Color.BLUE)


def log_error(message: str) -> None:
    """Rejected placement, with its reason (red)."""
    _emit(LOG_TAG_ERROR, message, Color.RED)


def log_success(message: str) -> None:
    """Accepted grid mutation (green)."""
    _emit(LOG_TAG_SUCCESS, message, Color.GREEN)


def log_info(message: str) -> None:
    _emit(LOG_TAG_INFO, message, Color.CYAN)
