"""Project-wide constants for logwash."""

CONFIG_ENV_VAR = "LOGWASH_CONFIG"

DEFAULT_CUTOFF_LENGTH = 100
DEFAULT_INFINITE_LENGTH = 99999
DEFAULT_ABBREV = 7

DEFAULT_MARGIN_WIDTH = 28
DEFAULT_MARGIN_UNIT_WIDTH = 7

SHOW_MORE_TEXT = 'type "e" to show more history'

DEFAULT_GRAPH_GLYPHS = {
    "/": "╱",
    "|": "│",
    "\\": "╲",
    "*": "◆",
    "o": "◇",
}
