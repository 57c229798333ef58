"""Protocol constants for QR-screen communication."""

from enum import Enum

# ============================================================================
# Port Settings (115200-8-N-1)
# ============================================================================

BAUD_RATE = 115200
DATA_BITS = 8
STOP_BITS = 1
PARITY_NONE = "N"

DEFAULT_READ_TIMEOUT_MS = 5000
DEFAULT_WRITE_TIMEOUT_MS = 5000

# ============================================================================
# Framing
# ============================================================================

TAG_OPEN = "["
TAG_CLOSE = "]"
LINE_TERMINATOR = "\n"
ENCODING = "utf-8"
POSITIVE_ANSWER = "OK"

# ============================================================================
# Command Tags
# ============================================================================


class Command(str, Enum):
    """Screen commands. The value is the tag sent on the wire (case-sensitive)."""

    # Data-returning
    GET_VERSION = "V"
    GET_ID = "ID"

    # Display
    SHOW_ID = "IDS"
    SHOW_QR = "Q"
    SHOW_QR_WITH_LOGO = "QL"
    SHOW_HEADER = "T1"
    SHOW_FOOTER = "T2"

    # Clear / power
    CLEAR = "CQ"
    CLEAR_WITHOUT_LOGO = "CQL"
    SWITCH_OFF = "OFF"

    @property
    def tag(self) -> str:
        return self.value

    @property
    def prefix(self) -> str:
        """Bracketed tag that starts both the request and the response line."""
        return f"{TAG_OPEN}{self.value}{TAG_CLOSE}"

    @property
    def positive_answer(self) -> str:
        """Exact response line acknowledging the command."""
        return self.prefix + POSITIVE_ANSWER


DATA_COMMANDS = frozenset({Command.GET_VERSION, Command.GET_ID})
