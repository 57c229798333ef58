"""QR-screen protocol implementation."""

from qrscreen.protocol.constants import (
    BAUD_RATE,
    DEFAULT_READ_TIMEOUT_MS,
    DEFAULT_WRITE_TIMEOUT_MS,
    POSITIVE_ANSWER,
    Command,
)
from qrscreen.protocol.frames import Frame, decode_line, is_positive_response, strip_prefix

# ScreenSession imported lazily to avoid circular import with serial.connection
# (serial.connection -> core.exceptions -> core.__init__ -> core.config -> protocol.constants
#  -> protocol.__init__ -> session -> serial.connection)


def __getattr__(name: str):
    if name == "ScreenSession":
        from qrscreen.protocol.session import ScreenSession

        return ScreenSession
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "Frame",
    "ScreenSession",
    "decode_line",
    "is_positive_response",
    "strip_prefix",
    "BAUD_RATE",
    "DEFAULT_READ_TIMEOUT_MS",
    "DEFAULT_WRITE_TIMEOUT_MS",
    "POSITIVE_ANSWER",
    "Command",
]
