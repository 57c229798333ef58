"""Core application functionality."""

from qrscreen.core.config import Settings, setup_logging
from qrscreen.core.exceptions import ScreenError, TransportError, TransportIOError, TransportOpenError

__all__ = [
    "ScreenError",
    "Settings",
    "TransportError",
    "TransportIOError",
    "TransportOpenError",
    "setup_logging",
]
