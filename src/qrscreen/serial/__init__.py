"""Serial communication layer."""

from qrscreen.serial.connection import ScreenConnection

__all__ = ["ScreenConnection"]
