"""Error taxonomy for the QR-screen driver.

A device that does not answer is not an error: timeouts surface as ``None``
or ``False`` results. Only a broken transport raises.
"""


class ScreenError(Exception):
    """Base class for all QR-screen errors."""


class TransportError(ScreenError, ConnectionError):
    """The serial transport failed."""


class TransportOpenError(TransportError):
    """The serial port could not be opened or configured."""

    def __init__(self, port: str, reason: str):
        self.port = port
        self.reason = reason
        super().__init__(f"Failed to open {port}: {reason}")


class TransportIOError(TransportError):
    """A write or read failed for a reason other than a timeout."""
