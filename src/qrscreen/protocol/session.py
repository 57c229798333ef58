"""Device session for the R-Call QR-screen.

One method per screen capability. Each call performs exactly one
request/response transaction; there are no retries. A screen that stays
silent is routine, so timeouts come back as ``None`` (data commands) or
``False`` (display commands). Only transport failures raise.

Usage::

    with ScreenSession.open("/dev/ttyACM0") as screen:
        print(screen.get_version())
        screen.show_header("R-Call")
        screen.show_qr_with_logo("https://example.com")

Sessions are not thread-safe. Callers sharing a session between threads must
serialise calls themselves.
"""

import logging

from qrscreen.protocol.constants import (
    BAUD_RATE,
    DEFAULT_READ_TIMEOUT_MS,
    DEFAULT_WRITE_TIMEOUT_MS,
    Command,
)
from qrscreen.protocol.frames import Frame, is_positive_response, strip_prefix
from qrscreen.serial.connection import ScreenConnection

logger = logging.getLogger(__name__)


class ScreenSession:
    """Request/response session bound to one open serial connection."""

    def __init__(self, connection: ScreenConnection):
        self._connection = connection

    @classmethod
    def open(
        cls,
        port: str,
        read_timeout_ms: int = DEFAULT_READ_TIMEOUT_MS,
        write_timeout_ms: int = DEFAULT_WRITE_TIMEOUT_MS,
        baudrate: int = BAUD_RATE,
    ) -> "ScreenSession":
        """
        Open *port* at 115200-8-N-1 and return a session on it.

        Raises:
            TransportOpenError: If the port cannot be opened or configured
        """
        connection = ScreenConnection(
            port,
            baudrate=baudrate,
            read_timeout_ms=read_timeout_ms,
            write_timeout_ms=write_timeout_ms,
        )
        connection.open()
        return cls(connection)

    @property
    def port(self) -> str:
        return self._connection.port

    @property
    def is_open(self) -> bool:
        return self._connection.connected

    @property
    def stats(self) -> dict:
        return self._connection.stats

    # -- timeouts -------------------------------------------------------------

    @property
    def read_timeout(self) -> int:
        """Read timeout in milliseconds."""
        return self._connection.read_timeout_ms

    @property
    def write_timeout(self) -> int:
        """Write timeout in milliseconds."""
        return self._connection.write_timeout_ms

    def set_read_timeout(self, timeout_ms: int) -> None:
        """Set the read timeout for subsequent transactions. Write timeout is kept."""
        self._connection.read_timeout_ms = timeout_ms

    def set_write_timeout(self, timeout_ms: int) -> None:
        """Set the write timeout for subsequent transactions. Read timeout is kept."""
        self._connection.write_timeout_ms = timeout_ms

    # -- data commands ----------------------------------------------------------

    def get_version(self) -> str | None:
        """
        Return the firmware version (e.g. ``QR-1.3.10.7789``).

        Returns:
            The version string, or None if the screen did not answer

        Raises:
            TransportIOError: If the port is unavailable or an I/O error occurs
        """
        return self._query(Command.GET_VERSION)

    def get_id(self) -> str | None:
        """
        Return the unique hardware id (e.g. ``4FFCB0033130363208473130``).

        Returns:
            The id string, or None if the screen did not answer

        Raises:
            TransportIOError: If the port is unavailable or an I/O error occurs
        """
        return self._query(Command.GET_ID)

    # -- display commands -------------------------------------------------------

    def show_id(self) -> bool:
        """Show the unique id as a QR code."""
        return self._execute(Command.SHOW_ID)

    def show_qr(self, text: str) -> bool:
        """Show *text* as a QR code without the logo."""
        return self._execute(Command.SHOW_QR, text)

    def show_qr_with_logo(self, text: str) -> bool:
        """Show *text* as a QR code with the logo."""
        return self._execute(Command.SHOW_QR_WITH_LOGO, text)

    def show_header(self, text: str) -> bool:
        return self._execute(Command.SHOW_HEADER, text)

    def show_footer(self, text: str) -> bool:
        return self._execute(Command.SHOW_FOOTER, text)

    def clear(self) -> bool:
        """Clear the QR code section, keeping the logo."""
        return self._execute(Command.CLEAR)

    def clear_without_logo(self) -> bool:
        """Clear the QR code section including the logo."""
        return self._execute(Command.CLEAR_WITHOUT_LOGO)

    def switch_off(self) -> bool:
        return self._execute(Command.SWITCH_OFF)

    # -- lifecycle ------------------------------------------------------------

    def close(self) -> None:
        """Release the serial port. Never raises and may be called repeatedly."""
        self._connection.close()

    def __enter__(self) -> "ScreenSession":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    # -- internals ------------------------------------------------------------

    def send(self, command: Command, text: str | None = None) -> str | None:
        """
        Send *command* (with optional *text*) and return the raw response line.

        Returns:
            The response line, or None if the screen did not answer in time

        Raises:
            TransportIOError: If the port is unavailable or an I/O error occurs
        """
        frame = Frame(command, text)
        logger.debug("Sending %s", frame)

        response = self._connection.transact(frame.to_bytes())

        if response is None:
            logger.debug("No response to %s", command.name)
        else:
            logger.debug("Response to %s: %r", command.name, response)
        return response

    def _query(self, command: Command) -> str | None:
        return strip_prefix(command, self.send(command))

    def _execute(self, command: Command, text: str | None = None) -> bool:
        return is_positive_response(command, self.send(command, text))

    def __repr__(self) -> str:
        state = "open" if self.is_open else "closed"
        return f"ScreenSession(port={self.port!r}, {state})"
