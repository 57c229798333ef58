"""Serial port connection for the QR-screen using pyserial.

Reads are semi-blocking: ``readline()`` returns as soon as a ``\n`` terminator
arrives, or with whatever was received when the read timeout elapses. A line
without its terminator therefore means the screen did not answer in time.
"""

import logging

import serial
from serial import SerialException, SerialTimeoutException

from qrscreen.core.exceptions import TransportIOError, TransportOpenError
from qrscreen.protocol.constants import (
    BAUD_RATE,
    DEFAULT_READ_TIMEOUT_MS,
    DEFAULT_WRITE_TIMEOUT_MS,
    ENCODING,
    LINE_TERMINATOR,
)
from qrscreen.protocol.frames import decode_line

logger = logging.getLogger(__name__)

_TERMINATOR = LINE_TERMINATOR.encode(ENCODING)


def _ms_to_seconds(timeout_ms: int) -> float | None:
    """Convert to pyserial seconds. 0 ms means block until done (pyserial None)."""
    if timeout_ms == 0:
        return None
    return timeout_ms / 1000


class ScreenConnection:
    """Owns one pyserial handle and performs single line transactions on it.

    Not thread-safe: callers must serialise access.
    """

    def __init__(
        self,
        port: str,
        baudrate: int = BAUD_RATE,
        read_timeout_ms: int = DEFAULT_READ_TIMEOUT_MS,
        write_timeout_ms: int = DEFAULT_WRITE_TIMEOUT_MS,
    ):
        """
        Initialize serial connection.

        Args:
            port: Serial port path (e.g., '/dev/ttyACM0' or 'COM3')
            baudrate: Communication speed (default: 115200)
            read_timeout_ms: Read timeout in milliseconds (default: 5000)
            write_timeout_ms: Write timeout in milliseconds (default: 5000)
        """
        _check_timeout(read_timeout_ms)
        _check_timeout(write_timeout_ms)

        self.port = port
        self.baudrate = baudrate
        self._read_timeout_ms = read_timeout_ms
        self._write_timeout_ms = write_timeout_ms

        self._serial: serial.Serial | None = None
        self._stats = {
            "transactions": 0,
            "timeouts": 0,
            "bytes_written": 0,
            "bytes_read": 0,
        }

    @property
    def connected(self) -> bool:
        """Check if the port is open."""
        return self._serial is not None and self._serial.is_open

    @property
    def stats(self) -> dict:
        """Get transaction statistics."""
        return self._stats.copy()

    @property
    def read_timeout_ms(self) -> int:
        return self._read_timeout_ms

    @read_timeout_ms.setter
    def read_timeout_ms(self, value: int) -> None:
        _check_timeout(value)
        self._read_timeout_ms = value
        if self._serial is not None:
            self._serial.timeout = _ms_to_seconds(value)

    @property
    def write_timeout_ms(self) -> int:
        return self._write_timeout_ms

    @write_timeout_ms.setter
    def write_timeout_ms(self, value: int) -> None:
        _check_timeout(value)
        self._write_timeout_ms = value
        if self._serial is not None:
            self._serial.write_timeout = _ms_to_seconds(value)

    def open(self) -> None:
        """
        Open and configure the serial port (8 data bits, no parity, 1 stop bit).

        Raises:
            TransportOpenError: If the port cannot be opened or configured
        """
        if self.connected:
            logger.debug("Already connected to %s", self.port)
            return

        logger.info("Opening serial port %s at %d baud", self.port, self.baudrate)

        port = serial.Serial()
        try:
            port.port = self.port
            port.baudrate = self.baudrate
            port.bytesize = serial.EIGHTBITS
            port.parity = serial.PARITY_NONE
            port.stopbits = serial.STOPBITS_ONE
            port.timeout = _ms_to_seconds(self._read_timeout_ms)
            port.write_timeout = _ms_to_seconds(self._write_timeout_ms)
            port.open()
        except (OSError, ValueError, SerialException) as e:
            logger.error("Failed to open %s: %s", self.port, e)
            raise TransportOpenError(self.port, str(e)) from e

        self._serial = port
        logger.info("Successfully opened %s", self.port)

    def close(self) -> None:
        """Close the serial port. Never raises."""
        port, self._serial = self._serial, None
        if port is None:
            return

        try:
            if port.is_open:
                port.close()
                logger.info("Closed %s", self.port)
        except Exception as e:
            logger.error("Error closing serial port %s: %s", self.port, e)

    def _require_port(self) -> serial.Serial:
        if not self.connected:
            raise TransportIOError("Not connected to serial port")
        return self._serial

    def reset_port(self) -> None:
        """Clear break/DTR/RTS line signals and flush both I/O buffers.

        Stale bytes or line states left by an aborted transaction must not
        leak into the next response.

        Raises:
            TransportIOError: If not connected or the port rejects the request
        """
        port = self._require_port()
        try:
            port.break_condition = False
            port.dtr = False
            port.rts = False
            port.reset_input_buffer()
            port.reset_output_buffer()
        except (OSError, SerialException) as e:
            logger.error("Failed to reset %s: %s", self.port, e)
            raise TransportIOError(f"Failed to reset port: {e}") from e

    def write(self, data: bytes) -> bool:
        """
        Write bytes within the write timeout.

        Returns:
            True if written, False if the write timed out

        Raises:
            TransportIOError: If not connected or the write fails
        """
        port = self._require_port()
        try:
            written = port.write(data)
        except SerialTimeoutException:
            logger.debug("Write timeout on %s after %d ms", self.port, self._write_timeout_ms)
            return False
        except (OSError, SerialException) as e:
            logger.error("Write error on %s: %s", self.port, e)
            raise TransportIOError(f"Write failed: {e}") from e

        self._stats["bytes_written"] += written or 0
        return True

    def read_line(self) -> str | None:
        """
        Read one line within the read timeout.

        Returns:
            The decoded line without its terminator, or None on timeout

        Raises:
            TransportIOError: If not connected or the read fails
        """
        port = self._require_port()
        try:
            raw = port.readline()
        except (OSError, SerialException) as e:
            logger.error("Read error on %s: %s", self.port, e)
            raise TransportIOError(f"Read failed: {e}") from e

        self._stats["bytes_read"] += len(raw)

        if not raw.endswith(_TERMINATOR):
            if raw:
                logger.debug("Discarding partial line %r after %d ms", raw, self._read_timeout_ms)
            else:
                logger.debug("Read timeout on %s after %d ms", self.port, self._read_timeout_ms)
            return None

        return decode_line(raw)

    def transact(self, data: bytes) -> str | None:
        """
        Perform one request/response exchange: reset, write, read one line.

        Returns:
            The response line, or None if the write or the read timed out

        Raises:
            TransportIOError: On any non-timeout transport failure
        """
        self._stats["transactions"] += 1
        self.reset_port()

        response = None
        if self.write(data):
            response = self.read_line()

        if response is None:
            self._stats["timeouts"] += 1
        return response

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def _check_timeout(timeout_ms: int) -> None:
    if timeout_ms < 0:
        raise ValueError(f"Timeout must be >= 0 ms, got {timeout_ms}")
