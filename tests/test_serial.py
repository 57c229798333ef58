"""Unit tests for the serial connection layer (ScreenConnection)."""

import pytest
import serial
from serial import SerialException, SerialTimeoutException

from qrscreen.core.exceptions import TransportError, TransportIOError, TransportOpenError
from qrscreen.serial.connection import ScreenConnection

# Must match conftest.TEST_PORT
TEST_PORT = "/dev/ttyTEST0"


@pytest.fixture
def connection(fake_serial):
    conn = ScreenConnection(TEST_PORT)
    conn.open()
    yield conn
    conn.close()


class TestOpen:
    """Tests for opening and configuring the port."""

    def test_port_configuration(self, connection, fake_serial):
        """Port opens at 115200-8-N-1 with 5 s timeouts."""
        assert connection.connected is True
        assert fake_serial.port == TEST_PORT
        assert fake_serial.baudrate == 115200
        assert fake_serial.bytesize == serial.EIGHTBITS
        assert fake_serial.parity == serial.PARITY_NONE
        assert fake_serial.stopbits == serial.STOPBITS_ONE
        assert fake_serial.timeout == 5.0
        assert fake_serial.write_timeout == 5.0

    def test_custom_timeouts(self, fake_serial):
        """Constructor timeouts are converted to seconds."""
        conn = ScreenConnection(TEST_PORT, read_timeout_ms=250, write_timeout_ms=1500)
        conn.open()

        assert fake_serial.timeout == 0.25
        assert fake_serial.write_timeout == 1.5

    def test_open_failure(self, fake_serial):
        """Failure to open raises TransportOpenError."""
        fake_serial.open_error = SerialException("could not open port")
        conn = ScreenConnection(TEST_PORT)

        with pytest.raises(TransportOpenError, match="could not open port") as exc_info:
            conn.open()

        assert exc_info.value.port == TEST_PORT
        assert isinstance(exc_info.value, ConnectionError)
        assert conn.connected is False

    def test_open_twice_is_noop(self, connection, fake_serial):
        """Opening an open connection keeps the same handle."""
        connection.open()
        assert connection.connected is True

    def test_negative_timeout_rejected(self):
        with pytest.raises(ValueError):
            ScreenConnection(TEST_PORT, read_timeout_ms=-1)

    def test_context_manager(self, fake_serial):
        """Context manager opens and closes the port."""
        with ScreenConnection(TEST_PORT) as conn:
            assert conn.connected is True
        assert fake_serial.is_open is False


class TestClose:
    """Tests for closing the port."""

    def test_close(self, connection, fake_serial):
        connection.close()

        assert connection.connected is False
        assert fake_serial.is_open is False

    def test_close_twice(self, connection, fake_serial):
        """Second close is a no-op."""
        connection.close()
        connection.close()

        assert fake_serial.events.count("close") == 1

    def test_close_error_swallowed(self, connection, fake_serial):
        """Errors while closing are logged, not raised."""
        fake_serial.close_error = OSError("device gone")

        connection.close()

        assert connection.connected is False

    def test_close_never_opened(self):
        ScreenConnection(TEST_PORT).close()


class TestTimeouts:
    """Tests for timeout setters."""

    def test_read_timeout_keeps_write(self, connection, fake_serial):
        connection.write_timeout_ms = 2000
        connection.read_timeout_ms = 1000

        assert connection.read_timeout_ms == 1000
        assert connection.write_timeout_ms == 2000
        assert fake_serial.timeout == 1.0
        assert fake_serial.write_timeout == 2.0

    def test_write_timeout_keeps_read(self, connection, fake_serial):
        connection.read_timeout_ms = 1000
        connection.write_timeout_ms = 300

        assert connection.read_timeout_ms == 1000
        assert fake_serial.timeout == 1.0
        assert fake_serial.write_timeout == 0.3

    def test_set_before_open(self, fake_serial):
        """Timeouts set before open are applied on open."""
        conn = ScreenConnection(TEST_PORT)
        conn.read_timeout_ms = 100
        conn.open()

        assert fake_serial.timeout == 0.1

    def test_negative_rejected(self, connection):
        with pytest.raises(ValueError):
            connection.write_timeout_ms = -5

    def test_zero_means_blocking(self, connection, fake_serial):
        """A 0 ms timeout blocks instead of turning the port non-blocking."""
        connection.read_timeout_ms = 0
        connection.write_timeout_ms = 0

        assert connection.read_timeout_ms == 0
        assert connection.write_timeout_ms == 0
        assert fake_serial.timeout is None
        assert fake_serial.write_timeout is None

    def test_zero_on_open(self, fake_serial):
        """Zero timeouts given to the constructor are applied as blocking."""
        conn = ScreenConnection(TEST_PORT, read_timeout_ms=0, write_timeout_ms=0)
        conn.open()

        assert fake_serial.timeout is None
        assert fake_serial.write_timeout is None


class TestResetPort:
    """Tests for reset_port."""

    def test_clears_signals_and_buffers(self, connection, fake_serial):
        connection.reset_port()

        assert fake_serial.events == [
            ("break", False),
            ("dtr", False),
            ("rts", False),
            "reset_input",
            "reset_output",
        ]

    def test_reset_failure(self, connection, fake_serial):
        """Port errors during reset surface as TransportIOError."""

        def fail():
            raise SerialException("Input/output error")

        fake_serial.reset_input_buffer = fail

        with pytest.raises(TransportIOError):
            connection.reset_port()


class TestTransact:
    """Tests for a full request/response exchange."""

    def test_order(self, connection, fake_serial):
        """Reset happens once, before the write, and the read follows the write."""
        fake_serial.queue(b"[OFF]OK\n")

        response = connection.transact(b"[OFF]\n")

        assert response == "[OFF]OK"
        assert fake_serial.events == [
            ("break", False),
            ("dtr", False),
            ("rts", False),
            "reset_input",
            "reset_output",
            ("write", b"[OFF]\n"),
            "readline",
        ]

    def test_crlf_stripped(self, connection, fake_serial):
        fake_serial.queue(b"[CQ]OK\r\n")
        assert connection.transact(b"[CQ]\n") == "[CQ]OK"

    def test_read_timeout(self, connection, fake_serial):
        """Nothing received within the read timeout yields None."""
        assert connection.transact(b"[V]\n") is None

    def test_partial_line_is_timeout(self, connection, fake_serial):
        """A line cut off by the timeout yields None."""
        fake_serial.queue(b"[V]QR-1.3")
        assert connection.transact(b"[V]\n") is None

    def test_lone_cr_is_not_a_terminator(self, connection, fake_serial):
        """Only \\n ends a line; a reply ending in \\r alone is incomplete."""
        fake_serial.queue(b"[OFF]OK\r")
        assert connection.transact(b"[OFF]\n") is None

    def test_write_timeout(self, connection, fake_serial):
        """Write timeout yields None and skips the read."""
        fake_serial.write_error = SerialTimeoutException("Write timeout")

        assert connection.transact(b"[Q]x\n") is None
        assert "readline" not in fake_serial.events

    def test_write_error(self, connection, fake_serial):
        """Non-timeout write failure propagates."""
        fake_serial.write_error = SerialException("write failed: [Errno 5] Input/output error")

        with pytest.raises(TransportIOError, match="Write failed"):
            connection.transact(b"[Q]x\n")

    def test_read_error(self, connection, fake_serial):
        """Non-timeout read failure propagates."""
        fake_serial.queue(SerialException("device disconnected"))

        with pytest.raises(TransportIOError, match="device disconnected") as exc_info:
            connection.transact(b"[V]\n")

        assert isinstance(exc_info.value, TransportError)
        assert isinstance(exc_info.value.__cause__, SerialException)

    def test_not_connected(self):
        conn = ScreenConnection(TEST_PORT)

        with pytest.raises(TransportIOError, match="Not connected"):
            conn.transact(b"[V]\n")

    def test_after_close(self, connection):
        connection.close()

        with pytest.raises(TransportIOError):
            connection.transact(b"[V]\n")

    def test_stats(self, connection, fake_serial):
        fake_serial.queue(b"[CQ]OK\n")

        connection.transact(b"[CQ]\n")
        connection.transact(b"[CQ]\n")

        stats = connection.stats
        assert stats["transactions"] == 2
        assert stats["timeouts"] == 1
        assert stats["bytes_written"] == 10
        assert stats["bytes_read"] == 7
