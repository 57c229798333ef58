"""Shared test fixtures."""

from collections import deque
from unittest.mock import patch

import pytest

from qrscreen.protocol.session import ScreenSession

TEST_PORT = "/dev/ttyTEST0"


class FakeSerial:
    """Scripted stand-in for ``serial.Serial``.

    Records every call (and line-signal assignment) in ``events`` and answers
    ``readline()`` from a queue. An empty queue behaves like a read timeout.
    Queued exceptions are raised instead of returned.
    """

    def __init__(self) -> None:
        self.port = None
        self.baudrate = 9600
        self.bytesize = None
        self.parity = None
        self.stopbits = None
        self.timeout = None
        self.write_timeout = None
        self.is_open = False

        self.events: list = []
        self.written = bytearray()
        self.responses: deque = deque()
        self.open_error: Exception | None = None
        self.write_error: Exception | None = None
        self.close_error: Exception | None = None

        self._break_condition = True
        self._dtr = True
        self._rts = True

    def queue(self, *lines) -> None:
        self.responses.extend(lines)

    @property
    def break_condition(self) -> bool:
        return self._break_condition

    @break_condition.setter
    def break_condition(self, value: bool) -> None:
        self._break_condition = value
        self.events.append(("break", value))

    @property
    def dtr(self) -> bool:
        return self._dtr

    @dtr.setter
    def dtr(self, value: bool) -> None:
        self._dtr = value
        self.events.append(("dtr", value))

    @property
    def rts(self) -> bool:
        return self._rts

    @rts.setter
    def rts(self, value: bool) -> None:
        self._rts = value
        self.events.append(("rts", value))

    def open(self) -> None:
        if self.open_error is not None:
            raise self.open_error
        self.is_open = True

    def close(self) -> None:
        self.events.append("close")
        if self.close_error is not None:
            raise self.close_error
        self.is_open = False

    def reset_input_buffer(self) -> None:
        self.events.append("reset_input")

    def reset_output_buffer(self) -> None:
        self.events.append("reset_output")

    def write(self, data: bytes) -> int:
        self.events.append(("write", bytes(data)))
        if self.write_error is not None:
            raise self.write_error
        self.written.extend(data)
        return len(data)

    def readline(self) -> bytes:
        self.events.append("readline")
        if not self.responses:
            return b""
        item = self.responses.popleft()
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture
def fake_serial():
    """Patch pyserial so opening any port yields a FakeSerial."""
    port = FakeSerial()
    with patch("serial.Serial", return_value=port):
        yield port


@pytest.fixture
def session(fake_serial):
    """An open ScreenSession backed by fake_serial."""
    screen = ScreenSession.open(TEST_PORT)
    yield screen
    screen.close()
