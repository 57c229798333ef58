"""Frame construction and response classification for the QR-screen protocol."""

import logging

from qrscreen.protocol.constants import ENCODING, LINE_TERMINATOR, Command

logger = logging.getLogger(__name__)


class Frame:
    """
    Represents a single request line.

    Frame structure:
    [TAG]PAYLOAD\\n

    The payload is appended verbatim: no separator, escaping or length limit.
    The display buffer on the device is the only practical limit.

    Attributes:
        command: Command being sent
        payload: Optional text following the tag
    """

    def __init__(self, command: Command, payload: str | None = None):
        self.command = command
        self.payload = payload

    def to_text(self) -> str:
        """
        Build the request line including its terminator.

        Example:
            >>> Frame(Command.SHOW_HEADER, "R-Call").to_text()
            '[T1]R-Call\\n'
        """
        text = self.command.prefix
        if self.payload is not None:
            text += self.payload
        return text + LINE_TERMINATOR

    def to_bytes(self) -> bytes:
        """
        Convert frame to bytes for transmission.

        Example:
            >>> Frame(Command.GET_VERSION).to_bytes()
            b'[V]\\n'
        """
        return self.to_text().encode(ENCODING)

    def __repr__(self) -> str:
        return f"Frame(cmd={self.command.name}, tag={self.command.tag!r}, payload={self.payload!r})"


def is_positive_response(command: Command, response: str | None) -> bool:
    """Check whether *response* acknowledges *command*.

    Only an exact match with ``[TAG]OK`` counts. Any other line, including
    case or whitespace differences and ``None`` (no response), is negative.
    """
    return response == command.positive_answer


def strip_prefix(command: Command, response: str | None) -> str | None:
    """Return the data following the command prefix in *response*.

    Returns:
        The remainder of the line, or None when there was no response or the
        line does not start with the expected ``[TAG]``.
    """
    if response is None:
        return None

    prefix = command.prefix
    if not response.startswith(prefix):
        logger.warning("Unexpected response to %s: %r (expected prefix %r)", command.name, response, prefix)
        return None

    return response[len(prefix) :]


def decode_line(raw: bytes) -> str:
    """Decode a raw response line ending in \\n and strip the terminator, including a preceding \\r."""
    return raw.decode(ENCODING, errors="replace").rstrip("\r\n")
