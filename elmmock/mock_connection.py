"""
Byte stream front end for the mock ELM327 interpreter.

MockConnection lets code written against a serial port talk to MockDevice:
commands written as '<cmd>\\r' are answered with the mock's lines, each
terminated by '\\r', followed by an empty line and the '>' prompt.
"""

import logging
from typing import Optional

from .connection import Connection
from .device import MockDevice
from .exceptions import NotConnectedException

logger = logging.getLogger(__name__)

PROMPT = b'>'


def frame_response(lines: tuple[str, ...]) -> bytes:
    """
    Encode response lines the way an ELM327 puts them on the wire.

    Args:
        lines (tuple[str, ...]): Response lines.

    Returns:
        bytes: Lines joined by '\\r', then '\\r\\r>'.
    """
    return ("\r".join(lines) + "\r\r").encode('ascii') + PROMPT


class MockConnection(Connection):
    """
    In-memory connection answering commands with MockDevice.

    Only the pending response bytes are kept; no command state survives
    between writes.

    Attributes:
        device (MockDevice): Interpreter producing the responses.
    """

    def __init__(self, device: Optional[MockDevice] = None) -> None:
        """
        Initialize mock connection.

        Args:
            device (MockDevice | None): Interpreter to use. A new MockDevice by default.
        """
        super().__init__()
        self.device = device if device is not None else MockDevice()
        self._read_buffer: bytes = b''

    def open(self) -> None:
        """Open the mock connection."""
        self._is_open = True

    def close(self) -> None:
        """Close the mock connection and drop unread bytes."""
        self._is_open = False
        self._read_buffer = b''

    def _check_open(self) -> None:
        if not self._is_open:
            raise NotConnectedException("Mock connection not open")

    def write(self, data: bytes) -> None:
        """
        Run the written command and queue its response.

        Args:
            data (bytes): Command bytes, usually terminated by '\\r'.

        Raises:
            NotConnectedException: If the connection is closed.
        """
        self._check_open()
        command = data.decode('ascii', errors='ignore').strip()
        result = self.device.execute(command)
        logger.debug("Mock TX %r -> %s", command, result.outputs)
        self._read_buffer += frame_response(result.outputs)

    def read_until(self, terminator: bytes, timeout: Optional[float] = None) -> bytes:
        """
        Read data until a terminator is found.

        Args:
            terminator: Byte sequence to read until
            timeout: Optional timeout in seconds (not used in mock)

        Returns:
            Bytes read including terminator, or everything queued if the
            terminator never appears
        """
        self._check_open()
        idx = self._read_buffer.find(terminator)
        if idx != -1:
            end = idx + len(terminator)
            result = self._read_buffer[:end]
            self._read_buffer = self._read_buffer[end:]
            return result

        result = self._read_buffer
        self._read_buffer = b''
        return result

    def flush_input(self) -> None:
        """Drop queued response bytes."""
        self._check_open()
        self._read_buffer = b''

    def __repr__(self) -> str:
        status = "open" if self._is_open else "closed"
        return f"MockConnection(status={status}, pending={len(self._read_buffer)})"
