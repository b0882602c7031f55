"""
Byte stream interface between ConnectionDevice and an ELM327.

An ELM327 takes one command per line terminated by '\r' and answers with
'\r' separated lines followed by the '>' prompt once it is ready for the
next command. A Connection only moves those bytes; splitting the reply into
lines is done by ConnectionDevice.
"""

from abc import ABC, abstractmethod
from typing import Optional


class Connection(ABC):
    """Abstract byte stream to an ELM327 (serial port or in-memory mock)."""

    def __init__(self) -> None:
        self._is_open: bool = False

    @abstractmethod
    def open(self) -> None:
        """
        Open the stream.

        Raises:
            ConnectionException: If the stream cannot be opened
        """

    @abstractmethod
    def close(self) -> None:
        """Close the stream and drop anything not yet read."""

    @abstractmethod
    def write(self, data: bytes) -> None:
        """
        Send a command line, including its trailing '\\r'.

        Raises:
            NotConnectedException: If the stream is not open
            ConnectionException: If the bytes cannot be sent
        """

    @abstractmethod
    def read_until(self, terminator: bytes, timeout: Optional[float] = None) -> bytes:
        """
        Read a reply up to and including terminator, normally the '>' prompt.

        Args:
            terminator: Byte sequence ending the reply
            timeout: Seconds to wait, None for the stream default

        Raises:
            NotConnectedException: If the stream is not open
            ConnectionTimeoutError: If the terminator does not arrive in time
        """

    @abstractmethod
    def flush_input(self) -> None:
        """Discard received bytes that belong to an earlier reply."""

    @property
    def is_open(self) -> bool:
        """Check if the stream is open."""
        return self._is_open

    def __enter__(self) -> "Connection":
        self.open()
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
