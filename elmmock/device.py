"""
Devices that run raw AT/OBD commands and return a Result.

MockDevice answers from fixed tables and is what tests use in place of an
adapter. ConnectionDevice sends the same commands over a Connection and
times the exchange.
"""

import logging
import time
from datetime import timedelta

from .connection import Connection
from .dispatcher import mock_outputs
from .pid_table import NOT_SUPPORTED
from .exceptions import ConnectionException
from .result import Result

logger = logging.getLogger(__name__)

PROMPT = b'>'


class MockDevice:
    """
    Mocked ELM327 adapter.

    Stateless: every call is answered from the constant tables, so one
    instance can be shared between threads.
    """

    def execute(self, command: str) -> Result:
        """
        Run a command against the mock.

        Never raises. Unknown commands are answered with NOT SUPPORTED and
        all durations are zero.

        Args:
            command (str): Raw command, e.g. 'ATSP0' or '010C'.

        Returns:
            Result: Outputs for the command, no error.
        """
        return Result(input=command, outputs=mock_outputs(command))

    def __repr__(self) -> str:
        return "MockDevice()"


class ConnectionDevice:
    """
    Runs commands over a byte stream connection.

    Attributes:
        connection (Connection): Open connection to an ELM327 (or MockConnection).
        timeout (float | None): Seconds to wait for the prompt, None for the connection default.
    """

    def __init__(self, connection: Connection, timeout: float | None = None) -> None:
        self.connection = connection
        self.timeout = timeout

    def execute(self, command: str) -> Result:
        """
        Send a command, read until the prompt and split the reply into lines.

        Bytes left over from an earlier reply (for example the tail of one that
        timed out) are discarded first. Transport failures are returned in
        Result.error, not raised. A non-string command cannot be sent and is
        answered with NOT SUPPORTED, as MockDevice does.

        Args:
            command (str): Raw command without line ending.

        Returns:
            Result: Outputs and measured durations.
        """
        if not isinstance(command, str):
            return Result(input=command, outputs=(NOT_SUPPORTED,))

        start = time.perf_counter()
        write_time = 0.0
        try:
            self.connection.flush_input()
            self.connection.write((command + '\r').encode('ascii', errors='replace'))
            write_time = time.perf_counter() - start

            read_start = time.perf_counter()
            raw = self.connection.read_until(PROMPT, timeout=self.timeout)
            read_time = time.perf_counter() - read_start
        except ConnectionException as e:
            logger.warning("Command %r failed: %s", command, e)
            return Result(
                input=command,
                error=e,
                write_time=timedelta(seconds=write_time),
                total_time=timedelta(seconds=time.perf_counter() - start),
            )

        total_time = time.perf_counter() - start
        outputs = parse_lines(raw, command)
        logger.debug("%r -> %s in %.3fs", command, outputs, total_time)
        return Result(
            input=command,
            outputs=outputs,
            write_time=timedelta(seconds=write_time),
            read_time=timedelta(seconds=read_time),
            total_time=timedelta(seconds=total_time),
        )

    def __repr__(self) -> str:
        return f"ConnectionDevice({self.connection!r})"


def parse_lines(raw: bytes, command: str) -> tuple[str, ...]:
    """
    Split a raw reply into response lines.

    Drops the prompt, blank lines and the echoed command (adapters echo
    unless ATE0 was sent).

    Args:
        raw (bytes): Bytes read up to and including the prompt.
        command (str): The command that was sent.

    Returns:
        tuple[str, ...]: Response lines in arrival order.
    """
    text = raw.decode('ascii', errors='ignore').replace(PROMPT.decode('ascii'), '')
    lines = [line.strip() for line in text.replace('\n', '\r').split('\r')]
    lines = [line for line in lines if line]
    if lines and lines[0] == command:
        lines = lines[1:]
    return tuple(lines)
