"""
Top-level command routing for the mock interpreter.

AT commands are answered from a fixed table, Mode 01 requests go to the PID
table, and everything else gets the NOT SUPPORTED sentinel.
"""

import logging
from types import MappingProxyType

from .pid_table import NOT_SUPPORTED, lookup

logger = logging.getLogger(__name__)

MODE1_PREFIX = "01"

AT_RESPONSES = MappingProxyType({
    'ATSP0': ("OK",),                          # Auto protocol select
    'AT@1': ("OBDII by elm329@gmail.com",),    # Device description
})


def mock_outputs(command: str) -> tuple[str, ...]:
    """
    Decide the response lines for a raw command.

    Matching is case sensitive: AT commands must match exactly, Mode 01
    requests by their '01' prefix.

    Args:
        command (str): Command as it would be sent to the adapter, without '\\r'.

    Returns:
        tuple[str, ...]: At least one response line.
    """
    if not isinstance(command, str):
        logger.debug("Non-string command %r", command)
        return (NOT_SUPPORTED,)

    if command in AT_RESPONSES:
        logger.debug("AT command %s", command)
        return AT_RESPONSES[command]

    if command.startswith(MODE1_PREFIX):
        return lookup(command[len(MODE1_PREFIX):])

    logger.debug("Unsupported command %r", command)
    return (NOT_SUPPORTED,)
