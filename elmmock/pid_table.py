"""
Mode 01 (show current data) response table.

Each entry maps a PID prefix to the canned lines a vehicle would send back.
Values are static, plausible readings for a running engine; nothing is
computed.
"""

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

NOT_SUPPORTED = "NOT SUPPORTED"

# Positive response code for Mode 01 (0x01 + 0x40)
MODE1_RESPONSE = "41"


@dataclass(frozen=True)
class PidEntry:
    """
    One row of the Mode 01 table.

    Attributes:
        prefix (str): Two hex digit PID the request must start with.
        description (str): Name of the parameter.
        lines (tuple[str, ...]): Response lines, space separated hex bytes.
    """
    prefix: str
    description: str
    lines: tuple[str, ...]

    def matches(self, pid_fragment: str) -> bool:
        return pid_fragment.startswith(self.prefix)


def _entry(pid: str, description: str, *data: str) -> PidEntry:
    """Build an entry whose single line is '41 <pid> <data...>'."""
    return PidEntry(pid, description, (" ".join((MODE1_RESPONSE, pid) + data),))


# Order matters: the first matching prefix wins.
MODE1_TABLE: tuple[PidEntry, ...] = (
    # Supported PID bitmaps. Only the first group reports anything, exactly the
    # data PIDs listed below.
    _entry("00", "PIDs supported [01-20]", "1F", "FD", "80", "02"),
    _entry("20", "PIDs supported [21-40]", "00", "00", "00", "00"),
    _entry("40", "PIDs supported [41-60]", "00", "00", "00", "00"),
    _entry("60", "PIDs supported [61-80]", "00", "00", "00", "00"),
    _entry("80", "PIDs supported [81-A0]", "00", "00", "00", "00"),
    _entry("04", "Calculated engine load", "7F"),
    _entry("05", "Engine coolant temperature", "64"),
    _entry("06", "Short term fuel trim, bank 1", "64"),
    _entry("07", "Long term fuel trim, bank 1", "45"),
    _entry("08", "Short term fuel trim, bank 2", "66"),
    _entry("09", "Long term fuel trim, bank 2", "75"),
    _entry("0A", "Fuel pressure", "80"),
    _entry("0B", "Intake manifold absolute pressure", "80"),
    _entry("0C", "Engine speed", "0F", "A0"),
    _entry("0D", "Vehicle speed", "FF"),
    _entry("0E", "Timing advance", "80"),
    _entry("10", "MAF air flow rate", "80", "80"),
    _entry("11", "Throttle position", "80"),
    _entry("1F", "Run time since engine start", "30", "A0"),
)


def lookup(pid_fragment: str) -> tuple[str, ...]:
    """
    Return the canned response lines for a Mode 01 PID.

    Args:
        pid_fragment (str): The request with its '01' mode prefix removed.

    Returns:
        tuple[str, ...]: Lines of the first entry whose prefix matches, or the
        single NOT SUPPORTED line.
    """
    for entry in MODE1_TABLE:
        if entry.matches(pid_fragment):
            logger.debug("Mode 01 PID %s (%s)", entry.prefix, entry.description)
            return entry.lines

    logger.debug("Mode 01 PID %r not in table", pid_fragment)
    return (NOT_SUPPORTED,)
