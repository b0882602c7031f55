"""
Result of running a single raw AT/OBD command.

A Result carries what was sent, what came back and how long it took. The
mock device produces Results with zero durations; transport-backed devices
fill in measured times and, on failure, the error.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Optional


OVERVIEW_TEMPLATE = "\n".join([
    "=======================================",
    " Mocked command \"{command}\"",
    "=======================================",
])


@dataclass(frozen=True)
class Result:
    """
    Raw text outcome of running one command.

    Attributes:
        input (str): The command string that was run.
        outputs (tuple[str, ...]): Response lines in the order the device sent them.
        error (Exception | None): Failure raised while running the command, if any.
        write_time (timedelta): Time spent writing the command.
        read_time (timedelta): Time spent reading the response.
        total_time (timedelta): Time for the whole exchange.
    """
    input: str
    outputs: tuple[str, ...] = ()
    error: Optional[Exception] = None
    write_time: timedelta = field(default_factory=timedelta)
    read_time: timedelta = field(default_factory=timedelta)
    total_time: timedelta = field(default_factory=timedelta)

    @property
    def failed(self) -> bool:
        """Check if running the command failed."""
        return self.error is not None

    def get_error(self) -> Optional[Exception]:
        """Return the error of this result, or None."""
        return self.error

    def get_outputs(self) -> list[str]:
        """
        Return the output lines of this result.

        Returns:
            list[str]: A new list, so callers may modify it freely.
        """
        return list(self.outputs)

    def format_overview(self) -> str:
        """
        Format the result as an overview of what command was run.

        Only the input is used; outputs, error and timings do not appear.

        Returns:
            str: Three line banner naming the command.
        """
        return OVERVIEW_TEMPLATE.format(command=self.input)
