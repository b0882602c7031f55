"""
Example: Querying the mock ELM327 directly and over a byte stream.

Runs the same commands against MockDevice and against a ConnectionDevice
wrapping MockConnection. Pass a serial port to run them against a real
adapter instead, e.g. `python examples/mock_example.py /dev/ttyUSB0`.
"""

import sys

from elmmock import ConnectionDevice, MockConnection, MockDevice, SerialConnection


COMMANDS = ['ATSP0', 'AT@1', '0100', '010C', '010D', '0105', '0199']


def run(device) -> None:
    for command in COMMANDS:
        result = device.execute(command)
        print(result.format_overview())
        if result.failed:
            print(f"Error: {result.error}")
            continue
        for line in result.outputs:
            print(f"  {line}")
        print(f"  ({result.total_time.total_seconds() * 1000:.2f} ms)")


def main() -> None:
    """Main example function."""
    if len(sys.argv) > 1:
        with SerialConnection(sys.argv[1]) as connection:
            run(ConnectionDevice(connection))
        return

    print("=== MockDevice ===")
    run(MockDevice())

    print("\n=== ConnectionDevice over MockConnection ===")
    with MockConnection() as connection:
        run(ConnectionDevice(connection))


if __name__ == "__main__":
    main()
