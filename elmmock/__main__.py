"""
Command line front end: run raw AT/OBD commands and print the replies.

Usage:
    python -m elmmock 0100 010C AT@1
    echo 010D | python -m elmmock --config device.ini --overview
"""

import argparse
import logging
import sys
from typing import Iterable, Optional

from .config import create_device, load_config
from .device import ConnectionDevice
from .exceptions import ELMMockException


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='elmmock',
        description="Run AT/OBD commands against the mock ELM327 or a serial adapter.",
    )
    parser.add_argument('commands', nargs='*', help="Commands to run; read from stdin when omitted")
    parser.add_argument('-c', '--config', help="INI configuration file")
    parser.add_argument('--overview', action='store_true', help="Print a banner before each reply")
    parser.add_argument('-v', '--verbose', action='store_true', help="Enable debug logging")
    return parser.parse_args(argv)


def _read_commands(args: argparse.Namespace) -> Iterable[str]:
    if args.commands:
        return args.commands
    return (line.strip() for line in sys.stdin if line.strip())


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)

    try:
        config = load_config(args.config)
    except ELMMockException as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    try:
        device = create_device(config)
    except ELMMockException as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    failed = False
    try:
        for command in _read_commands(args):
            result = device.execute(command)
            if args.overview:
                print(result.format_overview())
            if result.failed:
                failed = True
                print(f"Error: {result.error}", file=sys.stderr)
                continue
            for line in result.outputs:
                print(line)
    finally:
        if isinstance(device, ConnectionDevice):
            device.connection.close()

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
