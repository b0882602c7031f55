"""
Mock ELM327 OBD-II interpreter.

This package provides a deterministic stand-in for an ELM327 adapter: a
MockDevice that answers AT and Mode 01 commands from fixed tables, plus a
byte stream MockConnection and a SerialConnection so client code can switch
between the mock and real hardware.
"""

from .result import Result
from .pid_table import MODE1_TABLE, NOT_SUPPORTED, PidEntry, lookup
from .dispatcher import AT_RESPONSES, mock_outputs
from .device import ConnectionDevice, MockDevice
from .connection import Connection
from .mock_connection import MockConnection
from .serial_connection import SerialConnection
from .config import DeviceConfig, create_device, load_config
from .exceptions import (
    ELMMockException,
    ConfigurationException,
    ConnectionException,
    ConnectionTimeoutError,
    NotConnectedException,
)

__version__ = "0.1.0"

__all__ = [
    # Interpreter
    'MockDevice',
    'Result',
    'mock_outputs',
    'lookup',
    'PidEntry',
    'MODE1_TABLE',
    'AT_RESPONSES',
    'NOT_SUPPORTED',

    # Connection Layer
    'Connection',
    'ConnectionDevice',
    'MockConnection',
    'SerialConnection',

    # Configuration
    'DeviceConfig',
    'load_config',
    'create_device',

    # Exceptions
    'ELMMockException',
    'ConfigurationException',
    'ConnectionException',
    'ConnectionTimeoutError',
    'NotConnectedException',
]
