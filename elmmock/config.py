"""
INI configuration for the elmmock command line tool.

Example file:

    [Device]
    type = serial
    port = /dev/ttyUSB0
    baudrate = 38400
    timeout = 1.0

    [Logging]
    level = DEBUG

Every key is optional; without a file the mock device is used.
"""

import configparser
import logging
import os
from dataclasses import dataclass
from typing import Optional

from .device import ConnectionDevice, MockDevice
from .exceptions import ConfigurationException
from .serial_connection import DEFAULT_BAUDRATE, SerialConnection

logger = logging.getLogger(__name__)

DEVICE_TYPES = ('mock', 'serial')


@dataclass
class DeviceConfig:
    """
    Settings for building a device.

    Attributes:
        device_type (str): 'mock' or 'serial'.
        port (str | None): Serial port path, required for 'serial'.
        baudrate (int): Serial baud rate.
        timeout (float): Read timeout in seconds.
        log_level (str): Name of the logging level for the CLI.
    """
    device_type: str = 'mock'
    port: Optional[str] = None
    baudrate: int = DEFAULT_BAUDRATE
    timeout: float = 1.0
    log_level: str = 'WARNING'


def load_config(config_file: Optional[str] = None) -> DeviceConfig:
    """
    Load and validate configuration from an INI file.

    Args:
        config_file (str | None): Path to the INI file. None gives the defaults.

    Returns:
        DeviceConfig: Parsed settings.

    Raises:
        ConfigurationException: If the file is missing or a value is invalid.
    """
    if config_file is None:
        return DeviceConfig()

    if not os.path.exists(config_file):
        raise ConfigurationException(f"Configuration file '{config_file}' not found")

    config = configparser.ConfigParser(interpolation=None)
    try:
        config.read(config_file)
    except configparser.Error as e:
        raise ConfigurationException(f"Cannot parse '{config_file}': {e}") from e

    defaults = DeviceConfig()
    device = config['Device'] if 'Device' in config else {}
    logging_section = config['Logging'] if 'Logging' in config else {}

    device_type = device.get('type', defaults.device_type).strip().lower()
    if device_type not in DEVICE_TYPES:
        raise ConfigurationException(
            f"Unknown device type '{device_type}', expected one of {', '.join(DEVICE_TYPES)}"
        )

    port = device.get('port', '').strip() or None
    if device_type == 'serial' and port is None:
        raise ConfigurationException("[Device] port is required for type = serial")

    try:
        baudrate = int(device.get('baudrate', defaults.baudrate))
        timeout = float(device.get('timeout', defaults.timeout))
    except ValueError as e:
        raise ConfigurationException(f"Invalid [Device] value: {e}") from e

    log_level = logging_section.get('level', defaults.log_level).strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigurationException(f"Unknown logging level '{log_level}'")

    return DeviceConfig(
        device_type=device_type,
        port=port,
        baudrate=baudrate,
        timeout=timeout,
        log_level=log_level,
    )


def create_device(config: DeviceConfig) -> MockDevice | ConnectionDevice:
    """
    Build the device described by a configuration.

    A serial device is returned with its connection already open.

    Raises:
        ConnectionException: If the serial port cannot be opened.
    """
    if config.device_type == 'serial':
        connection = SerialConnection(config.port, baudrate=config.baudrate, timeout=config.timeout)
        connection.open()
        logger.info("Using %r", connection)
        return ConnectionDevice(connection, timeout=config.timeout)

    logger.info("Using mock device")
    return MockDevice()
