"""
Serial connection layer for ELM327 adapters.

This module provides serial port connectivity so the same client code can
run against real hardware or against the mock.
"""

import logging
from typing import Optional

import serial
import serial.tools.list_ports

from .connection import Connection
from .exceptions import ConnectionException, ConnectionTimeoutError, NotConnectedException

logger = logging.getLogger(__name__)

# ELM327 factory default
DEFAULT_BAUDRATE = 38400


class SerialConnection(Connection):
    """Serial port connection for ELM327 communication."""

    def __init__(
        self,
        port: str,
        baudrate: int = DEFAULT_BAUDRATE,
        timeout: float = 1.0,
        write_timeout: float = 1.0,
    ) -> None:
        """
        Initialize serial connection.

        Args:
            port: Serial port path (e.g., '/dev/ttyUSB0', 'COM3')
            baudrate: Baud rate for serial communication
            timeout: Read timeout in seconds
            write_timeout: Write timeout in seconds
        """
        super().__init__()
        self.port = port
        self.baudrate = baudrate
        self.timeout = timeout
        self.write_timeout = write_timeout
        self._serial: Optional[serial.Serial] = None

    def open(self) -> None:
        """Open the serial port connection."""
        if self._is_open:
            return

        try:
            self._serial = serial.Serial(
                port=self.port,
                baudrate=self.baudrate,
                timeout=self.timeout,
                write_timeout=self.write_timeout,
                bytesize=serial.EIGHTBITS,
                parity=serial.PARITY_NONE,
                stopbits=serial.STOPBITS_ONE,
            )
            self._is_open = True
            logger.debug("Opened %r", self)

        except serial.SerialException as e:
            raise ConnectionException(f"Failed to open serial port {self.port}: {e}") from e

    def close(self) -> None:
        """Close the serial port connection."""
        if not self._is_open or self._serial is None:
            return

        try:
            self._serial.close()
        except serial.SerialException as e:
            raise ConnectionException(f"Error closing serial port: {e}") from e
        finally:
            self._serial = None
            self._is_open = False

    def _port(self) -> serial.Serial:
        if not self._is_open or self._serial is None:
            raise NotConnectedException("Serial port not open")
        return self._serial

    def write(self, data: bytes) -> None:
        """Write data to the serial port."""
        port = self._port()
        try:
            port.write(data)
        except serial.SerialTimeoutException as e:
            raise ConnectionTimeoutError(f"Write timeout: {e}") from e
        except serial.SerialException as e:
            raise ConnectionException(f"Serial write error: {e}") from e

    def read_until(self, terminator: bytes, timeout: Optional[float] = None) -> bytes:
        """
        Read data until a terminator is found.

        pyserial returns whatever arrived when the timeout expires; a reply
        without the terminator is reported as a timeout.
        """
        port = self._port()
        original_timeout = port.timeout
        try:
            if timeout is not None:
                port.timeout = timeout
            data = port.read_until(terminator)
        except serial.SerialException as e:
            raise ConnectionException(f"Serial read error: {e}") from e
        finally:
            port.timeout = original_timeout

        if not data.endswith(terminator):
            raise ConnectionTimeoutError(f"No {terminator!r} received from {self.port} (got {data!r})")
        return data

    def flush_input(self) -> None:
        """Flush input buffer."""
        port = self._port()
        try:
            port.reset_input_buffer()
        except serial.SerialException as e:
            raise ConnectionException(f"Error flushing input buffer: {e}") from e

    @staticmethod
    def list_ports() -> list[str]:
        """
        List available serial ports.

        Returns:
            List of available serial port paths
        """
        ports = serial.tools.list_ports.comports()
        return [port.device for port in ports]

    def __repr__(self) -> str:
        """String representation."""
        status = "open" if self._is_open else "closed"
        return f"SerialConnection(port={self.port}, baudrate={self.baudrate}, status={status})"
