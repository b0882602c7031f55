"""
Custom exceptions for the ELM327 mock package.

This module defines the exception classes raised by the connection layer and
the configuration loader. The mock interpreter itself never raises; an
unsupported command is answered with a sentinel line instead.
"""


class ELMMockException(Exception):
    """
    Base exception for all elmmock errors.
    """
    pass


class ConnectionException(ELMMockException):
    """
    Exception raised when a connection operation fails.

    Raised by Connection implementations when the underlying transport
    (serial port, in-memory buffer) cannot complete a read or write.
    """
    pass


class ConnectionTimeoutError(ConnectionException):
    """Timeout during connection operation."""
    pass


class NotConnectedException(ConnectionException):
    """
    Exception raised when attempting operations without an open connection.

    Raised when trying to write or read while the connection has not been
    opened or has already been closed.
    """
    pass


class ConfigurationException(ELMMockException):
    """
    Exception raised when the INI configuration is invalid.

    Raised for an unknown device type, a missing serial port, or values that
    cannot be converted to the expected type.
    """
    pass
