"""
Unit tests for the connection layer (no hardware required).

MockConnection is exercised directly and through ConnectionDevice;
SerialConnection runs against a patched serial.Serial.
"""

import unittest
from datetime import timedelta
from unittest.mock import MagicMock, patch

import serial

from elmmock.device import ConnectionDevice, MockDevice, parse_lines
from elmmock.exceptions import (
    ConnectionException,
    ConnectionTimeoutError,
    NotConnectedException,
)
from elmmock.mock_connection import MockConnection, frame_response
from elmmock.serial_connection import SerialConnection


class TestMockConnection(unittest.TestCase):
    """
    Test suite for MockConnection.

    Verifies the mock frames replies the way an ELM327 does.
    """

    def setUp(self) -> None:
        self.connection = MockConnection()
        self.connection.open()

    def tearDown(self) -> None:
        self.connection.close()

    def test_open(self) -> None:
        self.assertTrue(self.connection.is_open)

    def test_rpm_round_trip(self) -> None:
        self.connection.write(b'010C\r')
        self.assertEqual(self.connection.read_until(b'>'), b'41 0C 0F A0\r\r>')

    def test_at_command(self) -> None:
        self.connection.write(b'ATSP0\r')
        self.assertEqual(self.connection.read_until(b'>'), b'OK\r\r>')

    def test_unsupported(self) -> None:
        self.connection.write(b'ATZ\r')
        self.assertEqual(self.connection.read_until(b'>'), b'NOT SUPPORTED\r\r>')

    def test_responses_queue_in_order(self) -> None:
        self.connection.write(b'0105\r')
        self.connection.write(b'010D\r')
        self.assertEqual(self.connection.read_until(b'>'), b'41 05 64\r\r>')
        self.assertEqual(self.connection.read_until(b'>'), b'41 0D FF\r\r>')

    def test_read_until_without_terminator(self) -> None:
        self.connection.write(b'0105\r')
        self.assertEqual(self.connection.read_until(b'#'), b'41 05 64\r\r>')

    def test_flush_input(self) -> None:
        self.connection.write(b'0100\r')
        self.connection.flush_input()
        self.assertEqual(self.connection.read_until(b'>'), b'')

    def test_write_when_closed(self) -> None:
        self.connection.close()
        with self.assertRaises(NotConnectedException):
            self.connection.write(b'0100\r')

    def test_context_manager(self) -> None:
        with MockConnection() as connection:
            self.assertTrue(connection.is_open)
        self.assertFalse(connection.is_open)

    def test_frame_response(self) -> None:
        self.assertEqual(frame_response(('A', 'B')), b'A\rB\r\r>')

    def test_repr(self) -> None:
        self.assertIn('open', repr(self.connection))


class TestConnectionDevice(unittest.TestCase):
    """Test suite for ConnectionDevice."""

    def test_matches_mock_device(self) -> None:
        """Going through the byte stream gives the same lines as the mock itself."""
        mock = MockDevice()
        with MockConnection() as connection:
            device = ConnectionDevice(connection)
            for command in ('ATSP0', 'AT@1', '0100', '010C', '011F', '0199', 'ATZ'):
                with self.subTest(command=command):
                    result = device.execute(command)
                    self.assertFalse(result.failed)
                    self.assertEqual(result.outputs, mock.execute(command).outputs)

    def test_durations_measured(self) -> None:
        with MockConnection() as connection:
            result = ConnectionDevice(connection).execute('010C')
        self.assertGreaterEqual(result.write_time, timedelta(0))
        self.assertGreaterEqual(result.read_time, timedelta(0))
        self.assertGreaterEqual(result.total_time, result.write_time)

    def test_transport_failure_is_reported(self) -> None:
        connection = MockConnection()  # never opened
        result = ConnectionDevice(connection).execute('010C')
        self.assertTrue(result.failed)
        self.assertIsInstance(result.error, NotConnectedException)
        self.assertEqual(result.outputs, ())

    def test_timeout_passed_to_connection(self) -> None:
        connection = MagicMock()
        connection.read_until.return_value = b'OK\r\r>'
        result = ConnectionDevice(connection, timeout=2.5).execute('ATSP0')
        connection.write.assert_called_once_with(b'ATSP0\r')
        connection.read_until.assert_called_once_with(b'>', timeout=2.5)
        self.assertEqual(result.outputs, ('OK',))

    def test_stale_input_flushed_before_each_command(self) -> None:
        """Leftovers of an earlier reply are discarded before the next command is sent."""
        connection = MagicMock()
        connection.read_until.return_value = b'41 0C 0F A0\r\r>'
        device = ConnectionDevice(connection)
        device.execute('010C')
        connection.read_until.return_value = b'41 0D FF\r\r>'
        device.execute('010D')

        self.assertEqual(connection.flush_input.call_count, 2)
        calls = [name for name, _, _ in connection.mock_calls]
        self.assertEqual(calls, ['flush_input', 'write', 'read_until'] * 2)

    def test_late_reply_not_attributed_to_next_command(self) -> None:
        """The tail of a reply that arrived after its prompt was missed is not read as the next answer."""
        with MockConnection() as connection:
            connection.write(b'0105\r')  # reply left unread, as after a timeout
            result = ConnectionDevice(connection).execute('010D')
        self.assertEqual(result.outputs, ('41 0D FF',))

    def test_non_string_command(self) -> None:
        """Like MockDevice, a non-string command is answered with NOT SUPPORTED."""
        connection = MagicMock()
        result = ConnectionDevice(connection).execute(None)  # type: ignore[arg-type]
        self.assertEqual(result.outputs, ('NOT SUPPORTED',))
        self.assertFalse(result.failed)
        connection.write.assert_not_called()
        self.assertEqual(result.outputs, MockDevice().execute(None).outputs)  # type: ignore[arg-type]

    def test_parse_lines_drops_echo_and_blank_lines(self) -> None:
        raw = b'010C\r41 0C 0F A0\r\r>'
        self.assertEqual(parse_lines(raw, '010C'), ('41 0C 0F A0',))

    def test_parse_lines_multiple(self) -> None:
        raw = b'SEARCHING...\r\n41 00 1F FD 80 02\r\n\r\n>'
        self.assertEqual(parse_lines(raw, '0100'), ('SEARCHING...', '41 00 1F FD 80 02'))


class TestSerialConnection(unittest.TestCase):
    """Unit tests for SerialConnection with serial.Serial patched out."""

    def setUp(self) -> None:
        patcher = patch('elmmock.serial_connection.serial.Serial')
        self.serial_class = patcher.start()
        self.addCleanup(patcher.stop)
        self.port = self.serial_class.return_value
        self.port.timeout = 1.0

    def test_init_defaults(self) -> None:
        conn = SerialConnection('/dev/ttyUSB0')
        self.assertEqual(conn.baudrate, 38400)
        self.assertFalse(conn.is_open)

    def test_open_close(self) -> None:
        conn = SerialConnection('/dev/ttyUSB0', baudrate=115200)
        conn.open()
        self.assertTrue(conn.is_open)
        kwargs = self.serial_class.call_args.kwargs
        self.assertEqual(kwargs['port'], '/dev/ttyUSB0')
        self.assertEqual(kwargs['baudrate'], 115200)

        conn.close()
        self.assertFalse(conn.is_open)
        self.port.close.assert_called_once()

    def test_open_failure(self) -> None:
        self.serial_class.side_effect = serial.SerialException("no such port")
        conn = SerialConnection('/dev/missing')
        with self.assertRaises(ConnectionException):
            conn.open()
        self.assertFalse(conn.is_open)

    def test_write_requires_open(self) -> None:
        conn = SerialConnection('/dev/ttyUSB0')
        with self.assertRaises(NotConnectedException):
            conn.write(b'0100\r')

    def test_write_timeout(self) -> None:
        self.port.write.side_effect = serial.SerialTimeoutException("slow")
        conn = SerialConnection('/dev/ttyUSB0')
        conn.open()
        with self.assertRaises(ConnectionTimeoutError):
            conn.write(b'0100\r')

    def test_read_until_restores_timeout(self) -> None:
        self.port.read_until.return_value = b'OK\r\r>'
        conn = SerialConnection('/dev/ttyUSB0')
        conn.open()
        self.assertEqual(conn.read_until(b'>', timeout=5.0), b'OK\r\r>')
        self.assertEqual(self.port.timeout, 1.0)

    def test_read_until_timeout(self) -> None:
        self.port.read_until.return_value = b'41 0C'
        conn = SerialConnection('/dev/ttyUSB0')
        conn.open()
        with self.assertRaises(ConnectionTimeoutError):
            conn.read_until(b'>')

    def test_flush_input(self) -> None:
        conn = SerialConnection('/dev/ttyUSB0')
        conn.open()
        conn.flush_input()
        self.port.reset_input_buffer.assert_called_once()

    def test_flush_input_failure(self) -> None:
        self.port.reset_input_buffer.side_effect = serial.SerialException("gone")
        conn = SerialConnection('/dev/ttyUSB0')
        conn.open()
        with self.assertRaises(ConnectionException):
            conn.flush_input()

    def test_flush_input_requires_open(self) -> None:
        with self.assertRaises(NotConnectedException):
            SerialConnection('/dev/ttyUSB0').flush_input()

    def test_device_over_serial(self) -> None:
        self.port.read_until.return_value = b'010C\r41 0C 0F A0\r\r>'
        conn = SerialConnection('/dev/ttyUSB0')
        conn.open()
        result = ConnectionDevice(conn).execute('010C')
        self.port.write.assert_called_once_with(b'010C\r')
        self.assertEqual(result.get_outputs(), ['41 0C 0F A0'])

    def test_device_over_serial_failure(self) -> None:
        self.port.read_until.side_effect = serial.SerialException("unplugged")
        conn = SerialConnection('/dev/ttyUSB0')
        conn.open()
        result = ConnectionDevice(conn).execute('010C')
        self.assertTrue(result.failed)
        self.assertIsInstance(result.error, ConnectionException)

    @patch('elmmock.serial_connection.serial.tools.list_ports.comports')
    def test_list_ports(self, comports) -> None:
        comports.return_value = [MagicMock(device='/dev/ttyUSB0'), MagicMock(device='/dev/ttyACM0')]
        self.assertEqual(SerialConnection.list_ports(), ['/dev/ttyUSB0', '/dev/ttyACM0'])

    def test_repr(self) -> None:
        conn = SerialConnection('/dev/ttyUSB0')
        self.assertIn('/dev/ttyUSB0', repr(conn))
        self.assertIn('closed', repr(conn))


if __name__ == '__main__':
    unittest.main()
