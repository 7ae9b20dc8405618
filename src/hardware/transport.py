"""
Serial transport for the OpenBCI USB dongle.

This module defines the byte-stream contract the Device relies on and an
implementation on top of pyserial, plus helpers for finding and opening
the dongle's port.
"""

from dataclasses import dataclass
from typing import Optional, Protocol

import serial
import serial.tools.list_ports

from core.constants import DEFAULT_SERIAL_SETTINGS
from core.exceptions import NoDataAvailable, TransportError
from core.session_logging import get_logger

logger = get_logger("transport")


class Transport(Protocol):
    """
    Duplex byte-stream contract.

    ``read`` fills the start of the buffer and returns the count. It raises
    NoDataAvailable when the read timeout passes with nothing received and
    TransportError for anything worse.
    """

    def read(self, buffer: bytearray) -> int: ...

    def write(self, data: bytes) -> int: ...

    def close(self) -> None: ...


@dataclass
class SerialSettings:
    """Configuration for opening the serial port."""
    port: Optional[str] = None  # None = auto-detect
    baud_rate: int = DEFAULT_SERIAL_SETTINGS["baud_rate"]
    read_timeout: float = DEFAULT_SERIAL_SETTINGS["read_timeout"]  # seconds


class SerialTransport:
    """Transport backed by an open ``serial.Serial``."""

    def __init__(self, conn: serial.Serial):
        self._serial = conn

    @classmethod
    def open(cls, settings: SerialSettings) -> "SerialTransport":
        """
        Open the port described by ``settings`` (8 data bits, no parity, 1 stop bit).

        Raises:
            TransportError: No port given or detected, or the port failed to open.
        """
        port = settings.port or auto_detect_port()
        if not port:
            raise TransportError("No serial port specified or detected")

        try:
            conn = serial.Serial(
                port=port,
                baudrate=settings.baud_rate,
                bytesize=serial.EIGHTBITS,
                parity=serial.PARITY_NONE,
                stopbits=serial.STOPBITS_ONE,
                timeout=settings.read_timeout,
            )
        except serial.SerialException as e:
            raise TransportError(f"Failed to open {port}: {e}") from e

        logger.info(f"Connected to {port} at {settings.baud_rate} baud")
        return cls(conn)

    def read(self, buffer: bytearray) -> int:
        if not buffer:
            return 0
        try:
            data = self._serial.read(len(buffer))
        except serial.SerialException as e:
            raise TransportError(f"Read failed: {e}") from e

        if not data:
            raise NoDataAvailable("No data before read timeout")

        buffer[:len(data)] = data
        return len(data)

    def write(self, data: bytes) -> int:
        try:
            n = self._serial.write(data)
        except serial.SerialException as e:
            raise TransportError(f"Write failed: {e}") from e
        return len(data) if n is None else n

    def close(self) -> None:
        try:
            self._serial.close()
        except serial.SerialException as e:
            raise TransportError(f"Close failed: {e}") from e
        logger.info("Disconnected from serial port")


def list_available_ports() -> list[dict]:
    """
    List all available serial ports.

    Returns:
        List of dicts with port info (device, description, hwid, manufacturer).
    """
    ports = []
    for port in serial.tools.list_ports.comports():
        ports.append({
            "device": port.device,
            "description": port.description,
            "hwid": port.hwid,
            "manufacturer": port.manufacturer,
        })
    return ports


def auto_detect_port() -> Optional[str]:
    """Attempt to find the OpenBCI dongle's port."""
    ports = list_available_ports()

    # The dongle is an FTDI USB-serial bridge
    keywords = ["FTDI", "FT231X", "USB", "Serial", "UART"]

    for port in ports:
        desc = f"{port['description']} {port['hwid']}".upper()
        if any(kw.upper() in desc for kw in keywords):
            logger.info(f"Auto-detected port: {port['device']} ({port['description']})")
            return port["device"]

    if ports:
        logger.info(f"Using first available port: {ports[0]['device']}")
        return ports[0]["device"]

    return None


def open_device(
    location: Optional[str] = None,
    baud_rate: int = DEFAULT_SERIAL_SETTINGS["baud_rate"],
    read_timeout: float = DEFAULT_SERIAL_SETTINGS["read_timeout"],
    **device_kwargs,
):
    """
    Open a serial port and wrap it in a Device.

    Args:
        location: Port name (e.g. '/dev/ttyUSB0', 'COM3'). Auto-detected if None.
        baud_rate: Communication speed in bits per second.
        read_timeout: Seconds a read waits before reporting no data.
        **device_kwargs: Passed to Device (pacer, handshake_settings).

    Returns:
        A Device over the opened port.
    """
    from .device import Device

    settings = SerialSettings(port=location, baud_rate=baud_rate, read_timeout=read_timeout)
    return Device(SerialTransport.open(settings), **device_kwargs)
