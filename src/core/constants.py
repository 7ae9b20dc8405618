"""
Shared protocol constants for the OpenBCI driver.

This module consolidates the wire command table, packet framing sizes and
default timing so the device, handshake and simulator agree on them.
"""

from enum import IntEnum
from types import MappingProxyType
from typing import Dict, Mapping


class Command(IntEnum):
    """Single-byte protocol commands and framing markers."""
    STOP = 0x73      # 's' - stop streaming
    START = 0x62     # 'b' - begin streaming
    RESET = 0x76     # 'v' - soft reset
    FOOTER = 0xC0    # Packet footer marker
    HEADER = 0xA0    # Packet header marker
    INIT = 0x24      # '$' - reset confirmation byte

    def to_bytes(self) -> bytes:
        """Wire representation of the command."""
        return bytes([self.value])


# Name -> byte lookup, read-only for the whole process
COMMANDS: Mapping[str, int] = MappingProxyType(
    {command.name.lower(): command.value for command in Command}
)


# Packet framing: footer, header, sequence, payload, footer
PAYLOAD_SIZE = 30
PACKET_SIZE = 1 + 1 + 1 + PAYLOAD_SIZE + 1
SEQUENCE_MODULO = 256

# Consecutive init bytes the board sends once a reset has completed
INIT_SEQUENCE_LENGTH = 3


# Default pacing (seconds)
DEFAULT_TIMING: Dict[str, float] = {
    "write_delay": 0.050,      # After each plain command write
    "settle_delay": 0.010,     # Between handshake steps
    "sample_interval": 0.025,  # Simulated time between packets
}


# Default serial settings for the OpenBCI dongle
DEFAULT_SERIAL_SETTINGS = {
    "baud_rate": 115200,
    "read_timeout": 1.0,
}


def command_name(value: int) -> str:
    """Get the protocol name for a byte value, or its hex form if unknown."""
    try:
        return Command(value).name.lower()
    except ValueError:
        return f"0x{value:02x}"
