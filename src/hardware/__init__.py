"""Hardware interface modules for talking to the OpenBCI board."""

from .device import Device, is_reset
from .handshake import HandshakeSettings, HandshakeWindow, ResetHandshake
from .pacing import Pacer
from .simulator import SimulatedPeripheral, ReadPhase, NumpyByteSource
from .transport import (
    SerialSettings,
    SerialTransport,
    Transport,
    auto_detect_port,
    list_available_ports,
    open_device,
)

__all__ = [
    "Device", "is_reset",
    "HandshakeSettings", "HandshakeWindow", "ResetHandshake",
    "Pacer",
    "SimulatedPeripheral", "ReadPhase", "NumpyByteSource",
    "SerialSettings", "SerialTransport", "Transport",
    "auto_detect_port", "list_available_ports", "open_device",
]
