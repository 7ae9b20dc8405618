"""Core modules shared by the driver: protocol constants, errors, logging."""

from .constants import Command, COMMANDS, PACKET_SIZE, PAYLOAD_SIZE
from .exceptions import (
    DriverError,
    TransportError,
    NoDataAvailable,
    HandshakeAborted,
    HandshakeTimeout,
)
from .session_logging import configure_logging, close_logging, get_logger

__all__ = [
    "Command", "COMMANDS", "PACKET_SIZE", "PAYLOAD_SIZE",
    "DriverError", "TransportError", "NoDataAvailable",
    "HandshakeAborted", "HandshakeTimeout",
    "configure_logging", "close_logging", "get_logger",
]
