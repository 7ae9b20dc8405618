"""
Device wrapper around a duplex byte-stream to the OpenBCI board.

Writes are passed through to the transport unless they contain the reset
command, in which case the reset handshake runs instead.
"""

from typing import Optional

from core.constants import Command
from core.session_logging import get_logger
from .handshake import HandshakeSettings, ResetHandshake
from .pacing import Pacer
from .transport import Transport

logger = get_logger("device")


def is_reset(data: bytes) -> bool:
    """True if the reset command byte appears anywhere in ``data``."""
    return Command.RESET in bytes(data)


class Device:
    """
    OpenBCI board reached over a transport.

    The transport's read, write and close are held as three separate
    capabilities. The device keeps no protocol state between calls; the
    handshake state lives only for the duration of one write.

    Not thread-safe: use one Device per thread or serialize access.
    """

    def __init__(
        self,
        transport: Transport,
        pacer: Optional[Pacer] = None,
        handshake_settings: Optional[HandshakeSettings] = None,
    ):
        """
        Initialize the device.

        Args:
            transport: Duplex byte-stream (serial port or SimulatedPeripheral).
            pacer: Delay source. Uses default timing if None.
            handshake_settings: Reset poll loop configuration.
        """
        self._read = transport.read
        self._write = transport.write
        self._close = transport.close

        self.pacer = pacer or Pacer()
        self.handshake_settings = handshake_settings or HandshakeSettings()

    def read(self, buffer: bytearray) -> int:
        """
        Read streamed bytes into ``buffer``.

        Returns:
            Number of bytes placed at the start of the buffer.
        """
        return self._read(buffer)

    def write(self, data: bytes) -> int:
        """
        Send command bytes to the board.

        If ``data`` contains the reset byte the reset handshake runs and its
        byte count is returned; the rest of ``data`` is not sent.

        Returns:
            Number of bytes written.
        """
        if is_reset(data):
            return self.reset()

        logger.debug(f"Writing {bytes(data).hex()} to device")
        try:
            return self._write(data)
        finally:
            self.pacer.after_write()

    def reset(self) -> int:
        """Run the reset handshake directly."""
        handshake = ResetHandshake(
            self._read,
            self._write,
            pacer=self.pacer,
            settings=self.handshake_settings,
        )
        return handshake.run()

    def close(self):
        """Close the underlying transport."""
        self._close()

    def __enter__(self) -> "Device":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
