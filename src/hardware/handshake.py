"""
Reset handshake for the OpenBCI board.

Writing a reset to the board is not a plain write: the board has to be
stopped, reset, and then confirm with three consecutive init bytes ('$$$')
before streaming can start again. The whole exchange runs synchronously
inside the Device.write call that requested it.
"""

from collections import deque
from dataclasses import dataclass
from typing import Callable, Optional

from core.constants import Command, INIT_SEQUENCE_LENGTH, command_name
from core.exceptions import (
    HandshakeAborted,
    HandshakeTimeout,
    NoDataAvailable,
    TransportError,
)
from core.session_logging import get_logger
from .pacing import Pacer

logger = get_logger("handshake")

# Errors a transport may raise that count as hard failures
TRANSPORT_ERRORS = (TransportError, OSError)


@dataclass
class HandshakeSettings:
    """Configuration for the init-confirmation poll loop."""
    max_polls: Optional[int] = None  # None = wait for the board indefinitely
    poll_delay: float = 0.0          # s to wait after a read that found no data

    def __post_init__(self):
        if self.max_polls is not None and self.max_polls < 1:
            raise ValueError(f"max_polls must be at least 1 or None, got {self.max_polls}")
        if self.poll_delay < 0:
            raise ValueError(f"poll_delay must not be negative, got {self.poll_delay}")


class HandshakeWindow:
    """Round-robin window over the last three bytes read."""

    def __init__(self, target: int = Command.INIT, size: int = INIT_SEQUENCE_LENGTH):
        self.target = int(target)
        self._slots = deque(maxlen=size)

    def push(self, value: int) -> bool:
        """Record a byte, overwriting the oldest. Returns True on a match."""
        self._slots.append(value)
        return self.matched

    @property
    def matched(self) -> bool:
        return (
            len(self._slots) == self._slots.maxlen
            and all(value == self.target for value in self._slots)
        )


class ResetHandshake:
    """
    Runs stop -> reset -> wait for init confirmation -> start.

    Only the stop, reset and start bytes count toward the returned total;
    bytes consumed while polling for the confirmation do not.

    Stop and start get the same post-write delay as a plain command write.
    The reset byte is followed only by the settle delay.
    """

    def __init__(
        self,
        read: Callable[[bytearray], int],
        write: Callable[[bytes], int],
        pacer: Optional[Pacer] = None,
        settings: Optional[HandshakeSettings] = None,
    ):
        """
        Initialize the handshake.

        Args:
            read: Transport read capability (fills the buffer, returns count).
            write: Transport write capability (returns bytes written).
            pacer: Delay source. Uses default timing if None.
            settings: Poll loop configuration. Unbounded if None.
        """
        self._read = read
        self._write = write
        self.pacer = pacer or Pacer()
        self.settings = settings or HandshakeSettings()

    def run(self) -> int:
        """
        Execute the handshake.

        Returns:
            Total command bytes written (stop + reset + start).

        Raises:
            HandshakeAborted: A write failed, or a read failed with anything
                other than NoDataAvailable.
            HandshakeTimeout: ``max_polls`` was set and ran out.
        """
        written = self._send(Command.STOP, 0)
        self.pacer.after_write()
        self.pacer.settle()

        written += self._send(Command.RESET, written)
        self.pacer.settle()

        polls = self._await_init(written)
        logger.info(f"Board confirmed reset after {polls} polls")

        written += self._send(Command.START, written)
        self.pacer.after_write()
        return written

    def _send(self, command: Command, written: int) -> int:
        logger.info(f"Writing {command_name(command)} to device")
        try:
            return self._write(command.to_bytes())
        except TRANSPORT_ERRORS as e:
            logger.warning(f"Handshake write of {command_name(command)} failed: {e}")
            raise HandshakeAborted(f"writing {command_name(command)} failed", written) from e

    def _await_init(self, written: int) -> int:
        """Poll one byte at a time until the init sequence arrives."""
        window = HandshakeWindow()
        buf = bytearray(1)
        polls = 0

        while not window.matched:
            if self.settings.max_polls is not None and polls >= self.settings.max_polls:
                logger.warning(f"Gave up waiting for init confirmation after {polls} polls")
                raise HandshakeTimeout(polls, written)
            polls += 1

            try:
                n = self._read(buf)
            except NoDataAvailable:
                self.pacer.wait(self.settings.poll_delay)
                continue
            except TRANSPORT_ERRORS as e:
                logger.warning(f"Handshake read failed: {e}")
                raise HandshakeAborted("reading init confirmation failed", written) from e

            if n == 0:
                self.pacer.wait(self.settings.poll_delay)
                continue

            window.push(buf[0])

        return polls
