"""Exception hierarchy for transport and handshake failures."""

from typing import Optional


class DriverError(Exception):
    """Base class for all driver errors."""


class TransportError(DriverError):
    """Failure of the underlying byte-stream (open, read, write or close)."""


class NoDataAvailable(TransportError):
    """No bytes arrived before the transport's read timeout.

    Only the reset handshake tolerates this; everywhere else it surfaces
    like any other transport error.
    """


class HandshakeAborted(DriverError):
    """The reset handshake stopped before the board confirmed the reset.

    Attributes:
        reason: What step failed.
        bytes_written: Command bytes written before the failure.
    """

    def __init__(self, reason: str, bytes_written: int = 0):
        self.reason = reason
        self.bytes_written = bytes_written
        super().__init__(f"Reset handshake aborted: {reason} ({bytes_written} bytes written)")


class HandshakeTimeout(HandshakeAborted):
    """The optional poll limit ran out while waiting for init bytes.

    Attributes:
        polls: Number of reads attempted.
    """

    def __init__(self, polls: int, bytes_written: int = 0, reason: Optional[str] = None):
        self.polls = polls
        super().__init__(reason or f"no init confirmation after {polls} polls", bytes_written)
