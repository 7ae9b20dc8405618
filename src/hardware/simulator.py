"""
Simulated OpenBCI board - produces correctly framed packets without hardware.

The simulator honours the same read/write/close contract as a serial
transport, so it can sit under a Device wherever a real port would.
"""

from enum import Enum, auto
from typing import Optional, Protocol

import numpy as np

from core.constants import Command, PAYLOAD_SIZE, SEQUENCE_MODULO
from core.session_logging import get_logger
from .pacing import Pacer

logger = get_logger("simulator")


class ReadPhase(Enum):
    """Position of the simulator inside a packet."""
    FOOTER = auto()           # Initial footer -> HEADER
    HEADER = auto()           # Header marker -> SEQUENCE
    SEQUENCE = auto()         # Sequence counter -> PAYLOAD
    PAYLOAD = auto()          # 30 sample bytes -> TRAILING_FOOTER
    TRAILING_FOOTER = auto()  # Footer, next sequence -> HEADER


class RandomByteSource(Protocol):
    """Supplies payload bytes for simulated samples."""

    def __call__(self) -> int: ...


class NumpyByteSource:
    """Uniform random bytes from a numpy Generator."""

    def __init__(self, seed: Optional[int] = None):
        self._rng = np.random.default_rng(seed)

    def __call__(self) -> int:
        return int(self._rng.integers(0, 256))


class SimulatedPeripheral:
    """
    Software stand-in for the OpenBCI board.

    Streams ``footer, header, sequence, 30 payload bytes, footer`` while
    armed; after the first packet each cycle restarts at the header. The
    ``start`` command arms it and ``stop`` disarms it. Disarming freezes the
    packet state rather than resetting it.

    Not thread-safe.
    """

    def __init__(
        self,
        random_source: Optional[RandomByteSource] = None,
        pacer: Optional[Pacer] = None,
    ):
        """
        Initialize the simulator.

        Args:
            random_source: Payload byte generator. Random if None.
            pacer: Delay source for the per-packet sampling interval.
        """
        self.random_source = random_source or NumpyByteSource()
        self.pacer = pacer or Pacer()

        self.armed = False
        self.sequence_counter = 0
        self.sample_counter = 0
        self.read_phase = ReadPhase.FOOTER

    def read(self, buffer: bytearray) -> int:
        """
        Fill ``buffer`` with stream bytes.

        Returns 0 and leaves the buffer untouched while not armed.
        """
        if not self.armed:
            return 0

        for idx in range(len(buffer)):
            buffer[idx] = self._step()
        return len(buffer)

    def _step(self) -> int:
        """Emit one byte and advance the packet state machine."""
        phase = self.read_phase

        if phase is ReadPhase.FOOTER:
            self.read_phase = ReadPhase.HEADER
            return Command.FOOTER

        if phase is ReadPhase.HEADER:
            self.read_phase = ReadPhase.SEQUENCE
            return Command.HEADER

        if phase is ReadPhase.SEQUENCE:
            self.read_phase = ReadPhase.PAYLOAD
            return self.sequence_counter

        if phase is ReadPhase.PAYLOAD:
            value = self.random_source() & 0xFF
            self.sample_counter += 1
            if self.sample_counter == PAYLOAD_SIZE:
                self.sample_counter = 0
                self.read_phase = ReadPhase.TRAILING_FOOTER
            return value

        if phase is ReadPhase.TRAILING_FOOTER:
            self.read_phase = ReadPhase.HEADER
            self.sequence_counter = (self.sequence_counter + 1) % SEQUENCE_MODULO
            self.pacer.after_packet()
            return Command.FOOTER

        raise AssertionError(f"Unhandled read phase: {phase}")

    def write(self, data: bytes) -> int:
        """
        Interpret a command. Only the first byte matters.

        Unknown commands are accepted and ignored.
        """
        if len(data) == 0:
            return 0

        command = data[0]
        if command == Command.START:
            if not self.armed:
                logger.info("Simulated board streaming started")
            self.armed = True
        elif command == Command.STOP:
            if self.armed:
                logger.info("Simulated board streaming stopped")
            self.armed = False

        return len(data)

    def close(self):
        """Nothing to release."""
