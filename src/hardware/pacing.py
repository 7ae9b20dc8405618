"""
Pacing delays for talking to the board.

The board needs time to ingest each command and streams packets at a fixed
sampling interval. All waits go through a Pacer so tests can swap in a
sleep function that returns immediately.
"""

import time
from dataclasses import dataclass
from typing import Callable

from core.constants import DEFAULT_TIMING


@dataclass
class Pacer:
    """Timing configuration plus the sleep function used to apply it."""
    write_delay: float = DEFAULT_TIMING["write_delay"]          # s after a command write
    settle_delay: float = DEFAULT_TIMING["settle_delay"]        # s between handshake steps
    sample_interval: float = DEFAULT_TIMING["sample_interval"]  # s between simulated packets
    sleep: Callable[[float], None] = time.sleep

    @classmethod
    def immediate(cls) -> "Pacer":
        """A pacer with every delay set to zero."""
        return cls(write_delay=0.0, settle_delay=0.0, sample_interval=0.0)

    def wait(self, seconds: float):
        """Sleep for ``seconds`` if positive."""
        if seconds > 0:
            self.sleep(seconds)

    def after_write(self):
        self.wait(self.write_delay)

    def settle(self):
        self.wait(self.settle_delay)

    def after_packet(self):
        self.wait(self.sample_interval)
