"""
OpenBCI Driver - command protocol and packet stream for the OpenBCI board.

Talks to the board through its USB serial dongle, or to a simulated board
that produces the same packet framing.
"""

__version__ = "0.1.0"
__author__ = "Cole Oliva"
