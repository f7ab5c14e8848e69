"""Keyboard input for the terminal frontend.

Reads one raw keypress at a time (tty+termios on POSIX, msvcrt on Windows)
and turns it into a puzzle ``Action``.
"""

from __future__ import annotations

import os
import sys
from enum import StrEnum
from typing import Callable

from sandwich.backend.models.board import Direction


class Action(StrEnum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    RESTART = "restart"
    CYCLE = "cycle"
    QUIT = "quit"
    NONE = ""

    @property
    def direction(self) -> Direction | None:
        """The slide direction for movement actions, else ``None``."""
        try:
            return Direction(self.value)
        except ValueError:
            return None


# Letter bindings; matched case-insensitively.
BINDINGS: dict[str, Action] = {
    "w": Action.UP,
    "s": Action.DOWN,
    "a": Action.LEFT,
    "d": Action.RIGHT,
    "r": Action.RESTART,
    "c": Action.CYCLE,
    "q": Action.QUIT,
}

# Final byte of the ``ESC [ x`` arrow-key sequences.
_ARROWS: dict[str, Action] = {
    "A": Action.UP,
    "B": Action.DOWN,
    "C": Action.RIGHT,
    "D": Action.LEFT,
}

_ESCAPE = "\x1b"
_CTRL_C = "\x03"


def _getch_unix() -> str:
    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ch = sys.stdin.read(1)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)
    return ch


def _getch_windows() -> str:
    import msvcrt  # type: ignore[import-not-found]

    return msvcrt.getch().decode("utf-8", errors="ignore")


def action_for(ch: str) -> Action:
    """Map a single raw character to an action."""
    if ch == _CTRL_C:
        return Action.QUIT
    return BINDINGS.get(ch.lower(), Action.NONE)


def read_action(getch: Callable[[], str] | None = None) -> Action:
    """Block for one keypress and return its action.

    A bare Escape quits; ``ESC [ A``-style sequences are the arrow keys.
    """
    read = getch or (_getch_windows if os.name == "nt" else _getch_unix)
    ch = read()
    if ch != _ESCAPE:
        return action_for(ch)
    if read() != "[":
        return Action.QUIT
    return _ARROWS.get(read(), Action.NONE)
