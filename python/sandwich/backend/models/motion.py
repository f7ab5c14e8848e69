"""Playback records handed from the engine to the presentation layer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class MotionKind(StrEnum):
    SLIDE = "slide"
    SHUFFLE = "shuffle"
    DECOY = "decoy"
    SETTLE = "settle"


@dataclass(frozen=True)
class TileMotion:
    """One tile travelling between two grid coordinates.

    The engine has already applied the logical change by the time a motion
    is queued; a renderer replays motions at whatever pace it likes.
    """

    tile_id: int
    start: tuple[int, int]
    end: tuple[int, int]
    kind: MotionKind
