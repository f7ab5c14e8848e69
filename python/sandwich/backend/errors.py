"""Exceptions raised by the puzzle backend."""

from __future__ import annotations


class PuzzleError(Exception):
    """Base class for puzzle engine errors."""


class InvalidMove(PuzzleError, ValueError):
    """A tile was moved that is not orthogonally adjacent to the empty cell."""

    def __init__(self, tile_id: int, position: tuple[int, int], empty: tuple[int, int]) -> None:
        self.tile_id = tile_id
        self.position = position
        self.empty = empty
        super().__init__(
            f"Tile {tile_id} at {position} is not adjacent to the empty cell {empty}."
        )


class UnknownRecipe(PuzzleError, LookupError):
    """No recipe with the requested id exists in the catalog."""


class MalformedRecipe(PuzzleError, ValueError):
    """A catalog entry is incomplete or cannot be laid out on a board."""
