"""Board model for the sandwich puzzle."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Sequence

from sandwich.backend.models.recipe import Recipe


class Direction(StrEnum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass
class Tile:
    """A movable ingredient tile.

    ``row``/``col`` is the tile's logical cell.  ``display_pos`` is where a
    renderer should currently draw it; it only drifts away from the logical
    cell during the decorative shuffle pass.
    """

    id: int
    row: int
    col: int
    display_pos: tuple[int, int] = field(init=False)

    def __post_init__(self) -> None:
        self.display_pos = (self.row, self.col)

    @property
    def position(self) -> tuple[int, int]:
        return (self.row, self.col)


@dataclass(frozen=True)
class TileSnapshot:
    id: int
    row: int
    col: int
    display_pos: tuple[int, int]


@dataclass(frozen=True)
class BoardSnapshot:
    """Read-only copy of a board for rendering."""

    size: int
    cells: tuple[tuple[int, ...], ...]
    empty_pos: tuple[int, int]
    tiles: tuple[TileSnapshot, ...]

    def flatten(self) -> list[int]:
        return [v for row in self.cells for v in row]


@dataclass(frozen=True)
class TargetLayout:
    """The winning arrangement, derived once from a recipe or the sequential order.

    ``cells`` is row-major with ``size * size`` entries.  Only the first
    ``compared`` cells decide a win; the rest may hold anything.
    """

    size: int
    cells: tuple[int, ...]
    compared: int

    @classmethod
    def from_recipe(cls, recipe: Recipe, size: int) -> TargetLayout:
        total = size * size
        sequence = list(recipe.sequence[:total])
        cells = sequence + [0] * (total - len(sequence))
        return cls(size=size, cells=tuple(cells), compared=len(sequence))

    @classmethod
    def sequential(cls, size: int) -> TargetLayout:
        """All tiles in order, empty cell bottom-right."""
        total = size * size
        return cls(size=size, cells=tuple(list(range(1, total)) + [0]), compared=total)

    def matches(self, board: Board) -> bool:
        flat = board.flatten()
        return flat[: self.compared] == list(self.cells[: self.compared])

    def is_cell_correct(self, cells: Sequence[Sequence[int]], row: int, col: int) -> bool:
        """True if a tile sits on (*row*, *col*) and it is the one the layout wants there."""
        index = row * self.size + col
        value = cells[row][col]
        return index < self.compared and value != 0 and value == self.cells[index]


@dataclass
class Board:
    """Represents the puzzle grid.

    Cells are stored as a 2D list of ints.  0 is an unoccupied cell; exactly
    one of those, ``empty_pos``, is the slot tiles slide into.
    """

    size: int
    cells: list[list[int]]
    empty_pos: tuple[int, int]
    pieces: dict[int, Tile] = field(default_factory=dict)

    # -- construction helpers -------------------------------------------------

    @classmethod
    def from_flat(cls, size: int, flat: Sequence[int]) -> Board:
        """Create a board from a flat row-major cell list.

        Example::

            Board.from_flat(3, [1, 2, 3, 4, 5, 6, 7, 0, 8])
        """
        if len(flat) != size * size:
            raise ValueError(
                f"Expected {size * size} cells for a {size}×{size} board, "
                f"got {len(flat)}."
            )
        ids = [v for v in flat if v != 0]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate tile ids in layout {list(flat)}.")

        cells = [list(flat[r * size : (r + 1) * size]) for r in range(size)]
        pieces = {
            v: Tile(id=v, row=r, col=c)
            for r, row in enumerate(cells)
            for c, v in enumerate(row)
            if v != 0
        }
        return cls(size=size, cells=cells, empty_pos=cls.locate_empty(cells), pieces=pieces)

    @classmethod
    def from_target(cls, target: TargetLayout) -> Board:
        return cls.from_flat(target.size, target.cells)

    @staticmethod
    def locate_empty(cells: list[list[int]]) -> tuple[int, int]:
        """Pick the empty slot among the zero cells.

        Rows are scanned bottom-up and each row right-to-left.  The scan
        stops at the first zero of a row but moves on to the rows above, so
        the rightmost zero of the topmost row holding one wins.  For a
        layout with a single zero this is simply that cell.
        """
        size = len(cells)
        found: tuple[int, int] | None = None
        for r in range(size - 1, -1, -1):
            for c in range(size - 1, -1, -1):
                if cells[r][c] == 0:
                    found = (r, c)
                    break
        if found is None:
            raise ValueError("Layout has no empty cell.")
        return found

    # -- queries --------------------------------------------------------------

    def tile_at(self, row: int, col: int) -> Tile | None:
        return self.pieces.get(self.cells[row][col])

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def flatten(self) -> list[int]:
        return [v for row in self.cells for v in row]

    def snapshot(self) -> BoardSnapshot:
        return BoardSnapshot(
            size=self.size,
            cells=tuple(tuple(row) for row in self.cells),
            empty_pos=self.empty_pos,
            tiles=tuple(
                TileSnapshot(id=t.id, row=t.row, col=t.col, display_pos=t.display_pos)
                for t in sorted(self.pieces.values(), key=lambda t: t.id)
            ),
        )

    def copy(self) -> Board:
        pieces = {}
        for tile_id, tile in self.pieces.items():
            clone = Tile(id=tile_id, row=tile.row, col=tile.col)
            clone.display_pos = tile.display_pos
            pieces[tile_id] = clone
        return Board(
            size=self.size,
            cells=[row[:] for row in self.cells],
            empty_pos=self.empty_pos,
            pieces=pieces,
        )
