"""The single-step slide rule shared by players and the shuffle."""

from __future__ import annotations

from sandwich.backend.errors import InvalidMove
from sandwich.backend.models.board import Board, Direction, Tile
from sandwich.backend.models.motion import MotionKind, TileMotion

# Neighbour offsets from the empty cell: up, down, left, right.
_NEIGHBOURS = ((-1, 0), (1, 0), (0, -1), (0, 1))


class MoveEngine:
    """Stateless move rules; all methods are static."""

    @staticmethod
    def is_legal(tile: Tile, board: Board) -> bool:
        """True if *tile* is exactly one orthogonal step from the empty cell."""
        er, ec = board.empty_pos
        return abs(tile.row - er) + abs(tile.col - ec) == 1

    @staticmethod
    def legal_tiles(board: Board) -> list[Tile]:
        er, ec = board.empty_pos
        tiles: list[Tile] = []
        for dr, dc in _NEIGHBOURS:
            nr, nc = er + dr, ec + dc
            if board.in_bounds(nr, nc):
                tile = board.tile_at(nr, nc)
                if tile is not None:
                    tiles.append(tile)
        return tiles

    @staticmethod
    def tile_for_direction(board: Board, direction: Direction) -> Tile | None:
        """Return the tile that would slide in *direction*, if any.

        E.g. ``Direction.UP`` picks the tile **below** the empty cell.
        """
        # UP   → tile at (er+1, ec) moves up
        # DOWN → tile at (er-1, ec) moves down
        # LEFT → tile at (er, ec+1) moves left
        # RIGHT→ tile at (er, ec-1) moves right
        offsets = {
            Direction.UP: (1, 0),
            Direction.DOWN: (-1, 0),
            Direction.LEFT: (0, 1),
            Direction.RIGHT: (0, -1),
        }
        dr, dc = offsets[direction]
        er, ec = board.empty_pos
        tr, tc = er + dr, ec + dc
        if not board.in_bounds(tr, tc):
            return None
        return board.tile_at(tr, tc)

    @staticmethod
    def apply_move(
        board: Board, tile: Tile, kind: MotionKind = MotionKind.SLIDE
    ) -> TileMotion:
        """Slide *tile* into the empty cell and return the motion.

        Raises ``InvalidMove`` if the tile is not adjacent to the empty cell.
        """
        if not MoveEngine.is_legal(tile, board):
            raise InvalidMove(tile.id, tile.position, board.empty_pos)

        start = tile.position
        er, ec = board.empty_pos
        board.cells[tile.row][tile.col] = 0
        board.cells[er][ec] = tile.id
        board.empty_pos = start
        tile.row, tile.col = er, ec
        tile.display_pos = (er, ec)
        return TileMotion(tile_id=tile.id, start=start, end=(er, ec), kind=kind)
