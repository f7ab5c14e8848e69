from __future__ import annotations

import random

import pytest

from sandwich.backend.models.board import Board, TargetLayout
from sandwich.backend.models.recipe import RecipeCatalog


@pytest.fixture
def catalog() -> RecipeCatalog:
    return RecipeCatalog()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


def assert_board_invariants(board: Board, target: TargetLayout) -> None:
    """Check the structural invariants every reachable board must satisfy."""
    er, ec = board.empty_pos
    assert board.cells[er][ec] == 0, "empty_pos must hold 0"

    flat = board.flatten()
    assert sorted(v for v in flat if v) == sorted(v for v in target.cells if v)
    assert flat.count(0) == list(target.cells).count(0)

    for tile in board.pieces.values():
        assert board.cells[tile.row][tile.col] == tile.id
