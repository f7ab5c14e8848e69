"""Session orchestration: input gating, events, reset, and recipe cycling."""

from __future__ import annotations

import logging
import random

import pytest
from conftest import assert_board_invariants

from sandwich.backend.engine.evaluator import CompletionEvent, FailureEvent, OutcomeEvaluator
from sandwich.backend.engine.gamemoves import MoveEngine
from sandwich.backend.engine.gameplay import GamePlay
from sandwich.backend.engine.gamestate import GameState, Phase
from sandwich.backend.models.board import Board, Direction, TargetLayout
from sandwich.backend.models.config import PuzzleConfig
from sandwich.backend.models.motion import MotionKind
from sandwich.backend.models.recipe import Recipe, RecipeCatalog


def _play(game: GamePlay, tile_id: int) -> bool:
    """Request a move and settle it straight away, as a frontend without animation would."""
    if not game.request_move(tile_id):
        return False
    game.settle()
    return True


def _legacy_game(flat: list[int], **overrides) -> GamePlay:
    config = PuzzleConfig(**overrides)
    return GamePlay.from_board(
        Board.from_flat(3, flat), TargetLayout.sequential(3), config
    )


# -- startup ------------------------------------------------------------------


def test_for_recipe_starts_idle_and_shuffled(catalog: RecipeCatalog, rng: random.Random) -> None:
    game = GamePlay.for_recipe(catalog, "classic_stack", rng=rng)

    assert game.phase is Phase.IDLE
    assert game.move_count == 0
    assert game.move_limit == 60
    assert game.recipe is not None and game.recipe.id == "classic_stack"
    assert_board_invariants(game.state.board, game.state.target)

    motions = game.drain_motions()
    assert sum(m.kind is MotionKind.SHUFFLE for m in motions) == 20
    assert game.drain_motions() == []


def test_unknown_recipe_falls_back(
    catalog: RecipeCatalog, rng: random.Random, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.WARNING):
        game = GamePlay.for_recipe(catalog, "mystery_meat", rng=rng)
    assert game.recipe is not None and game.recipe.id == "classic_stack"
    assert "mystery_meat" in caplog.text


def test_legacy_game_uses_sequential_target(rng: random.Random) -> None:
    game = GamePlay.legacy(PuzzleConfig(grid_size=4), rng)

    assert game.recipe is None
    assert game.state.target == TargetLayout.sequential(4)
    assert game.snapshot().flatten().count(0) == 1
    assert_board_invariants(game.state.board, game.state.target)


def test_initial_empty_cell_for_leafy_stack(catalog: RecipeCatalog) -> None:
    recipe = catalog.require("leafy_stack")
    state = GameState.for_recipe(recipe, PuzzleConfig().for_recipe(recipe))
    assert state.phase is Phase.SHUFFLING
    assert state.board.empty_pos == (1, 2)


_GOOD = Recipe(id="good", name="Good", sequence=(1, 2, 3, 4, 5, 6, 7, 8))


@pytest.mark.parametrize(
    "entry",
    [
        # Fills every cell, leaving nowhere to slide into.
        {"id": "packed", "name": "Packed", "sequence": [1, 2, 3, 4, 5, 6, 7, 8, 9]},
        {"id": "doubled", "name": "Doubled", "sequence": [1, 1, 2]},
        {"id": "greedy", "name": "Greedy", "sequence": [1, 2, 3], "optimalMoves": 60},
    ],
    ids=["no-empty-cell", "duplicate-tiles", "optimal-above-max"],
)
def test_unplayable_recipe_falls_back(
    entry: dict, rng: random.Random, caplog: pytest.LogCaptureFixture
) -> None:
    catalog = RecipeCatalog([_GOOD, Recipe.from_dict(entry)])
    assert RecipeCatalog.validate(catalog.get_by_id(entry["id"]))

    with caplog.at_level(logging.WARNING):
        game = GamePlay.for_recipe(catalog, entry["id"], PuzzleConfig(), rng)

    assert game.recipe is _GOOD
    assert game.phase is Phase.IDLE
    assert entry["id"] in caplog.text
    assert_board_invariants(game.state.board, game.state.target)


def test_cycle_skips_unplayable_recipes(
    rng: random.Random, caplog: pytest.LogCaptureFixture
) -> None:
    packed = Recipe(id="packed", name="Packed", sequence=tuple(range(1, 10)))
    leafy = Recipe(id="leafy", name="Leafy", sequence=(1, 2, 3, 8))
    game = GamePlay.for_recipe(RecipeCatalog([_GOOD, packed, leafy]), "good", rng=rng)

    with caplog.at_level(logging.WARNING):
        assert game.cycle_recipe()

    assert game.recipe is leafy
    assert "packed" in caplog.text
    assert game.phase is Phase.IDLE


# -- move requests ------------------------------------------------------------


def test_request_move_enters_animating_until_settled() -> None:
    game = _legacy_game([1, 2, 3, 4, 5, 6, 7, 0, 8])

    assert game.request_move(8)
    assert game.phase is Phase.ANIMATING
    assert game.move_count == 0

    # Input is gated while the move is in flight.
    assert not game.request_move(8)

    event = game.settle()
    assert isinstance(event, CompletionEvent)
    assert game.move_count == 1
    assert game.phase is Phase.WON


def test_illegal_requests_are_ignored() -> None:
    game = _legacy_game([1, 2, 3, 4, 5, 6, 7, 0, 8])
    before = game.snapshot()

    assert not game.request_move(1)  # not adjacent
    assert not game.request_move(42)  # no such tile
    assert game.snapshot() == before
    assert game.phase is Phase.IDLE
    assert game.drain_motions() == []


def test_settle_without_move_is_noop() -> None:
    game = _legacy_game([1, 2, 3, 4, 5, 6, 7, 0, 8])
    assert game.settle() is None
    assert game.move_count == 0


def test_move_by_direction_and_cell() -> None:
    game = _legacy_game([1, 2, 3, 4, 5, 6, 7, 0, 8])

    assert not game.move(Direction.UP)  # nothing below the empty cell
    assert game.move(Direction.DOWN)  # tile 5 slides down
    game.settle()
    assert game.snapshot().cells[1] == (4, 0, 6)

    assert not game.move_tile(0, 0)
    assert not game.move_tile(5, 5)
    assert game.move_tile(2, 1)
    game.settle()
    assert game.snapshot().cells[1] == (4, 5, 6)


def test_slide_motion_is_queued() -> None:
    game = _legacy_game([1, 2, 3, 4, 5, 6, 7, 0, 8])
    game.request_move(8)
    [motion] = game.drain_motions()
    assert motion.kind is MotionKind.SLIDE
    assert (motion.start, motion.end) == ((2, 2), (2, 1))


def test_won_puzzle_ignores_further_moves() -> None:
    game = _legacy_game([1, 2, 3, 4, 5, 6, 7, 0, 8])
    _play(game, 8)
    assert game.is_won
    assert not game.request_move(6)


# -- events -------------------------------------------------------------------


def test_fail_boundary() -> None:
    game = _legacy_game([1, 2, 3, 4, 5, 6, 7, 0, 8], max_moves=50)
    failures: list[FailureEvent] = []
    game.on_fail(failures.append)

    # Tile 5 bounces between (1, 1) and (2, 1) without ever solving.
    for _ in range(49):
        assert _play(game, 5)
    assert game.move_count == 49
    assert game.phase is Phase.IDLE
    assert failures == []

    assert _play(game, 5)
    assert game.phase is Phase.FAILED
    assert failures == [FailureEvent(move_count=50)]
    assert not game.request_move(5)


def test_complete_handlers_receive_event(catalog: RecipeCatalog) -> None:
    recipe = catalog.require("classic_stack")
    config = PuzzleConfig().for_recipe(recipe)
    game = GamePlay.from_board(
        Board.from_flat(3, [1, 2, 3, 4, 5, 6, 7, 0, 8]),
        TargetLayout.from_recipe(recipe, 3),
        config,
        recipe,
    )
    seen: list[CompletionEvent] = []
    game.on_complete(seen.append)
    game.on_fail(lambda event: pytest.fail("unexpected failure"))

    _play(game, 8)

    assert len(seen) == 1
    assert seen[0].recipe_id == "classic_stack"
    assert seen[0].move_count == 1
    assert seen[0].rating.symbol == "⭐⭐⭐"


def test_leafy_stack_scenario(catalog: RecipeCatalog) -> None:
    game = GamePlay.for_recipe(catalog, "leafy_stack", rng=random.Random(8))
    completions: list[CompletionEvent] = []
    game.on_complete(completions.append)

    shuffle = [m for m in game.drain_motions() if m.kind is MotionKind.SHUFFLE]
    assert len(shuffle) == 20
    assert_board_invariants(game.state.board, game.state.target)

    # Undo the scramble one legal move at a time until the recipe is rebuilt.
    for motion in reversed(shuffle):
        assert _play(game, motion.tile_id)
        if game.phase is Phase.WON:
            break

    assert game.snapshot().flatten() == [1, 2, 3, 8, 0, 0, 0, 0, 0]
    assert len(completions) == 1
    event = completions[0]
    assert event.recipe_id == "leafy_stack"
    assert event.move_count == game.move_count
    assert event.rating is OutcomeEvaluator.rate(game.move_count, 15)


# -- reset and cycling --------------------------------------------------------


def test_reset_reshuffles_and_clears_moves(catalog: RecipeCatalog, rng: random.Random) -> None:
    game = GamePlay.for_recipe(catalog, "classic_stack", rng=rng)
    game.drain_motions()
    tile = MoveEngine.legal_tiles(game.state.board)[0]
    _play(game, tile.id)
    assert game.move_count == 1

    assert game.reset()
    assert game.move_count == 0
    assert game.phase is Phase.IDLE
    assert any(m.kind is MotionKind.SHUFFLE for m in game.drain_motions())
    assert_board_invariants(game.state.board, game.state.target)


def test_reset_after_failure() -> None:
    game = _legacy_game([1, 2, 3, 4, 5, 6, 7, 0, 8], optimal_moves=1, max_moves=1)
    _play(game, 5)
    assert game.phase is Phase.FAILED

    assert game.reset()
    assert game.phase is Phase.IDLE
    assert game.move_count == 0


def test_reset_rejected_while_shuffling(catalog: RecipeCatalog, rng: random.Random) -> None:
    game = GamePlay.for_recipe(catalog, "classic_stack", rng=rng)
    steps = game.generator.shuffle(game.state)
    next(steps)
    assert game.phase is Phase.SHUFFLING

    assert not game.reset()
    assert not game.cycle_recipe()
    assert not game.request_move(next(iter(game.state.board.pieces)))
    assert game.phase is Phase.SHUFFLING

    list(steps)
    assert game.phase is Phase.IDLE


def test_cycle_recipe_advances_and_wraps(catalog: RecipeCatalog, rng: random.Random) -> None:
    game = GamePlay.for_recipe(catalog, "garden_delight", rng=rng)

    assert game.cycle_recipe()
    assert game.recipe is not None and game.recipe.id == "deluxe_combo"
    assert game.move_limit == 70
    assert game.state.config.difficulty == "Hard"

    assert game.cycle_recipe()
    assert game.recipe.id == "classic_stack"
    assert game.move_count == 0
    assert game.phase is Phase.IDLE
    assert_board_invariants(game.state.board, game.state.target)


def test_cycle_recipe_keeps_global_overrides(catalog: RecipeCatalog, rng: random.Random) -> None:
    config = PuzzleConfig(shuffle_move_count=5, enable_hybrid_shuffle=False)
    game = GamePlay.for_recipe(catalog, "classic_stack", config, rng)
    game.drain_motions()

    game.cycle_recipe()

    motions = game.drain_motions()
    assert len(motions) == 5
    assert all(m.kind is MotionKind.SHUFFLE for m in motions)


def test_cycle_recipe_noop_in_legacy_mode(rng: random.Random) -> None:
    game = GamePlay.legacy(rng=rng)
    assert not game.cycle_recipe()
    assert game.recipe is None
