"""Progress tracking fed by completion and failure events."""

from __future__ import annotations

import json
from pathlib import Path

from sandwich.backend.engine.evaluator import CompletionEvent, FailureEvent, Rating
from sandwich.backend.engine.gameplay import GamePlay
from sandwich.backend.models.board import Board, TargetLayout
from sandwich.backend.models.config import PuzzleConfig
from sandwich.backend.models.progress import ProgressManager
from sandwich.backend.models.recipe import Recipe, RecipeCatalog


def _completion(catalog: RecipeCatalog, recipe_id: str, moves: int = 12) -> CompletionEvent:
    return CompletionEvent(
        recipe=catalog.require(recipe_id), move_count=moves, rating=Rating.THREE_STARS
    )


# -- event handling -----------------------------------------------------------


def test_completion_applies_buffs_and_totals(catalog: RecipeCatalog) -> None:
    manager = ProgressManager(None)

    manager.record_completion(_completion(catalog, "leafy_stack", moves=9))

    progress = manager.progress
    assert progress.pet.defense == 20
    assert progress.pet.stamina == 115
    assert progress.total_moves == 9
    assert progress.puzzles_completed == 1
    assert progress.completed_recipes == ["leafy_stack"]
    assert progress.last_result == "win"


def test_health_buff_heals_hp_up_to_max(catalog: RecipeCatalog) -> None:
    manager = ProgressManager(None)
    manager.record_failure(FailureEvent(move_count=40))
    manager.record_failure(FailureEvent(move_count=40))
    assert manager.progress.pet.hp == 80

    manager.record_completion(_completion(catalog, "cheesy_beast"))
    assert manager.progress.pet.hp == 90
    assert manager.progress.pet.attack == 25

    manager.record_completion(_completion(catalog, "deluxe_combo"))
    assert manager.progress.pet.hp == 100


def test_completed_recipes_are_unique(catalog: RecipeCatalog) -> None:
    manager = ProgressManager(None)
    manager.record_completion(_completion(catalog, "leafy_stack"))
    manager.record_completion(_completion(catalog, "leafy_stack"))
    assert manager.progress.completed_recipes == ["leafy_stack"]
    assert manager.progress.puzzles_completed == 2


def test_unknown_buff_stats_are_ignored() -> None:
    manager = ProgressManager(None)
    recipe = Recipe(id="odd", name="Odd", sequence=(1,), buff={"luck": 5, "max_hp": 50})
    manager.record_completion(
        CompletionEvent(recipe=recipe, move_count=1, rating=Rating.THREE_STARS)
    )
    assert manager.progress.pet.max_hp == 100
    assert not hasattr(manager.progress.pet, "luck")


def test_failure_penalty_floors_at_zero() -> None:
    manager = ProgressManager(None)
    for _ in range(12):
        manager.record_failure(FailureEvent(move_count=50))
    assert manager.progress.pet.hp == 0
    assert manager.progress.puzzles_failed == 12
    assert manager.progress.last_result == "fail"
    assert manager.progress.total_moves == 0


def test_legacy_completion_has_no_recipe() -> None:
    manager = ProgressManager(None)
    manager.record_completion(CompletionEvent(recipe=None, move_count=30, rating=Rating.TWO_STARS))
    assert manager.progress.completed_recipes == []
    assert manager.progress.total_moves == 30


# -- persistence --------------------------------------------------------------


def test_progress_persists_between_managers(tmp_path: Path, catalog: RecipeCatalog) -> None:
    path = tmp_path / "data" / "progress.json"
    manager = ProgressManager(path)
    manager.record_completion(_completion(catalog, "protein_power", moves=14))

    data = json.loads(path.read_text())
    assert data["pet"]["attack"] == 30
    assert data["completed_recipes"] == ["protein_power"]

    reloaded = ProgressManager(path)
    assert reloaded.progress == manager.progress


# -- wiring -------------------------------------------------------------------


def test_attach_subscribes_to_game(catalog: RecipeCatalog) -> None:
    recipe = catalog.require("classic_stack")
    game = GamePlay.from_board(
        Board.from_flat(3, [1, 2, 3, 4, 5, 6, 7, 0, 8]),
        TargetLayout.from_recipe(recipe, 3),
        PuzzleConfig().for_recipe(recipe),
        recipe,
    )
    manager = ProgressManager(None)
    manager.attach(game)

    game.request_move(8)
    game.settle()

    assert manager.progress.completed_recipes == ["classic_stack"]
    assert manager.progress.pet.defense == 15
    assert manager.progress.total_moves == 1
