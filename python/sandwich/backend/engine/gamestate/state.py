"""Tracks the mutable state of a puzzle attempt."""

from __future__ import annotations

from enum import StrEnum

from sandwich.backend.models.board import Board, TargetLayout
from sandwich.backend.models.config import PuzzleConfig
from sandwich.backend.models.recipe import Recipe


class Phase(StrEnum):
    IDLE = "idle"
    ANIMATING = "animating"
    SHUFFLING = "shuffling"
    WON = "won"
    FAILED = "failed"


class GameState:
    """Holds the board, its target layout, the move counter, and the phase.

    A fresh state starts on the solved board in the ``SHUFFLING`` phase; the
    generator takes it to ``IDLE``.
    """

    def __init__(
        self,
        target: TargetLayout,
        config: PuzzleConfig,
        recipe: Recipe | None = None,
    ) -> None:
        self.target = target
        self.config = config
        self.recipe = recipe
        self.board = Board.from_target(target)
        self.moves: int = 0
        self.phase: Phase = Phase.SHUFFLING

    @classmethod
    def for_recipe(cls, recipe: Recipe, config: PuzzleConfig) -> GameState:
        """*config* must already be resolved for *recipe*."""
        target = TargetLayout.from_recipe(recipe, config.grid_size)
        return cls(target, config, recipe)

    @classmethod
    def legacy(cls, config: PuzzleConfig) -> GameState:
        return cls(TargetLayout.sequential(config.grid_size), config)

    # -- lifecycle ------------------------------------------------------------

    def restart(self) -> None:
        self.moves = 0
        self.phase = Phase.SHUFFLING

    @property
    def is_terminal(self) -> bool:
        return self.phase in (Phase.WON, Phase.FAILED)

    # -- moves ----------------------------------------------------------------

    def increment_moves(self) -> None:
        self.moves += 1

    @property
    def is_solved(self) -> bool:
        return self.target.matches(self.board)
