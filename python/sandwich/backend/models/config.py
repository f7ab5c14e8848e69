"""Puzzle configuration, resolved once per recipe selection."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from sandwich.backend.models.recipe import Recipe

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PuzzleConfig:
    """Fully populated settings for one puzzle session.

    The defaults here are the global defaults; ``for_recipe`` layers a
    recipe's own metadata on top of them.
    """

    grid_size: int = 3
    optimal_moves: int = 20
    max_moves: int = 50
    difficulty: str = "Normal"
    shuffle_move_count: int = 20
    enable_hybrid_shuffle: bool = True
    hybrid_shuffle_count: int = 6
    debug_mode: bool = False

    def __post_init__(self) -> None:
        if self.grid_size < 2:
            raise ValueError(f"grid_size must be at least 2, got {self.grid_size}.")
        if self.optimal_moves < 1 or self.max_moves < 1:
            raise ValueError("optimal_moves and max_moves must be positive.")
        if self.optimal_moves > self.max_moves:
            raise ValueError(
                f"optimal_moves ({self.optimal_moves}) exceeds max_moves ({self.max_moves})."
            )
        if self.shuffle_move_count < 0 or self.hybrid_shuffle_count < 0:
            raise ValueError("Shuffle counts cannot be negative.")

    def for_recipe(self, recipe: Recipe) -> PuzzleConfig:
        """Return a copy with *recipe*'s grid size, move limits and difficulty.

        Fields the recipe leaves as ``None`` keep this config's values.
        """
        resolved = replace(
            self,
            grid_size=self.grid_size if recipe.grid_size is None else recipe.grid_size,
            optimal_moves=(
                self.optimal_moves if recipe.optimal_moves is None else recipe.optimal_moves
            ),
            max_moves=self.max_moves if recipe.max_moves is None else recipe.max_moves,
            difficulty=self.difficulty if recipe.difficulty is None else recipe.difficulty,
        )
        logger.debug(
            "Applied config for %s: size=%d optimal=%d max=%d difficulty=%s",
            recipe.id,
            resolved.grid_size,
            resolved.optimal_moves,
            resolved.max_moves,
            resolved.difficulty,
        )
        return resolved
