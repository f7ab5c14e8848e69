"""Win, fail and rating checks run after each player move."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

from sandwich.backend.engine.gamestate import GameState, Phase
from sandwich.backend.models.recipe import Recipe

logger = logging.getLogger(__name__)


class Rating(StrEnum):
    THREE_STARS = "three_stars"
    TWO_STARS = "two_stars"
    ONE_STAR = "one_star"
    SKULL = "skull"

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]


_SYMBOLS = {
    Rating.THREE_STARS: "⭐⭐⭐",
    Rating.TWO_STARS: "⭐⭐",
    Rating.ONE_STAR: "⭐",
    Rating.SKULL: "\U0001f480",
}


@dataclass(frozen=True)
class CompletionEvent:
    recipe: Recipe | None
    move_count: int
    rating: Rating

    @property
    def recipe_id(self) -> str | None:
        return self.recipe.id if self.recipe is not None else None


@dataclass(frozen=True)
class FailureEvent:
    move_count: int


Outcome = CompletionEvent | FailureEvent


class OutcomeEvaluator:
    """Decides whether a settled move ended the puzzle."""

    @staticmethod
    def rate(moves: int, optimal: int) -> Rating:
        """Rate *moves* against *optimal*; every bound is inclusive."""
        if moves <= optimal:
            return Rating.THREE_STARS
        if moves <= optimal * 1.5:
            return Rating.TWO_STARS
        if moves <= optimal * 2:
            return Rating.ONE_STAR
        return Rating.SKULL

    def evaluate(self, state: GameState) -> Outcome | None:
        """Check the move budget, then the target layout.

        Moves *state* into ``FAILED`` or ``WON`` and returns the matching
        event, or returns ``None`` if play continues.
        """
        if state.is_terminal:
            return None

        if state.moves >= state.config.max_moves:
            state.phase = Phase.FAILED
            logger.debug("Move limit %d reached", state.config.max_moves)
            return FailureEvent(move_count=state.moves)

        if state.is_solved:
            state.phase = Phase.WON
            rating = self.rate(state.moves, state.config.optimal_moves)
            logger.debug("Solved in %d moves (%s)", state.moves, rating.value)
            return CompletionEvent(recipe=state.recipe, move_count=state.moves, rating=rating)

        return None
