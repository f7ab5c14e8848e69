"""Core gameplay logic: processes move requests and dispatches outcomes."""

from __future__ import annotations

import logging
import random
from collections import deque
from typing import Callable

from sandwich.backend.engine.evaluator import (
    CompletionEvent,
    FailureEvent,
    Outcome,
    OutcomeEvaluator,
)
from sandwich.backend.engine.gamegenerator import GameGenerator
from sandwich.backend.engine.gamemoves import MoveEngine
from sandwich.backend.engine.gamestate import GameState, Phase
from sandwich.backend.errors import MalformedRecipe
from sandwich.backend.models.board import Board, BoardSnapshot, Direction, TargetLayout
from sandwich.backend.models.config import PuzzleConfig
from sandwich.backend.models.motion import TileMotion
from sandwich.backend.models.recipe import DEFAULT_RECIPE_ID, Recipe, RecipeCatalog

logger = logging.getLogger(__name__)


class GamePlay:
    """Orchestrates a single puzzle session.

    Player moves are two-step: ``request_move`` applies the slide and enters
    ``ANIMATING``; ``settle`` counts it and runs the outcome checks once the
    presentation is done with it.
    """

    def __init__(
        self,
        state: GameState,
        *,
        catalog: RecipeCatalog | None = None,
        base_config: PuzzleConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.state = state
        self.catalog = catalog
        self.base_config = base_config if base_config is not None else state.config
        self.generator = GameGenerator(rng)
        self.evaluator = OutcomeEvaluator()
        self._motions: deque[TileMotion] = deque()
        self._complete_handlers: list[Callable[[CompletionEvent], None]] = []
        self._fail_handlers: list[Callable[[FailureEvent], None]] = []

    @classmethod
    def for_recipe(
        cls,
        catalog: RecipeCatalog,
        recipe_id: str = DEFAULT_RECIPE_ID,
        config: PuzzleConfig | None = None,
        rng: random.Random | None = None,
    ) -> GamePlay:
        """Start a shuffled session for *recipe_id*.

        Unknown, malformed or unplayable ids fall back to the catalog's
        first recipe.
        """
        base = config if config is not None else PuzzleConfig()
        state = cls._open(catalog, catalog.resolve(recipe_id), base)
        game = cls(state, catalog=catalog, base_config=base, rng=rng)
        game._shuffle()
        return game

    @classmethod
    def legacy(
        cls, config: PuzzleConfig | None = None, rng: random.Random | None = None
    ) -> GamePlay:
        """Start a shuffled session on the plain sequential layout."""
        base = config if config is not None else PuzzleConfig()
        game = cls(GameState.legacy(base), base_config=base, rng=rng)
        game._shuffle()
        return game

    @classmethod
    def from_board(
        cls,
        board: Board,
        target: TargetLayout,
        config: PuzzleConfig | None = None,
        recipe: Recipe | None = None,
    ) -> GamePlay:
        """Create an idle session from an existing board, skipping the shuffle."""
        base = config if config is not None else PuzzleConfig(grid_size=board.size)
        state = GameState(target, base, recipe)
        state.board = board
        state.phase = Phase.IDLE
        return cls(state)

    @staticmethod
    def _layout(recipe: Recipe, base: PuzzleConfig) -> GameState:
        """Build the solved state for *recipe*.

        Raises ``MalformedRecipe`` if the recipe cannot be laid out on a board
        (no empty cell, duplicate tiles) or its move limits are inconsistent.
        """
        if not RecipeCatalog.validate(recipe):
            raise MalformedRecipe(f"Recipe {recipe.id!r} is missing an id, name, or sequence.")
        try:
            return GameState.for_recipe(recipe, base.for_recipe(recipe))
        except ValueError as exc:
            raise MalformedRecipe(f"Recipe {recipe.id!r} is unplayable: {exc}") from exc

    @classmethod
    def _open(cls, catalog: RecipeCatalog, recipe: Recipe, base: PuzzleConfig) -> GameState:
        try:
            return cls._layout(recipe, base)
        except MalformedRecipe as exc:
            logger.warning("%s Falling back to %r.", exc, catalog.default.id)
            return cls._layout(catalog.default, base)

    # -- events ---------------------------------------------------------------

    def on_complete(self, handler: Callable[[CompletionEvent], None]) -> None:
        self._complete_handlers.append(handler)

    def on_fail(self, handler: Callable[[FailureEvent], None]) -> None:
        self._fail_handlers.append(handler)

    def _dispatch(self, event: Outcome) -> None:
        if isinstance(event, CompletionEvent):
            for handler in self._complete_handlers:
                handler(event)
        else:
            for handler in self._fail_handlers:
                handler(event)

    # -- movement -------------------------------------------------------------

    def request_move(self, tile_id: int) -> bool:
        """Slide tile *tile_id* into the empty cell.

        Returns False, changing nothing, unless the puzzle is idle and the
        tile is adjacent to the empty cell.
        """
        if self.state.phase is not Phase.IDLE:
            return False

        board = self.state.board
        tile = board.pieces.get(tile_id)
        if tile is None or not MoveEngine.is_legal(tile, board):
            return False

        self._motions.append(MoveEngine.apply_move(board, tile))
        self.state.phase = Phase.ANIMATING
        return True

    def move(self, direction: Direction) -> bool:
        """Slide the tile that moves in *direction* (see ``MoveEngine``)."""
        tile = MoveEngine.tile_for_direction(self.state.board, direction)
        if tile is None:
            return False
        return self.request_move(tile.id)

    def move_tile(self, row: int, col: int) -> bool:
        board = self.state.board
        if not board.in_bounds(row, col):
            return False
        tile = board.tile_at(row, col)
        if tile is None:
            return False
        return self.request_move(tile.id)

    def settle(self) -> Outcome | None:
        """Finish the in-flight move: count it and check for a win or fail."""
        if self.state.phase is not Phase.ANIMATING:
            return None

        self.state.increment_moves()
        self.state.phase = Phase.IDLE

        event = self.evaluator.evaluate(self.state)
        if event is not None:
            self._dispatch(event)
        return event

    # -- lifecycle ------------------------------------------------------------

    def reset(self) -> bool:
        """Reshuffle the current puzzle; refused while a shuffle is running."""
        if self.state.phase is Phase.SHUFFLING:
            logger.debug("Reset ignored while shuffling")
            return False
        self.state.restart()
        self._motions.clear()
        self._shuffle()
        return True

    def cycle_recipe(self) -> bool:
        """Switch to the next catalog recipe and reshuffle.

        Unplayable entries are skipped with a warning. Does nothing on
        legacy sessions or while shuffling.
        """
        if self.catalog is None or self.state.recipe is None:
            return False
        if self.state.phase is Phase.SHUFFLING:
            logger.debug("Recipe cycle ignored while shuffling")
            return False

        recipe = self.state.recipe
        for _ in range(len(self.catalog)):
            recipe = self.catalog.next_after(recipe)
            try:
                state = self._layout(recipe, self.base_config)
            except MalformedRecipe as exc:
                logger.warning("%s Skipping it.", exc)
                continue
            break
        else:
            return False

        logger.debug("Cycling to recipe %s", recipe.id)
        self.state = state
        self._motions.clear()
        self._shuffle()
        return True

    def _shuffle(self) -> None:
        self._motions.extend(self.generator.shuffle(self.state))

    # -- queries --------------------------------------------------------------

    def snapshot(self) -> BoardSnapshot:
        return self.state.board.snapshot()

    def drain_motions(self) -> list[TileMotion]:
        motions = list(self._motions)
        self._motions.clear()
        return motions

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def move_count(self) -> int:
        return self.state.moves

    @property
    def move_limit(self) -> int:
        return self.state.config.max_moves

    @property
    def recipe(self) -> Recipe | None:
        return self.state.recipe

    @property
    def size(self) -> int:
        return self.state.board.size

    @property
    def is_won(self) -> bool:
        return self.state.phase is Phase.WON
