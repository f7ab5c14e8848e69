"""Generates scrambled, solvable boards from a target layout."""

from __future__ import annotations

import logging
import random
from typing import Iterator

from sandwich.backend.engine.gamemoves import MoveEngine
from sandwich.backend.engine.gamestate import GameState, Phase
from sandwich.backend.models.board import Board, TargetLayout
from sandwich.backend.models.motion import MotionKind, TileMotion

logger = logging.getLogger(__name__)

# Probability that a decorative round swaps two tiles rather than rotating three.
PAIR_SWAP_CHANCE = 0.7


class GameGenerator:
    """Creates solvable puzzles by shuffling from the solved state.

    The walk only ever applies legal moves, so every scramble can be undone
    by the player.  An optional decorative pass then churns the tiles'
    display positions without touching the logical board.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng if rng is not None else random.Random()

    @staticmethod
    def solved(target: TargetLayout) -> Board:
        """Return the goal-state board for *target*."""
        return Board.from_target(target)

    def shuffle(self, state: GameState) -> Iterator[TileMotion]:
        """Reset *state* to solved and scramble it, yielding each motion.

        The phase stays ``SHUFFLING`` until the generator is exhausted.
        """
        state.phase = Phase.SHUFFLING
        state.board = self.solved(state.target)
        config = state.config

        yield from self.scramble(state.board, config.shuffle_move_count)
        if config.enable_hybrid_shuffle:
            yield from self.decorate(state.board, config.hybrid_shuffle_count)

        state.phase = Phase.IDLE

    def scramble(self, board: Board, num_shuffles: int) -> Iterator[TileMotion]:
        """Scramble *board* in-place using random legal moves.

        The tile moved last is never picked again straight away unless it is
        the only candidate.
        """
        prev_id: int | None = None

        for _ in range(num_shuffles):
            candidates = MoveEngine.legal_tiles(board)
            if len(candidates) > 1:
                candidates = [t for t in candidates if t.id != prev_id]
            if not candidates:
                logger.debug("No legal shuffle move around %s; skipping step.", board.empty_pos)
                continue

            tile = self.rng.choice(candidates)
            prev_id = tile.id
            yield MoveEngine.apply_move(board, tile, MotionKind.SHUFFLE)

    def decorate(self, board: Board, rounds: int) -> Iterator[TileMotion]:
        """Cycle the display positions of small random tile groups.

        Each round swaps two tiles or rotates three, then settles every
        chosen tile back onto its logical cell.
        """
        tiles = sorted(board.pieces.values(), key=lambda t: t.id)
        if len(tiles) < 2:
            return

        for _ in range(rounds):
            count = 2 if self.rng.random() < PAIR_SWAP_CHANCE else 3
            chosen = self.rng.sample(tiles, min(count, len(tiles)))

            origins = [t.display_pos for t in chosen]
            targets = origins[1:] + origins[:1]
            for tile, start, end in zip(chosen, origins, targets):
                tile.display_pos = end
                yield TileMotion(tile_id=tile.id, start=start, end=end, kind=MotionKind.DECOY)

            for tile in chosen:
                start = tile.display_pos
                tile.display_pos = tile.position
                yield TileMotion(
                    tile_id=tile.id, start=start, end=tile.position, kind=MotionKind.SETTLE
                )
