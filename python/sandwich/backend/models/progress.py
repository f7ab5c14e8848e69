"""Cross-puzzle progress: pet stats, totals, and completed recipes."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Mapping

if TYPE_CHECKING:
    from sandwich.backend.engine.evaluator import CompletionEvent, FailureEvent
    from sandwich.backend.engine.gameplay import GamePlay

logger = logging.getLogger(__name__)

# Recipe buffs name some stats differently from the pet record.
_STAT_ALIASES: dict[str, str] = {"health": "hp"}

FAIL_HP_PENALTY = 10


@dataclass
class PetStats:
    hp: int = 100
    max_hp: int = 100
    hunger: int = 100
    attack: int = 10
    defense: int = 10
    stamina: int = 100


@dataclass
class Progress:
    pet: PetStats = field(default_factory=PetStats)
    total_moves: int = 0
    puzzles_completed: int = 0
    puzzles_failed: int = 0
    completed_recipes: list[str] = field(default_factory=list)
    last_result: str | None = None


class ProgressManager:
    """Loads, saves, and updates progress from a JSON file.

    Attach it to a game with ``attach`` and it applies completion and
    failure events as they fire.
    """

    def __init__(self, filepath: Path | None) -> None:
        self.filepath = filepath
        self.progress = Progress()
        self._load()

    # -- persistence ----------------------------------------------------------

    def _load(self) -> None:
        if self.filepath is not None and self.filepath.exists():
            data = json.loads(self.filepath.read_text())
            pet = PetStats(**data.pop("pet", {}))
            self.progress = Progress(pet=pet, **data)

    def save(self) -> None:
        if self.filepath is None:
            return
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        self.filepath.write_text(json.dumps(asdict(self.progress), indent=2) + "\n")

    # -- event handlers -------------------------------------------------------

    def attach(self, game: GamePlay) -> None:
        game.on_complete(self.record_completion)
        game.on_fail(self.record_failure)

    def record_completion(self, event: CompletionEvent) -> None:
        progress = self.progress
        progress.last_result = "win"
        progress.puzzles_completed += 1
        progress.total_moves += event.move_count

        if event.recipe is not None:
            if event.recipe.id not in progress.completed_recipes:
                progress.completed_recipes.append(event.recipe.id)
            self._apply_buff(event.recipe.buff)

        logger.debug("Recorded completion: %s", event)
        self.save()

    def record_failure(self, event: FailureEvent) -> None:
        progress = self.progress
        progress.last_result = "fail"
        progress.puzzles_failed += 1
        progress.pet.hp = max(0, progress.pet.hp - FAIL_HP_PENALTY)

        logger.debug("Recorded failure: %s", event)
        self.save()

    # -- helpers --------------------------------------------------------------

    def _apply_buff(self, buff: Mapping[str, int]) -> None:
        pet = self.progress.pet
        for stat, delta in buff.items():
            name = _STAT_ALIASES.get(stat, stat)
            if name == "max_hp" or not hasattr(pet, name):
                logger.debug("Ignoring buff for unknown stat %r", stat)
                continue
            setattr(pet, name, getattr(pet, name) + delta)
        pet.hp = min(pet.hp, pet.max_hp)
