"""Recipe definitions and the read-only recipe catalog."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from sandwich.backend.errors import MalformedRecipe, UnknownRecipe

logger = logging.getLogger(__name__)

# Ingredient names, indexed by tile id - 1.
INGREDIENTS: tuple[str, ...] = (
    "Bread Top",
    "Lettuce",
    "Tomato",
    "Cheese",
    "Patty",
    "Onion",
    "Pickle",
    "Bread Bottom",
)

DEFAULT_RECIPE_ID = "leafy_stack"


def ingredient_name(tile_id: int) -> str:
    if 1 <= tile_id <= len(INGREDIENTS):
        return INGREDIENTS[tile_id - 1]
    return f"#{tile_id}"


@dataclass(frozen=True)
class Recipe:
    """A named target arrangement plus its difficulty metadata.

    ``grid_size``, ``optimal_moves``, ``max_moves`` and ``difficulty`` are
    optional; ``None`` means the puzzle configuration decides.
    """

    id: str
    name: str
    sequence: tuple[int, ...]
    description: str = ""
    buff: Mapping[str, int] = field(default_factory=dict, hash=False)
    difficulty: str | None = None
    grid_size: int | None = None
    optimal_moves: int | None = None
    max_moves: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "sequence", tuple(self.sequence))
        object.__setattr__(self, "buff", MappingProxyType(dict(self.buff)))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Recipe:
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            sequence=tuple(data.get("sequence", ())),
            description=data.get("description", ""),
            buff=data.get("buff", {}),
            difficulty=data.get("difficulty"),
            grid_size=data.get("gridSize", data.get("grid_size")),
            optimal_moves=data.get("optimalMoves", data.get("optimal_moves")),
            max_moves=data.get("maxMoves", data.get("max_moves")),
        )

    @property
    def ingredients(self) -> list[str]:
        return [ingredient_name(i) for i in self.sequence if i]


RECIPES: tuple[Recipe, ...] = (
    Recipe(
        id="classic_stack",
        name="Classic Stack",
        description="The traditional dungeon sandwich.",
        sequence=(1, 2, 3, 4, 5, 6, 7, 8),
        buff={"health": 20, "defense": 5},
        difficulty="Medium",
        grid_size=3,
        optimal_moves=30,
        max_moves=60,
    ),
    Recipe(
        id="leafy_stack",
        name="Leafy Stack",
        description="A simple veggie sandwich for herbivore pets.",
        sequence=(1, 2, 3, 8),
        buff={"defense": 10, "stamina": 15},
        difficulty="Easy",
        grid_size=3,
        optimal_moves=15,
        max_moves=40,
    ),
    Recipe(
        id="cheesy_beast",
        name="Cheesy Beast",
        description="Extra cheese for hungry pets.",
        sequence=(1, 4, 5, 8),
        buff={"attack": 15, "health": 10},
        difficulty="Easy",
        grid_size=3,
        optimal_moves=15,
        max_moves=40,
    ),
    Recipe(
        id="protein_power",
        name="Protein Power",
        description="Meat-heavy meal for warrior pets.",
        sequence=(1, 5, 4, 8),
        buff={"attack": 20, "defense": 5},
        difficulty="Easy",
        grid_size=3,
        optimal_moves=15,
        max_moves=40,
    ),
    Recipe(
        id="garden_delight",
        name="Garden Delight",
        description="Fresh veggies for balanced nutrition.",
        sequence=(1, 2, 6, 7, 8),
        buff={"health": 15, "stamina": 20},
        difficulty="Medium",
        grid_size=3,
        optimal_moves=20,
        max_moves=50,
    ),
    Recipe(
        id="deluxe_combo",
        name="Deluxe Combo",
        description="Everything sandwich for special occasions.",
        sequence=(1, 2, 3, 4, 5, 6, 7, 8),
        buff={"health": 30, "attack": 10, "defense": 10, "stamina": 15},
        difficulty="Hard",
        grid_size=3,
        optimal_moves=35,
        max_moves=70,
    ),
)


class RecipeCatalog:
    """Read-only, ordered collection of recipes."""

    def __init__(self, recipes: Iterable[Recipe] = RECIPES) -> None:
        self._recipes: tuple[Recipe, ...] = tuple(recipes)
        if not self._recipes:
            raise ValueError("A recipe catalog needs at least one recipe.")

    @classmethod
    def from_file(cls, filepath: Path) -> RecipeCatalog:
        """Load a catalog from a JSON list of recipe objects."""
        data = json.loads(filepath.read_text())
        return cls(Recipe.from_dict(entry) for entry in data)

    # -- queries --------------------------------------------------------------

    def get_by_id(self, recipe_id: str) -> Recipe | None:
        for recipe in self._recipes:
            if recipe.id == recipe_id:
                return recipe
        return None

    def get_all(self) -> list[Recipe]:
        return list(self._recipes)

    def get_by_difficulty(self, difficulty: str) -> list[Recipe]:
        return [r for r in self._recipes if r.difficulty == difficulty]

    @property
    def default(self) -> Recipe:
        return self._recipes[0]

    def __len__(self) -> int:
        return len(self._recipes)

    @staticmethod
    def validate(recipe: Recipe | None) -> bool:
        """Return True if *recipe* has an id, a name, and a non-empty sequence."""
        if recipe is None:
            return False
        return bool(recipe.id) and bool(recipe.name) and len(recipe.sequence) > 0

    # -- lookups with recovery -------------------------------------------------

    def require(self, recipe_id: str) -> Recipe:
        """Return the recipe for *recipe_id* or raise.

        Raises ``UnknownRecipe`` if the id is absent and ``MalformedRecipe``
        if the entry fails ``validate``.
        """
        recipe = self.get_by_id(recipe_id)
        if recipe is None:
            raise UnknownRecipe(f"No recipe with id {recipe_id!r}.")
        if not self.validate(recipe):
            raise MalformedRecipe(f"Recipe {recipe_id!r} is missing an id, name, or sequence.")
        return recipe

    def resolve(self, recipe_id: str) -> Recipe:
        """Like ``require`` but falls back to the first catalog entry."""
        try:
            return self.require(recipe_id)
        except (UnknownRecipe, MalformedRecipe) as exc:
            logger.warning("%s Falling back to %r.", exc, self.default.id)
            return self.default

    def next_after(self, recipe: Recipe) -> Recipe:
        """Return the entry after *recipe*, wrapping to the start."""
        ids = [r.id for r in self._recipes]
        try:
            index = ids.index(recipe.id)
        except ValueError:
            index = -1
        return self._recipes[(index + 1) % len(self._recipes)]
