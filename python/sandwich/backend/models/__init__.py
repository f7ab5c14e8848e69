from sandwich.backend.models.board import Board, BoardSnapshot, Direction, TargetLayout, Tile
from sandwich.backend.models.config import PuzzleConfig
from sandwich.backend.models.motion import MotionKind, TileMotion
from sandwich.backend.models.recipe import INGREDIENTS, RECIPES, Recipe, RecipeCatalog

__all__ = [
    "Board",
    "BoardSnapshot",
    "Direction",
    "INGREDIENTS",
    "MotionKind",
    "PuzzleConfig",
    "RECIPES",
    "Recipe",
    "RecipeCatalog",
    "TargetLayout",
    "Tile",
    "TileMotion",
]
