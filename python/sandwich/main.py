#!/usr/bin/env python3
"""Sandwich Puzzle.

Usage::

    sandwich-puzzle                      # default recipe
    sandwich-puzzle -r deluxe_combo      # pick a recipe
    sandwich-puzzle --legacy -s 4        # plain sequential 4×4 puzzle
    sandwich-puzzle --debug              # C cycles recipes, debug logging
    sandwich-puzzle --list               # show the recipe catalog
    sandwich-puzzle --progress           # show saved pet stats and totals
"""

import logging
import random
from pathlib import Path
from typing import Optional

import typer

from sandwich.backend.engine.gameplay import GamePlay
from sandwich.backend.models.config import PuzzleConfig
from sandwich.backend.models.progress import ProgressManager
from sandwich.backend.models.recipe import DEFAULT_RECIPE_ID, RecipeCatalog

DATA_DIR = Path.cwd() / "data"

app = typer.Typer(add_completion=False)


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        filename=str(DATA_DIR / "sandwich.log") if debug else None,
    )


# -- CLI entry point ----------------------------------------------------------


@app.command()
def main(
    recipe: str = typer.Option(
        DEFAULT_RECIPE_ID, "-r", "--recipe",
        help="Recipe id to play.",
    ),
    legacy: bool = typer.Option(
        False, "--legacy",
        help="Play the plain sequential puzzle instead of a recipe.",
    ),
    size: int = typer.Option(
        3, "-s", "--size",
        min=3, max=8,
        help="Grid size (3-8) for legacy mode and recipes without one.",
    ),
    shuffle_moves: int = typer.Option(
        20, "--shuffle-moves",
        min=0,
        help="Random legal moves applied when shuffling.",
    ),
    no_hybrid: bool = typer.Option(
        False, "--no-hybrid",
        help="Skip the decorative swap pass after shuffling.",
    ),
    hybrid_rounds: int = typer.Option(
        6, "--hybrid-rounds",
        min=0,
        help="Rounds of decorative swaps.",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed",
        help="Seed for reproducible shuffles.",
    ),
    debug: bool = typer.Option(
        False, "--debug",
        help="Enable recipe cycling (C) and log to data/sandwich.log.",
    ),
    recipes: Optional[Path] = typer.Option(
        None, "--recipes",
        exists=True, dir_okay=False,
        help="JSON file with a custom recipe catalog.",
    ),
    list_recipes: bool = typer.Option(
        False, "--list",
        help="Show the recipe catalog and exit.",
    ),
    progress: bool = typer.Option(
        False, "--progress",
        help="Show saved progress and exit.",
    ),
) -> None:
    """Sandwich Puzzle."""
    from sandwich.frontend.cli.rich import app as rich_app

    DATA_DIR.mkdir(parents=True, exist_ok=True)
    _configure_logging(debug)

    catalog = RecipeCatalog.from_file(recipes) if recipes else RecipeCatalog()
    manager = ProgressManager(DATA_DIR / "progress.json")

    if list_recipes:
        rich_app.print_catalog(catalog)
        return
    if progress:
        rich_app.print_progress(manager)
        return

    config = PuzzleConfig(
        grid_size=size,
        shuffle_move_count=shuffle_moves,
        enable_hybrid_shuffle=not no_hybrid,
        hybrid_shuffle_count=hybrid_rounds,
        debug_mode=debug,
    )
    rng = random.Random(seed)

    if legacy:
        game = GamePlay.legacy(config, rng)
    else:
        game = GamePlay.for_recipe(catalog, recipe, config, rng)

    rich_app.run(game, manager, debug=config.debug_mode)


if __name__ == "__main__":
    app()
