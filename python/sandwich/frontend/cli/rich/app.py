"""Rich terminal frontend: board table, stats panel, and key loop.

Renders the puzzle state and reports player actions back to the engine.
Queued tile motions are replayed frame by frame so the shuffle is visible.
"""

from __future__ import annotations

import sys
import time
from typing import Sequence

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from sandwich.backend.engine.evaluator import CompletionEvent, FailureEvent
from sandwich.backend.engine.gameplay import GamePlay
from sandwich.backend.engine.gamestate import Phase
from sandwich.backend.models.board import Board, TargetLayout
from sandwich.backend.models.motion import MotionKind, TileMotion
from sandwich.backend.models.progress import ProgressManager
from sandwich.backend.models.recipe import RecipeCatalog, ingredient_name
from sandwich.frontend.cli.input_handler import Action, read_action

console = Console()

FRAME_DELAY = 0.06
FAIL_DISPLAY_SECONDS = 2.0

# The empty slot tiles slide into, and the unused cells of sparse recipes.
SLOT_MARK = "[bold cyan]□[/bold cyan]"
HOLE_MARK = "[dim]·[/dim]"


# -- board rendering ----------------------------------------------------------


def _render_board(
    cells: Sequence[Sequence[int]], slot: tuple[int, int], target: TargetLayout
) -> Table:
    """Return a Rich Table representing the puzzle grid.

    Correctly placed tiles are green. *slot* is drawn apart from the other
    zero cells, since it is the only one tiles can move into.
    """
    names = [ingredient_name(v) for row in cells for v in row if v]
    width = max((len(n) for n in names), default=3)
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style="yellow",
        padding=(0, 1),
    )
    for _ in range(target.size):
        table.add_column(width=width, justify="center")

    for r, row in enumerate(cells):
        rendered: list[str] = []
        for c, val in enumerate(row):
            if (r, c) == slot:
                rendered.append(SLOT_MARK)
            elif val == 0:
                rendered.append(HOLE_MARK)
            elif target.is_cell_correct(cells, r, c):
                rendered.append(f"[bold green]{ingredient_name(val)}[/bold green]")
            else:
                rendered.append(f"[bold white]{ingredient_name(val)}[/bold white]")
        table.add_row(*rendered)

    return table


def _header(game: GamePlay) -> Text:
    recipe = game.recipe
    header = Text()
    if recipe is None:
        header.append("  Slide tiles to build the sandwich!", style="bold")
        return header
    header.append("  Recipe: ", style="dim")
    header.append(recipe.name, style="bold yellow")
    header.append(f" [{game.state.config.difficulty}]\n", style="dim")
    header.append("  Order: ", style="dim")
    header.append(" → ".join(recipe.ingredients))
    return header


def _stats(game: GamePlay) -> Text:
    stats = Text()
    stats.append("  Moves: ", style="dim")
    stats.append(f"{game.move_count} / {game.move_limit}", style="bold yellow")
    return stats


def _controls(debug: bool) -> Text:
    controls = Text()
    controls.append("  ↑↓←→", style="bold cyan")
    controls.append(" / ", style="dim")
    controls.append("WASD", style="bold cyan")
    controls.append("  move   ", style="dim")
    controls.append("R", style="bold cyan")
    controls.append("  reset   ", style="dim")
    if debug:
        controls.append("C", style="bold yellow")
        controls.append("  next recipe   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append("  quit", style="dim")
    return controls


def _draw(
    game: GamePlay,
    cells: Sequence[Sequence[int]],
    slot: tuple[int, int],
    status: str = "",
    debug: bool = False,
) -> None:
    console.clear()

    size = game.size
    title = "SANDWICH PUZZLE" if game.recipe is not None else "SLIDING SANDWICH"
    border = {
        Phase.WON: "bold green",
        Phase.FAILED: "bold red",
        Phase.SHUFFLING: "cyan",
    }.get(game.phase, "yellow")

    board_table = _render_board(cells, slot, game.state.target)

    panel = Panel(
        Group(Align.center(_header(game)), Text(""), Align.center(board_table)),
        title=f"[bold]{title}  {size}×{size}[/bold]",
        border_style=border,
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(_stats(game)))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(_controls(debug)))
    sys.stdout.flush()


# -- motion playback ----------------------------------------------------------


def _replay_shuffle(game: GamePlay, motions: list[TileMotion], debug: bool) -> None:
    """Replay a shuffle from the solved layout.

    Decoy and settle motions of one round land together, so they are drawn
    as a single frame. Each shuffle slide leaves the slot where the tile
    started.
    """
    target = game.state.target
    solved = Board.from_target(target)
    positions = {t.id: t.position for t in solved.pieces.values()}
    slot = solved.empty_pos

    for i, motion in enumerate(motions):
        positions[motion.tile_id] = motion.end
        if motion.kind is MotionKind.SHUFFLE:
            slot = motion.start
        following = motions[i + 1] if i + 1 < len(motions) else None
        if (
            following is not None
            and motion.kind is not MotionKind.SHUFFLE
            and following.kind is motion.kind
        ):
            continue

        cells = [[0] * target.size for _ in range(target.size)]
        for tile_id, (r, c) in positions.items():
            cells[r][c] = tile_id
        _draw(game, cells, slot, "[cyan]Shuffling…[/cyan]", debug)
        time.sleep(FRAME_DELAY)


# -- summary tables -----------------------------------------------------------


def print_catalog(catalog: RecipeCatalog) -> None:
    table = Table(
        title="Recipes",
        title_style="bold cyan",
        box=rich.box.ROUNDED,
        border_style="dim",
    )
    table.add_column("ID", style="bold")
    table.add_column("Name")
    table.add_column("Difficulty", style="yellow")
    table.add_column("Grid", justify="right")
    table.add_column("Optimal", justify="right")
    table.add_column("Max", justify="right")
    table.add_column("Order", style="dim")

    for recipe in catalog.get_all():
        table.add_row(
            recipe.id,
            recipe.name,
            recipe.difficulty or "-",
            str(recipe.grid_size or "-"),
            str(recipe.optimal_moves or "-"),
            str(recipe.max_moves or "-"),
            " → ".join(recipe.ingredients),
        )
    console.print(table)


def print_progress(manager: ProgressManager) -> None:
    progress = manager.progress
    table = Table(box=rich.box.ROUNDED, border_style="dim", show_header=False)
    table.add_column(style="dim")
    table.add_column(style="bold yellow", justify="right")

    pet = progress.pet
    table.add_row("HP", f"{pet.hp} / {pet.max_hp}")
    table.add_row("Hunger", str(pet.hunger))
    table.add_row("Attack", str(pet.attack))
    table.add_row("Defense", str(pet.defense))
    table.add_row("Stamina", str(pet.stamina))
    table.add_row("Puzzles completed", str(progress.puzzles_completed))
    table.add_row("Puzzles failed", str(progress.puzzles_failed))
    table.add_row("Total moves", str(progress.total_moves))
    table.add_row("Recipes", ", ".join(progress.completed_recipes) or "-")

    console.print(Panel(table, title="[bold]PROGRESS[/bold]", border_style="bright_blue"))


# -- game loop ----------------------------------------------------------------


def run(game: GamePlay, manager: ProgressManager, debug: bool = False) -> None:
    """Play *game* until the player quits."""
    outcome: dict[str, str] = {}

    def _completed(event: CompletionEvent) -> None:
        done = "RECIPE COMPLETE!" if game.recipe is not None else "SANDWICH COMPLETE!"
        outcome["status"] = (
            f"[bold green]{done}[/bold green]  {event.rating.symbol}  "
            f"[dim]({event.move_count} moves)[/dim]"
        )

    def _failed(event: FailureEvent) -> None:
        ruined = "Recipe ruined!" if game.recipe is not None else "Your sandwich fell apart!"
        outcome["status"] = f"[bold red]{ruined}[/bold red]  [dim]Try again…[/dim]"

    manager.attach(game)
    game.on_complete(_completed)
    game.on_fail(_failed)

    _replay_shuffle(game, game.drain_motions(), debug)

    while True:
        status = outcome.get("status", "")
        snapshot = game.snapshot()
        _draw(game, snapshot.cells, snapshot.empty_pos, status, debug)

        if game.phase is Phase.FAILED:
            time.sleep(FAIL_DISPLAY_SECONDS)
            game.reset()
            outcome.clear()
            _replay_shuffle(game, game.drain_motions(), debug)
            continue

        action = read_action()

        if action.direction is not None:
            if game.move(action.direction):
                game.drain_motions()
                game.settle()
        elif action is Action.RESTART:
            if game.reset():
                outcome.clear()
                _replay_shuffle(game, game.drain_motions(), debug)
        elif action is Action.CYCLE and debug:
            if game.cycle_recipe():
                outcome.clear()
                _replay_shuffle(game, game.drain_motions(), debug)
        elif action is Action.QUIT:
            console.clear()
            console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
            return
