"""Command line front end for PushBox.

Example::

    pushbox levels
    pushbox show 2
    pushbox play --moves "wddadds"

``play`` without ``--moves`` reads commands interactively: ``w/a/s/d`` move,
``p``/``n``/``r`` go to the previous/next level or restart, ``q`` quits.
"""

from __future__ import annotations

import logging
from typing import Optional

import click
from tabulate import tabulate
from tqdm import tqdm

from pushbox.config import GameConfig
from pushbox.control.actions import KEY_BINDINGS, WASD_BINDINGS, Action
from pushbox.engine.rules import PushBoxRules
from pushbox.engine.state import PuzzleState
from pushbox.exceptions import LevelNotFoundError, MalformedLevelError
from pushbox.levels.repository import LevelRepository
from pushbox.session import GameSession, TickReport

logger = logging.getLogger(__name__)

# Single-character commands accepted by `play`.
COMMANDS: dict[str, Action] = {
    **WASD_BINDINGS,
    **{k: v for k, v in KEY_BINDINGS.items() if len(k) == 1},
}


def _repository(config: GameConfig) -> LevelRepository:
    return LevelRepository(config.levels_dir, size=config.size)


def _level_count(config: GameConfig, repository: LevelRepository) -> int:
    return config.level_count or repository.level_count


@click.group()
@click.option("--levels-dir", type=click.Path(exists=True, file_okay=False), default=None,
              help="Directory of <n>.map files (default: packaged levels).")
@click.option("--size", type=int, default=None, help="Grid side length.")
@click.option("--level-count", type=int, default=None, help="Levels before wrapping to 1.")
@click.option("-v", "--verbose", count=True, help="Increase log verbosity (-v info, -vv debug).")
@click.pass_context
def main(ctx: click.Context, levels_dir: Optional[str], size: Optional[int],
         level_count: Optional[int], verbose: int) -> None:
    """Push-box puzzle engine."""
    level = logging.WARNING - 10 * min(verbose, 2)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    try:
        config = GameConfig.from_env().replace(
            levels_dir=levels_dir, size=size, level_count=level_count
        )
    except ValueError as e:
        raise click.BadParameter(str(e)) from e
    ctx.obj = config


@main.command()
@click.argument("level", type=int)
@click.pass_obj
def show(config: GameConfig, level: int) -> None:
    """Print a level and its statistics."""
    repository = _repository(config)
    try:
        data = repository.load(level)
    except (LevelNotFoundError, MalformedLevelError) as e:
        raise click.ClickException(str(e)) from e
    puzzle = PuzzleState.from_grid(PushBoxRules(config.size), data.grid, data.start)
    click.echo(str(puzzle))
    click.echo(f"Level {level}: start {data.start}, {data.boxes} boxes, {data.targets} targets")


@main.command()
@click.pass_obj
def levels(config: GameConfig) -> None:
    """List the available levels."""
    repository = _repository(config)
    rows = []
    for level in range(1, _level_count(config, repository) + 1):
        try:
            data = repository.load(level)
        except (LevelNotFoundError, MalformedLevelError) as e:
            rows.append([level, "-", "-", "-", f"error: {e}"])
            continue
        rows.append([level, data.start, data.boxes, data.targets, "ok" if data.is_winnable else "unwinnable"])
    click.echo(tabulate(rows, headers=["Level", "Start", "Boxes", "Targets", "Status"]))


@main.command()
@click.option("--quiet", is_flag=True, help="Hide the progress bar.")
@click.pass_obj
def check(config: GameConfig, quiet: bool) -> None:
    """Parse every level and report problems. Exits with status 1 on any error."""
    repository = _repository(config)
    count = _level_count(config, repository)
    problems = []
    for level in tqdm(range(1, count + 1), desc="Checking levels", disable=quiet):
        try:
            data = repository.load(level)
        except (LevelNotFoundError, MalformedLevelError) as e:
            problems.append([level, str(e)])
            continue
        if not data.is_winnable:
            problems.append([level, "more loose boxes than free targets"])

    if problems:
        click.echo(tabulate(problems, headers=["Level", "Problem"]))
        raise click.exceptions.Exit(1)
    click.echo(f"{count} levels OK")


@main.command()
@click.option("--level", "start_level", type=int, default=None, help="Level to start on.")
@click.option("--moves", default=None, help="Play these commands and exit instead of prompting.")
@click.pass_obj
def play(config: GameConfig, start_level: Optional[int], moves: Optional[str]) -> None:
    """Play in the terminal."""
    try:
        session = GameSession(config.replace(start_level=start_level))
        session.tick()
    except (LevelNotFoundError, MalformedLevelError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    # Commands are spaced one input interval apart so none are rate-limited.
    interval = config.input_interval_ms / 1000.0
    clock = 0.0

    def tick() -> None:
        try:
            _echo_report(session.tick())
        except (LevelNotFoundError, MalformedLevelError) as e:
            raise click.ClickException(str(e)) from e

    def run(commands: str) -> None:
        nonlocal clock
        for char in commands:
            action = COMMANDS.get(char.lower())
            if action is None:
                if not char.isspace():
                    click.echo(f"Unknown command {char!r}", err=True)
                continue
            session.submit(action, now=clock)
            clock += interval
            tick()
            if session.puzzle is None:
                # Install the level requested by a win or a level command.
                tick()

    if moves is not None:
        run(moves)
        click.echo(str(session.puzzle))
        return

    click.echo(str(session.puzzle))
    while True:
        line = click.prompt(f"[level {session.level}]", default="", show_default=False)
        if line.strip().lower() in ("q", "quit", "exit"):
            return
        try:
            run(line)
        except click.ClickException as e:
            # A failed load leaves no puzzle; p, n or r requests another level.
            e.show()
            click.echo("Use p, n or r to load another level.")
            continue
        click.echo(str(session.puzzle))


def _echo_report(report: TickReport) -> None:
    if report.won:
        click.echo(f"Solved! On to level {report.level}.")
    elif report.loaded:
        logger.info("Level %d ready", report.level)
    elif report.action is not None and report.action.direction is None:
        click.echo(f"Level {report.level}")


if __name__ == "__main__":
    main()
