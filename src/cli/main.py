"""Main CLI application for dice distributions."""

import logging
import random
from typing import Optional

import typer
from rich.logging import RichHandler

from src.cli.display import (
    console,
    display_distribution,
    display_error,
    display_probabilities,
    display_rolls,
    display_statistics,
)
from src.config import get_settings
from src.dice import Dice, DiceBuildingError, build_from_string

# Create main app
app = typer.Typer(
    name="dices",
    help="Exact probability distributions for dice notation",
    add_completion=True,
)


def _build(expression: str, max_domain: Optional[int] = None) -> Dice:
    """Build ``expression`` or exit with a readable error."""
    settings = get_settings()
    limit = max_domain if max_domain is not None else settings.max_domain_size
    try:
        return build_from_string(
            expression,
            max_domain_size=limit,
            random_source=settings.random_source(),
        )
    except DiceBuildingError as e:
        display_error(str(e))
        raise typer.Exit(1)


@app.command()
def stats(
    expression: str = typer.Argument(..., help="Dice notation, e.g. '2d6+3'"),
    max_domain: Optional[int] = typer.Option(
        None, "--max-domain", "-m", help="Maximum number of outcomes"
    ),
    table: bool = typer.Option(True, "--table/--no-table", help="Show the distribution table"),
) -> None:
    """Show statistics and the full distribution of an expression."""
    settings = get_settings()
    dice = _build(expression, max_domain)

    display_statistics(dice, precision=settings.display_precision)
    if table:
        display_distribution(
            dice,
            precision=settings.display_precision,
            width=settings.histogram_width,
        )


@app.command()
def roll(
    expression: str = typer.Argument(..., help="Dice notation, e.g. '2d6+3'"),
    count: Optional[int] = typer.Option(None, "--count", "-n", help="Number of rolls"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for reproducible rolls"),
) -> None:
    """Roll an expression one or more times."""
    settings = get_settings()
    dice = _build(expression)

    if count is None:
        count = settings.default_roll_count
    if seed is not None:
        source = random.Random(seed)
    else:
        source = None

    try:
        values = dice.roll_many(count, random_source=source)
    except DiceBuildingError as e:
        display_error(str(e))
        raise typer.Exit(1)

    display_rolls(values)


@app.command()
def prob(
    expression: str = typer.Argument(..., help="Dice notation, e.g. '2d6+3'"),
    value: int = typer.Argument(..., help="Value to compare against"),
) -> None:
    """Show P(X < v), P(X <= v), P(X = v), P(X >= v) and P(X > v)."""
    settings = get_settings()
    dice = _build(expression)
    display_probabilities(value, dice.prob_all(value), precision=settings.display_precision)


@app.command()
def quantile(
    expression: str = typer.Argument(..., help="Dice notation, e.g. '2d6+3'"),
    p: float = typer.Argument(..., min=0.0, help="Probability level, e.g. 0.9"),
) -> None:
    """Show the smallest value q with P(X <= q) >= p."""
    dice = _build(expression)
    console.print(f"[bold]{dice.quantile(p)}[/bold]")


@app.callback()
def main(
    debug: bool = typer.Option(False, "--debug", help="Log evaluation details"),
) -> None:
    """Dices - exact dice probability distributions.

    Use 'dices stats 2d6' to see a distribution, 'dices roll 2d6' to roll it.
    """
    if debug or get_settings().debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


if __name__ == "__main__":
    app()
