"""Rich display helpers for CLI output.

Probabilities stay exact Fractions everywhere else; they are turned into
floats only here, when they are printed.
"""

from fractions import Fraction

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from src.dice import Dice, ProbAll


# Shared console instance
console = Console()


def display_error(message: str) -> None:
    """Display error message.

    Args:
        message: Error message.
    """
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_probability(probability: Fraction, precision: int = 6) -> str:
    """Exact fraction followed by its rounded float value."""
    return f"{probability} ({float(probability):.{precision}f})"


def _create_histogram_bar(probability: Fraction, peak: Fraction, width: int = 40) -> Text:
    """Create a Rich Text bar scaled so the most likely outcome fills ``width``.

    Args:
        probability: Probability of this outcome.
        peak: Highest probability in the distribution.
        width: Bar width in characters.

    Returns:
        Rich Text object with styled bar.
    """
    filled = int(probability / peak * width) if peak > 0 else 0
    empty = width - filled

    bar_text = Text()
    bar_text.append("#" * filled, style="green" if probability == peak else "cyan")
    bar_text.append(" " * empty, style="dim")
    return bar_text


def display_statistics(dice: Dice, precision: int = 6) -> None:
    """Display the summary statistics panel.

    Args:
        dice: Built dice.
        precision: Digits after the decimal point for float values.
    """
    lines = [
        f"[bold]Expression:[/bold] {dice.builder_string}",
        f"[bold]Min:[/bold] {dice.min}    [bold]Max:[/bold] {dice.max}",
        f"[bold]Mean:[/bold] {format_probability(dice.mean, precision)}",
        f"[bold]Variance:[/bold] {format_probability(dice.variance, precision)}",
        f"[bold]Std. deviation:[/bold] {dice.standard_deviation:.{precision}f}",
        f"[bold]Median:[/bold] {dice.median}",
        f"[bold]Mode:[/bold] {', '.join(str(value) for value in dice.mode)}",
        f"[dim]Built in {dice.build_time:.2f} ms[/dim]",
    ]
    console.print(Panel("\n".join(lines), title="Statistics", style="cyan"))


def display_distribution(dice: Dice, precision: int = 6, width: int = 40) -> None:
    """Display the probability mass function with a histogram column.

    Args:
        dice: Built dice.
        precision: Digits after the decimal point for float values.
        width: Width of the longest histogram bar.
    """
    peak = max(probability for _, probability in dice.distribution)

    table = Table(title="Distribution", box=box.ROUNDED)
    table.add_column("Value", style="cyan", justify="right")
    table.add_column("P(X = v)", justify="right")
    table.add_column("P(X <= v)", justify="right", style="dim")
    table.add_column("", no_wrap=True)

    for (value, probability), (_, running) in zip(
        dice.distribution, dice.cumulative_distribution
    ):
        table.add_row(
            str(value),
            f"{float(probability):.{precision}f}",
            f"{float(running):.{precision}f}",
            _create_histogram_bar(probability, peak, width),
        )

    console.print(table)


def display_probabilities(value: int, probs: ProbAll, precision: int = 6) -> None:
    """Display every comparison probability for ``value``.

    Args:
        value: The value being compared against.
        probs: Probabilities from ``Dice.prob_all``.
        precision: Digits after the decimal point for float values.
    """
    table = Table(title=f"Probabilities for {value}", box=box.ROUNDED)
    table.add_column("Event", style="cyan")
    table.add_column("Probability", justify="right")

    rows = [
        (f"X < {value}", probs.lt),
        (f"X <= {value}", probs.lte),
        (f"X = {value}", probs.eq),
        (f"X >= {value}", probs.gte),
        (f"X > {value}", probs.gt),
    ]
    for label, probability in rows:
        table.add_row(label, format_probability(probability, precision))

    console.print(table)


def display_rolls(values: list[int]) -> None:
    """Display rolled values, with their total when there is more than one.

    Args:
        values: Rolled outcomes in roll order.
    """
    if not values:
        console.print("[dim]No rolls.[/dim]")
        return

    console.print(", ".join(f"[bold]{value}[/bold]" for value in values))
    if len(values) > 1:
        console.print(f"[dim]Total: {sum(values)}[/dim]")
