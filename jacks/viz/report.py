"""Terminal display of simulation results."""

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from jacks.game.cards import Card
from jacks.game.evaluator import HandResult
from jacks.simulation.models import TrialRecord
from jacks.simulation.stats import SimulationStats


def _rtp_style(rtp: float) -> str:
    """Color for an RTP figure."""
    if rtp >= 99:
        return "green"
    elif rtp >= 95:
        return "yellow"
    return "red"


def format_hand(hand: list[Card], holds: Optional[frozenset[int]] = None) -> Text:
    """Cards with red suits colored and held positions bold."""
    text = Text()
    for i, card in enumerate(hand):
        style = "red" if card.is_red else "white"
        if holds is not None and i in holds:
            style += " bold reverse"
        text.append(str(card).rjust(3), style=style)
        text.append(" ")
    return text


class StatsDisplay:
    """
    Render SimulationStats with rich.

    Tables cover the headline numbers, per-category frequencies
    against optimal-play frequencies, and volatility.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def summary_table(self, stats: SimulationStats, title: str = "Simulation Summary") -> Table:
        summary = stats.get_summary()
        rtp = stats.get_rtp()

        table = Table(title=title, show_header=False)
        table.add_column("Stat", style="cyan")
        table.add_column("Value", justify="right")

        table.add_row("Hands played", summary["hands_played"])
        table.add_row("Total wagered", summary["total_wagered"])
        table.add_row("Total won", summary["total_won"])
        table.add_row("Net", summary["net"])
        table.add_row("RTP", Text(summary["rtp"], style=_rtp_style(rtp)))
        table.add_row("Win rate", summary["win_rate"])

        interval = stats.get_confidence_intervals()
        if interval:
            rtp_ci = interval["rtp"]
            table.add_row(
                "RTP 95% CI",
                f"{rtp_ci['lower']:.2f}% - {rtp_ci['upper']:.2f}%",
            )

        if stats.duration > 0:
            table.add_row("Hands / second", f"{stats.get_hands_per_second():,.0f}")

        return table

    def frequency_table(self, stats: SimulationStats) -> Table:
        """Per-category counts vs optimal-play frequencies."""
        comparison = stats.get_theoretical_comparison()
        frequencies = stats.get_hand_frequencies()

        table = Table(title="Hand Frequencies", header_style="bold")
        table.add_column("Hand", style="white")
        table.add_column("Count", justify="right")
        table.add_column("Actual %", justify="right")
        table.add_column("Optimal %", justify="right", style="dim")
        table.add_column("Diff", justify="right")

        for category, freq in frequencies.items():
            cmp = comparison[category]
            diff = cmp["difference"]
            diff_style = "green" if diff >= 0 else "red"
            table.add_row(
                category,
                f"{freq['count']:,}",
                f"{freq['frequency']:.4f}",
                f"{cmp['theoretical']:.4f}",
                Text(f"{diff:+.4f}", style=diff_style),
            )

        return table

    def volatility_table(self, stats: SimulationStats) -> Table:
        metrics = stats.get_volatility_metrics()

        table = Table(title="Volatility (running net)", show_header=False)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")
        table.add_row("Mean", f"{metrics['mean']:,.2f}")
        table.add_row("Std deviation", f"{metrics['standard_deviation']:,.2f}")
        table.add_row("Variance", f"{metrics['variance']:,.2f}")
        return table

    def display(self, stats: SimulationStats, title: str = "Simulation Summary") -> None:
        """Print the full report."""
        self.console.print(self.summary_table(stats, title))
        self.console.print()
        self.console.print(self.frequency_table(stats))
        self.console.print()
        self.console.print(self.volatility_table(stats))

    def display_trial(self, trial: TrialRecord) -> None:
        """Print one hand: dealt cards with holds marked, then the draw."""
        result = trial.result
        body = Text()
        body.append("Dealt: ")
        body.append_text(format_hand(list(trial.initial_hand), trial.holds))
        body.append("\nFinal: ")
        body.append_text(format_hand(list(trial.final_hand)))
        body.append(f"\n{result.description}  pays {trial.payout}")

        self.console.print(Panel(
            body,
            title=f"[bold]{trial.strategy}[/]",
            border_style="green" if trial.payout > 0 else "grey50",
        ))


def display_stats(stats: SimulationStats, title: str = "Simulation Summary") -> None:
    """Convenience function to print a report."""
    StatsDisplay().display(stats, title=title)


def describe_result(result: HandResult) -> str:
    """Short label with strength rank, e.g. 'Pair of Jacks (2)'."""
    return f"{result.description} ({result.rank})"
