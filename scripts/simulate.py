#!/usr/bin/env python3
"""Run a video poker simulation and print the results."""

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from jacks.errors import JacksError
from jacks.game.paytable import PaytableManager
from jacks.simulation import SimulationCallbacks, SimulationConfig, SimulationEngine
from jacks.strategy import STRATEGY_NAMES
from jacks.viz import StatsDisplay


def main():
    parser = argparse.ArgumentParser(
        description="Simulate Jacks or Better video poker hands"
    )
    parser.add_argument(
        "-n", "--hands",
        type=int,
        default=10000,
        help="Number of hands to play, 100-100000 (default: 10000)",
    )
    parser.add_argument(
        "-s", "--strategy",
        choices=STRATEGY_NAMES,
        default="optimal",
        help="Hold strategy (default: optimal)",
    )
    parser.add_argument(
        "-b", "--bet",
        type=int,
        default=5,
        help="Credits bet per hand, 1-5 (default: 5)",
    )
    parser.add_argument(
        "-p", "--paytable",
        default="full",
        help="Paytable id (default: full)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for a reproducible run",
    )
    parser.add_argument(
        "--speed",
        type=int,
        default=0,
        help="Delay between hands in ms, 0 for full speed (default: 0)",
    )
    parser.add_argument(
        "--paytables-file",
        help="JSON file with extra paytables to import",
    )
    parser.add_argument(
        "--export",
        help="Save statistics as JSON to this file",
    )
    parser.add_argument(
        "--show-hands",
        type=int,
        default=0,
        help="Print the first N hands played",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output",
    )

    args = parser.parse_args()
    console = Console()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    paytables = PaytableManager()
    try:
        if args.paytables_file:
            imported = paytables.import_paytables(Path(args.paytables_file).read_text())
            console.print(f"[bold]Imported paytables:[/] {', '.join(imported)}")
        paytable = paytables.set_paytable(args.paytable)
    except (JacksError, OSError) as e:
        console.print(f"[red]{e}[/]")
        return 1

    console.print(Panel.fit(
        f"[bold blue]{paytable.name}[/]\n"
        f"Theoretical RTP: {paytable.rtp:.2f}%  |  "
        f"Strategy: {args.strategy}  |  Bet: {args.bet}",
        border_style="blue",
    ))

    config = SimulationConfig(
        total_hands=args.hands,
        speed=args.speed,
        strategy=args.strategy,
        bet=args.bet,
    )
    display = StatsDisplay(console)
    shown = []

    def on_hand_complete(trial):
        if len(shown) < args.show_hands:
            shown.append(trial)
            display.display_trial(trial)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.percentage:>5.1f}%"),
        console=console,
    ) as progress:
        task = progress.add_task("Simulating...", total=args.hands)

        def on_progress(update):
            progress.update(
                task,
                completed=update.hands_played,
                description=f"RTP {update.current_stats['rtp']:.2f}%",
            )

        engine = SimulationEngine(
            paytables=paytables,
            seed=args.seed,
            callbacks=SimulationCallbacks(
                on_progress=on_progress,
                on_hand_complete=on_hand_complete,
            ),
        )

        try:
            engine.start_simulation(config)
        except KeyboardInterrupt:
            console.print("[yellow]Interrupted[/]")
        except JacksError as e:
            console.print(f"[red]{e}[/]")
            return 1

    console.print()
    display.display(engine.stats)

    if args.export:
        Path(args.export).write_text(engine.stats.export_stats())
        console.print(f"\n[bold]Statistics saved to:[/] {args.export}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
