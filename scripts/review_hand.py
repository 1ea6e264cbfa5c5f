#!/usr/bin/env python3
"""Review a dealt hand.

Classify a 5-card hand, show what it pays, and compare the holds
each strategy would make.
"""

import argparse
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich.panel import Panel

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from jacks.errors import JacksError
from jacks.game import HandEvaluator, PaytableManager, parse_cards, treys_score
from jacks.strategy import (
    AcesHighStrategy,
    AcesOptimalStrategy,
    NoHoldStrategy,
    OptimalStrategy,
)
from jacks.viz import describe_result, format_hand


def main():
    parser = argparse.ArgumentParser(
        description="Classify a hand and show strategy holds"
    )
    parser.add_argument(
        "hand",
        help="Five cards, e.g. 'Jh Js 3d 7c 9s' or 'J♥ J♠ 3♦ 7♣ 9♠'",
    )
    parser.add_argument(
        "-p", "--paytable",
        default="full",
        help="Paytable id (default: full)",
    )
    parser.add_argument(
        "-b", "--bet",
        type=int,
        default=5,
        help="Credits bet, 1-5 (default: 5)",
    )

    args = parser.parse_args()
    console = Console()

    evaluator = HandEvaluator()
    paytables = PaytableManager()

    try:
        hand = parse_cards(args.hand)
        paytables.set_paytable(args.paytable)
        result = evaluator.evaluate(hand)
        payout = paytables.calculate_payout(result.category, args.bet)
    except JacksError as e:
        console.print(f"[red]{e}[/]")
        return 1

    console.print(Panel.fit(
        format_hand(hand),
        title="[bold]Dealt[/]",
        border_style="blue",
    ))
    console.print(f"[bold]Hand:[/] {describe_result(result)}")
    console.print(f"[bold]Pays as dealt:[/] {payout} credits (bet {args.bet})")
    console.print(f"[dim]treys strength: {treys_score(hand)} (1 = best)[/]")
    console.print()

    strategies = [
        OptimalStrategy(),
        AcesHighStrategy(),
        AcesOptimalStrategy(),
        NoHoldStrategy(),
    ]

    table = Table(title="Holds by strategy", header_style="bold")
    table.add_column("Strategy", style="cyan")
    table.add_column("Holds")
    table.add_column("Kept cards")

    for strategy in strategies:
        holds = strategy.get_optimal_holds(hand)
        kept = " ".join(str(hand[i]) for i in sorted(holds)) or "[dim]draw 5[/]"
        table.add_row(strategy.name, format_hand(hand, holds), kept)

    console.print(table)
    return 0


if __name__ == "__main__":
    sys.exit(main())
