"""Paytable definitions and payout lookup."""

import copy
import json
import logging
from dataclasses import asdict, dataclass
from typing import Any, Union

from jacks.errors import (
    InvalidInputError,
    PaytableNotFoundError,
    PaytableValidationError,
)
from .evaluator import PAYING_CATEGORIES, HandCategory

logger = logging.getLogger(__name__)


@dataclass
class Paytable:
    """
    A named payout schedule.

    ``payouts`` maps a category name to 5 total-credit payouts indexed
    by bet - 1. Values already include the returned wager, so a 1:1
    hand pays [1, 2, 3, 4, 5].
    """
    name: str
    rtp: float  # Theoretical RTP % under optimal play
    payouts: dict[str, list[int]]
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Paytable":
        return cls(
            name=data["name"],
            rtp=data["rtp"],
            payouts={k: list(v) for k, v in data["payouts"].items()},
            description=data.get("description", ""),
        )


def _jacks_payouts(full_house: int, flush: int, quads: int = 25) -> dict[str, list[int]]:
    """Standard 9/6-style schedule; 4000 for a max-bet royal."""
    base = {
        "Royal Flush": 250,
        "Straight Flush": 50,
        "Four of a Kind": quads,
        "Full House": full_house,
        "Flush": flush,
        "Straight": 4,
        "Three of a Kind": 3,
        "Two Pair": 2,
        "Jacks or Better": 1,
    }
    payouts = {name: [pay * bet for bet in range(1, 6)] for name, pay in base.items()}
    payouts["Royal Flush"][4] = 4000
    return payouts


DEFAULT_PAYTABLES = {
    "full": Paytable(
        name="Full Pay Jacks or Better",
        rtp=99.54,
        description="The best paying Jacks or Better variation",
        payouts=_jacks_payouts(full_house=9, flush=6),
    ),
    "short": Paytable(
        name="Short Pay Jacks or Better",
        rtp=98.39,
        description="Reduced payouts on Full House and Flush",
        payouts=_jacks_payouts(full_house=8, flush=5),
    ),
    "bonus": Paytable(
        name="Bonus Poker",
        rtp=99.17,
        description="Enhanced payouts for Four of a Kind",
        payouts=_jacks_payouts(full_house=8, flush=5, quads=80),
    ),
}


def _is_number(x: Any) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool)


class PaytableManager:
    """Named collection of paytables with a current selection."""

    def __init__(self, current: str = "full"):
        self.paytables: dict[str, Paytable] = copy.deepcopy(DEFAULT_PAYTABLES)
        if current not in self.paytables:
            raise PaytableNotFoundError(f"Unknown paytable: {current}")
        self.current = current

    def get_current_paytable(self) -> Paytable:
        return self.paytables[self.current]

    def set_paytable(self, paytable_id: str) -> Paytable:
        """Select the active paytable."""
        if paytable_id not in self.paytables:
            raise PaytableNotFoundError(f"Unknown paytable: {paytable_id}")
        self.current = paytable_id
        logger.debug("Selected paytable %s", paytable_id)
        return self.get_current_paytable()

    def calculate_payout(self, category: Union[str, HandCategory], bet: int) -> int:
        """
        Total credits returned for a hand.

        Args:
            category: Hand category (name or HandCategory)
            bet: Credits wagered (1-5)

        Returns:
            Payout in credits, 0 for categories without an entry
        """
        if not isinstance(bet, int) or isinstance(bet, bool) or bet < 1 or bet > 5:
            raise InvalidInputError(f"Invalid bet amount: {bet}")

        payouts = self.get_current_paytable().payouts.get(str(category))
        if not payouts:
            return 0
        return payouts[bet - 1]

    def get_available_paytables(self) -> list[dict[str, Any]]:
        return [
            {
                "id": pid,
                "name": p.name,
                "rtp": p.rtp,
                "description": p.description,
            }
            for pid, p in self.paytables.items()
        ]

    def calculate_theoretical_rtp(self) -> float:
        """Published RTP of the current paytable under optimal play."""
        return self.get_current_paytable().rtp

    def get_expected_value(self, bet: int) -> float:
        """Expected credits returned per hand at the theoretical RTP."""
        return bet * self.calculate_theoretical_rtp() / 100

    def validate_paytable(self, paytable: Union[Paytable, dict[str, Any]]) -> list[str]:
        """
        Structural check of a paytable.

        Returns:
            List of problems; empty when valid
        """
        if isinstance(paytable, Paytable):
            paytable = paytable.to_dict()
        if not isinstance(paytable, dict):
            return ["Paytable must be an object"]

        errors = []

        if not paytable.get("name"):
            errors.append("Paytable must have a name")

        rtp = paytable.get("rtp")
        if not _is_number(rtp) or rtp < 0 or rtp > 100:
            errors.append("Paytable must have valid RTP (0-100)")

        payouts = paytable.get("payouts")
        if not isinstance(payouts, dict):
            errors.append("Paytable must have payouts object")
            return errors

        for category in PAYING_CATEGORIES:
            if category.value not in payouts:
                errors.append(f"Missing payout for {category.value}")

        # Every entry, required or extra, must be usable by calculate_payout
        for name, values in payouts.items():
            if (
                not isinstance(values, (list, tuple))
                or len(values) != 5
                or not all(_is_number(v) for v in values)
            ):
                errors.append(f"{name} must have exactly 5 payout values")

        return errors

    def add_custom_paytable(
        self,
        paytable_id: str,
        paytable: Union[Paytable, dict[str, Any]],
    ) -> Paytable:
        """Validate and register a paytable under ``paytable_id``."""
        errors = self.validate_paytable(paytable)
        if errors:
            raise PaytableValidationError(
                f"Invalid paytable: {', '.join(errors)}", errors
            )

        if isinstance(paytable, dict):
            paytable = Paytable.from_dict(paytable)
        self.paytables[paytable_id] = paytable
        return paytable

    def export_paytables(self) -> str:
        """All paytables as JSON text."""
        data = {pid: p.to_dict() for pid, p in self.paytables.items()}
        return json.dumps(data, indent=2, ensure_ascii=False)

    def import_paytables(self, text: str) -> list[str]:
        """
        Merge paytables from JSON text.

        Every entry is validated before any is committed. If one fails,
        nothing is imported and all problems are reported together.

        Returns:
            Imported paytable ids
        """
        try:
            imported = json.loads(text)
        except json.JSONDecodeError as e:
            raise PaytableValidationError(
                f"Failed to import paytables: {e}", [str(e)]
            ) from e

        if not isinstance(imported, dict):
            errors = ["Paytable data must be an object keyed by id"]
            raise PaytableValidationError(
                f"Failed to import paytables: {errors[0]}", errors
            )

        errors = []
        for pid, data in imported.items():
            errors.extend(f"{pid}: {e}" for e in self.validate_paytable(data))

        if errors:
            raise PaytableValidationError(
                f"Failed to import paytables: {'; '.join(errors)}", errors
            )

        staged = {pid: Paytable.from_dict(data) for pid, data in imported.items()}
        self.paytables.update(staged)

        logger.info("Imported %d paytable(s): %s", len(imported), ", ".join(imported))
        return list(imported)
