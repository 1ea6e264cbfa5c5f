"""Pytest configuration and fixtures."""

import numpy as np
import pytest

from jacks.game.cards import parse_cards
from jacks.game.evaluator import HandEvaluator
from jacks.game.paytable import PaytableManager


@pytest.fixture
def rng():
    """Seeded generator so shuffles are reproducible."""
    return np.random.default_rng(12345)


@pytest.fixture
def hand():
    """Build a hand from a string like 'J♥ J♠ 3♦ 7♣ 9♠' or 'Jh Js 3d 7c 9s'."""
    return parse_cards


@pytest.fixture
def evaluator():
    return HandEvaluator()


@pytest.fixture
def paytables():
    return PaytableManager()
