"""Core test fixtures for dice distribution tests."""

import random
from fractions import Fraction

import pytest

from src.config import get_settings
from src.dice import Dice, build_from_string


class SequenceSource:
    """Random source replaying a fixed list of draws, then failing loudly."""

    def __init__(self, draws: list[float]) -> None:
        self._draws = iter(draws)

    def random(self) -> float:
        return next(self._draws)


@pytest.fixture
def seeded_rng() -> random.Random:
    """Deterministic random source."""
    return random.Random(20240229)


@pytest.fixture
def two_d6() -> Dice:
    """The classic 2d6 distribution."""
    return build_from_string("2d6")


@pytest.fixture
def two_d6_table() -> dict[int, Fraction]:
    """Exact 2d6 probabilities."""
    ways = {2: 1, 3: 2, 4: 3, 5: 4, 6: 5, 7: 6, 8: 5, 9: 4, 10: 3, 11: 2, 12: 1}
    return {value: Fraction(count, 36) for value, count in ways.items()}


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Reset cached settings so environment patches take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sequence_source():
    """Factory for random sources replaying fixed draws."""
    return SequenceSource
