import itertools

import matplotlib
import numpy as np
import pytest

matplotlib.use("Agg")

UNIT_SQUARE = [(0.0, 0.0), (0.0, 1.0), (1.0, 1.0), (1.0, 0.0)]


class ScriptedRandom:
    """Stands in for a numpy Generator, replaying fixed draws."""

    def __init__(self, values, integers=0):
        self.values = list(values)
        self._integers = integers

    def random(self):
        return self.values.pop(0)

    def integers(self, high):
        return self._integers % high


@pytest.fixture
def unit_square():
    return UNIT_SQUARE


@pytest.fixture
def random_cities():
    rng = np.random.default_rng(7)
    return rng.uniform(0, 100, size=(12, 2))


@pytest.fixture
def fake_clock():
    """Clock advancing one second per call, so time_limit counts clock reads."""
    return itertools.count().__next__


@pytest.fixture
def scripted_random():
    return ScriptedRandom
