"""Shared fixtures for the test suite."""

import numpy as np
import pytest


class FixedRandom:
    """Stands in for a Generator whose scalar draws are all the same value."""

    def __init__(self, value: float):
        self.value = value

    def random(self, size=None):
        if size is None:
            return self.value
        return np.full(size, self.value)


class NoEntropy:
    """A random source that fails the test if anything draws from it."""

    def random(self, *args, **kwargs):
        raise AssertionError("random source was used")

    def uniform(self, *args, **kwargs):
        raise AssertionError("random source was used")


@pytest.fixture
def rng():
    return np.random.default_rng(12345)


@pytest.fixture
def fixed_rng():
    return FixedRandom


@pytest.fixture
def no_entropy():
    return NoEntropy()
