"""Shared fixtures for the can world tests."""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from environment import CanWorldEnv


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def empty_3x3():
    """3x3 grid, no cans, robot in the top-left corner."""
    return CanWorldEnv(dimension=3, n_cans=0, robot_pos=(0, 0))
