"""Layout utilities for the can world.

Keeps the Gym env file small by isolating:
  - configuration checks
  - boundary / crash rule
  - random can and robot placement
"""

from __future__ import annotations

from typing import Tuple

import numpy as np

from .constants import Action, ACTION_DELTAS, Cell


def validate_layout(dimension: int, n_cans: int) -> None:
    """Reject layouts that can never be built.

    Raised here, at construction, so random placement never loops forever
    looking for a free cell.
    """
    if int(dimension) < 1:
        raise ValueError(f"Grid dimension must be at least 1, got {dimension}")
    if int(n_cans) < 0:
        raise ValueError(f"Number of cans must be non-negative, got {n_cans}")
    if int(n_cans) > int(dimension) ** 2:
        raise ValueError(
            f"Cannot place {n_cans} cans on a {dimension}x{dimension} grid "
            f"({dimension ** 2} cells)"
        )


def in_bounds(dimension: int, x: int, y: int) -> bool:
    return 0 <= x < dimension and 0 <= y < dimension


def exits_grid(dimension: int, position: Tuple[int, int], action: Action) -> bool:
    """True if taking a movement action from `position` would leave the grid.

    One rule for all four directions. PICK_UP never exits the grid.
    """
    if action not in ACTION_DELTAS:
        return False
    dx, dy = ACTION_DELTAS[action]
    x, y = position
    return not in_bounds(dimension, x + dx, y + dy)


def random_position(dimension: int, rng: np.random.Generator) -> Tuple[int, int]:
    """Uniformly random (x, y) on the grid."""
    x, y = rng.integers(0, dimension, size=2)
    return int(x), int(y)


def random_grid(dimension: int, n_cans: int, rng: np.random.Generator) -> np.ndarray:
    """Empty grid with exactly `n_cans` cans at distinct random cells.

    Draws uniformly and redraws on collision until the count is reached.
    """
    validate_layout(dimension, n_cans)

    grid = np.full((dimension, dimension), Cell.EMPTY, dtype=np.int8)
    placed = 0
    while placed < n_cans:
        x, y = random_position(dimension, rng)
        if grid[y, x] == Cell.CAN:
            continue
        grid[y, x] = Cell.CAN
        placed += 1

    return grid


def count_cans(grid: np.ndarray) -> int:
    return int(np.count_nonzero(grid == Cell.CAN))
