"""Text rendering for the can world.

Row 0 is printed first, so north points up on screen.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from .constants import ACTION_SYMBOLS, Action, Cell

TILE_SYMBOLS = {
    Cell.EMPTY: "_",
    Cell.CAN: "C",
}
ROBOT_SYMBOL = "R"
ROBOT_ON_CAN_SYMBOL = "@"


def render_text(grid: np.ndarray, robot_pos: tuple[int, int]) -> str:
    size = grid.shape[0]
    lines = []
    for y in range(size):
        row = []
        for x in range(size):
            tile = Cell(int(grid[y, x]))
            if (x, y) == robot_pos:
                row.append(ROBOT_ON_CAN_SYMBOL if tile == Cell.CAN else ROBOT_SYMBOL)
            else:
                row.append(TILE_SYMBOLS[tile])
        lines.append(" ".join(row))
    return "\n".join(lines)


def actions_to_string(actions: Sequence[Action]) -> str:
    """Compact action trace, one letter per step (e.g. "NNEP")."""
    return "".join(ACTION_SYMBOLS[Action(a)] for a in actions)
