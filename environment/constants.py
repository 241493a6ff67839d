"""Constants for the can-collecting grid world."""

from __future__ import annotations

from enum import IntEnum
from typing import Dict, Tuple


class Cell(IntEnum):
    """Contents of a grid cell as seen by the robot.

    WALL is never stored in the grid. It only shows up in a percept when the
    robot looks past the edge.
    """

    EMPTY = 0
    CAN = 1
    WALL = 2


class Action(IntEnum):
    MOVE_NORTH = 0
    MOVE_SOUTH = 1
    MOVE_EAST = 2
    MOVE_WEST = 3
    PICK_UP = 4


N_ACTIONS: int = len(Action)

# (dx, dy) on grid[y, x]; north is the row drawn above
ACTION_DELTAS: Dict[Action, Tuple[int, int]] = {
    Action.MOVE_NORTH: (0, -1),
    Action.MOVE_SOUTH: (0, 1),
    Action.MOVE_EAST: (1, 0),
    Action.MOVE_WEST: (-1, 0),
}

ACTION_SYMBOLS: Dict[Action, str] = {
    Action.MOVE_NORTH: "N",
    Action.MOVE_SOUTH: "S",
    Action.MOVE_EAST: "E",
    Action.MOVE_WEST: "W",
    Action.PICK_UP: "P",
}

# Rewards
REWARD_CAN: float = 10.0
REWARD_NO_CAN: float = -1.0
REWARD_CRASH: float = -5.0
REWARD_MOVE: float = 0.0

METADATA = {
    "render_modes": ["human", "ansi"],
    "render_fps": 4,
}
