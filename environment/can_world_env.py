"""Can-collecting grid world as a Gymnasium environment (core dynamics only)."""

from __future__ import annotations

from typing import Any, Dict, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .constants import (
    Action,
    ACTION_DELTAS,
    Cell,
    N_ACTIONS,
    METADATA,
    REWARD_CAN,
    REWARD_CRASH,
    REWARD_MOVE,
    REWARD_NO_CAN,
)
from .generation import (
    count_cans,
    exits_grid,
    in_bounds,
    random_grid,
    random_position,
    validate_layout,
)
from .rendering import render_text
from .types import Percept


class CanWorldEnv(gym.Env):
    """Square grid with scattered cans and one robot.

    Constructing the env gives an all-empty grid with the robot at
    `robot_pos`. `reset()` (or `CanWorldEnv.randomized`) scatters `n_cans`
    cans and drops the robot at a random cell.

    Rewards (computed on the state *before* the action):
        +10  pick up where there is a can
        -1   pick up where there is no can
        -5   move that would leave the grid (crash, robot stays put)
         0   any other move
    """

    metadata = METADATA

    def __init__(
        self,
        dimension: int = 10,
        n_cans: int = 20,
        robot_pos: Tuple[int, int] = (0, 0),
        max_steps: int | None = None,
        render_mode: str | None = None,
    ):
        validate_layout(dimension, n_cans)
        self.dimension = int(dimension)
        self.n_cans = int(n_cans)

        x, y = int(robot_pos[0]), int(robot_pos[1])
        if not in_bounds(self.dimension, x, y):
            raise ValueError(
                f"Robot position {robot_pos} is outside a "
                f"{self.dimension}x{self.dimension} grid"
            )

        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render mode: {render_mode}")
        self.render_mode = render_mode
        self.max_steps = None if max_steps is None else int(max_steps)

        # Grid state
        self.grid: np.ndarray = np.full(
            (self.dimension, self.dimension), Cell.EMPTY, dtype=np.int8
        )
        self.robot_pos: Tuple[int, int] = (x, y)

        # Episode state
        self.steps: int = 0
        self.crashes: int = 0
        self.cans_collected: int = 0

        self.action_space = spaces.Discrete(N_ACTIONS)
        self.observation_space = spaces.Tuple([spaces.Discrete(len(Cell))] * len(Percept._fields))

    @classmethod
    def randomized(
        cls,
        dimension: int = 10,
        n_cans: int = 20,
        seed: int | None = None,
        **kwargs: Any,
    ) -> "CanWorldEnv":
        """Build an env and scatter cans and robot at random."""
        env = cls(dimension=dimension, n_cans=n_cans, **kwargs)
        env.reset(seed=seed)
        return env

    def reset(
        self, seed: int | None = None, options: dict | None = None
    ) -> tuple[Percept, Dict[str, Any]]:
        """Scatter a fresh set of cans and place the robot at random.

        The robot may start on a can.
        """
        super().reset(seed=seed)

        self.grid = random_grid(self.dimension, self.n_cans, self.np_random)
        self.robot_pos = random_position(self.dimension, self.np_random)

        self.steps = 0
        self.crashes = 0
        self.cans_collected = 0

        return self.observe(), self._get_info()

    # -------------------- Sensing --------------------

    def _cell_at(self, x: int, y: int) -> Cell:
        if not in_bounds(self.dimension, x, y):
            return Cell.WALL
        return Cell(int(self.grid[y, x]))

    def observe(self) -> Percept:
        """Read the robot's cell and its four neighbours."""
        x, y = self.robot_pos
        neighbours = {}
        for name, action in (
            ("north", Action.MOVE_NORTH),
            ("south", Action.MOVE_SOUTH),
            ("east", Action.MOVE_EAST),
            ("west", Action.MOVE_WEST),
        ):
            dx, dy = ACTION_DELTAS[action]
            neighbours[name] = self._cell_at(x + dx, y + dy)
        return Percept(current=self._cell_at(x, y), **neighbours)

    def can_count(self) -> int:
        """Cans still on the grid."""
        return count_cans(self.grid)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "steps": int(self.steps),
            "crashes": int(self.crashes),
            "cans_remaining": self.can_count(),
            "cans_collected": int(self.cans_collected),
            "robot_pos": self.robot_pos,
        }

    # -------------------- Dynamics --------------------

    def crashes_on(self, action: Action) -> bool:
        """Would this action bump the robot into the edge of the grid?"""
        return exits_grid(self.dimension, self.robot_pos, Action(action))

    def reward(self, action: Action) -> float:
        """Reward for `action` in the current state. Does not change state."""
        action = Action(action)
        if action == Action.PICK_UP:
            x, y = self.robot_pos
            return REWARD_CAN if self.grid[y, x] == Cell.CAN else REWARD_NO_CAN
        return REWARD_CRASH if self.crashes_on(action) else REWARD_MOVE

    def _transition(self, action: Action) -> None:
        x, y = self.robot_pos

        if action == Action.PICK_UP:
            if self.grid[y, x] == Cell.CAN:
                self.grid[y, x] = Cell.EMPTY
                self.cans_collected += 1
            return

        if self.crashes_on(action):
            self.crashes += 1
            return

        dx, dy = ACTION_DELTAS[action]
        self.robot_pos = (x + dx, y + dy)

    def step(self, action: int) -> tuple[Percept, float, bool, bool, Dict[str, Any]]:
        assert self.action_space.contains(int(action)), f"Invalid action: {action}"
        action = Action(int(action))

        reward = self.reward(action)
        self._transition(action)
        self.steps += 1

        # Fixed-length episodes: nothing terminates, only the step budget truncates
        terminated = False
        truncated = self.max_steps is not None and self.steps >= self.max_steps

        if self.render_mode == "human":
            self.render()

        return self.observe(), reward, terminated, truncated, self._get_info()

    # -------------------- Rendering --------------------

    def render(self) -> str | None:
        text = render_text(self.grid, self.robot_pos)
        if self.render_mode == "ansi":
            return text
        if self.render_mode == "human":
            print(text)
            print()
        return None

    def __str__(self) -> str:
        return render_text(self.grid, self.robot_pos)

    def __repr__(self) -> str:
        return (
            f"CanWorldEnv(dimension={self.dimension}, n_cans={self.n_cans}, "
            f"robot_pos={self.robot_pos}, cans_remaining={self.can_count()}, "
            f"crashes={self.crashes})"
        )
