"""
Tabular Q-Learning Agent
========================
Dense Q-table over every possible percept (243 rows x 5 actions).

Q-learning update rule:
    Q(s, a) = Q(s, a) + eta * [reward + gamma * max(Q(s', a')) - Q(s, a)]

The agent remembers the (percept, action) pair it chose last. The next
call to `update` credits the reward to exactly that pair and clears it.
"""

from __future__ import annotations

from typing import Iterator, Optional, Tuple

import numpy as np

from environment.constants import Action, N_ACTIONS
from environment.types import Percept

from .encoder import PerceptEncoder


class QLearningAgent:
    """
    Epsilon-greedy tabular Q-learning robot.

    The Q-table is the only state that lives across episodes. Learning rate
    and discount are passed to `update` by the caller on every call.
    """

    def __init__(self, epsilon: float = 1.0, seed: int | None = None):
        """
        Initialize the agent.

        Args:
            epsilon: Initial exploration rate in [0, 1]. Callers decay it
                between episodes by assigning to `agent.epsilon`.
            seed: Seed for the agent's random generator.
        """
        self.encoder = PerceptEncoder()
        self.q_table = np.zeros((len(self.encoder), N_ACTIONS), dtype=np.float64)
        self.epsilon = epsilon
        self.rng = np.random.default_rng(seed)

        # (percept, action) from the last select_action, consumed by update
        self.pending: Optional[Tuple[Percept, Action]] = None

    @property
    def epsilon(self) -> float:
        return self._epsilon

    @epsilon.setter
    def epsilon(self, value: float) -> None:
        value = float(value)
        if not 0.0 <= value <= 1.0:
            raise ValueError(f"epsilon must be in [0, 1], got {value}")
        self._epsilon = value

    @property
    def awaiting_update(self) -> bool:
        return self.pending is not None

    def _row(self, percept: Percept) -> np.ndarray:
        return self.q_table[self.encoder.encode(percept)]

    def max_action_for_percept(self, percept: Percept) -> Tuple[Action, float]:
        """Best action for a percept and its value.

        Ties are broken uniformly at random among all maximizing actions.
        """
        row = self._row(percept)
        max_q = row.max()
        best_actions = np.flatnonzero(row == max_q)
        return Action(int(self.rng.choice(best_actions))), float(max_q)

    def select_action(self, percept: Percept) -> Action:
        """
        Select an action using an epsilon-greedy policy.

        Explores when the draw falls under epsilon, or when every action in
        this row still has the same value (nothing learned yet).

        Args:
            percept: Current observation.

        Returns:
            Selected action. Also remembered for the next `update`.
        """
        row = self._row(percept)
        if self.rng.random() < self.epsilon or np.all(row == row[0]):
            action = Action(int(self.rng.integers(N_ACTIONS)))
        else:
            action, _ = self.max_action_for_percept(percept)

        self.pending = (percept, action)
        return action

    def update(self, reward: float, eta: float, gamma: float, next_percept: Percept) -> float:
        """
        Credit `reward` to the last chosen (percept, action).

        Does nothing when no choice is pending.

        Args:
            reward: Reward received for the pending action.
            eta: Learning rate.
            gamma: Discount factor.
            next_percept: Observation after the action was applied.

        Returns:
            Absolute change of the updated Q-value (0.0 when nothing was pending).
        """
        if self.pending is None:
            return 0.0

        percept, action = self.pending
        self.pending = None

        # Only the value is needed; no tie-break draw
        max_next_q = float(self._row(next_percept).max())
        target_q = reward + gamma * max_next_q

        index = self.encoder.encode(percept)
        current_q = self.q_table[index, action]
        new_q = current_q + eta * (target_q - current_q)
        self.q_table[index, action] = new_q

        return abs(new_q - current_q)

    def q_values(self, percept: Percept) -> np.ndarray:
        """Copy of the action values for one percept."""
        return self._row(percept).copy()

    def rows(self) -> Iterator[Tuple[Percept, np.ndarray]]:
        """Yield (percept, action values) for every row, in index order.

        The yielded arrays are read-only views.
        """
        for percept in self.encoder:
            values = self._row(percept).view()
            values.flags.writeable = False
            yield percept, values

    def get_visited_state_count(self) -> int:
        """Number of percepts whose row has been touched by learning."""
        return int(np.count_nonzero(np.any(self.q_table != 0.0, axis=1)))
