"""Console progress lines for training runs."""

from __future__ import annotations

from typing import List

import numpy as np


def print_episode_info(
    result,
    recent_rewards: List[float],
    learned_percepts: int,
    window: int = 100,
):
    """Print formatted episode information."""
    avg_reward = np.mean(recent_rewards[-window:]) if recent_rewards else 0
    print(
        f"Episode {result.episode:5d} | "
        f"Reward: {result.total_reward:8.2f} | "
        f"Avg Reward: {avg_reward:8.2f} | "
        f"Cans: {result.cans_collected:3d} | "
        f"Crashes: {result.crashes:3d} | "
        f"Epsilon: {result.epsilon:.4f} | "
        f"Q-States: {learned_percepts}"
    )
