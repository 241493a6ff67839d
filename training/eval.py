"""Greedy evaluation.

Runs the learned policy with epsilon forced to 0 and without touching the
Q-table, then restores the agent's epsilon.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from agents import QLearningAgent
from environment import CanWorldEnv

from .core import run_episode


def evaluate(
    agent: QLearningAgent,
    *,
    n_episodes: int = 10,
    dimension: int = 10,
    n_cans: int = 20,
    steps_per_episode: int = 200,
    seed: Optional[int] = None,
    render: bool = False,
) -> dict:
    """Greedy evaluation.

    Returns a dictionary so callers can log whatever they care about.
    """
    rng = np.random.default_rng(seed)
    saved_epsilon = agent.epsilon
    agent.epsilon = 0.0

    rewards: list[float] = []
    cans: list[int] = []
    crashes: list[int] = []

    try:
        for _ in range(int(n_episodes)):
            env_seed = None if seed is None else int(rng.integers(2**31 - 1))
            env = CanWorldEnv.randomized(
                dimension,
                n_cans,
                seed=env_seed,
                max_steps=steps_per_episode,
                render_mode="human" if render else None,
            )
            total_reward, _ = run_episode(env, agent, eta=0.0, gamma=0.0, learn=False)
            rewards.append(total_reward)
            cans.append(env.cans_collected)
            crashes.append(env.crashes)
            env.close()
    finally:
        agent.epsilon = saved_epsilon
        agent.pending = None

    return {
        "episodes": int(n_episodes),
        "avg_reward": float(np.mean(rewards)) if rewards else 0.0,
        "avg_cans_collected": float(np.mean(cans)) if cans else 0.0,
        "avg_crashes": float(np.mean(crashes)) if crashes else 0.0,
        "collection_rate": float(np.sum(cans) / (n_cans * len(cans))) if cans and n_cans else 0.0,
    }
