"""Core Q-learning episode loop.

One long-lived agent, a fresh randomized grid every episode, and a fixed
number of steps per episode. Per step:

    percept -> agent.select_action -> env.step -> agent.update(next percept)

Evaluation and report writing live in sibling modules.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from agents import QLearningAgent
from environment import CanWorldEnv
from environment.rendering import actions_to_string

from .progress import print_episode_info
from .schedules import epsilon_for_episode, validate_schedule


@dataclass
class EpisodeResult:
    """Summary of a single episode."""

    episode: int
    total_reward: float
    crashes: int
    cans_collected: int
    epsilon: float
    actions: str = ""


def run_episode(
    env: CanWorldEnv,
    agent: QLearningAgent,
    *,
    eta: float,
    gamma: float,
    learn: bool = True,
) -> Tuple[float, List[int]]:
    """Drive `agent` through `env` until the step budget runs out.

    The env must already be reset. Returns (total reward, actions taken).
    """
    percept = env.observe()
    total_reward = 0.0
    actions: List[int] = []
    done = False

    while not done:
        action = agent.select_action(percept)
        next_percept, reward, terminated, truncated, _ = env.step(action)
        if learn:
            agent.update(reward, eta, gamma, next_percept)

        total_reward += reward
        actions.append(action)
        percept = next_percept
        done = terminated or truncated

    return total_reward, actions


def train_agent(
    *,
    # Environment
    dimension: int = 10,
    n_cans: int = 20,
    steps_per_episode: int = 200,
    # Training
    n_episodes: int = 100,
    eta: float = 0.2,
    gamma: float = 0.9,
    # Exploration
    epsilon_schedule: str = "linear",
    eps_start: float = 1.0,
    eps_end: float = 0.1,
    eps_decay: float = 0.99,
    eps_decay_episodes: int = 80,
    # Logging
    log_interval: int = 10,
    verbose: bool = False,
    seed: Optional[int] = None,
    agent: Optional[QLearningAgent] = None,
) -> Tuple[QLearningAgent, List[EpisodeResult]]:
    """Train a Q-learning robot for `n_episodes` episodes.

    Pass `agent` to keep training an existing Q-table. `log_interval=0`
    silences progress output.

    Returns:
        (agent, one EpisodeResult per episode)
    """
    if int(n_episodes) < 1:
        raise ValueError(f"n_episodes must be positive, got {n_episodes}")
    if int(steps_per_episode) < 1:
        raise ValueError(f"steps_per_episode must be positive, got {steps_per_episode}")

    # Fail on bad schedules/layouts before any episode runs
    validate_schedule(
        epsilon_schedule,
        start=eps_start, end=eps_end, decay=eps_decay, decay_episodes=eps_decay_episodes,
    )
    CanWorldEnv(dimension=dimension, n_cans=n_cans)

    rng = np.random.default_rng(seed)
    if agent is None:
        agent = QLearningAgent(epsilon=eps_start, seed=seed)

    results: List[EpisodeResult] = []
    recent_rewards: List[float] = []
    start_time = time.time()

    if log_interval:
        print(f"Training on {dimension}x{dimension} grid, {n_cans} cans, "
              f"{steps_per_episode} steps/episode")
        print(f"Episodes: {n_episodes}, eta: {eta}, gamma: {gamma}, "
              f"epsilon schedule: {epsilon_schedule}")
        print("=" * 80)

    for episode in range(n_episodes):
        agent.epsilon = epsilon_for_episode(
            epsilon_schedule, episode,
            start=eps_start, end=eps_end, decay=eps_decay, decay_episodes=eps_decay_episodes,
        )

        env_seed = None if seed is None else int(rng.integers(2**31 - 1))
        env = CanWorldEnv.randomized(
            dimension, n_cans, seed=env_seed, max_steps=steps_per_episode
        )

        total_reward, actions = run_episode(env, agent, eta=eta, gamma=gamma, learn=True)

        result = EpisodeResult(
            episode=episode + 1,
            total_reward=total_reward,
            crashes=env.crashes,
            cans_collected=env.cans_collected,
            epsilon=agent.epsilon,
            actions=actions_to_string(actions),
        )
        results.append(result)
        recent_rewards.append(total_reward)

        if log_interval and result.episode % log_interval == 0:
            print_episode_info(result, recent_rewards, agent.get_visited_state_count())
            if verbose:
                print(f"  Actions: {result.actions}")

        env.close()

    if log_interval:
        elapsed = time.time() - start_time
        print("=" * 80)
        print(f"Training completed in {elapsed:.1f} seconds")
        print(f"Final epsilon: {agent.epsilon:.4f}")
        print(f"Percepts with learned values: {agent.get_visited_state_count()}")

    return agent, results
