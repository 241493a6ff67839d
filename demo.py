"""
Text-mode demo of the can world.
================================

Steps a robot through one randomized grid and prints the grid after every
action. The robot either acts at random or follows a policy trained on the
spot.

Usage:
    python demo.py
    python demo.py --policy trained --train-episodes 2000 --steps 30
"""

from __future__ import annotations

import argparse
import time

from agents import QLearningAgent
from config import ENV_CONFIG, AGENT_CONFIG
from environment import CanWorldEnv
from environment.constants import ACTION_SYMBOLS
from training import train_agent


def run_demo(
    dimension: int | None = None,
    n_cans: int | None = None,
    steps: int = 20,
    policy: str = "random",
    train_episodes: int = 1000,
    delay: float = 0.0,
    seed: int | None = None,
) -> float:
    """Play one episode in text mode. Returns the total reward."""
    dimension = ENV_CONFIG["dimension"] if dimension is None else dimension
    n_cans = ENV_CONFIG["n_cans"] if n_cans is None else n_cans

    if policy == "trained":
        print(f"Training a policy for {train_episodes} episodes...")
        agent, _ = train_agent(
            dimension=dimension,
            n_cans=n_cans,
            steps_per_episode=ENV_CONFIG["steps_per_episode"],
            n_episodes=train_episodes,
            eta=AGENT_CONFIG["eta"],
            gamma=AGENT_CONFIG["gamma"],
            eps_start=AGENT_CONFIG["epsilon"],
            eps_end=AGENT_CONFIG["epsilon_min"],
            eps_decay_episodes=max(1, int(train_episodes * 0.8)),
            log_interval=0,
            seed=seed,
        )
        agent.epsilon = 0.0
    else:
        agent = QLearningAgent(epsilon=1.0, seed=seed)

    env = CanWorldEnv.randomized(dimension, n_cans, seed=seed, max_steps=steps, render_mode="ansi")

    print("=" * 60)
    print(f"CAN WORLD DEMO ({policy} policy)")
    print("=" * 60)
    print(f"  Grid: {dimension}x{dimension}, cans: {env.can_count()}, robot at {env.robot_pos}")
    print("\n" + env.render())

    percept = env.observe()
    total_reward = 0.0
    done = False

    while not done:
        action = agent.select_action(percept)
        percept, reward, terminated, truncated, info = env.step(action)
        total_reward += reward
        done = terminated or truncated

        print(f"\nStep {info['steps']:3d} | Action: {ACTION_SYMBOLS[action]} | "
              f"Reward: {reward:+5.1f} | Total: {total_reward:+7.1f}")
        print(env.render())

        if delay:
            time.sleep(delay)

    print("\n" + "=" * 60)
    print(f"Cans collected: {env.cans_collected}, remaining: {env.can_count()}")
    print(f"Crashes: {env.crashes}")
    print(f"Total reward: {total_reward:.1f}")

    env.close()
    return total_reward


def add_demo_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--dimension", type=int, default=None, help="Grid side length")
    parser.add_argument("--cans", type=int, default=None, help="Number of cans")
    parser.add_argument("--steps", type=int, default=20, help="Steps to play")
    parser.add_argument("--policy", type=str, default="random", choices=["random", "trained"])
    parser.add_argument("--train-episodes", type=int, default=1000, dest="train_episodes",
                        help="Training episodes for --policy trained")
    parser.add_argument("--delay", type=float, default=0.0, help="Delay between steps")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")


def run_from_args(args: argparse.Namespace) -> float:
    return run_demo(
        dimension=args.dimension,
        n_cans=args.cans,
        steps=args.steps,
        policy=args.policy,
        train_episodes=args.train_episodes,
        delay=args.delay,
        seed=args.seed,
    )


def main():
    parser = argparse.ArgumentParser(description="Text-mode can world demo")
    add_demo_arguments(parser)
    run_from_args(parser.parse_args())


if __name__ == "__main__":
    main()
