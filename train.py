"""
Training script for Tabular Q-Learning on the Can World.
========================================================

Train a robot to pick up cans on a grid without crashing into its edges.

Usage:
    python train.py
    python train.py --episodes 5000 --steps 200
    python train.py --schedule exponential --epsilon-decay 0.995 --seed 7
"""

from __future__ import annotations

import argparse

from config import ENV_CONFIG, AGENT_CONFIG, TRAIN_CONFIG, PATHS
from training import evaluate, train_agent, write_episode_log, write_q_table
from training.schedules import SCHEDULES
from utils import setup_directories, plot_training_stats


def train(
    n_episodes: int | None = None,
    steps_per_episode: int | None = None,
    dimension: int | None = None,
    n_cans: int | None = None,
    eta: float | None = None,
    gamma: float | None = None,
    epsilon: float | None = None,
    epsilon_min: float | None = None,
    epsilon_decay: float | None = None,
    epsilon_schedule: str | None = None,
    eps_decay_episodes: int | None = None,
    eval_episodes: int | None = None,
    seed: int | None = None,
    output_dir: str | None = None,
    plot: bool = True,
    verbose: bool = False,
):
    """
    Train, report and (optionally) evaluate a Q-learning robot.

    Every argument left as None falls back to config.py.
    """
    n_episodes = TRAIN_CONFIG["n_episodes"] if n_episodes is None else n_episodes
    steps_per_episode = ENV_CONFIG["steps_per_episode"] if steps_per_episode is None else steps_per_episode
    dimension = ENV_CONFIG["dimension"] if dimension is None else dimension
    n_cans = ENV_CONFIG["n_cans"] if n_cans is None else n_cans
    eta = AGENT_CONFIG["eta"] if eta is None else eta
    gamma = AGENT_CONFIG["gamma"] if gamma is None else gamma
    epsilon = AGENT_CONFIG["epsilon"] if epsilon is None else epsilon
    epsilon_min = AGENT_CONFIG["epsilon_min"] if epsilon_min is None else epsilon_min
    epsilon_decay = AGENT_CONFIG["epsilon_decay"] if epsilon_decay is None else epsilon_decay
    epsilon_schedule = AGENT_CONFIG["epsilon_schedule"] if epsilon_schedule is None else epsilon_schedule
    eps_decay_episodes = AGENT_CONFIG["eps_decay_episodes"] if eps_decay_episodes is None else eps_decay_episodes
    eval_episodes = TRAIN_CONFIG["eval_episodes"] if eval_episodes is None else eval_episodes
    seed = TRAIN_CONFIG["seed"] if seed is None else seed

    paths = dict(PATHS)
    if output_dir:
        paths["output_dir"] = output_dir
        paths["logs_dir"] = output_dir
        paths["q_table_file"] = f"{output_dir}/q_table.csv"
        paths["episodes_file"] = f"{output_dir}/episodes.csv"
        paths["plot_file"] = f"{output_dir}/training_stats.png"
    setup_directories(paths)

    agent, results = train_agent(
        dimension=dimension,
        n_cans=n_cans,
        steps_per_episode=steps_per_episode,
        n_episodes=n_episodes,
        eta=eta,
        gamma=gamma,
        epsilon_schedule=epsilon_schedule,
        eps_start=epsilon,
        eps_end=epsilon_min,
        eps_decay=epsilon_decay,
        eps_decay_episodes=eps_decay_episodes,
        log_interval=TRAIN_CONFIG["log_interval"],
        verbose=verbose,
        seed=seed,
    )

    write_q_table(agent, paths["q_table_file"])
    write_episode_log(results, paths["episodes_file"])

    if plot:
        plot_training_stats(
            [r.total_reward for r in results],
            [r.cans_collected for r in results],
            save_path=paths["plot_file"],
        )

    if eval_episodes:
        stats = evaluate(
            agent,
            n_episodes=eval_episodes,
            dimension=dimension,
            n_cans=n_cans,
            steps_per_episode=steps_per_episode,
            seed=seed,
        )
        print(f"\n=== EVALUATION ({stats['episodes']} greedy episodes) ===")
        print(f"Avg reward : {stats['avg_reward']:.2f}")
        print(f"Avg cans   : {stats['avg_cans_collected']:.2f} of {n_cans}")
        print(f"Avg crashes: {stats['avg_crashes']:.2f}")
        print(f"Collected %: {stats['collection_rate'] * 100:.1f}%")

    return agent, results


def add_train_arguments(parser: argparse.ArgumentParser) -> None:
    """Training flags, shared with main.py."""
    parser.add_argument("--episodes", type=int, default=None,
                        help=f"Number of training episodes (default: {TRAIN_CONFIG['n_episodes']})")
    parser.add_argument("--steps", type=int, default=None,
                        help=f"Steps per episode (default: {ENV_CONFIG['steps_per_episode']})")
    parser.add_argument("--dimension", type=int, default=None,
                        help=f"Side length of the square grid (default: {ENV_CONFIG['dimension']})")
    parser.add_argument("--cans", type=int, default=None,
                        help=f"Cans scattered per episode (default: {ENV_CONFIG['n_cans']})")
    parser.add_argument("--eta", type=float, default=None,
                        help=f"Learning rate (default: {AGENT_CONFIG['eta']})")
    parser.add_argument("--gamma", type=float, default=None,
                        help=f"Discount factor (default: {AGENT_CONFIG['gamma']})")
    parser.add_argument("--epsilon", type=float, default=None,
                        help=f"Initial exploration rate (default: {AGENT_CONFIG['epsilon']})")
    parser.add_argument("--epsilon-min", type=float, default=None, dest="epsilon_min",
                        help=f"Final exploration rate (default: {AGENT_CONFIG['epsilon_min']})")
    parser.add_argument("--epsilon-decay", type=float, default=None, dest="epsilon_decay",
                        help=f"Per-episode decay factor, exponential schedule "
                             f"(default: {AGENT_CONFIG['epsilon_decay']})")
    parser.add_argument("--eps-decay-episodes", type=int, default=None, dest="eps_decay_episodes",
                        help=f"Episodes to reach epsilon-min, linear schedule "
                             f"(default: {AGENT_CONFIG['eps_decay_episodes']})")
    parser.add_argument("--schedule", type=str, default=None, choices=SCHEDULES,
                        help=f"Epsilon schedule (default: {AGENT_CONFIG['epsilon_schedule']})")
    parser.add_argument("--eval-episodes", type=int, default=None, dest="eval_episodes",
                        help=f"Greedy evaluation episodes after training, 0 to skip "
                             f"(default: {TRAIN_CONFIG['eval_episodes']})")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--output-dir", type=str, default=None, dest="output_dir",
                        help="Directory for reports and plot")
    parser.add_argument("--no-plot", action="store_true", help="Skip the training plot")
    parser.add_argument("--verbose", action="store_true",
                        help="Print the action trace of logged episodes")


def run_from_args(args: argparse.Namespace):
    return train(
        n_episodes=args.episodes,
        steps_per_episode=args.steps,
        dimension=args.dimension,
        n_cans=args.cans,
        eta=args.eta,
        gamma=args.gamma,
        epsilon=args.epsilon,
        epsilon_min=args.epsilon_min,
        epsilon_decay=args.epsilon_decay,
        epsilon_schedule=args.schedule,
        eps_decay_episodes=args.eps_decay_episodes,
        eval_episodes=args.eval_episodes,
        seed=args.seed,
        output_dir=args.output_dir,
        plot=not args.no_plot,
        verbose=args.verbose,
    )


def main():
    parser = argparse.ArgumentParser(description="Train Q-learning robot on the can world")
    add_train_arguments(parser)
    args = parser.parse_args()
    run_from_args(args)


if __name__ == "__main__":
    main()
