"""
Utility functions for training and evaluation.
"""

from __future__ import annotations

import os
from typing import Dict, List, Sequence

import numpy as np
import matplotlib.pyplot as plt


def setup_directories(paths: Dict[str, str]):
    """Create necessary directories if they don't exist."""
    for path in paths.values():
        if os.path.splitext(path)[1]:
            path = os.path.dirname(path)
        if path and not os.path.exists(path):
            os.makedirs(path)
            print(f"Created directory: {path}")


def moving_average(values: Sequence[float], window: int = 100) -> np.ndarray:
    """Trailing mean; the first entries average over what is available."""
    values = np.asarray(values, dtype=np.float64)
    window = max(1, int(window))
    sums = np.cumsum(values)
    sums[window:] = sums[window:] - sums[:-window]
    return sums / np.minimum(np.arange(1, values.size + 1), window)


def plot_training_stats(
    rewards: List[float],
    cans_collected: List[float],
    window: int = 10,
    save_path: str | None = None,
):
    """
    Plot training statistics with moving average.

    Args:
        rewards: List of episode rewards.
        cans_collected: List of cans picked up per episode.
        window: Window size for moving average.
        save_path: Optional path to save the plot.
    """
    fig, axes = plt.subplots(2, 1, figsize=(10, 8))

    # Plot rewards
    ax = axes[0]
    ax.plot(rewards, alpha=0.3, color="blue", label="Episode Reward")
    ax.plot(moving_average(rewards, window), color="red", label=f"Moving Avg ({window})")
    ax.set_xlabel("Episode")
    ax.set_ylabel("Reward")
    ax.set_title("Training Rewards")
    ax.legend()
    ax.grid(True, alpha=0.3)

    # Plot cans collected
    ax = axes[1]
    ax.plot(cans_collected, alpha=0.3, color="green", label="Cans Collected")
    ax.plot(moving_average(cans_collected, window), color="red", label=f"Moving Avg ({window})")
    ax.set_xlabel("Episode")
    ax.set_ylabel("Cans")
    ax.set_title("Cans Collected per Episode")
    ax.legend()
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    if save_path:
        os.makedirs(os.path.dirname(save_path) or ".", exist_ok=True)
        plt.savefig(save_path, dpi=150)
        print(f"Plot saved to {save_path}")
    else:
        plt.show()

    plt.close(fig)
