"""Delimited-text reports of a training run.

Two files:
  - the learned Q-table, one row per percept
  - the per-episode log
"""

from __future__ import annotations

import csv
import os
from dataclasses import asdict, fields
from typing import Iterable

import numpy as np

from agents import QLearningAgent
from environment.constants import ACTION_SYMBOLS, Action
from environment.types import Percept

from .core import EpisodeResult


def _ensure_parent(filepath: str) -> None:
    os.makedirs(os.path.dirname(filepath) or ".", exist_ok=True)


def write_q_table(agent: QLearningAgent, filepath: str, delimiter: str = ",") -> int:
    """Write every (percept, action values) row plus its greedy action.

    The "best" column lists every maximizing action, so ties show as
    e.g. "NE". Rows whose values are all equal report "-".
    Returns the number of data rows written.
    """
    _ensure_parent(filepath)

    header = ["index", *Percept._fields, *(ACTION_SYMBOLS[a] for a in Action), "best"]
    n_rows = 0
    with open(filepath, "w", newline="") as f:
        writer = csv.writer(f, delimiter=delimiter)
        writer.writerow(header)
        for index, (percept, values) in enumerate(agent.rows()):
            if np.all(values == values[0]):
                best = "-"
            else:
                best = "".join(
                    ACTION_SYMBOLS[Action(int(i))]
                    for i in np.flatnonzero(values == values.max())
                )
            writer.writerow([
                index,
                *(cell.name for cell in percept),
                *(f"{v:.6f}" for v in values),
                best,
            ])
            n_rows += 1

    print(f"Q-table written to {filepath}")
    return n_rows


def write_episode_log(
    results: Iterable[EpisodeResult], filepath: str, delimiter: str = ","
) -> int:
    """Write one row per episode. Returns the number of data rows written."""
    _ensure_parent(filepath)

    columns = [f.name for f in fields(EpisodeResult)]
    n_rows = 0
    with open(filepath, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=columns, delimiter=delimiter)
        writer.writeheader()
        for result in results:
            writer.writerow(asdict(result))
            n_rows += 1

    print(f"Episode log written to {filepath}")
    return n_rows
