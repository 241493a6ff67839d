"""Training, evaluation and reporting for the can-collecting robot."""

from .core import EpisodeResult, run_episode, train_agent
from .eval import evaluate
from .report import write_episode_log, write_q_table
from .schedules import epsilon_for_episode, exponential_epsilon, linear_epsilon, validate_schedule

__all__ = [
    "EpisodeResult",
    "run_episode",
    "train_agent",
    "evaluate",
    "write_episode_log",
    "write_q_table",
    "epsilon_for_episode",
    "exponential_epsilon",
    "linear_epsilon",
    "validate_schedule",
]
