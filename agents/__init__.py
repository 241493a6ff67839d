"""Agent modules for the can-collecting robot."""

from .encoder import PerceptEncoder, all_percepts
from .q_learning_agent import QLearningAgent

__all__ = ["PerceptEncoder", "QLearningAgent", "all_percepts"]
