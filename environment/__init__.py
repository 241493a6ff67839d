"""Can-collecting grid world: dynamics, rewards and percepts."""

from .can_world_env import CanWorldEnv
from .constants import Action, Cell
from .types import Percept

__all__ = ["CanWorldEnv", "Action", "Cell", "Percept"]
