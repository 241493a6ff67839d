"""Type definitions for the can-collecting grid world."""

from typing import NamedTuple

from .constants import Cell


class Percept(NamedTuple):
    """What the robot senses: its own cell and the four cardinal neighbours.

    Neighbours outside the grid read as Cell.WALL.
    """

    current: Cell
    north: Cell
    south: Cell
    east: Cell
    west: Cell
