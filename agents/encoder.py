"""Percept encoding for the tabular agent.

A percept is five cells, each EMPTY / CAN / WALL, so there are exactly
3**5 = 243 of them. The encoder enumerates every one of them in a fixed
nested order and gives each a dense row index into the Q-table.

Percepts that can never be observed (e.g. current == WALL) still get a row;
that keeps the mapping total and identical for every agent that builds it.

This encoder is intentionally *pure*:
  - it does not depend on any environment instance
  - it never changes after construction
"""

from __future__ import annotations

import itertools
from types import MappingProxyType
from typing import Iterator, List, Mapping

from environment.constants import Cell
from environment.types import Percept

N_PERCEPTS: int = len(Cell) ** len(Percept._fields)


def all_percepts() -> List[Percept]:
    """Every percept, in index order.

    The last field (west) varies fastest, the first (current) slowest.
    """
    return [Percept(*cells) for cells in itertools.product(Cell, repeat=len(Percept._fields))]


class PerceptEncoder:
    """Read-only bijection between percepts and row indices [0, 243)."""

    def __init__(self):
        self.percepts: tuple[Percept, ...] = tuple(all_percepts())
        self.index: Mapping[Percept, int] = MappingProxyType(
            {percept: i for i, percept in enumerate(self.percepts)}
        )

    def encode(self, percept: Percept) -> int:
        """Row index of `percept`."""
        return self.index[percept]

    def decode(self, index: int) -> Percept:
        return self.percepts[index]

    def __len__(self) -> int:
        return len(self.percepts)

    def __iter__(self) -> Iterator[Percept]:
        return iter(self.percepts)
