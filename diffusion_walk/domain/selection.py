"""Neighbour selection and random placement of the event and sink."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from random import Random
from typing import Protocol

from diffusion_walk.domain.topology import GridTopology, TopologyError


class NeighborPicker(Protocol):
    """Source of the index of the next hop within a neighbour list."""

    def pick(self, neighbors: Sequence[int]) -> int: ...


class RandomNeighborPicker:
    """Uniform, memoryless choice driven by one seeded ``Random`` for the run."""

    def __init__(self, rng: Random) -> None:
        self.rng = rng

    def pick(self, neighbors: Sequence[int]) -> int:
        if not neighbors:
            raise TopologyError("cannot pick a neighbor from an empty list")
        return self.rng.randrange(len(neighbors))


class ScriptedNeighborPicker:
    """Replays a fixed sequence of indices, one per pick."""

    def __init__(self, indices: Iterable[int]) -> None:
        self._indices = list(indices)
        self._position = 0

    @property
    def remaining(self) -> int:
        return len(self._indices) - self._position

    def pick(self, neighbors: Sequence[int]) -> int:
        if not neighbors:
            raise TopologyError("cannot pick a neighbor from an empty list")
        if self._position >= len(self._indices):
            raise ValueError("scripted picker exhausted")
        index = self._indices[self._position]
        self._position += 1
        return index


class FirstNeighborPicker:
    """Always takes the first neighbour in list order."""

    def pick(self, neighbors: Sequence[int]) -> int:
        if not neighbors:
            raise TopologyError("cannot pick a neighbor from an empty list")
        return 0


def choose_agent_origin(topology: GridTopology, rng: Random) -> tuple[list[int], int]:
    """Pick a sensing node, its event area, and the area node that emits the agent.

    Returns ``(event_area, origin)``.
    """
    sensed_at = rng.randrange(topology.node_count)
    area = topology.event_area(sensed_at)
    return area, area[rng.randrange(len(area))]


def choose_sink(topology: GridTopology, rng: Random) -> int:
    """Pick the sink node uniformly over the whole grid."""
    return rng.randrange(topology.node_count)
