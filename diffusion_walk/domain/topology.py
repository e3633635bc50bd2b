"""Grid topology provider for the sensor network.

Node ids are row-major indices into a ``length x width`` grid. Each node is
linked to its up/left/right/down neighbours, clipped at the grid edges; the
neighbour relation is fixed once the topology is built.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import networkx as nx


class TopologyError(ValueError):
    """Raised when a topology cannot support a random walk."""


@dataclass(frozen=True)
class Topology:
    """Immutable adjacency lists indexed by node id."""

    neighbor_lists: tuple[tuple[int, ...], ...]

    @classmethod
    def from_lists(cls, neighbor_lists: Sequence[Sequence[int]]) -> Topology:
        return cls(neighbor_lists=tuple(tuple(n) for n in neighbor_lists))

    @property
    def node_count(self) -> int:
        return len(self.neighbor_lists)

    def neighbors(self, node_id: int) -> tuple[int, ...]:
        """Return the ordered neighbour ids of *node_id*."""
        self.check_node(node_id)
        return self.neighbor_lists[node_id]

    def check_node(self, node_id: int) -> None:
        if not 0 <= node_id < self.node_count:
            raise ValueError(f"node id {node_id} outside [0, {self.node_count})")

    def validate(self) -> None:
        """Reject topologies with isolated nodes, dangling ids or one-way links.

        Raises :exc:`TopologyError` on the first violation found.
        """
        if self.node_count == 0:
            raise TopologyError("topology has no nodes")
        for node_id, neighbors in enumerate(self.neighbor_lists):
            if not neighbors:
                raise TopologyError(f"node {node_id} has no neighbors")
            for other in neighbors:
                if not 0 <= other < self.node_count:
                    raise TopologyError(f"node {node_id} lists out-of-range neighbor {other}")
                if other == node_id:
                    raise TopologyError(f"node {node_id} lists itself as a neighbor")
                if node_id not in self.neighbor_lists[other]:
                    raise TopologyError(f"neighbor relation {node_id} -> {other} is not symmetric")

    def as_graph(self) -> nx.Graph:
        """Return an undirected networkx view of the adjacency."""
        graph = nx.Graph()
        graph.add_nodes_from(range(self.node_count))
        for node_id, neighbors in enumerate(self.neighbor_lists):
            graph.add_edges_from((node_id, other) for other in neighbors)
        return graph


@dataclass(frozen=True)
class GridTopology(Topology):
    """Rectangular 4-connected grid of ``length`` rows and ``width`` columns."""

    length: int = 0
    width: int = 0

    @classmethod
    def create(cls, length: int, width: int) -> GridTopology:
        """Build the grid; neighbour order is up, left, right, down."""
        if length < 1 or width < 1:
            raise ValueError("grid dimensions must be >= 1")
        neighbor_lists = tuple(
            _grid_neighbors(node_id, length, width) for node_id in range(length * width)
        )
        return cls(neighbor_lists=neighbor_lists, length=length, width=width)

    @property
    def grid_dimensions(self) -> tuple[int, int]:
        return self.length, self.width

    def position(self, node_id: int) -> tuple[int, int]:
        """Return the ``(row, column)`` coordinates of *node_id*."""
        self.check_node(node_id)
        return node_id // self.width, node_id % self.width

    def event_area(self, node_id: int) -> list[int]:
        """Return the nodes that sense an event at *node_id*.

        The area is the node itself plus its in-grid 4-neighbourhood, ordered
        up, left, self, right, down.
        """
        self.check_node(node_id)
        up, left, right, down = _grid_cells(node_id, self.length, self.width)
        return [cell for cell in (up, left, node_id, right, down) if cell is not None]


def _grid_cells(
    node_id: int, length: int, width: int
) -> tuple[int | None, int | None, int | None, int | None]:
    """Return the (up, left, right, down) cells of *node_id*; None when clipped."""
    row, col = divmod(node_id, width)
    up = node_id - width if row > 0 else None
    left = node_id - 1 if col > 0 else None
    right = node_id + 1 if col < width - 1 else None
    down = node_id + width if row < length - 1 else None
    return up, left, right, down


def _grid_neighbors(node_id: int, length: int, width: int) -> tuple[int, ...]:
    return tuple(cell for cell in _grid_cells(node_id, length, width) if cell is not None)
