"""Simulation context owning the topology and every node's event table."""

from __future__ import annotations

from dataclasses import dataclass

from diffusion_walk.domain.event_table import EventTable
from diffusion_walk.domain.topology import GridTopology, Topology


@dataclass
class SensorNetwork:
    """A topology plus one event table per node, created empty."""

    topology: Topology
    tables: list[EventTable]

    @classmethod
    def from_topology(cls, topology: Topology) -> SensorNetwork:
        return cls(topology=topology, tables=[EventTable() for _ in range(topology.node_count)])

    @classmethod
    def grid(cls, length: int, width: int) -> SensorNetwork:
        return cls.from_topology(GridTopology.create(length, width))

    @property
    def node_count(self) -> int:
        return self.topology.node_count

    def table(self, node_id: int) -> EventTable:
        self.topology.check_node(node_id)
        return self.tables[node_id]

    def nodes_with_event(self, event_id: int) -> list[int]:
        """Return ids of nodes whose table holds a record for *event_id*."""
        return [node_id for node_id, table in enumerate(self.tables) if table.contains(event_id)]
