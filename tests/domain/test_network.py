"""Tests for diffusion_walk.domain.network module."""

from __future__ import annotations

import pytest

from diffusion_walk.domain.event_table import EventRecord
from diffusion_walk.domain.network import SensorNetwork
from diffusion_walk.domain.topology import Topology


def test_grid_network_has_one_empty_table_per_node() -> None:
    network = SensorNetwork.grid(3, 4)
    assert network.node_count == 12
    assert len(network.tables) == 12
    assert all(len(table) == 0 for table in network.tables)


def test_tables_are_distinct_objects() -> None:
    network = SensorNetwork.grid(2, 2)
    network.table(0).upsert(EventRecord(0, 0, 1))
    assert network.table(1).contains(0) is False


def test_nodes_with_event() -> None:
    network = SensorNetwork.grid(2, 3)
    network.table(4).upsert(EventRecord(0, 1, None))
    network.table(1).upsert(EventRecord(0, 0, 4))
    network.table(2).upsert(EventRecord(7, 0, 5))
    assert network.nodes_with_event(0) == [1, 4]


def test_table_lookup_out_of_range() -> None:
    network = SensorNetwork.from_topology(Topology.from_lists([[1], [0]]))
    with pytest.raises(ValueError):
        network.table(2)
