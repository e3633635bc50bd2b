"""Domain layer: topology, event tables, network context, neighbour selection."""

from diffusion_walk.domain.event_table import AgentMessage, EventRecord, EventTable
from diffusion_walk.domain.network import SensorNetwork
from diffusion_walk.domain.selection import (
    FirstNeighborPicker,
    NeighborPicker,
    RandomNeighborPicker,
    ScriptedNeighborPicker,
    choose_agent_origin,
    choose_sink,
)
from diffusion_walk.domain.topology import GridTopology, Topology, TopologyError

__all__ = [
    "AgentMessage",
    "EventRecord",
    "EventTable",
    "FirstNeighborPicker",
    "GridTopology",
    "NeighborPicker",
    "RandomNeighborPicker",
    "ScriptedNeighborPicker",
    "SensorNetwork",
    "Topology",
    "TopologyError",
    "choose_agent_origin",
    "choose_sink",
]
