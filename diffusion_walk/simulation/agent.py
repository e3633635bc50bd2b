"""Agent propagation: the random walk that spreads an event's breadcrumbs."""

from __future__ import annotations

import logging

from diffusion_walk.config.constants import TTL_MAX
from diffusion_walk.domain.event_table import AgentMessage, EventRecord
from diffusion_walk.domain.network import SensorNetwork
from diffusion_walk.domain.selection import NeighborPicker
from diffusion_walk.io.trace import Phase, TraceRecord, TraceSink
from diffusion_walk.simulation.walk import RandomWalk

logger = logging.getLogger(__name__)


def propagate_agent(
    network: SensorNetwork,
    start_node: int,
    event_id: int,
    *,
    picker: NeighborPicker,
    ttl_max: int = TTL_MAX,
    sink: TraceSink | None = None,
) -> list[TraceRecord]:
    """Walk an agent message from *start_node*, updating every visited event table.

    Every iteration picks a neighbour (the last one included), deposits
    ``{event_id, jumps, next}`` at the current node via insert-or-improve, and
    reports the hop. The walk visits exactly ``ttl_max + 1`` nodes, repeats
    allowed. Returns the hop records in order.
    """
    walk = RandomWalk(network.topology, start_node, ttl_max)
    trace: list[TraceRecord] = []
    while not walk.finished:
        chosen = walk.choose(picker)
        message = AgentMessage(
            record=EventRecord(
                event_id=event_id,
                jumps_to_event=walk.jumps,
                next_neighbor_toward_event=walk.next_pointer(chosen),
            ),
            ttl=walk.ttl,
        )
        table = network.table(walk.current)
        table.upsert(message.record)
        record = TraceRecord(
            phase=Phase.AGENT,
            node_id=walk.current,
            event_id=message.event_id,
            jumps=message.jumps_to_event,
            next_pointer=message.next_neighbor_toward_event,
            ttl=message.ttl,
            table_snapshot=table.snapshot(),
        )
        logger.debug(
            "agent hop node=%s jumps=%s next=%s ttl=%s",
            record.node_id,
            record.jumps,
            record.next_pointer,
            record.ttl,
        )
        trace.append(record)
        if sink is not None:
            sink.record_hop(record)
        walk.advance(chosen)
    return trace
