"""Single-run orchestration: build the grid, spread the agent, then search."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from random import Random
from typing import cast

from diffusion_walk.config.constants import MAX_RENDER_DIMENSION
from diffusion_walk.config.types import RunSummary, SimulationConfig
from diffusion_walk.domain.network import SensorNetwork
from diffusion_walk.domain.selection import (
    RandomNeighborPicker,
    choose_agent_origin,
    choose_sink,
)
from diffusion_walk.domain.topology import GridTopology
from diffusion_walk.io.trace import TraceRecord, TraceSink
from diffusion_walk.simulation.agent import propagate_agent
from diffusion_walk.simulation.search import SearchResult, propagate_search

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationRun:
    """Everything one simulation produced, network state included."""

    config: SimulationConfig
    network: SensorNetwork
    event_area: tuple[int, ...]
    agent_origin: int
    sink_node: int
    agent_trace: tuple[TraceRecord, ...]
    search: SearchResult

    @property
    def topology(self) -> GridTopology:
        return cast(GridTopology, self.network.topology)

    def summary(self, run_id: str) -> RunSummary:
        return RunSummary(
            run_id=run_id,
            seed=self.config.seed,
            agent_origin=self.agent_origin,
            sink_node=self.sink_node,
            found=self.search.found,
            intersection=self.search.intersection,
            route_length=len(self.search.route),
            search_hops=self.search.hops,
            nodes_with_event=len(self.network.nodes_with_event(self.config.event_id)),
        )


def run_simulation(
    config: SimulationConfig,
    *,
    sink: TraceSink | None = None,
    rng: Random | None = None,
    announce: Callable[[str], None] | None = None,
) -> SimulationRun:
    """Run one agent walk followed by one search walk on a fresh grid.

    A single ``Random`` (seeded from ``config.seed`` unless *rng* is given)
    drives the event placement, both walks and the sink choice. *announce*,
    when given, receives one line per milestone before the walk it introduces.
    """
    if rng is None:
        rng = Random(config.seed)
    if max(config.length, config.width) > MAX_RENDER_DIMENSION:
        logger.warning(
            "grid %sx%s exceeds %s; console drawing will not line up",
            config.length,
            config.width,
            MAX_RENDER_DIMENSION,
        )
    topology = GridTopology.create(config.length, config.width)
    network = SensorNetwork.from_topology(topology)
    picker = RandomNeighborPicker(rng)

    event_area, origin = choose_agent_origin(topology, rng)
    logger.info("event sensed by nodes %s; node %s emits the agent", event_area, origin)
    if announce is not None:
        announce(f"Event sensed by nodes {', '.join(str(n) for n in event_area)}")
        announce(f"Node {origin} emits the agent message")
    agent_trace = propagate_agent(
        network,
        origin,
        config.event_id,
        picker=picker,
        ttl_max=config.ttl_max,
        sink=sink,
    )

    sink_node = choose_sink(topology, rng)
    logger.info("sink node %s searches for event %s", sink_node, config.event_id)
    if announce is not None:
        announce(f"Sink node is {sink_node}")
    search = propagate_search(
        network,
        sink_node,
        config.event_id,
        picker=picker,
        ttl_max=config.ttl_max,
        sink=sink,
    )
    if search.found:
        logger.info("intersection at node %s, route %s", search.intersection, search.route)
    else:
        logger.info("search from node %s found no intersection", sink_node)

    return SimulationRun(
        config=config,
        network=network,
        event_area=tuple(event_area),
        agent_origin=origin,
        sink_node=sink_node,
        agent_trace=tuple(agent_trace),
        search=search,
    )
