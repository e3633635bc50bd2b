"""Search propagation: a sink's random walk looking for an event breadcrumb."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from diffusion_walk.config.constants import TTL_MAX
from diffusion_walk.domain.event_table import EventRecord
from diffusion_walk.domain.network import SensorNetwork
from diffusion_walk.domain.selection import NeighborPicker
from diffusion_walk.io.trace import Phase, SearchOutcome, TraceRecord, TraceSink
from diffusion_walk.simulation.walk import RandomWalk, WalkState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchResult:
    """Outcome of one search walk.

    When ``found`` the route runs from the intersection node back to the sink;
    otherwise it is the visited path in walk order.
    """

    found: bool
    route: tuple[int, ...]

    @property
    def intersection(self) -> int | None:
        return self.route[0] if self.found else None

    @property
    def hops(self) -> int:
        """Hops the search message travelled (zero for a hit at the sink)."""
        return len(self.route) - 1


def propagate_search(
    network: SensorNetwork,
    sink_node: int,
    event_id: int,
    *,
    picker: NeighborPicker,
    ttl_max: int = TTL_MAX,
    sink: TraceSink | None = None,
) -> SearchResult:
    """Walk a search message from *sink_node* until a table knows *event_id*.

    Each visited node is appended to the path and checked before the walk
    moves on, so a sink that already holds the event yields ``(True,
    [sink_node])``. Event tables are only read.
    """
    walk = RandomWalk(network.topology, sink_node, ttl_max)
    path: list[int] = []
    while not walk.finished:
        node_id = walk.current
        path.append(node_id)
        table = network.table(node_id)
        if table.contains(event_id):
            _report_hop(sink, walk, event_id, None, table.snapshot())
            walk.hit()
            break
        chosen = walk.choose(picker)
        _report_hop(sink, walk, event_id, walk.next_pointer(chosen), table.snapshot())
        walk.advance(chosen)

    found = walk.state is WalkState.HIT
    if found:
        path.reverse()
        logger.debug("search hit at node %s after %s hops", path[0], len(path) - 1)
    else:
        logger.debug("search from node %s expired without a hit", sink_node)
    result = SearchResult(found=found, route=tuple(path))
    if sink is not None:
        sink.record_outcome(SearchOutcome(event_id=event_id, found=found, route=result.route))
    return result


def _report_hop(
    sink: TraceSink | None,
    walk: RandomWalk,
    event_id: int,
    next_pointer: int | None,
    snapshot: tuple[EventRecord, ...],
) -> None:
    if sink is None:
        return
    sink.record_hop(
        TraceRecord(
            phase=Phase.SEARCH,
            node_id=walk.current,
            event_id=event_id,
            jumps=walk.jumps,
            next_pointer=next_pointer,
            ttl=walk.ttl,
            table_snapshot=snapshot,
        )
    )
