"""TTL-bounded random walk shared by the agent and search engines.

A walk starts ``WALKING`` at its start node and visits at most ``ttl_max + 1``
nodes. ``HIT`` (search only) and ``EXPIRED`` are terminal.
"""

from __future__ import annotations

from enum import Enum

from diffusion_walk.domain.selection import NeighborPicker
from diffusion_walk.domain.topology import Topology


class WalkState(Enum):
    WALKING = "walking"
    HIT = "hit"
    EXPIRED = "expired"


class RandomWalk:
    """Position, hop budget and distance travelled of one message."""

    def __init__(self, topology: Topology, start_node: int, ttl_max: int) -> None:
        if ttl_max < 0:
            raise ValueError("ttl_max must be >= 0")
        topology.validate()
        topology.check_node(start_node)
        self.topology = topology
        self.current = start_node
        self.ttl = ttl_max
        self.jumps = 0
        self.state = WalkState.WALKING

    @property
    def finished(self) -> bool:
        return self.state is not WalkState.WALKING

    def choose(self, picker: NeighborPicker) -> int:
        """Ask *picker* for the next hop from the current node."""
        self._require_walking()
        neighbors = self.topology.neighbors(self.current)
        index = picker.pick(neighbors)
        if not 0 <= index < len(neighbors):
            raise ValueError(
                f"picker returned index {index} for {len(neighbors)} neighbors "
                f"of node {self.current}"
            )
        return neighbors[index]

    def next_pointer(self, chosen: int) -> int | None:
        """Forward pointer to record at this hop; None on the last hop."""
        return None if self.ttl == 0 else chosen

    def advance(self, chosen: int) -> None:
        """Spend one hop and move to *chosen*; expires when the TTL underflows."""
        self._require_walking()
        self.ttl -= 1
        self.jumps += 1
        if self.ttl < 0:
            self.state = WalkState.EXPIRED
            return
        self.current = chosen

    def hit(self) -> None:
        self._require_walking()
        self.state = WalkState.HIT

    def _require_walking(self) -> None:
        if self.finished:
            raise RuntimeError(f"walk already terminated ({self.state.value})")
