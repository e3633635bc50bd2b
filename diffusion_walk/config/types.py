"""Configuration dataclasses and result containers for simulation runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from diffusion_walk.config.constants import (
    DEFAULT_EVENT_ID,
    GRID_LENGTH,
    GRID_WIDTH,
    MAX_BATCH_RUNS,
    TTL_MAX,
)

__all__ = [
    "BatchConfig",
    "RunSummary",
    "SimulationConfig",
]

# ---------------------------------------------------------------------------
# Result container
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RunSummary:
    """Top-level result for one simulated agent/search run."""

    run_id: str
    seed: int | None
    agent_origin: int
    sink_node: int
    found: bool
    intersection: int | None
    route_length: int
    search_hops: int
    nodes_with_event: int


# ---------------------------------------------------------------------------
# Config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SimulationConfig:
    """Grid shape and protocol knobs for one simulation."""

    length: int = GRID_LENGTH
    width: int = GRID_WIDTH
    ttl_max: int = TTL_MAX
    event_id: int = DEFAULT_EVENT_ID
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.length < 1:
            raise ValueError("length must be >= 1")
        if self.width < 1:
            raise ValueError("width must be >= 1")
        if self.length * self.width < 2:
            raise ValueError("grid must contain at least two nodes")
        if self.ttl_max < 0:
            raise ValueError("ttl_max must be >= 0")

    @property
    def node_count(self) -> int:
        return self.length * self.width


@dataclass(frozen=True)
class BatchConfig:
    """Seeded batch of independent simulations sharing one grid configuration."""

    n_runs: int = 100
    out_dir: Path = Path("data")
    base_seed: int = 0
    simulation: SimulationConfig = field(default_factory=SimulationConfig)

    def __post_init__(self) -> None:
        if self.n_runs < 1:
            raise ValueError("n_runs must be >= 1")
        if self.n_runs > MAX_BATCH_RUNS:
            raise ValueError("n_runs exceeds safety threshold")

    def run_config(self, index: int) -> SimulationConfig:
        """Return the simulation config of run *index* with its derived seed."""
        base = self.simulation
        return SimulationConfig(
            length=base.length,
            width=base.width,
            ttl_max=base.ttl_max,
            event_id=base.event_id,
            seed=self.base_seed + index,
        )
