"""Configuration layer: constants and typed config dataclasses."""

from diffusion_walk.config.constants import (
    DEFAULT_EVENT_ID,
    FLUSH_THRESHOLD,
    GRID_LENGTH,
    GRID_WIDTH,
    MAX_BATCH_RUNS,
    MAX_RENDER_DIMENSION,
    TTL_MAX,
)
from diffusion_walk.config.types import BatchConfig, RunSummary, SimulationConfig

__all__ = [
    "BatchConfig",
    "DEFAULT_EVENT_ID",
    "FLUSH_THRESHOLD",
    "GRID_LENGTH",
    "GRID_WIDTH",
    "MAX_BATCH_RUNS",
    "MAX_RENDER_DIMENSION",
    "RunSummary",
    "SimulationConfig",
    "TTL_MAX",
]
