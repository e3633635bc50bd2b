"""Experiments layer: seeded batch orchestration."""

from diffusion_walk.experiments.batch import run_batch, summarize_runs

__all__ = [
    "run_batch",
    "summarize_runs",
]
