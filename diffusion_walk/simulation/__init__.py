"""Simulation layer: walk state machine, agent and search engines, single runs."""

from diffusion_walk.simulation.agent import propagate_agent
from diffusion_walk.simulation.engine import SimulationRun, run_simulation
from diffusion_walk.simulation.search import SearchResult, propagate_search
from diffusion_walk.simulation.walk import RandomWalk, WalkState

__all__ = [
    "RandomWalk",
    "SearchResult",
    "SimulationRun",
    "WalkState",
    "propagate_agent",
    "propagate_search",
    "run_simulation",
]
