"""Console and matplotlib renderings of the grid and of a simulation run."""

from __future__ import annotations

from pathlib import Path

import matplotlib
import matplotlib.pyplot as plt
import networkx as nx
import numpy as np
from matplotlib.colors import Colormap
from matplotlib.lines import Line2D

from diffusion_walk.domain.network import SensorNetwork
from diffusion_walk.domain.topology import GridTopology
from diffusion_walk.io.paths import resolve_within_base
from diffusion_walk.simulation.engine import SimulationRun
from diffusion_walk.viz.theme import DEFAULT_THEME, Theme

# ---------------------------------------------------------------------------
# Console drawing
# ---------------------------------------------------------------------------


def render_grid_text(topology: GridTopology) -> str:
    """Draw the grid with ``---`` links between columns and ``|`` between rows.

    Ids from 10 upward take two characters, so their link shrinks to ``--``;
    grids wider than 10 columns or with three-digit ids stop lining up.
    """
    length, width = topology.grid_dimensions
    lines: list[str] = []
    for row in range(length):
        parts: list[str] = []
        for col in range(width):
            node_id = row * width + col
            parts.append(str(node_id))
            if col != width - 1:
                parts.append("---" if node_id < 10 else "--")
        lines.append("".join(parts))
        if row != length - 1:
            lines.append("   ".join("|" * width))
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Walk figure
# ---------------------------------------------------------------------------


def _best_jumps_grid(network: SensorNetwork, topology: GridTopology, event_id: int) -> np.ndarray:
    """Return (length, width) float array of stored jumps; NaN where unknown."""
    grid = np.full(topology.grid_dimensions, np.nan)
    for node_id, table in enumerate(network.tables):
        record = table.get(event_id)
        if record is not None:
            grid[topology.position(node_id)] = record.jumps_to_event
    return grid


def _node_xy(
    topology: GridTopology, nodes: list[int] | tuple[int, ...]
) -> tuple[list[int], list[int]]:
    xs, ys = [], []
    for node_id in nodes:
        row, col = topology.position(node_id)
        xs.append(col)
        ys.append(row)
    return xs, ys


def _heat_cmap(theme: Theme) -> Colormap:
    return matplotlib.colormaps[theme.heat_cmap].with_extremes(bad=theme.empty_cell_color)


def render_walks(
    run: SimulationRun,
    output_path: Path,
    theme: Theme = DEFAULT_THEME,
    base_dir: Path | None = None,
) -> Path:
    """Draw the agent walk, search walk and recovered route of *run*.

    Cells are shaded by the jump count each node stores for the event.
    When *base_dir* is given, *output_path* must resolve inside it.
    """
    output_path = Path(output_path)
    if base_dir is not None:
        output_path = resolve_within_base(output_path, Path(base_dir))

    topology = run.topology
    length, width = topology.grid_dimensions
    event_id = run.config.event_id
    graph = topology.as_graph()
    pos = {node_id: topology.position(node_id)[::-1] for node_id in graph.nodes}

    fig, ax = plt.subplots(figsize=(max(4.0, width * 0.8), max(4.0, length * 0.8)))
    heat = _best_jumps_grid(run.network, topology, event_id)
    img = ax.imshow(heat, cmap=_heat_cmap(theme), origin="upper", aspect="equal")
    fig.colorbar(img, ax=ax, fraction=0.046, pad=0.04, label="jumps to event")

    nx.draw_networkx_edges(graph, pos, ax=ax, edge_color=theme.edge_color, width=1.0)
    nx.draw_networkx_nodes(graph, pos, ax=ax, node_size=30, node_color=theme.node_color)

    agent_nodes = [record.node_id for record in run.agent_trace]
    xs, ys = _node_xy(topology, agent_nodes)
    ax.plot(xs, ys, color=theme.agent_color, linewidth=2.0, alpha=0.8)

    # Search path in walk order: the route is reversed only on a hit.
    search_nodes = list(reversed(run.search.route)) if run.search.found else list(run.search.route)
    xs, ys = _node_xy(topology, search_nodes)
    ax.plot(xs, ys, color=theme.search_color, linewidth=2.0, alpha=0.8, linestyle="--")

    if run.search.found:
        xs, ys = _node_xy(topology, run.search.route)
        ax.plot(xs, ys, color=theme.route_color, linewidth=3.0)
        ix, iy = _node_xy(topology, [run.search.route[0]])
        ax.scatter(ix, iy, s=160, marker="*", color=theme.route_color, zorder=5)

    ox, oy = _node_xy(topology, [run.agent_origin])
    ax.scatter(ox, oy, s=120, marker="o", color=theme.origin_color, zorder=5)
    sx, sy = _node_xy(topology, [run.sink_node])
    ax.scatter(sx, sy, s=120, marker="s", color=theme.sink_color, zorder=5)

    handles = [
        Line2D([0], [0], color=theme.agent_color, linewidth=2, label="agent walk"),
        Line2D(
            [0], [0], color=theme.search_color, linewidth=2, linestyle="--", label="search walk"
        ),
        Line2D([0], [0], color=theme.route_color, linewidth=3, label="route to sink"),
        Line2D([0], [0], marker="o", color=theme.origin_color, linestyle="", label="agent origin"),
        Line2D([0], [0], marker="s", color=theme.sink_color, linestyle="", label="sink"),
    ]
    ax.legend(
        handles=handles,
        loc="upper center",
        bbox_to_anchor=(0.5, -0.04),
        ncol=3,
        fontsize=8,
        frameon=False,
    )
    outcome = f"found at node {run.search.intersection}" if run.search.found else "not found"
    ax.set_title(f"Event {event_id}: {outcome}", fontsize=10)
    ax.set_xticks(range(width))
    ax.set_yticks(range(length))

    fig.tight_layout()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
    return output_path
