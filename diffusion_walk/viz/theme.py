"""Colour theme for walk figures."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Theme:
    """Visual styling for :func:`diffusion_walk.viz.render.render_walks`."""

    name: str
    edge_color: str
    node_color: str
    agent_color: str
    search_color: str
    route_color: str
    origin_color: str
    sink_color: str
    heat_cmap: str
    empty_cell_color: str


DEFAULT_THEME = Theme(
    name="default",
    edge_color="#B0B0B0",
    node_color="#404040",
    agent_color="#E07A1F",
    search_color="#2F6DB5",
    route_color="#2CA02C",
    origin_color="#D62728",
    sink_color="#1F3B73",
    heat_cmap="YlOrRd_r",
    empty_cell_color="#F4F4F4",
)

PAPER_THEME = Theme(
    name="paper",
    edge_color="#CCCCCC",
    node_color="#000000",
    agent_color="#555555",
    search_color="#999999",
    route_color="#000000",
    origin_color="#000000",
    sink_color="#000000",
    heat_cmap="Greys_r",
    empty_cell_color="#FFFFFF",
)

REGISTERED_THEMES: dict[str, Theme] = {t.name: t for t in (DEFAULT_THEME, PAPER_THEME)}


def get_theme(name: str) -> Theme:
    """Return a registered theme by name."""
    try:
        return REGISTERED_THEMES[name]
    except KeyError as exc:
        valid = ", ".join(sorted(REGISTERED_THEMES))
        raise ValueError(f"theme must be one of {valid}") from exc
