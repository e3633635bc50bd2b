"""Visualization layer: console grid drawing, walk figures, and themes."""

from diffusion_walk.viz.render import render_grid_text, render_walks
from diffusion_walk.viz.theme import DEFAULT_THEME, PAPER_THEME, REGISTERED_THEMES, Theme, get_theme

__all__ = [
    "DEFAULT_THEME",
    "PAPER_THEME",
    "REGISTERED_THEMES",
    "Theme",
    "get_theme",
    "render_grid_text",
    "render_walks",
]
