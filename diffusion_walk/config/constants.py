"""Centralized protocol and simulation constants.

Consuming modules should import from this module rather than defining
their own inline literals.
"""

from __future__ import annotations

GRID_LENGTH = 7
"""Default number of grid rows."""

GRID_WIDTH = 7
"""Default number of grid columns."""

TTL_MAX = 15
"""Hop budget of agent and search messages; a walk visits TTL_MAX + 1 nodes."""

DEFAULT_EVENT_ID = 0
"""Label of the sensed event in a single simulation."""

MAX_RENDER_DIMENSION = 10
"""Largest grid side that still lines up in the console drawing."""

FLUSH_THRESHOLD = 8_192
"""Flush trace rows to Parquet once this in-memory row count is reached."""

MAX_BATCH_RUNS = 1_000_000
"""Safety cap on the number of simulations in one batch."""
