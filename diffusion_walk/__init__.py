"""Agent/search random-walk event dissemination over a grid sensor network."""

__version__ = "0.1.0"
