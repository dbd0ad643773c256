"""Keyed Labyrinth: shortest paths through mazes with keys and locked doors."""

__version__ = "1.0.0"
