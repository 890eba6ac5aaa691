"""Maze Walker: decode maze images and walk them with the right-hand rule."""

__version__ = "1.0.0"
