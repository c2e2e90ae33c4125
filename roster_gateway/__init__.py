"""Roster Gateway — cached member directory and leader authentication."""

__version__ = "1.0.0"
