"""Grassroots: a text-based football club management game."""

__version__ = "0.1.0"
