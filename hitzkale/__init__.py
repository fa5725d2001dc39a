"""Hitzkale - explore Basque words by base and by suffix."""

__version__ = "0.1.0"
