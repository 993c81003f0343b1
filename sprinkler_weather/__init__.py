"""Sprinkler weather adjustment service."""

__version__ = "0.1.0"
