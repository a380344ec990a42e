"""Diligence CLI - recurring task engine with a local SQLite vault."""

__version__ = "0.3.0"
