"""Repository interfaces for Diligence CLI.

Abstract base classes defining the persistence contract (the "Ports").
The SQLite implementation lives in ``diligence_cli.adapters.sqlite``.
"""

from .repository import TaskRepository

__all__ = ["TaskRepository"]
