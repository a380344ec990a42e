"""Migration 1: the tasks table and its indexes."""

from diligence_cli.adapters.sqlite import schema

from .runner import Migration

initial_migration = Migration(
    version=1,
    description="Create tasks table",
    statements=(schema.CREATE_TASKS_TABLE, *schema.ALL_INDEXES),
)
