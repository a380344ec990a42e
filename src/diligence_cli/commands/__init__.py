"""Command modules for the diligence CLI."""
