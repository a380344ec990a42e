"""Utility helpers for Diligence CLI."""
