"""Retention cleanup for GitHub deployment tracking boards."""

__version__ = "0.1.0"
