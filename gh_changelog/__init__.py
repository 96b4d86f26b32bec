"""Markdown changelog generation from GitHub milestones."""

__version__ = "0.1.0"
