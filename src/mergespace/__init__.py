"""Mergespace - measure how merge conflicts were resolved in history."""

__version__ = "0.1.0"
