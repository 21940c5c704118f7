"""LeeTracker: coding-practice tracker backend."""

__version__ = "0.1.0"
