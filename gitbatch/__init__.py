"""Batch git commands across the repositories that own a set of paths."""

__version__ = "0.1.0"
