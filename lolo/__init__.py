"""Lolo-style grid puzzle-chase simulation engine."""

__version__ = "0.1.0"
