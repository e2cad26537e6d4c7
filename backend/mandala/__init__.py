"""Mandala wheel geometry engine."""

__version__ = "0.1.0"
