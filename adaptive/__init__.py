"""Adaptive shell — cross-platform package installation."""

__version__ = "0.1.0"
