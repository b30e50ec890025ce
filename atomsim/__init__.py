"""Bouncing-atoms simulation with a small Pillow-based drawing surface."""

__version__ = "0.1.0"
__all__ = ["drawing", "simulation"]