"""Core graph container."""

from .graph import Graph

__all__ = [
    "Graph",
]
