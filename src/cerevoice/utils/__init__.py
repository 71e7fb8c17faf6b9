"""Small helpers shared by the client and CLI."""
from .timeit import Timing, timeit

__all__ = ["Timing", "timeit"]
