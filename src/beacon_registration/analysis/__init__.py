"""
Analysis Module

Queries over merged registration results.
"""

from .queries import unique_beacon_count, max_manhattan_distance

__all__ = [
    "unique_beacon_count",
    "max_manhattan_distance",
]
