"""
Acceleration Module

Process-pool execution of the match attempts within a merge pass.
"""

from .parallel_executor import MatchParallelExecutor

__all__ = [
    "MatchParallelExecutor",
]
