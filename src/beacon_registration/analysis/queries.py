"""
Registration Queries

Read-only answers computed from a merged registration result.
"""

from itertools import combinations
from typing import Sequence, Set, Union, TYPE_CHECKING

from ..geometry.vector import Vector3, manhattan_distance

if TYPE_CHECKING:
    from ..alignment.merger import RegistrationResult


def unique_beacon_count(result: Union["RegistrationResult", Set[Vector3]]) -> int:
    """Number of distinct beacons in the global frame."""
    beacons = getattr(result, "beacons", result)
    return len(beacons)


def max_manhattan_distance(positions: Sequence[Vector3]) -> int:
    """Largest Manhattan distance between any two scanner positions (0 if fewer than two)."""
    return max((manhattan_distance(a, b) for a, b in combinations(positions, 2)), default=0)
