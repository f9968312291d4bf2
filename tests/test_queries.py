"""
Tests for registration queries.
"""

from beacon_registration.analysis.queries import max_manhattan_distance, unique_beacon_count
from beacon_registration.geometry.vector import Vector3


def test_unique_beacon_count_accepts_sets():
    assert unique_beacon_count({Vector3(1, 2, 3), Vector3(1, 2, 3), Vector3(0, 0, 0)}) == 2
    assert unique_beacon_count(set()) == 0


def test_max_manhattan_distance():
    positions = [
        Vector3(0, 0, 0),
        Vector3(68, -1246, -43),
        Vector3(1105, -1205, 1229),
        Vector3(-92, -2380, -20),
        Vector3(-20, -1133, 1061),
    ]
    assert max_manhattan_distance(positions) == 3621


def test_max_manhattan_distance_small_inputs():
    assert max_manhattan_distance([]) == 0
    assert max_manhattan_distance([Vector3(5, 5, 5)]) == 0
    assert max_manhattan_distance([Vector3(1, 1, 1), Vector3(-1, -1, -1)]) == 6
