"""
Tests for incremental scanner merging.
"""

from pathlib import Path

import numpy as np
import pytest

from beacon_registration.acceleration.parallel_executor import MatchParallelExecutor
from beacon_registration.alignment.matcher import BeaconMatcher
from beacon_registration.alignment.merger import NoConvergenceError, ScannerMerger, combine_scanners
from beacon_registration.analysis.queries import max_manhattan_distance, unique_beacon_count
from beacon_registration.geometry.rotations import IDENTITY
from beacon_registration.geometry.scanner import Scanner
from beacon_registration.geometry.vector import Vector3
from beacon_registration.preprocessing.loader import ScannerLoader

DATA_DIR = Path(__file__).parent / "data"

EXPECTED_POSITIONS = [
    Vector3(0, 0, 0),
    Vector3(68, -1246, -43),
    Vector3(1105, -1205, 1229),
    Vector3(-92, -2380, -20),
    Vector3(-20, -1133, 1061),
]


@pytest.fixture
def example_scanners():
    return ScannerLoader().load(str(DATA_DIR / "example_scanners.txt"))


class TestCanonicalExample:

    def test_unique_beacon_count(self, example_scanners):
        result = combine_scanners(example_scanners)
        assert unique_beacon_count(result) == 79
        assert result.unique_beacon_count == 79

    def test_scanner_positions(self, example_scanners):
        result = combine_scanners(example_scanners)
        assert result.positions == EXPECTED_POSITIONS
        assert result.rotations[0] == IDENTITY

    def test_max_manhattan_distance(self, example_scanners):
        result = combine_scanners(example_scanners)
        assert max_manhattan_distance(result.positions) == 3621

    def test_merge_order_and_passes(self, example_scanners):
        result = combine_scanners(example_scanners)
        # Scanner 2 only overlaps scanner 4, which joins later in the first pass
        assert result.merge_order == [0, 1, 3, 4, 2]
        assert result.passes == 2

    def test_input_is_not_modified(self, example_scanners):
        before = [set(s.beacons) for s in example_scanners]
        combine_scanners(example_scanners)
        assert [s.beacons for s in example_scanners] == before

    def test_rotations_map_scanners_into_global_frame(self, example_scanners):
        result = combine_scanners(example_scanners)
        for scanner, rotation, position in zip(example_scanners, result.rotations, result.positions):
            assert scanner.transformed(rotation, position) <= result.beacons

    def test_best_strategy_agrees(self, example_scanners):
        result = combine_scanners(example_scanners, strategy="best")
        assert unique_beacon_count(result) == 79
        assert result.positions == EXPECTED_POSITIONS


def test_two_scanner_fixture():
    scanners = ScannerLoader().load(str(DATA_DIR / "two_scanners.txt"))

    result = combine_scanners(scanners)

    assert [len(s) for s in scanners] == [30, 34]
    assert unique_beacon_count(result) == 52
    assert result.positions[1] == Vector3(-830, 412, 1157)
    assert max_manhattan_distance(result.positions) == 2399


def test_duplicate_scanner_is_idempotent(example_scanners):
    once = combine_scanners(example_scanners)
    twice = combine_scanners(example_scanners + [example_scanners[3].copy()])

    assert unique_beacon_count(twice) == unique_beacon_count(once)
    assert twice.positions[5] == twice.positions[3]


def test_single_scanner(example_scanners):
    result = combine_scanners(example_scanners[:1])

    assert result.beacons == example_scanners[0].beacons
    assert result.positions == [Vector3(0, 0, 0)]
    assert result.passes == 0


def test_empty_input():
    with pytest.raises(ValueError):
        combine_scanners([])


class TestNoConvergence:

    def test_disconnected_scanner_fails_fast(self, example_scanners):
        rng = np.random.default_rng(5)
        island = Scanner.from_points(99, [rng.integers(-1000, 1001, size=3) for _ in range(25)])

        with pytest.raises(NoConvergenceError) as excinfo:
            combine_scanners(example_scanners + [island])

        assert excinfo.value.unresolved == [99]

    def test_pass_limit(self, example_scanners):
        # Scanner 2 needs a second pass
        with pytest.raises(NoConvergenceError) as excinfo:
            combine_scanners(example_scanners, max_passes=1)
        assert excinfo.value.unresolved == [2]

    def test_no_convergence_is_runtime_error(self):
        a = Scanner(0, [Vector3(i, 0, 0) for i in range(3)])
        b = Scanner(1, [Vector3(100 * i, 7, 9) for i in range(1, 4)])
        with pytest.raises(RuntimeError):
            ScannerMerger(BeaconMatcher(threshold=3)).combine([a, b])


class TestParallelMerge:

    def test_parallel_passes_reach_same_result(self, example_scanners):
        executor = MatchParallelExecutor(n_workers=2)

        result = combine_scanners(example_scanners, executor=executor)

        assert unique_beacon_count(result) == 79
        assert result.positions == EXPECTED_POSITIONS
        assert max_manhattan_distance(result.positions) == 3621

    def test_snapshot_needs_more_passes(self, example_scanners):
        # Against a snapshot only scanner 1 can join in pass 1
        result = combine_scanners(example_scanners, executor=MatchParallelExecutor(n_workers=2))
        assert result.merge_order[:2] == [0, 1]
        assert result.passes == 3

    def test_single_worker_executor(self, example_scanners):
        result = combine_scanners(example_scanners, executor=MatchParallelExecutor(n_workers=1))
        assert unique_beacon_count(result) == 79
