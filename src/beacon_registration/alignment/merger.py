"""
Incremental Scanner Merging

Folds every scanner into the frame of the first one. Each pass tries to match
every still-pending scanner against the growing global base; a successful match
adds the transformed beacons to the base and fixes the scanner's position.

The loop stops when no scanner is pending. A pass that merges nothing means the
overlap graph is disconnected, which raises NoConvergenceError instead of
looping forever.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Set

from ..acceleration.parallel_executor import MatchParallelExecutor
from ..geometry.rotations import IDENTITY, RotationTransform
from ..geometry.scanner import Scanner
from ..geometry.vector import Vector3
from ..utils.logging import setup_logger
from .matcher import BeaconMatcher, MatchResult

logger = setup_logger(__name__)


class NoConvergenceError(RuntimeError):
    """Raised when merge passes stop making progress or exceed the pass cap."""

    def __init__(self, message: str, unresolved: Sequence[int]):
        super().__init__(message)
        self.unresolved = list(unresolved)


@dataclass
class RegistrationResult:
    """
    Outcome of merging all scanners.

    positions and rotations are indexed like the input scanner list; position i
    is scanner i's origin in the global frame and rotation i maps its local
    coordinates into that frame.
    """

    beacons: Set[Vector3]
    positions: List[Vector3]
    rotations: List[RotationTransform]
    merge_order: List[int] = field(default_factory=list)
    passes: int = 0

    @property
    def unique_beacon_count(self) -> int:
        return len(self.beacons)


def _match_against_base(candidate: Scanner, *, base: Scanner, matcher: BeaconMatcher) -> Optional[MatchResult]:
    """Pool worker: match one pending scanner against a base snapshot."""
    return matcher.find_match(base, candidate)


class ScannerMerger:
    """
    Drive repeated matching passes until every scanner is placed.

    Example:
        merger = ScannerMerger(BeaconMatcher(threshold=12))
        result = merger.combine(scanners)
    """

    def __init__(
        self,
        matcher: Optional[BeaconMatcher] = None,
        *,
        max_passes: Optional[int] = None,
        executor: Optional[MatchParallelExecutor] = None,
    ):
        """
        Args:
            matcher: Pairwise matcher (default BeaconMatcher(threshold=12))
            max_passes: Optional hard cap on passes. Without it the loop is
                bounded by the zero-progress check alone.
            executor: Optional parallel executor. When set, every pass matches
                against a snapshot of the base and commits results afterwards.
        """
        self.matcher = matcher or BeaconMatcher()
        self.max_passes = max_passes
        self.executor = executor

    def combine(self, scanners: Sequence[Scanner]) -> RegistrationResult:
        """
        Merge all scanners into the frame of scanners[0].

        Args:
            scanners: Parsed scanners; the input is not modified

        Returns:
            RegistrationResult

        Raises:
            ValueError: If no scanners are given
            NoConvergenceError: If some scanners cannot be aligned
        """
        if not scanners:
            raise ValueError("No scanners to combine")

        n = len(scanners)
        base = scanners[0].copy()
        positions: List[Optional[Vector3]] = [None] * n
        rotations: List[Optional[RotationTransform]] = [None] * n
        positions[0] = Vector3.zero()
        rotations[0] = IDENTITY
        merge_order = [0]

        pending = list(range(1, n))
        passes = 0
        logger.info(
            f"Combining {n} scanners (threshold={self.matcher.threshold}, "
            f"strategy={self.matcher.strategy})"
        )

        while pending:
            if self.max_passes is not None and passes >= self.max_passes:
                raise NoConvergenceError(
                    f"Pass limit of {self.max_passes} reached with {len(pending)} scanner(s) unresolved: "
                    f"{self._ids(scanners, pending)}",
                    self._ids(scanners, pending),
                )
            passes += 1
            logger.info(f"Pass {passes}: considering {len(pending)} scanners")

            merged_this_pass = []
            for idx, result in self._run_pass(base, scanners, pending):
                if result is None:
                    continue
                base.beacons |= result.apply(scanners[idx].beacons)
                positions[idx] = result.offset
                rotations[idx] = result.rotation
                merged_this_pass.append(idx)
                merge_order.append(idx)
                logger.debug(
                    f"Merged scanner {scanners[idx].scanner_id} at {result.offset.as_tuple()} "
                    f"({result.matches} coincident beacons)"
                )

            if not merged_this_pass:
                unresolved = self._ids(scanners, pending)
                raise NoConvergenceError(
                    f"No scanner could be aligned in pass {passes}; "
                    f"overlap graph is disconnected for scanners {unresolved}",
                    unresolved,
                )

            merged = set(merged_this_pass)
            pending = [i for i in pending if i not in merged]
            logger.info(
                f"Pass {passes} finished: merged {len(merged_this_pass)}, "
                f"{len(pending)} pending, {len(base)} beacons in base"
            )

        logger.info(f"All {n} scanners merged in {passes} pass(es): {len(base)} unique beacons")
        return RegistrationResult(
            beacons=base.beacons,
            positions=positions,
            rotations=rotations,
            merge_order=merge_order,
            passes=passes,
        )

    def _run_pass(self, base: Scanner, scanners: Sequence[Scanner], pending: List[int]):
        """Yield (index, MatchResult or None) for a snapshot of the pending indices."""
        snapshot = list(pending)
        if self.executor is None:
            # Sequential: later attempts see beacons merged earlier in this pass
            for idx in snapshot:
                yield idx, self.matcher.find_match(base, scanners[idx])
            return

        frozen_base = base.copy()
        results = self.executor.map_candidates(
            candidates=[scanners[i] for i in snapshot],
            worker_fn=_match_against_base,
            worker_kwargs={"base": frozen_base, "matcher": self.matcher},
        )
        yield from zip(snapshot, results)

    @staticmethod
    def _ids(scanners: Sequence[Scanner], indices: Sequence[int]) -> List[int]:
        return [scanners[i].scanner_id for i in indices]


def combine_scanners(
    scanners: Sequence[Scanner],
    *,
    threshold: int = 12,
    strategy: str = "first",
    max_passes: Optional[int] = None,
    executor: Optional[MatchParallelExecutor] = None,
) -> RegistrationResult:
    """
    Merge scanners into one global beacon set.

    Args:
        scanners: Parsed scanners, scanners[0] defines the global frame
        threshold: Minimum coincident beacons to accept an alignment
        strategy: 'first' or 'best' (see BeaconMatcher)
        max_passes: Optional cap on merge passes
        executor: Optional MatchParallelExecutor

    Returns:
        RegistrationResult
    """
    matcher = BeaconMatcher(threshold=threshold, strategy=strategy)
    return ScannerMerger(matcher, max_passes=max_passes, executor=executor).combine(scanners)
