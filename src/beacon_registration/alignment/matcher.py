"""
Pairwise Beacon Matching

Finds the rigid transform (cube rotation + integer translation) that places a
candidate scanner's beacons onto a base beacon set with at least `threshold`
coincident beacons.

For every rotation R the candidate is rotated and every base/candidate beacon
pair proposes the offset b - R(c). Both beacon sets are duplicate-free, so the
number of pairs proposing an offset equals the overlap that offset produces.
Offsets are counted in one vectorized pass with np.unique.

Strategies:
- first: first qualifying hypothesis wins (rotation order, then lexicographic offset)
- best: all rotations are scored and the largest overlap wins (earliest on ties)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Set, Tuple

import numpy as np

from ..geometry.rotations import ROTATIONS, RotationTransform
from ..geometry.scanner import Scanner
from ..geometry.vector import Vector3
from ..utils.logging import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class MatchResult:
    offset: Vector3
    rotation: RotationTransform
    matches: int

    def apply(self, beacons: Iterable[Vector3]) -> Set[Vector3]:
        """Map candidate-frame beacons into the base frame."""
        return {self.rotation.apply(b).add(self.offset) for b in beacons}


def count_overlap(
    base: Set[Vector3],
    candidate: Iterable[Vector3],
    rotation: RotationTransform,
    offset: Vector3,
) -> int:
    """Number of transformed candidate beacons that coincide with base beacons."""
    return sum(1 for c in candidate if rotation.apply(c).add(offset) in base)


@dataclass
class BeaconMatcher:
    threshold: int = 12
    strategy: str = "first"  # first | best

    def __post_init__(self):
        if self.threshold < 1:
            raise ValueError(f"Overlap threshold must be >= 1, got {self.threshold}")
        if self.strategy not in ("first", "best"):
            raise ValueError(f"Unknown match strategy '{self.strategy}'. Choose 'first' or 'best'.")

    def find_match(self, base: Scanner, candidate: Scanner) -> Optional[MatchResult]:
        """
        Search for an alignment of `candidate` onto `base`.

        Args:
            base: Scanner whose frame is the target frame
            candidate: Scanner to align

        Returns:
            MatchResult with the verified overlap count, or None if no rotation and
            offset produce at least `threshold` coincident beacons
        """
        if len(base) == 0 or len(candidate) == 0:
            logger.debug(f"Scanner {candidate.scanner_id}: empty beacon set, no match possible")
            return None
        if len(candidate) < self.threshold or len(base) < self.threshold:
            return None

        base_pts = base.as_array()
        cand_pts = candidate.as_array()

        best: Optional[Tuple[int, Vector3, RotationTransform]] = None
        for rotation in ROTATIONS:
            hit = self._best_offset(base_pts, rotation.apply_array(cand_pts))
            if hit is None:
                continue
            votes, offset = hit
            if self.strategy == "first":
                best = (votes, offset, rotation)
                break
            if best is None or votes > best[0]:
                best = (votes, offset, rotation)

        if best is None:
            logger.debug(
                f"Scanner {candidate.scanner_id}: no alignment with >= {self.threshold} "
                f"coincident beacons against {len(base)} base beacons"
            )
            return None

        votes, offset, rotation = best
        matches = count_overlap(base.beacons, candidate.beacons, rotation, offset)
        if matches != votes:
            # Vote count and set intersection must agree for duplicate-free sets
            raise RuntimeError(
                f"Overlap verification failed for scanner {candidate.scanner_id}: "
                f"{votes} votes vs {matches} coincident beacons"
            )
        return MatchResult(offset=offset, rotation=rotation, matches=matches)

    def _best_offset(self, base_pts: np.ndarray, rotated: np.ndarray) -> Optional[Tuple[int, Vector3]]:
        """
        Count offset hypotheses b - c' for one rotation.

        Returns:
            (votes, offset) of the selected qualifying hypothesis, or None
        """
        diffs = (base_pts[:, None, :] - rotated[None, :, :]).reshape(-1, 3)
        offsets, counts = np.unique(diffs, axis=0, return_counts=True)
        qualifying = np.flatnonzero(counts >= self.threshold)
        if qualifying.size == 0:
            return None
        if self.strategy == "first":
            idx = int(qualifying[0])
        else:
            idx = int(qualifying[np.argmax(counts[qualifying])])
        x, y, z = (int(v) for v in offsets[idx])
        return int(counts[idx]), Vector3(x, y, z)


def find_match(base: Scanner, candidate: Scanner, threshold: int = 12, *, strategy: str = "first") -> Optional[MatchResult]:
    """Functional shortcut for BeaconMatcher(threshold, strategy).find_match."""
    return BeaconMatcher(threshold=threshold, strategy=strategy).find_match(base, candidate)
