"""
Scanner

A scanner is the set of beacons it reports, in its own local frame.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Set

import numpy as np

from .rotations import RotationTransform
from .vector import Vector3, vectors_to_array


@dataclass
class Scanner:
    """Deduplicated beacon set of one scanner. Order of beacons is irrelevant."""

    scanner_id: int
    beacons: Set[Vector3] = field(default_factory=set)

    def __post_init__(self):
        # Accept any iterable; duplicates collapse
        self.beacons = set(self.beacons)

    @classmethod
    def from_points(cls, scanner_id: int, points: Iterable) -> Scanner:
        """Build a scanner from Vector3 instances or (x, y, z) integer triples."""
        beacons = set()
        for p in points:
            if isinstance(p, Vector3):
                beacons.add(p)
            else:
                x, y, z = p
                beacons.add(Vector3(int(x), int(y), int(z)))
        return cls(scanner_id, beacons)

    def __len__(self) -> int:
        return len(self.beacons)

    def transformed(self, rotation: RotationTransform, offset: Optional[Vector3] = None) -> Set[Vector3]:
        """Beacons mapped by `rotation` and then shifted by `offset`."""
        if offset is None:
            return {rotation.apply(b) for b in self.beacons}
        return {rotation.apply(b).add(offset) for b in self.beacons}

    def as_array(self) -> np.ndarray:
        """Beacons as a sorted (N, 3) int64 array."""
        return vectors_to_array(sorted(self.beacons))

    def copy(self) -> Scanner:
        return Scanner(self.scanner_id, set(self.beacons))
