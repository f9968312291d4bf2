"""
Cube Rotation Group

The 24 proper rotations that map the coordinate axes onto signed coordinate
axes. Each rotation is stored as three row vectors; applying it to a vector is
three dot products.

The group is built once at import time from ordered pairs of signed unit axes
(a, b) with c = a x b, which guarantees a right-handed frame. The construction
is checked before the table is published and a failed check raises
RotationGroupError.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .vector import Vector3


class RotationGroupError(RuntimeError):
    """Raised when the rotation table is not the 24-element proper rotation group."""


@dataclass(frozen=True)
class RotationTransform:
    """Linear map given by its rows (ex, ey, ez)."""

    ex: Vector3
    ey: Vector3
    ez: Vector3

    def apply(self, v: Vector3) -> Vector3:
        return Vector3(self.ex.dot(v), self.ey.dot(v), self.ez.dot(v))

    def __call__(self, v: Vector3) -> Vector3:
        return self.apply(v)

    def transpose(self) -> RotationTransform:
        """Transpose; for an orthogonal transform this is its inverse."""
        return RotationTransform(
            Vector3(self.ex.x, self.ey.x, self.ez.x),
            Vector3(self.ex.y, self.ey.y, self.ez.y),
            Vector3(self.ex.z, self.ey.z, self.ez.z),
        )

    def determinant(self) -> int:
        # Scalar triple product of the rows
        return self.ex.dot(self.ey.cross(self.ez))

    def as_matrix(self) -> np.ndarray:
        return np.array(
            [self.ex.as_tuple(), self.ey.as_tuple(), self.ez.as_tuple()],
            dtype=np.int64,
        )

    def apply_array(self, points: np.ndarray) -> np.ndarray:
        """Rotate an (N, 3) integer array of points."""
        if points.size == 0:
            return points
        return points @ self.as_matrix().T


IDENTITY = RotationTransform(Vector3(1, 0, 0), Vector3(0, 1, 0), Vector3(0, 0, 1))

# Order matters: it fixes the search order of the matcher, identity first.
AXES: Tuple[Vector3, ...] = (
    Vector3(1, 0, 0),
    Vector3(-1, 0, 0),
    Vector3(0, 1, 0),
    Vector3(0, -1, 0),
    Vector3(0, 0, 1),
    Vector3(0, 0, -1),
)


def build_rotation_group() -> Tuple[RotationTransform, ...]:
    """
    Enumerate the proper rotations of the cube and verify the result.

    Returns:
        Tuple of 24 distinct RotationTransform, identity first

    Raises:
        RotationGroupError: If the construction does not yield the expected group
    """
    rotations = []
    for a in AXES:
        for b in AXES:
            if b == a or b == a.negate():
                continue
            rotations.append(RotationTransform(a, b, a.cross(b)))

    verify_rotation_group(rotations)
    return tuple(rotations)


def verify_rotation_group(rotations) -> None:
    """
    Check that `rotations` is exactly the 24-element proper rotation group.

    Raises:
        RotationGroupError: On size, duplicate, identity or handedness violations
    """
    if len(rotations) != 24:
        raise RotationGroupError(f"Expected 24 rotations, got {len(rotations)}")
    if len(set(rotations)) != len(rotations):
        raise RotationGroupError("Rotation table contains duplicate transforms")
    if IDENTITY not in rotations:
        raise RotationGroupError("Rotation table does not contain the identity")
    improper = [r for r in rotations if r.determinant() != 1]
    if improper:
        raise RotationGroupError(
            f"Rotation table contains {len(improper)} transform(s) with determinant != +1"
        )


ROTATIONS: Tuple[RotationTransform, ...] = build_rotation_group()
