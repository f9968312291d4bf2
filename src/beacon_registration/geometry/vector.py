"""
Integer 3D Vectors

Exact integer vector arithmetic used for beacon coordinates, scanner positions
and rotation rows. Alignments must reproduce beacon coordinates exactly, so no
floating point is involved anywhere.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

import numpy as np


@dataclass(frozen=True, order=True)
class Vector3:
    """Immutable integer vector, ordered lexicographically on (x, y, z)."""

    x: int
    y: int
    z: int

    def add(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def subtract(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def dot(self, other: Vector3) -> int:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector3) -> Vector3:
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def negate(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def __add__(self, other: Vector3) -> Vector3:
        return self.add(other)

    def __sub__(self, other: Vector3) -> Vector3:
        return self.subtract(other)

    def __neg__(self) -> Vector3:
        return self.negate()

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.x, self.y, self.z)

    @classmethod
    def zero(cls) -> Vector3:
        return cls(0, 0, 0)


def manhattan_distance(a: Vector3, b: Vector3) -> int:
    """Sum of absolute coordinate differences between two vectors."""
    return abs(a.x - b.x) + abs(a.y - b.y) + abs(a.z - b.z)


def vectors_to_array(vectors: Iterable[Vector3]) -> np.ndarray:
    """
    Stack vectors into an (N, 3) int64 array.

    Args:
        vectors: Any iterable of Vector3 (order is preserved)

    Returns:
        (N, 3) array; shape (0, 3) when empty
    """
    rows = [v.as_tuple() for v in vectors]
    if not rows:
        return np.empty((0, 3), dtype=np.int64)
    return np.asarray(rows, dtype=np.int64)


def array_to_vectors(points: np.ndarray) -> List[Vector3]:
    """Convert an (N, 3) integer array back to Vector3 instances."""
    points = np.asarray(points)
    if points.size == 0:
        return []
    if points.ndim != 2 or points.shape[1] != 3:
        raise ValueError(f"Expected an (N, 3) array, got shape {points.shape}")
    return [Vector3(int(x), int(y), int(z)) for x, y, z in points.tolist()]
