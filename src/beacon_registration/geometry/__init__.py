"""
Geometry Module

Exact integer geometry for beacon registration:
- Vector3 value type and Manhattan distance
- The 24-element cube rotation group
- The Scanner beacon set
"""

from .vector import Vector3, manhattan_distance, vectors_to_array, array_to_vectors
from .rotations import (
    IDENTITY,
    ROTATIONS,
    RotationGroupError,
    RotationTransform,
    build_rotation_group,
    verify_rotation_group,
)
from .scanner import Scanner

__all__ = [
    "Vector3",
    "manhattan_distance",
    "vectors_to_array",
    "array_to_vectors",
    "IDENTITY",
    "ROTATIONS",
    "RotationGroupError",
    "RotationTransform",
    "build_rotation_group",
    "verify_rotation_group",
    "Scanner",
]
