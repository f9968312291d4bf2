"""
Tests for the 24-element cube rotation group.
"""

import itertools

import numpy as np
import pytest

from beacon_registration.geometry.rotations import (
    IDENTITY,
    ROTATIONS,
    RotationGroupError,
    RotationTransform,
    build_rotation_group,
    verify_rotation_group,
)
from beacon_registration.geometry.vector import Vector3


def _rot(*rows) -> RotationTransform:
    return RotationTransform(*(Vector3(*r) for r in rows))


SAMPLE_VECTORS = [
    Vector3(0, 0, 0),
    Vector3(1, 2, 3),
    Vector3(-404, 588, -901),
    Vector3(7, -33, -71),
]


class TestRotationGroup:

    def test_group_has_24_distinct_members(self):
        assert len(ROTATIONS) == 24
        assert len(set(ROTATIONS)) == 24

    def test_identity_first(self):
        assert IDENTITY in ROTATIONS
        assert ROTATIONS[0] == IDENTITY

    def test_known_rotations_present(self):
        assert _rot((1, 0, 0), (0, -1, 0), (0, 0, -1)) in ROTATIONS
        assert _rot((1, 0, 0), (0, 0, 1), (0, -1, 0)) in ROTATIONS

    def test_reflection_absent(self):
        # Left-handed frame
        bad = _rot((1, 0, 0), (0, 0, 1), (0, 1, 0))
        assert bad.determinant() == -1
        assert bad not in ROTATIONS

    def test_all_proper(self):
        for r in ROTATIONS:
            assert r.determinant() == 1
            assert round(np.linalg.det(r.as_matrix())) == 1

    def test_closed_under_composition(self):
        mats = {r.as_matrix().tobytes() for r in ROTATIONS}
        for a, b in itertools.product(ROTATIONS, repeat=2):
            assert (a.as_matrix() @ b.as_matrix()).tobytes() in mats

    def test_rebuild_is_identical(self):
        assert build_rotation_group() == ROTATIONS


class TestRotationProperties:

    @pytest.mark.parametrize("v", SAMPLE_VECTORS)
    def test_length_preserving(self, v):
        for r in ROTATIONS:
            rv = r.apply(v)
            assert rv.dot(rv) == v.dot(v)

    @pytest.mark.parametrize("v", SAMPLE_VECTORS)
    def test_transpose_is_inverse(self, v):
        for r in ROTATIONS:
            assert r.transpose().apply(r.apply(v)) == v
            assert r.apply(r.transpose().apply(v)) == v

    def test_bijection_on_point_set(self):
        points = set(SAMPLE_VECTORS)
        for r in ROTATIONS:
            assert len({r.apply(p) for p in points}) == len(points)

    def test_apply_array_matches_apply(self):
        pts = np.array([v.as_tuple() for v in SAMPLE_VECTORS], dtype=np.int64)
        for r in ROTATIONS:
            expected = [r.apply(v).as_tuple() for v in SAMPLE_VECTORS]
            assert r.apply_array(pts).tolist() == [list(e) for e in expected]

    def test_non_rotation_transform_scales(self):
        scale = _rot((2, 0, 0), (0, 3, 0), (0, 0, 4))
        assert scale.apply(Vector3(2, 2, 2)) == Vector3(4, 6, 8)


class TestGroupVerification:

    def test_wrong_size_rejected(self):
        with pytest.raises(RotationGroupError):
            verify_rotation_group(ROTATIONS[:23])

    def test_duplicates_rejected(self):
        with pytest.raises(RotationGroupError):
            verify_rotation_group(ROTATIONS[:23] + (ROTATIONS[1],))

    def test_missing_identity_rejected(self):
        with pytest.raises(RotationGroupError):
            verify_rotation_group(ROTATIONS[1:] + (_rot((2, 0, 0), (0, 1, 0), (0, 0, 1)),))

    def test_reflection_rejected(self):
        bad = _rot((1, 0, 0), (0, 0, 1), (0, 1, 0))
        with pytest.raises(RotationGroupError):
            verify_rotation_group(ROTATIONS[:23] + (bad,))
