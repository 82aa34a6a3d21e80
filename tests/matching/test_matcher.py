from __future__ import annotations

import math

import numpy as np
import pytest

from face_attendance.core.enums import Pose
from face_attendance.core.exceptions import (
    AuthenticationFailedError,
    EnrollmentMissingError,
    FormatMismatchError,
    InputInvalidError,
)
from face_attendance.identities.model import EnrolledDescriptor
from face_attendance.matching.matcher import FaceMatcher
from face_attendance.matching.model import Accept, Reject, RejectKind


def _d(values, pose=Pose.FRONT) -> EnrolledDescriptor:
    return EnrolledDescriptor(pose=pose, vector=values)


def test_identical_descriptors_accept_with_zero_score():
    result = FaceMatcher().match(np.zeros(128), [_d([0.0] * 128)])

    assert isinstance(result, Accept)
    assert result.score == 0.0


@pytest.mark.parametrize("count", [1, 2, 3])
def test_no_length_matching_candidate_is_format_mismatch(count):
    enrolled = [_d([0.0] * 64, pose) for pose in list(Pose)[:count]]

    result = FaceMatcher().match(np.zeros(128), enrolled)

    assert isinstance(result, Reject)
    assert result.kind == RejectKind.FORMAT_MISMATCH
    assert isinstance(result.to_error(), FormatMismatchError)


def test_score_is_min_distance_over_length_matching_candidates_only():
    live = np.array([1.0, 1.0, 1.0])
    enrolled = [
        _d([1.0, 1.0], Pose.FRONT),  # wrong length, ignored even though closer
        _d([1.0, 1.0, 1.3], Pose.LEFT),
        _d([1.0, 1.2, 1.0], Pose.RIGHT),
    ]

    result = FaceMatcher(threshold=1.0).match(live, enrolled)

    assert isinstance(result, Accept)
    assert result.score == pytest.approx(0.2)


def test_score_matches_euclidean_formula():
    live = np.array([0.5, -0.25, 2.0, 0.0])
    candidate = [0.1, 0.3, 1.5, -0.4]
    expected = math.sqrt(sum((c - l) ** 2 for c, l in zip(candidate, live)))

    result = FaceMatcher(threshold=10).match(live, [_d(candidate)])

    assert result.score == pytest.approx(expected)


def test_score_equal_to_threshold_accepts():
    result = FaceMatcher(threshold=0.6).match(np.array([0.6]), [_d([0.0])])

    assert isinstance(result, Accept)
    assert result.score == 0.6


@pytest.mark.parametrize("eps", [1e-9, 1e-3, 0.5])
def test_score_above_threshold_rejects_with_score_and_threshold(eps):
    result = FaceMatcher(threshold=0.6).match(np.array([0.6 + eps]), [_d([0.0])])

    assert isinstance(result, Reject)
    assert result.kind == RejectKind.AUTHENTICATION_FAILED
    assert result.score == pytest.approx(0.6 + eps)
    assert result.threshold == 0.6

    error = result.to_error()
    assert isinstance(error, AuthenticationFailedError)
    assert error.score == result.score
    assert error.threshold == 0.6


def test_empty_enrollment_is_enrollment_missing():
    result = FaceMatcher().match(np.zeros(4), [])

    assert result.kind == RejectKind.ENROLLMENT_MISSING
    assert isinstance(result.to_error(), EnrollmentMissingError)


@pytest.mark.parametrize("live", [None, "abc", 3.0, [], np.zeros(0), np.zeros((2, 2)), [True, False], [1.0, float("nan")], [10**400], (0.5, 10**400)])
def test_invalid_live_descriptor_fails_before_looking_at_candidates(live):
    # Empty enrollment would be EnrollmentMissing; input is checked first.
    result = FaceMatcher().match(live, [])

    assert result.kind == RejectKind.INPUT_INVALID
    assert isinstance(result.to_error(), InputInvalidError)


def test_plain_list_is_accepted_as_vector():
    result = FaceMatcher().match([0.0, 0.0], [_d([0.0, 0.0])])

    assert isinstance(result, Accept)


def test_lower_threshold_is_stricter():
    live = np.array([0.5])
    enrolled = [_d([0.0])]

    assert isinstance(FaceMatcher(threshold=0.6).match(live, enrolled), Accept)
    assert isinstance(FaceMatcher(threshold=0.4).match(live, enrolled), Reject)


def test_non_finite_enrolled_vectors_are_skipped():
    enrolled = [_d([float("nan"), 0.0], Pose.FRONT), _d([0.1, 0.0], Pose.LEFT)]

    result = FaceMatcher().match([0.0, 0.0], enrolled)

    assert isinstance(result, Accept)
    assert result.score == pytest.approx(0.1)


def test_only_non_finite_enrolled_vectors_is_format_mismatch():
    result = FaceMatcher().match([0.0, 0.0], [_d([float("nan"), 0.0]), _d([0.0, float("inf")], Pose.LEFT)])

    assert result.kind == RejectKind.FORMAT_MISMATCH
    assert result.score is None
