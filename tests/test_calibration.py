"""Calibration store and drift corrector tests"""
import numpy as np
import pytest

from facial_animation.config.constants import (
    HORIZONTAL_HEAD_ORIENTATION,
    VERTICAL_HEAD_ORIENTATION,
)
from facial_animation.models import CalibrationSnapshot, SmoothedLandmarks
from facial_animation.processing.calibration import adjust_calibration, calibrate
from tests.conftest import make_face


def _smoothed(points):
    return SmoothedLandmarks(points=np.array(points, dtype=float), initialized=True)


def test_calibrate_copies_points_and_reference_distances(neutral_points):
    smoothed = _smoothed(neutral_points)

    snapshot = calibrate(smoothed)

    assert snapshot.calibrated
    np.testing.assert_array_equal(snapshot.points, neutral_points)
    assert snapshot.neutral_horizontal_reference_distance == pytest.approx(40.0)
    assert snapshot.reference_distances[HORIZONTAL_HEAD_ORIENTATION] == pytest.approx(40.0)
    assert snapshot.reference_distances[VERTICAL_HEAD_ORIENTATION] == pytest.approx(30.0)


def test_snapshot_is_independent_copy(neutral_points):
    smoothed = _smoothed(neutral_points)
    snapshot = calibrate(smoothed)

    smoothed.points += 5.0

    np.testing.assert_array_equal(snapshot.points, neutral_points)


def test_recalibration_overwrites_previous_snapshot(neutral_points):
    snapshot = calibrate(_smoothed(neutral_points))

    other = make_face(3)
    other[1] = (80.0, -100.0)  # 코끝까지 거리 20
    calibrate(_smoothed(other), snapshot)

    np.testing.assert_array_equal(snapshot.points, other)
    assert snapshot.neutral_horizontal_reference_distance == pytest.approx(20.0)


def test_calibrate_before_detection_gives_zero_baseline():
    snapshot = calibrate(SmoothedLandmarks())

    assert snapshot.calibrated
    assert not snapshot.points.any()
    assert all(distance == 0.0 for distance in snapshot.reference_distances.values())


def test_adjust_is_noop_before_calibration():
    snapshot = CalibrationSnapshot()

    adjust_calibration(snapshot, 30, np.array([50.0, -50.0]))

    assert not snapshot.points.any()


def test_adjust_translates_every_point_by_anchor_offset(neutral_points):
    snapshot = calibrate(_smoothed(neutral_points))
    offset = np.array([12.0, -7.5])

    adjust_calibration(snapshot, 30, neutral_points[30] + offset)

    np.testing.assert_allclose(snapshot.points, neutral_points + offset)
    np.testing.assert_allclose(snapshot.points[30], neutral_points[30] + offset)


def test_adjust_with_mouth_anchor(neutral_points):
    snapshot = calibrate(_smoothed(neutral_points))
    offset = np.array([-3.0, 4.0])

    adjust_calibration(snapshot, 67, neutral_points[67] + offset)

    np.testing.assert_allclose(snapshot.points, neutral_points + offset)


def test_adjust_rejects_invalid_anchor(neutral_points):
    snapshot = calibrate(_smoothed(neutral_points))
    with pytest.raises(ValueError):
        adjust_calibration(snapshot, 68, np.zeros(2))
