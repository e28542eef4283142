"""Data model tests"""
import numpy as np
import pytest

from facial_animation.config.constants import ACTION_UNIT_NAMES
from facial_animation.core.landmark_extractor import LandmarkExtractor
from facial_animation.models import ActionUnitState, LandmarkFrame, SmoothedLandmarks
from facial_animation.utils.exceptions import InvalidLandmarkFrameError


def test_landmark_frame_is_read_only(neutral_points):
    frame = LandmarkFrame(neutral_points)

    with pytest.raises(ValueError):
        frame.points[0, 0] = 1.0
    neutral_points[0, 0] = -999.0
    assert frame.points[0, 0] != -999.0


@pytest.mark.parametrize("shape", [(67, 2), (68, 3), (68,)])
def test_landmark_frame_requires_68_points(shape):
    with pytest.raises(InvalidLandmarkFrameError):
        LandmarkFrame(np.zeros(shape))


def test_landmark_frame_rejects_non_finite(neutral_points):
    neutral_points[5, 1] = np.nan
    with pytest.raises(InvalidLandmarkFrameError):
        LandmarkFrame(neutral_points)


def test_from_pixels_negates_y():
    pixels = np.tile([10.0, 20.0], (68, 1))

    frame = LandmarkFrame.from_pixels(pixels)

    np.testing.assert_array_equal(frame[0], [10.0, -20.0])
    assert len(frame) == 68


def test_extractor_handles_empty_detection():
    assert LandmarkExtractor().to_frame([]) is None


def test_smoothed_landmarks_shape_mismatch():
    with pytest.raises(ValueError):
        SmoothedLandmarks(points=np.zeros((68, 2)), velocities=np.zeros((10, 2)))


def test_action_unit_state_clamps():
    state = ActionUnitState()

    state.set('blink', 3.0)
    state.set('dimpler', -1.0)

    assert list(state) == ACTION_UNIT_NAMES
    assert state['blink'] == 1.0
    assert state['dimpler'] == 0.0
    assert state.to_dict()['blink'] == 1.0
