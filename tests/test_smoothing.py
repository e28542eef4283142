"""Temporal smoother tests"""
import numpy as np
import pytest

from facial_animation.models import LandmarkFrame, SmoothedLandmarks
from facial_animation.processing.smoothing import smooth, smooth_damp
from tests.conftest import make_face


def test_first_frame_seeds_positions(neutral_frame):
    state = SmoothedLandmarks()

    smooth(neutral_frame, state, smoothing_time=0.1, dt=0.25)

    assert state.initialized
    np.testing.assert_array_equal(state.points, neutral_frame.points)
    np.testing.assert_array_equal(state.velocities, np.zeros((68, 2)))


@pytest.mark.parametrize("smoothing_time,dt", [(0.1, 0.25), (0.1, 1 / 30), (0.5, 1 / 60), (2.0, 0.25)])
def test_converges_monotonically_without_overshoot(smoothing_time, dt):
    state = SmoothedLandmarks()
    smooth(LandmarkFrame(make_face(0)), state, smoothing_time, dt)

    target = LandmarkFrame(make_face(1))
    start = state.points.copy()
    previous_error = np.abs(target.points - state.points)

    for _ in range(400):
        smooth(target, state, smoothing_time, dt)
        error = np.abs(target.points - state.points)
        assert np.all(error <= previous_error + 1e-9)
        # 목표를 넘어서지 않음 (시작점 → 목표 방향 유지)
        assert np.all(np.sign(target.points - state.points) * np.sign(target.points - start) >= 0)
        previous_error = error

    np.testing.assert_allclose(state.points, target.points, atol=1e-6)


def test_smaller_smoothing_time_tracks_closer():
    fast = SmoothedLandmarks()
    slow = SmoothedLandmarks()
    start = LandmarkFrame(make_face(0))
    target = LandmarkFrame(make_face(1))
    smooth(start, fast, 0.05, 1 / 30)
    smooth(start, slow, 0.5, 1 / 30)

    smooth(target, fast, 0.05, 1 / 30)
    smooth(target, slow, 0.5, 1 / 30)

    fast_error = np.abs(target.points - fast.points).sum()
    slow_error = np.abs(target.points - slow.points).sum()
    assert fast_error < slow_error


def test_axes_are_independent():
    current = np.array([[0.0, 5.0]])
    target = np.array([[10.0, 5.0]])
    velocity = np.zeros((1, 2))

    output, new_velocity = smooth_damp(current, target, velocity, 0.1, 1 / 30)

    assert 0.0 < output[0, 0] < 10.0
    assert output[0, 1] == 5.0
    assert new_velocity[0, 1] == 0.0


def test_max_speed_limits_step():
    current = np.array([[0.0, 0.0]])
    target = np.array([[100.0, 0.0]])
    velocity = np.zeros((1, 2))

    limited, _ = smooth_damp(current, target, velocity, 0.1, 1 / 30, max_speed=10.0)
    unlimited, _ = smooth_damp(current, target, velocity, 0.1, 1 / 30)

    assert limited[0, 0] < unlimited[0, 0]


def test_velocity_state_keeps_cardinality(neutral_frame):
    state = SmoothedLandmarks()
    for seed in range(5):
        smooth(LandmarkFrame(make_face(seed)), state, 0.1, 0.25)
    assert state.velocities.shape == state.points.shape == (68, 2)


@pytest.mark.parametrize("smoothing_time,dt", [(0.0, 0.25), (-0.1, 0.25), (0.1, 0.0), (0.1, -1.0)])
def test_rejects_non_positive_parameters(neutral_frame, smoothing_time, dt):
    state = SmoothedLandmarks()
    with pytest.raises(ValueError):
        smooth(neutral_frame, state, smoothing_time, dt)
