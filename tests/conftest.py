import numpy as np
import pytest

from facial_animation.config.settings import TrackingConfig
from facial_animation.models import LandmarkFrame
from facial_animation.processing.pipeline import FacialAnimationTracker


def make_face(seed: int = 0) -> np.ndarray:
    """
    합성 68점 얼굴 (y 반전 좌표)

    point 30 (코끝) = (100, -100), point 1 = (60, -100) → 거리 40
    point 57 (아랫입술) = (100, -140), point 8 (턱) = (100, -170) → 거리 30
    """
    rng = np.random.default_rng(seed)
    points = np.column_stack([
        rng.uniform(40.0, 160.0, 68),
        -rng.uniform(40.0, 180.0, 68),
    ])
    points[30] = (100.0, -100.0)
    points[1] = (60.0, -100.0)
    points[57] = (100.0, -140.0)
    points[8] = (100.0, -170.0)
    return points


@pytest.fixture
def neutral_points() -> np.ndarray:
    return make_face()


@pytest.fixture
def neutral_frame(neutral_points) -> LandmarkFrame:
    return LandmarkFrame(neutral_points)


@pytest.fixture
def config() -> TrackingConfig:
    return TrackingConfig()


@pytest.fixture
def tracker(config) -> FacialAnimationTracker:
    return FacialAnimationTracker(config=config)


def run_ticks(tracker, frame, count: int = 40, dt: float = 0.25):
    result = None
    for _ in range(count):
        result = tracker.update(frame, dt)
    return result
