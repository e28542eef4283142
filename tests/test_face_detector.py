"""Haar/LBF detector lifecycle tests (no model files needed)"""
import numpy as np
import pytest

from facial_animation.config.settings import DetectionConfig
from facial_animation.core.face_detector import HaarLBFDetector, create_detector
from facial_animation.processing.pipeline import FacialAnimationTracker
from facial_animation.utils.exceptions import ConfigurationError, DetectionError


class FakeCascade:
    def detectMultiScale(self, gray):
        return []


def _detector_without_models():
    detector = HaarLBFDetector.__new__(HaarLBFDetector)
    detector.classifier = FakeCascade()
    detector.facemark = object()
    return detector


def test_detect_without_faces_returns_empty():
    detector = _detector_without_models()

    assert detector.detect(np.zeros((48, 64, 3), dtype=np.uint8)) == []


def test_close_releases_models():
    detector = _detector_without_models()

    detector.close()

    assert detector.facemark is None
    assert detector.classifier is None
    with pytest.raises(DetectionError):
        detector.detect(np.zeros((48, 64, 3), dtype=np.uint8))


def test_closed_detector_abandons_tick(config):
    detector = _detector_without_models()
    detector.close()
    tracker = FacialAnimationTracker(config=config, detector=detector)

    assert tracker.process_frame(np.zeros((48, 64, 3), dtype=np.uint8)) is None
    assert tracker.state.tick_count == 0


def test_missing_lbf_model_raises(tmp_path):
    config = DetectionConfig(backend='haar_lbf', lbf_model_path=str(tmp_path / "lbfmodel.yaml"))

    with pytest.raises(ConfigurationError):
        create_detector(config)
