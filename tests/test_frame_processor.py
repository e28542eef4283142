"""Frame loop and TCP payload tests (no camera)"""
import json

import cv2
import numpy as np
import pytest

from facial_animation.__main__ import parse_args, resolve_calibrate_after
from facial_animation.config.constants import HORIZONTAL_HEAD_ORIENTATION
from facial_animation.processing.frame_processor import FrameProcessor
from facial_animation.processing.pipeline import FacialAnimationTracker
from facial_animation.utils.exceptions import InvalidImageError
from facial_animation.utils.tcp_sender import ActionUnitSender


class RecordingSender:
    def __init__(self):
        self.published = []

    def update_result(self, result, calibrated=False):
        self.published.append((result, calibrated))


class StaticFaceDetector:
    """항상 같은 얼굴 하나를 반환하는 검출기"""

    def __init__(self, points):
        self.pixels = points * np.array([1.0, -1.0])

    def detect(self, image):
        return [self.pixels]

    def close(self):
        pass


def _write_video(path, frames=20, size=(64, 48)):
    writer = cv2.VideoWriter(str(path), cv2.VideoWriter_fourcc(*'MJPG'), 10.0, size)
    assert writer.isOpened()
    for i in range(frames):
        writer.write(np.full((size[1], size[0], 3), i * 10, dtype=np.uint8))
    writer.release()
    return path


def test_publish_forwards_calibration_flag(tracker, neutral_frame):
    sender = RecordingSender()
    processor = FrameProcessor(tracker, sender)
    tracker.request_calibration()

    processor._after_tick(tracker.update(neutral_frame))
    processor._after_tick(None)

    assert len(sender.published) == 1
    assert sender.published[0][1] is True


def test_calibrate_after_counts_tracked_ticks(tracker, neutral_frame):
    processor = FrameProcessor(tracker, calibrate_after=3)

    for _ in range(2):
        processor._after_tick(tracker.update(neutral_frame))
        processor._after_tick(tracker.update(None))
    assert not tracker.state.pending_calibration

    processor._after_tick(tracker.update(neutral_frame))
    assert tracker.state.pending_calibration

    result = tracker.update(neutral_frame)
    assert result.calibrated_this_tick


def test_calibrate_after_must_be_positive(tracker):
    with pytest.raises(ValueError):
        FrameProcessor(tracker, calibrate_after=0)


def test_headless_video_calibrates(config, neutral_points, tmp_path):
    video = _write_video(tmp_path / "face.avi")
    tracker = FacialAnimationTracker(config=config, detector=StaticFaceDetector(neutral_points))
    processor = FrameProcessor(tracker, calibrate_after=1)

    results = list(processor.process_video(str(video), display=False))

    assert len(results) > 2
    assert tracker.calibrated
    assert results[1].calibrated_this_tick
    assert results[-1].action_units[HORIZONTAL_HEAD_ORIENTATION] == 0.0


def test_headless_cli_defaults_to_auto_calibration():
    assert resolve_calibrate_after(parse_args(['--no-display'])) == 1
    assert resolve_calibrate_after(parse_args(['--no-display', '--calibrate-after', '5'])) == 5
    assert resolve_calibrate_after(parse_args([])) is None


def test_cli_rejects_non_positive_calibrate_after():
    with pytest.raises(SystemExit):
        parse_args(['--calibrate-after', '0'])


def test_missing_video_raises(tracker, tmp_path):
    processor = FrameProcessor(tracker)
    with pytest.raises(InvalidImageError):
        next(processor.process_video(str(tmp_path / "missing.mp4")))


def test_sender_message_is_newline_delimited_json(tracker, neutral_frame):
    sender = ActionUnitSender(ip="127.0.0.1", port=0, fps=30)

    sender.update_result(tracker.update(neutral_frame), calibrated=False)

    assert sender.latest_message.endswith(b'\n')
    payload = json.loads(sender.latest_message.decode('utf-8'))
    assert payload['face_detected'] is True
    assert set(payload['action_units']) == set(tracker.action_units)
    assert sender.get_client_count() == 0
