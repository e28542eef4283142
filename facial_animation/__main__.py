#!/usr/bin/env python3
"""
Facial Action Unit Tracker - 실시간 카메라 실행

Usage:
    python -m facial_animation --camera 0
    python -m facial_animation --video sample.mp4 --no-display
    python -m facial_animation --no-display --calibrate-after 10
"""

import argparse
import sys

from .config.settings import DetectionConfig, TrackingConfig
from .core.face_detector import create_detector
from .processing.frame_processor import FrameProcessor
from .processing.pipeline import FacialAnimationTracker
from .utils import ActionUnitSender, get_config, get_logger
from .utils.exceptions import FacialAnimationException

logger = get_logger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Facial Action Unit Tracker')
    parser.add_argument('--camera', type=int, default=0, help='카메라 디바이스 ID (기본: 0)')
    parser.add_argument('--video', type=str, default=None, help='카메라 대신 처리할 비디오 파일')
    parser.add_argument('--backend', choices=['mediapipe', 'haar_lbf'], default=None,
                        help='랜드마크 검출기 (기본: config.yaml)')
    parser.add_argument('--no-display', action='store_true', help='디버그 화면 비활성화')
    parser.add_argument('--no-tcp', action='store_true', help='Unity TCP 전송 비활성화')
    parser.add_argument('--max-frames', type=int, default=None, help='최대 tick 수')
    parser.add_argument('--calibrate-after', type=int, default=None,
                        help='얼굴이 검출된 N번째 tick 에서 자동 calibration (화면이 없으면 기본 1)')
    args = parser.parse_args(argv)
    if args.calibrate_after is not None and args.calibrate_after < 1:
        parser.error('--calibrate-after must be at least 1')
    return args


def resolve_calibrate_after(args):
    """자동 calibration tick 수 (화면이 없으면 키 입력이 불가하므로 기본 1)"""
    if args.calibrate_after is None and args.no_display:
        return 1
    return args.calibrate_after


def main(argv=None) -> int:
    args = parse_args(argv)
    config = get_config()

    try:
        detection_config = DetectionConfig.from_config(config)
        if args.backend:
            detection_config.backend = args.backend
        tracker = FacialAnimationTracker(
            config=TrackingConfig.from_config(config),
            detector=create_detector(detection_config),
        )
    except FacialAnimationException as e:
        logger.error(f"Initialization failed: {e}")
        return 1

    sender = None
    if not args.no_tcp:
        sender = ActionUnitSender.from_config(config)
        sender.start_server()

    display = not args.no_display
    processor = FrameProcessor(tracker, sender=sender, calibrate_after=resolve_calibrate_after(args))

    try:
        if args.video:
            results = processor.process_video(args.video, display=display)
        else:
            results = processor.process_realtime(
                camera_id=args.camera,
                display=display,
                max_frames=args.max_frames,
            )
        for result in results:
            logger.debug(repr(result.action_units))
    except FacialAnimationException as e:
        logger.error(f"Tracking stopped: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    finally:
        if sender is not None:
            sender.stop_server()
        tracker.detector.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
