"""프레임 처리 루프 (카메라 / 비디오 → tracker)"""

import time
from typing import Generator, Optional

import cv2

from ..models import TickResult
from ..utils.exceptions import InvalidImageError
from ..utils.logging_config import get_logger
from .pipeline import FacialAnimationTracker

logger = get_logger(__name__)

WINDOW_NAME = 'Facial Action Units'
CALIBRATION_KEYS = (ord(' '), ord('c'))
QUIT_KEY = ord('q')


class FrameProcessor:
    """프레임 처리 파이프라인"""

    def __init__(
        self,
        tracker: FacialAnimationTracker,
        sender=None,
        calibrate_after: Optional[int] = None
    ):
        """
        초기화

        Args:
            tracker: FacialAnimationTracker 인스턴스 (검출기 포함)
            sender: update_result(result) 를 제공하는 전송기 (선택적)
            calibrate_after: 얼굴이 검출된 tick 이 이 수에 도달하면 calibration 요청
                (키보드 없이 실행할 때 사용, None이면 비활성화)
        """
        if calibrate_after is not None and calibrate_after < 1:
            raise ValueError(f"calibrate_after must be at least 1, got {calibrate_after}")

        self.tracker = tracker
        self.sender = sender
        self.calibrate_after = calibrate_after
        self.face_ticks = 0

    def _after_tick(self, result: Optional[TickResult]):
        """자동 calibration 카운트 및 결과 전송"""
        if result is None:
            return

        if result.face_detected:
            self.face_ticks += 1
            if self.face_ticks == self.calibrate_after and not self.tracker.calibrated:
                logger.info(f"Auto calibration requested after {self.face_ticks} tracked ticks")
                self.tracker.request_calibration()

        if self.sender is not None:
            self.sender.update_result(result, calibrated=self.tracker.calibrated)

    def _show(self, frame, result: Optional[TickResult]) -> bool:
        """디버그 화면 표시, 종료 키 입력 시 False"""
        raw_frame = result.raw_frame if result is not None else None
        display_frame = self.tracker.presenter.render(frame, self.tracker.state, raw_frame)
        cv2.imshow(WINDOW_NAME, display_frame)

        key = cv2.waitKey(1) & 0xFF
        if key in CALIBRATION_KEYS:
            self.tracker.request_calibration()
        return key != QUIT_KEY

    def process_video(
        self,
        video_path: str,
        fps: Optional[float] = None,
        display: bool = False
    ) -> Generator[TickResult, None, None]:
        """
        비디오 처리 (제너레이터)

        display 가 True 이면 실시간 처리와 같은 키 입력 (SPACE / c, q) 을 받는다.

        Args:
            video_path: 비디오 파일 경로
            fps: 프레임 간격 계산용 fps (None이면 파일 메타데이터 사용)
            display: 결과 화면 표시 여부

        Yields:
            TickResult: 각 프레임의 처리 결과 (검출기 오류 프레임은 제외)
        """
        cap = cv2.VideoCapture(str(video_path))
        if not cap.isOpened():
            raise InvalidImageError(f"Failed to open video: {video_path}")

        fps = fps or cap.get(cv2.CAP_PROP_FPS) or 30.0
        dt = 1.0 / fps

        try:
            while cap.isOpened():
                ret, frame = cap.read()
                if not ret:
                    break

                result = self.tracker.process_frame(frame, dt)
                self._after_tick(result)

                if display and not self._show(frame, result):
                    break

                if result is not None:
                    yield result

        finally:
            cap.release()
            if display:
                cv2.destroyAllWindows()

    def process_realtime(
        self,
        camera_id: int = 0,
        display: bool = True,
        max_frames: Optional[int] = None
    ) -> Generator[TickResult, None, None]:
        """
        실시간 카메라 처리

        tracking_interval 마다 한 번 tick 을 실행한다.
        SPACE / c: calibration, q: 종료

        Args:
            camera_id: 카메라 디바이스 ID
            display: 결과 화면 표시 여부
            max_frames: 최대 tick 수 (None이면 무한)

        Yields:
            TickResult: 각 tick 의 처리 결과
        """
        cap = cv2.VideoCapture(camera_id)
        if not cap.isOpened():
            raise InvalidImageError(f"Failed to open camera {camera_id}")

        width = int(cap.get(cv2.CAP_PROP_FRAME_WIDTH))
        height = int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
        logger.info(f"Tracking started! Recording with camera {camera_id} at {width}x{height}")

        interval = self.tracker.config.tracking_interval
        last_tick = time.time()
        tick_count = 0

        try:
            while cap.isOpened():
                if max_frames and tick_count >= max_frames:
                    break

                ret, frame = cap.read()
                if not ret:
                    break

                now = time.time()
                if now - last_tick < interval:
                    if display and not self._show(frame, None):
                        break
                    continue

                dt = now - last_tick
                last_tick = now

                result = self.tracker.process_frame(frame, dt)
                self._after_tick(result)

                if display and not self._show(frame, result):
                    break

                if result is not None:
                    yield result
                tick_count += 1

        finally:
            cap.release()
            if display:
                cv2.destroyAllWindows()
