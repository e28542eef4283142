"""디버그 마커 생성 및 시각화"""

from typing import List, Optional, Tuple

import cv2
import numpy as np

from ..config.constants import (
    CALIBRATION_MARKER_COLOR,
    OFFSET_MARKER_COLOR,
    SMOOTHED_MARKER_COLOR,
)
from ..config.settings import TrackingConfig
from ..models import DebugLine, LandmarkFrame, TrackerState


class DebugPresenter:
    """
    디버그 라인 / 이미지 생성

    - calibration markers: neutral snapshot (녹색)
    - smoothed positions: smoothing 결과 (시안)
    - offset markers: raw 검출 좌표 (노란색)
    """

    def __init__(self, config: TrackingConfig, duration: float = 0.0):
        """
        Args:
            config: 토글 플래그 및 marker_length 를 가진 TrackingConfig
            duration: 디버그 라인 표시 시간 (0 = 1 프레임)
        """
        self.config = config
        self.duration = duration

    def _lines(self, points: np.ndarray, color: Tuple[int, int, int]) -> List[DebugLine]:
        normal = (0.0, 0.0, self.config.marker_length)
        lines = []
        for x, y in points:
            start = (float(x), float(y), 0.0)
            end = (start[0] + normal[0], start[1] + normal[1], start[2] + normal[2])
            lines.append(DebugLine(start, end, color, self.duration))
        return lines

    def build_lines(self, state: TrackerState, raw_frame: Optional[LandmarkFrame]) -> List[DebugLine]:
        """
        토글 설정에 따른 디버그 라인 생성

        Args:
            state: TrackerState
            raw_frame: 이번 tick 의 raw LandmarkFrame (없으면 offset marker 생략)

        Returns:
            DebugLine 리스트
        """
        lines: List[DebugLine] = []

        if self.config.display_calibration_markers and state.snapshot.calibrated:
            lines.extend(self._lines(state.snapshot.points, CALIBRATION_MARKER_COLOR))

        if self.config.display_smoothed_positions and state.smoothed.initialized:
            lines.extend(self._lines(state.smoothed.points, SMOOTHED_MARKER_COLOR))

        if self.config.display_offset_markers and raw_frame is not None:
            lines.extend(self._lines(raw_frame.points, OFFSET_MARKER_COLOR))

        return lines

    @staticmethod
    def _to_pixel(point) -> Tuple[int, int]:
        # y 부호 반전 복원
        return int(round(point[0])), int(round(-point[1]))

    def render(
        self,
        image: np.ndarray,
        state: TrackerState,
        raw_frame: Optional[LandmarkFrame] = None
    ) -> np.ndarray:
        """
        디버그 이미지 생성 (원본은 변경하지 않음)

        Args:
            image: BGR 이미지
            state: TrackerState
            raw_frame: 이번 tick 의 raw LandmarkFrame

        Returns:
            마커와 Action Unit 값이 그려진 BGR 이미지
        """
        canvas = image.copy()
        if len(canvas.shape) == 2:
            canvas = cv2.cvtColor(canvas, cv2.COLOR_GRAY2BGR)

        for line in self.build_lines(state, raw_frame):
            cv2.circle(canvas, self._to_pixel(line.start), 2, line.color, -1)

        # Action Unit 막대
        for row, (name, value) in enumerate(state.action_units.items()):
            y = 20 + row * 18
            cv2.rectangle(canvas, (10, y - 10), (10 + int(100 * value), y), (0, 200, 255), -1)
            cv2.rectangle(canvas, (10, y - 10), (110, y), (200, 200, 200), 1)
            cv2.putText(canvas, f"{name} {value:.2f}", (118, y), cv2.FONT_HERSHEY_SIMPLEX,
                        0.4, (255, 255, 255), 1, cv2.LINE_AA)

        status = "CALIBRATED" if state.calibrated else "Press SPACE to calibrate"
        cv2.putText(canvas, status, (10, canvas.shape[0] - 10), cv2.FONT_HERSHEY_SIMPLEX,
                    0.5, (0, 255, 0) if state.calibrated else (0, 0, 255), 1, cv2.LINE_AA)

        return canvas
