"""
Tick 기반 Action Unit 파이프라인

tick 순서:
    smoothing → drift 보정 → calibration 요청 처리 → Action Unit 계산

calibration 이 적용된 tick 의 Action Unit 은 항상 0 이다.

얼굴이 검출되지 않은 tick 은 smoothed 상태, snapshot, Action Unit 값을 모두 유지한다.
"""

from typing import Optional

import numpy as np

from ..config.settings import TrackingConfig
from ..core.landmark_extractor import LandmarkExtractor
from ..models import ActionUnitState, LandmarkFrame, TickResult, TrackerState
from ..utils.exceptions import DetectionError, InvalidImageError, InvalidLandmarkFrameError
from ..utils.logging_config import get_logger
from .action_units import derive_action_units
from .calibration import adjust_calibration, calibrate
from .debug_presenter import DebugPresenter
from .smoothing import smooth

logger = get_logger(__name__)


def tick(
    state: TrackerState,
    raw_frame: Optional[LandmarkFrame],
    dt: float,
    config: TrackingConfig
) -> TickResult:
    """
    한 tick 처리

    Args:
        state: 파이프라인 상태 (in place 갱신)
        raw_frame: 이번 tick 의 LandmarkFrame (얼굴 없음이면 None)
        dt: 이전 tick 이후 경과 시간 (초)
        config: TrackingConfig

    Returns:
        TickResult
    """
    face_detected = raw_frame is not None

    if face_detected:
        smooth(raw_frame, state.smoothed, config.smoothing_time, dt, config.max_speed)
        adjust_calibration(state.snapshot, config.anchor_index, raw_frame[config.anchor_index])

    calibrated_this_tick = False
    if state.pending_calibration:
        calibrate(state.smoothed, state.snapshot, config.action_units)
        state.pending_calibration = False
        calibrated_this_tick = True

    if face_detected:
        derive_action_units(state.snapshot, state.smoothed, config.action_units, state.action_units)

    state.tick_count += 1

    return TickResult(
        action_units=state.action_units,
        face_detected=face_detected,
        calibrated_this_tick=calibrated_this_tick,
        raw_frame=raw_frame,
    )


class FacialAnimationTracker:
    """
    얼굴 Action Unit 트래커

    Features:
    - request_calibration(): 다음 tick 에서 neutral 기준 포즈 재설정
    - update(): LandmarkFrame 으로 직접 tick 실행 (검출기 없이 사용 가능)
    - process_frame(): 외부 검출기 호출 후 tick 실행
    """

    def __init__(
        self,
        config: Optional[TrackingConfig] = None,
        detector=None,
        extractor=None,
        presenter: Optional[DebugPresenter] = None
    ):
        """
        초기화

        Args:
            config: TrackingConfig (None이면 config.yaml 사용)
            detector: detect(image) -> List[(68, 2)] 를 제공하는 검출기
            extractor: LandmarkExtractor (None이면 기본 생성)
            presenter: DebugPresenter (None이면 config 기반 생성)
        """
        self.config = config or TrackingConfig.from_config()
        self.state = TrackerState(action_units=ActionUnitState(self.config.action_units.keys()))
        self.detector = detector
        self.extractor = extractor or LandmarkExtractor()
        self.presenter = presenter or DebugPresenter(self.config)

        unconfigured = [name for name, spec in self.config.action_units.items() if not spec.is_configured]
        if unconfigured:
            logger.info(f"Action units without a configured point pair: {', '.join(unconfigured)}")

    @property
    def action_units(self) -> ActionUnitState:
        """현재 Action Unit 값 (읽기 전용)"""
        return self.state.action_units

    @property
    def calibrated(self) -> bool:
        return self.state.calibrated

    def request_calibration(self):
        """calibration 요청 (여러 번 호출해도 다음 tick 에 1회 재설정)"""
        self.state.pending_calibration = True
        logger.debug("Calibration requested")

    def update(self, raw_frame: Optional[LandmarkFrame], dt: Optional[float] = None) -> TickResult:
        """
        LandmarkFrame 으로 한 tick 실행

        Args:
            raw_frame: LandmarkFrame 또는 None (얼굴 없음)
            dt: 경과 시간 (None이면 tracking_interval)

        Returns:
            TickResult
        """
        dt = self.config.tracking_interval if dt is None else dt
        result = tick(self.state, raw_frame, dt, self.config)
        result.debug_lines = self.presenter.build_lines(self.state, raw_frame)
        return result

    def process_frame(self, image: np.ndarray, dt: Optional[float] = None) -> Optional[TickResult]:
        """
        이미지에서 랜드마크 검출 후 tick 실행

        검출기 오류 시 해당 tick 은 폐기되고 상태는 변경되지 않는다.

        Args:
            image: BGR 이미지
            dt: 경과 시간 (None이면 tracking_interval)

        Returns:
            TickResult, 검출기 오류 시 None
        """
        if self.detector is None:
            raise DetectionError("No landmark detector configured")

        try:
            faces = self.detector.detect(image)
            raw_frame = self.extractor.to_frame(faces)
        except (DetectionError, InvalidImageError, InvalidLandmarkFrameError) as e:
            logger.error(f"Tick abandoned: {e}")
            return None

        return self.update(raw_frame, dt)

    def __repr__(self):
        return f"FacialAnimationTracker(calibrated={self.calibrated}, ticks={self.state.tick_count})"
