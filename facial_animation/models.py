"""데이터 모델 정의"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from .config.constants import (
    ACTION_UNIT_NAMES,
    HORIZONTAL_HEAD_ORIENTATION,
    NUM_LANDMARKS,
    VERTICAL_HEAD_ORIENTATION,
)
from .utils.validators import validate_landmark_points


def _zero_points() -> np.ndarray:
    return np.zeros((NUM_LANDMARKS, 2), dtype=np.float64)


@dataclass(frozen=True, eq=False)
class LandmarkFrame:
    """
    한 프레임의 68점 랜드마크 (검출 성공 시 1회 생성)

    좌표는 이미지 픽셀 공간이며 y 는 부호 반전 ("위" 가 양수).
    points 배열은 read-only 로 고정된다.
    """

    points: np.ndarray

    def __post_init__(self):
        points = np.array(self.points, dtype=np.float64)
        validate_landmark_points(points)
        points.setflags(write=False)
        object.__setattr__(self, 'points', points)

    @classmethod
    def from_pixels(cls, pixel_points: Iterable[Tuple[float, float]]) -> 'LandmarkFrame':
        """
        검출기 픽셀 좌표 (x, y 아래 방향) 로부터 생성

        Args:
            pixel_points: 68개 (x, y) 픽셀 좌표

        Returns:
            y 가 반전된 LandmarkFrame
        """
        points = np.array(list(pixel_points), dtype=np.float64)
        if points.ndim == 2 and points.shape[1] == 2:
            points = points * np.array([1.0, -1.0])
        return cls(points)

    def __getitem__(self, index: int) -> np.ndarray:
        return self.points[index]

    def __len__(self) -> int:
        return len(self.points)

    def translated(self, offset: Tuple[float, float]) -> 'LandmarkFrame':
        """모든 포인트를 offset 만큼 평행 이동한 새 프레임"""
        return LandmarkFrame(self.points + np.asarray(offset, dtype=np.float64))


@dataclass
class CalibrationSnapshot:
    """
    Neutral face 기준 포즈

    calibrate() 로만 생성/덮어쓰기 되며, drift 보정이 매 tick 평행 이동만 적용한다.
    """

    points: np.ndarray = field(default_factory=_zero_points)
    reference_distances: Dict[str, float] = field(default_factory=dict)
    calibrated: bool = False

    @property
    def neutral_horizontal_reference_distance(self) -> float:
        return self.reference_distances.get(HORIZONTAL_HEAD_ORIENTATION, 0.0)

    @property
    def neutral_vertical_reference_distance(self) -> float:
        return self.reference_distances.get(VERTICAL_HEAD_ORIENTATION, 0.0)


@dataclass
class SmoothedLandmarks:
    """
    Temporal smoothing 된 68점 + 포인트별 2D 속도 (필터 상태)

    velocities 는 points 와 같은 개수를 유지하며 생성 시에만 초기화된다.
    """

    points: np.ndarray = field(default_factory=_zero_points)
    velocities: np.ndarray = field(default_factory=_zero_points)
    initialized: bool = False

    def __post_init__(self):
        if self.points.shape != self.velocities.shape:
            raise ValueError(
                f"velocity shape {self.velocities.shape} does not match points shape {self.points.shape}"
            )


class ActionUnitState(Mapping):
    """
    Action Unit 식별자 → [0, 1] 범위 스칼라

    calibration 전에는 이전 값 (초기 0.0) 을 유지한다.
    """

    def __init__(self, names: Optional[Iterable[str]] = None):
        self._values: Dict[str, float] = {name: 0.0 for name in (names or ACTION_UNIT_NAMES)}

    def __getitem__(self, name: str) -> float:
        return self._values[name]

    def __iter__(self):
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def set(self, name: str, value: float):
        """값 설정 ([0, 1] 로 clamp)"""
        self._values[name] = min(max(float(value), 0.0), 1.0)

    def to_dict(self) -> Dict[str, float]:
        """딕셔너리로 변환"""
        return dict(self._values)

    def __repr__(self):
        values = ', '.join(f"{k}={v:.3f}" for k, v in self._values.items())
        return f"ActionUnitState({values})"


@dataclass
class TrackerState:
    """
    파이프라인 전체 상태 (tick 함수에 참조로 전달)

    - snapshot: Calibration Store 소유, Drift Corrector 가 평행 이동
    - smoothed: Temporal Smoother 소유
    - action_units: Action-Unit Deriver 소유 (읽기 전용 노출)
    """

    snapshot: CalibrationSnapshot = field(default_factory=CalibrationSnapshot)
    smoothed: SmoothedLandmarks = field(default_factory=SmoothedLandmarks)
    action_units: ActionUnitState = field(default_factory=ActionUnitState)
    pending_calibration: bool = False
    tick_count: int = 0

    @property
    def calibrated(self) -> bool:
        return self.snapshot.calibrated


@dataclass
class DebugLine:
    """디버그 라인 (point → point + normal)"""

    start: Tuple[float, float, float]
    end: Tuple[float, float, float]
    color: Tuple[int, int, int]
    duration: float = 0.0


@dataclass
class TickResult:
    """tick 처리 결과"""

    action_units: ActionUnitState
    face_detected: bool = False
    calibrated_this_tick: bool = False
    raw_frame: Optional[LandmarkFrame] = None
    debug_lines: List[DebugLine] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        """딕셔너리로 변환"""
        return {
            'action_units': self.action_units.to_dict(),
            'face_detected': self.face_detected,
            'calibrated_this_tick': self.calibrated_this_tick,
        }
