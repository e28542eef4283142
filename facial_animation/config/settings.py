"""시스템 설정 클래스 정의"""

import math
from dataclasses import dataclass, field
from typing import Dict, Optional

from ..utils.config_loader import Config, get_config
from ..utils.exceptions import ConfigurationError
from .constants import (
    ACTION_UNIT_NAMES,
    DEFAULT_ANCHOR_INDEX,
    DEFAULT_MARKER_LENGTH,
    DEFAULT_SCALE_FACTOR,
    DEFAULT_SMOOTHING_TIME,
    DEFAULT_TRACKING_INTERVAL,
    NUM_LANDMARKS,
    WIRED_ACTION_UNITS,
)


def _is_positive(value) -> bool:
    return value is not None and not math.isnan(value) and value > 0


@dataclass
class ActionUnitSpec:
    """
    Action Unit 계산 규칙

    snapshot_index 의 calibration 위치와 tracked_index 의 smoothed 위치 간 거리를
    사용한다. 포인트 쌍이 없으면 "미설정" 상태로 항상 0.0 을 출력한다.
    """

    name: str
    snapshot_index: Optional[int] = None
    tracked_index: Optional[int] = None
    scale: float = DEFAULT_SCALE_FACTOR

    def __post_init__(self):
        """설정 값 검증"""
        if (self.snapshot_index is None) != (self.tracked_index is None):
            raise ConfigurationError(
                f"{self.name}: snapshot_index and tracked_index must be set together"
            )
        for index in (self.snapshot_index, self.tracked_index):
            if index is not None and not 0 <= index < NUM_LANDMARKS:
                raise ConfigurationError(
                    f"{self.name}: landmark index must be between 0 and {NUM_LANDMARKS - 1}, got {index}"
                )
        if not _is_positive(self.scale):
            raise ConfigurationError(f"{self.name}: scale must be positive, got {self.scale}")

    @property
    def is_configured(self) -> bool:
        """포인트 쌍 설정 여부"""
        return self.snapshot_index is not None


def default_action_unit_specs(scale: float = DEFAULT_SCALE_FACTOR) -> Dict[str, ActionUnitSpec]:
    """기본 Action Unit 규칙 (head orientation 2개만 연결, 나머지는 미설정)"""
    specs = {}
    for name in ACTION_UNIT_NAMES:
        pair = WIRED_ACTION_UNITS.get(name)
        if pair:
            specs[name] = ActionUnitSpec(name, pair[0], pair[1], scale)
        else:
            specs[name] = ActionUnitSpec(name, scale=scale)
    return specs


@dataclass
class TrackingConfig:
    """트래킹 파이프라인 설정"""

    # Temporal smoothing
    smoothing_time: float = DEFAULT_SMOOTHING_TIME  # 작을수록 반응 빠름, 클수록 jitter 감소
    max_speed: float = math.inf

    # Tick 주기 (초)
    tracking_interval: float = DEFAULT_TRACKING_INTERVAL

    # Calibration drift 보정 기준점
    anchor_index: int = DEFAULT_ANCHOR_INDEX

    action_units: Dict[str, ActionUnitSpec] = field(default_factory=default_action_unit_specs)

    # 디버그 오버레이
    display_calibration_markers: bool = True
    display_smoothed_positions: bool = True
    display_offset_markers: bool = True
    marker_length: float = DEFAULT_MARKER_LENGTH

    def __post_init__(self):
        """설정 값 검증"""
        if not _is_positive(self.smoothing_time):
            raise ConfigurationError(f"smoothing_time must be positive, got {self.smoothing_time}")
        if not _is_positive(self.max_speed):
            raise ConfigurationError(f"max_speed must be positive, got {self.max_speed}")
        if not _is_positive(self.tracking_interval):
            raise ConfigurationError(f"tracking_interval must be positive, got {self.tracking_interval}")
        if not 0 <= self.anchor_index < NUM_LANDMARKS:
            raise ConfigurationError(
                f"anchor_index must be between 0 and {NUM_LANDMARKS - 1}, got {self.anchor_index}"
            )
        for name, spec in self.action_units.items():
            if spec.name != name:
                raise ConfigurationError(f"Action unit key '{name}' does not match spec name '{spec.name}'")

    @classmethod
    def from_config(cls, config: Optional[Config] = None) -> 'TrackingConfig':
        """
        config.yaml 의 tracking / action_units / debug 섹션으로부터 생성

        Args:
            config: Config 인스턴스 (None이면 전역 설정)

        Returns:
            TrackingConfig
        """
        config = config or get_config()

        default_scale = config.get('action_units.default_scale', DEFAULT_SCALE_FACTOR)
        specs = default_action_unit_specs(default_scale)

        units = config.get('action_units.units', {}) or {}
        for name, options in units.items():
            options = options or {}
            base = specs.get(name, ActionUnitSpec(name, scale=default_scale))
            specs[name] = ActionUnitSpec(
                name=name,
                snapshot_index=options.get('snapshot_index', base.snapshot_index),
                tracked_index=options.get('tracked_index', base.tracked_index),
                scale=options.get('scale', default_scale),
            )

        max_speed = config.get('tracking.max_speed')

        return cls(
            smoothing_time=config.get('tracking.smoothing_time', DEFAULT_SMOOTHING_TIME),
            max_speed=math.inf if max_speed is None else float(max_speed),
            tracking_interval=config.get('tracking.tracking_interval', DEFAULT_TRACKING_INTERVAL),
            anchor_index=config.get('tracking.anchor_index', DEFAULT_ANCHOR_INDEX),
            action_units=specs,
            display_calibration_markers=config.get('debug.display_calibration_markers', True),
            display_smoothed_positions=config.get('debug.display_smoothed_positions', True),
            display_offset_markers=config.get('debug.display_offset_markers', True),
            marker_length=config.get('debug.marker_length', DEFAULT_MARKER_LENGTH),
        )


@dataclass
class DetectionConfig:
    """얼굴 검출기 설정"""

    backend: str = 'mediapipe'  # mediapipe | haar_lbf
    cascade_path: str = 'haarcascade_frontalface_alt2.xml'
    lbf_model_path: str = 'lbfmodel.yaml'
    min_detection_confidence: float = 0.5

    def __post_init__(self):
        """설정 값 검증"""
        if self.backend not in ('mediapipe', 'haar_lbf'):
            raise ConfigurationError(f"Unknown detector backend '{self.backend}'")
        if not 0.0 <= self.min_detection_confidence <= 1.0:
            raise ConfigurationError("min_detection_confidence must be between 0 and 1")

    @classmethod
    def from_config(cls, config: Optional[Config] = None) -> 'DetectionConfig':
        """config.yaml 의 detector 섹션으로부터 생성"""
        config = config or get_config()
        return cls(
            backend=config.get('detector.backend', 'mediapipe'),
            cascade_path=config.get('detector.cascade_path', 'haarcascade_frontalface_alt2.xml'),
            lbf_model_path=config.get('detector.lbf_model_path', 'lbfmodel.yaml'),
            min_detection_confidence=config.get('detector.min_detection_confidence', 0.5),
        )
