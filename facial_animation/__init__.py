"""
Facial Action Unit Tracker
68점 얼굴 랜드마크 기반 Action Unit (head orientation 등) 추출 시스템
"""

__version__ = "0.1.0"

from .config.settings import ActionUnitSpec, DetectionConfig, TrackingConfig
from .models import (
    ActionUnitState,
    CalibrationSnapshot,
    LandmarkFrame,
    SmoothedLandmarks,
    TickResult,
    TrackerState,
)
from .processing.pipeline import FacialAnimationTracker, tick

__all__ = [
    'ActionUnitSpec',
    'DetectionConfig',
    'TrackingConfig',
    'ActionUnitState',
    'CalibrationSnapshot',
    'LandmarkFrame',
    'SmoothedLandmarks',
    'TickResult',
    'TrackerState',
    'FacialAnimationTracker',
    'tick',
]
