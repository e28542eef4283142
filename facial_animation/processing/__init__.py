"""Processing layer components"""

from .action_units import derive_action_units
from .calibration import adjust_calibration, calibrate
from .debug_presenter import DebugPresenter
from .frame_processor import FrameProcessor
from .pipeline import FacialAnimationTracker, tick
from .smoothing import smooth, smooth_damp

__all__ = [
    'calibrate',
    'adjust_calibration',
    'smooth',
    'smooth_damp',
    'derive_action_units',
    'tick',
    'FacialAnimationTracker',
    'DebugPresenter',
    'FrameProcessor',
]
