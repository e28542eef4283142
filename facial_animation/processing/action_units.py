"""Landmark 거리 기반 Action Unit 계산"""

import math
from typing import Mapping

from ..config.settings import ActionUnitSpec
from ..models import ActionUnitState, CalibrationSnapshot, SmoothedLandmarks
from .calibration import point_distance


def action_unit_value(
    reference_distance: float,
    live_distance: float,
    scale: float
) -> float:
    """
    clamp((reference - live) * scale, 0, 1)

    live 거리가 neutral 보다 줄어들수록 1 에 가까워진다.
    """
    value = (reference_distance - live_distance) * scale
    if not math.isfinite(value):
        return 0.0
    return min(max(value, 0.0), 1.0)


def derive_action_unit(
    spec: ActionUnitSpec,
    snapshot: CalibrationSnapshot,
    smoothed: SmoothedLandmarks
) -> float:
    """
    단일 Action Unit 계산

    포인트 쌍이 설정되지 않은 Action Unit 은 0.0 을 반환한다.
    """
    if not spec.is_configured:
        return 0.0

    reference = snapshot.reference_distances.get(spec.name)
    if reference is None:
        # calibration 이후 새로 연결된 규칙
        return 0.0

    live = point_distance(snapshot.points[spec.snapshot_index], smoothed.points[spec.tracked_index])
    return action_unit_value(reference, live, spec.scale)


def derive_action_units(
    snapshot: CalibrationSnapshot,
    smoothed: SmoothedLandmarks,
    specs: Mapping[str, ActionUnitSpec],
    state: ActionUnitState
) -> ActionUnitState:
    """
    모든 Action Unit 갱신 (in place)

    calibration 전에는 state 를 변경하지 않는다.

    Args:
        snapshot: CalibrationSnapshot
        smoothed: SmoothedLandmarks
        specs: Action Unit 규칙
        state: 갱신할 ActionUnitState

    Returns:
        state
    """
    if not snapshot.calibrated:
        return state

    for name, spec in specs.items():
        state.set(name, derive_action_unit(spec, snapshot, smoothed))
    return state
