"""Neutral face calibration 및 drift 보정"""

from typing import Mapping, Optional

import numpy as np

from ..config.settings import ActionUnitSpec, default_action_unit_specs
from ..models import CalibrationSnapshot, SmoothedLandmarks
from ..utils.logging_config import get_logger
from ..utils.validators import validate_landmark_index

logger = get_logger(__name__)


def point_distance(p1: np.ndarray, p2: np.ndarray) -> float:
    """두 2D 포인트 간 유클리드 거리"""
    return float(np.hypot(p2[0] - p1[0], p2[1] - p1[1]))


def calibrate(
    smoothed: SmoothedLandmarks,
    snapshot: Optional[CalibrationSnapshot] = None,
    action_unit_specs: Optional[Mapping[str, ActionUnitSpec]] = None
) -> CalibrationSnapshot:
    """
    현재 smoothed 랜드마크를 neutral 기준 포즈로 저장

    이전 snapshot 은 완전히 덮어쓴다 (history 없음). 검출 전 호출하면
    모든 포인트가 0 인 기준 포즈가 만들어지며 이는 허용된다.

    Args:
        smoothed: 현재 SmoothedLandmarks
        snapshot: 덮어쓸 snapshot (None이면 새로 생성)
        action_unit_specs: reference distance 를 계산할 Action Unit 규칙

    Returns:
        calibrated = True 인 CalibrationSnapshot
    """
    if snapshot is None:
        snapshot = CalibrationSnapshot()
    if action_unit_specs is None:
        action_unit_specs = default_action_unit_specs()

    if not smoothed.initialized:
        logger.warning("Calibrating before any detection - neutral baseline is all zeros")

    snapshot.points = np.array(smoothed.points, dtype=np.float64)

    # snapshot 과 smoothed 가 같은 시점이므로 reference = 두 포인트 간 현재 거리
    snapshot.reference_distances = {
        name: point_distance(snapshot.points[spec.snapshot_index], smoothed.points[spec.tracked_index])
        for name, spec in action_unit_specs.items()
        if spec.is_configured
    }
    snapshot.calibrated = True

    logger.info(
        "Calibrated successfully (horizontal ref=%.2f, vertical ref=%.2f)",
        snapshot.neutral_horizontal_reference_distance,
        snapshot.neutral_vertical_reference_distance,
    )
    return snapshot


def adjust_calibration(
    snapshot: CalibrationSnapshot,
    anchor_index: int,
    current_anchor_raw: np.ndarray
) -> CalibrationSnapshot:
    """
    Calibration snapshot 을 현재 anchor 위치로 평행 이동 (in place)

    보정 벡터는 이번 tick 의 어떤 포인트도 갱신되기 전 anchor 값으로 한 번만
    계산하여 68점 모두에 동일하게 적용한다. 회전/스케일 drift 는 보정하지 않는다.

    Args:
        snapshot: 보정할 CalibrationSnapshot
        anchor_index: 기준점 인덱스 (예: 30 코끝, 67 입 안쪽)
        current_anchor_raw: 이번 tick raw anchor 위치

    Returns:
        보정된 snapshot
    """
    if not snapshot.calibrated:
        return snapshot

    validate_landmark_index(anchor_index)

    correction = np.asarray(current_anchor_raw, dtype=np.float64) - snapshot.points[anchor_index]
    snapshot.points += correction
    return snapshot
