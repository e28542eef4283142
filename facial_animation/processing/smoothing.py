"""Critically-damped landmark smoothing"""

import math
from typing import Tuple

import numpy as np

from ..models import LandmarkFrame, SmoothedLandmarks
from ..utils.validators import validate_positive


def smooth_damp(
    current: np.ndarray,
    target: np.ndarray,
    velocity: np.ndarray,
    smoothing_time: float,
    dt: float,
    max_speed: float = math.inf
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Critically-damped spring step (축별 독립)

    exp(-omega * dt) 는 3차 근사식을 사용하므로 어떤 양수 dt 에서도 발산하지 않는다.

    Args:
        current: 현재 위치 배열
        target: 목표 위치 배열 (current 와 같은 shape)
        velocity: 현재 속도 배열 (필터 상태)
        smoothing_time: 목표 도달 시간 상수 (> 0)
        dt: 경과 시간 (> 0)
        max_speed: 최대 속도 (기본: 제한 없음)

    Returns:
        (새 위치, 새 속도) 튜플
    """
    validate_positive(smoothing_time, "smoothing_time")
    validate_positive(dt, "dt")

    omega = 2.0 / smoothing_time
    x = omega * dt
    decay = 1.0 / (1.0 + x + 0.48 * x * x + 0.235 * x * x * x)

    change = current - target
    original_target = target

    if math.isfinite(max_speed):
        max_change = max_speed * smoothing_time
        change = np.clip(change, -max_change, max_change)
    target = current - change

    temp = (velocity + omega * change) * dt
    new_velocity = (velocity - omega * temp) * decay
    output = target + (change + temp) * decay

    # 목표를 지나치면 목표에 고정
    overshoot = (original_target - current > 0) == (output > original_target)
    output = np.where(overshoot, original_target, output)
    new_velocity = np.where(overshoot, (output - original_target) / dt, new_velocity)

    return output, new_velocity


def smooth(
    raw: LandmarkFrame,
    state: SmoothedLandmarks,
    smoothing_time: float,
    dt: float,
    max_speed: float = math.inf
) -> SmoothedLandmarks:
    """
    68점 각각을 raw 목표로 한 tick 이동 (in place)

    첫 프레임은 위치를 raw 로 초기화하고 속도는 0 으로 둔다.

    Args:
        raw: 이번 tick 의 LandmarkFrame
        state: 갱신할 SmoothedLandmarks
        smoothing_time: 시간 상수
        dt: tick 간격

    Returns:
        갱신된 state
    """
    if not state.initialized:
        validate_positive(smoothing_time, "smoothing_time")
        validate_positive(dt, "dt")
        state.points[:] = raw.points
        state.initialized = True
        return state

    points, velocities = smooth_damp(
        state.points, raw.points, state.velocities, smoothing_time, dt, max_speed
    )
    state.points[:] = points
    state.velocities[:] = velocities
    return state
