"""
Action Unit 결과를 Unity 캐릭터 애니메이션용 JSON으로 변환
"""
import json
from datetime import datetime


def to_unity_json(result, calibrated: bool = False, precision: int = 4):
    """
    tick 결과를 Unity 에서 사용할 JSON dict 로 변환

    Args:
        result: TickResult (action_units, face_detected 속성)
        calibrated: calibration 완료 여부
        precision: 소수점 자릿수

    Returns:
        dict: JSON 직렬화 가능한 딕셔너리
    """
    action_units = {
        name: round(float(value), precision)
        for name, value in result.action_units.items()
    }

    return {
        "action_units": action_units,
        "face_detected": bool(result.face_detected),
        "calibrated": bool(calibrated),
        "timestamp": datetime.now().isoformat(),
    }


def to_json_string(result, calibrated: bool = False) -> str:
    """
    tick 결과를 한 줄 JSON 문자열로 변환 (TCP 전송용)

    Args:
        result: TickResult
        calibrated: calibration 완료 여부

    Returns:
        str: JSON 문자열
    """
    return json.dumps(to_unity_json(result, calibrated), ensure_ascii=False)
