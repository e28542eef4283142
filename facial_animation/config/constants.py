"""68점 얼굴 랜드마크 인덱스 및 시스템 상수 정의"""

from typing import Dict, List, Tuple

NUM_LANDMARKS = 68

# 중요 랜드마크 포인트 (dlib / iBUG 300-W 68점 규격)
IMPORTANT_LANDMARKS: Dict[str, int] = {
    'left_face_contour': 1,
    'chin': 8,
    'nose_tip': 30,
    'lower_lip': 57,
}

NOSE_TIP = IMPORTANT_LANDMARKS['nose_tip']
DEFAULT_ANCHOR_INDEX = NOSE_TIP

# Action Unit 식별자
HORIZONTAL_HEAD_ORIENTATION = 'horizontal_head_orientation'
VERTICAL_HEAD_ORIENTATION = 'vertical_head_orientation'

# 거리 기반 계산이 연결된 Action Unit: (snapshot 포인트, tracked 포인트)
WIRED_ACTION_UNITS: Dict[str, Tuple[int, int]] = {
    HORIZONTAL_HEAD_ORIENTATION: (NOSE_TIP, IMPORTANT_LANDMARKS['left_face_contour']),
    VERTICAL_HEAD_ORIENTATION: (IMPORTANT_LANDMARKS['lower_lip'], IMPORTANT_LANDMARKS['chin']),
}

# 선언만 되어 있고 기본 포인트 쌍이 없는 Action Unit (FACS)
RESERVED_ACTION_UNITS: List[str] = [
    'inner_brow_raiser',
    'outer_brow_raiser',
    'nose_wrinkler',
    'chin_raiser',
    'mouth_stretch',
    'lower_lip_depressor',
    'dimpler',
    'blink',
]

ACTION_UNIT_NAMES: List[str] = list(WIRED_ACTION_UNITS) + RESERVED_ACTION_UNITS

# 시스템 상수
DEFAULT_SMOOTHING_TIME = 0.1
DEFAULT_SCALE_FACTOR = 0.05
DEFAULT_TRACKING_INTERVAL = 0.25
DEFAULT_MARKER_LENGTH = 3.0

# 디버그 마커 색상 (BGR)
CALIBRATION_MARKER_COLOR: Tuple[int, int, int] = (0, 255, 0)    # 녹색
SMOOTHED_MARKER_COLOR: Tuple[int, int, int] = (255, 255, 0)     # 시안
OFFSET_MARKER_COLOR: Tuple[int, int, int] = (0, 255, 255)       # 노란색
