"""
MediaPipe 468-point to 68-point landmark mapping.

This module converts MediaPipe Face Mesh (468 points) output into the
68-point convention used by the action unit pipeline.
"""

import numpy as np

from ..config.constants import NUM_LANDMARKS

# MediaPipe → 68점 매핑 테이블
MEDIAPIPE_TO_DLIB_68 = {
    # 얼굴 윤곽 (Jaw line) 0-16
    0: 127,
    1: 234,   # 왼쪽 윤곽 (horizontal head orientation)
    2: 93,
    3: 132,
    4: 58,
    5: 172,
    6: 136,
    7: 150,
    8: 152,   # 턱 끝 (vertical head orientation)
    9: 377,
    10: 379,
    11: 365,
    12: 397,
    13: 288,
    14: 361,
    15: 454,
    16: 356,

    # 눈썹 (Eyebrows) 17-26
    17: 70,
    18: 63,
    19: 105,
    20: 66,
    21: 107,
    22: 336,
    23: 296,
    24: 334,
    25: 293,
    26: 300,

    # 코 (Nose) 27-35
    27: 168,  # 코 브릿지 상단
    28: 6,
    29: 197,
    30: 4,    # 코 끝 (anchor)
    31: 98,
    32: 97,
    33: 2,
    34: 326,
    35: 327,

    # 눈 (Eyes) 36-47
    36: 33,
    37: 160,
    38: 158,
    39: 133,
    40: 153,
    41: 144,
    42: 362,
    43: 385,
    44: 387,
    45: 263,
    46: 373,
    47: 380,

    # 입 (Mouth) 48-67
    48: 61,   # 입 외곽 시작
    49: 39,
    50: 37,
    51: 0,
    52: 267,
    53: 269,
    54: 291,
    55: 405,
    56: 314,
    57: 17,   # 아랫입술 (vertical head orientation)
    58: 84,
    59: 181,
    60: 78,   # 입 내부 시작
    61: 82,
    62: 13,
    63: 312,
    64: 308,
    65: 317,
    66: 14,
    67: 87    # 입 내부 끝
}


def convert_mediapipe_to_dlib68(mediapipe_landmarks, img_width: int, img_height: int) -> np.ndarray:
    """
    MediaPipe 468점 랜드마크를 68점 형식으로 변환.

    Args:
        mediapipe_landmarks: MediaPipe face_landmarks.landmark (정규화 좌표 0.0-1.0)
        img_width: 이미지 너비 (픽셀)
        img_height: 이미지 높이 (픽셀)

    Returns:
        np.ndarray: (68, 2) shape의 픽셀 좌표 (x, y), float
    """
    points = np.empty((NUM_LANDMARKS, 2), dtype=np.float64)

    for dlib_idx in range(NUM_LANDMARKS):
        lm = mediapipe_landmarks[MEDIAPIPE_TO_DLIB_68[dlib_idx]]
        points[dlib_idx, 0] = lm.x * img_width
        points[dlib_idx, 1] = lm.y * img_height

    return points
