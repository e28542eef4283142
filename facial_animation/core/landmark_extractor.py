"""검출기 출력 → LandmarkFrame 변환"""

from typing import Optional, Sequence

import numpy as np

from ..models import LandmarkFrame
from ..utils.exceptions import InvalidLandmarkFrameError
from ..utils.logging_config import get_logger

logger = get_logger(__name__)


class LandmarkExtractor:
    """첫 번째 얼굴의 68점만 LandmarkFrame 으로 변환"""

    def to_frame(self, faces: Sequence[np.ndarray]) -> Optional[LandmarkFrame]:
        """
        검출 결과에서 primary face 추출

        Args:
            faces: 얼굴별 (68, 2) 픽셀 좌표 리스트 (y 아래 방향)

        Returns:
            LandmarkFrame, 얼굴이 없으면 None

        Raises:
            InvalidLandmarkFrameError: 포인트 개수가 68 이 아닌 경우
        """
        if faces is None or len(faces) == 0:
            return None

        if len(faces) > 1:
            logger.debug(f"{len(faces)} faces detected, using the first one")

        points = np.asarray(faces[0], dtype=np.float64).reshape(-1, 2)
        if len(points) == 0:
            raise InvalidLandmarkFrameError("Detector returned an empty landmark set")

        return LandmarkFrame.from_pixels(points)
