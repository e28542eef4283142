"""
68점 얼굴 랜드마크 검출기

- HaarLBFDetector: OpenCV Haar cascade + LBF facemark (opencv-contrib)
- MediaPipeLandmarkDetector: MediaPipe Face Mesh 468점 → 68점 변환
"""

from pathlib import Path
from typing import List

import cv2
import mediapipe as mp
import numpy as np

from ..config.settings import DetectionConfig
from ..utils.exceptions import ConfigurationError, DetectionError
from ..utils.logging_config import get_logger
from ..utils.validators import validate_image
from .landmark_mapping import convert_mediapipe_to_dlib68

logger = get_logger(__name__)


def _to_gray(image: np.ndarray) -> np.ndarray:
    if len(image.shape) == 2:
        return image
    if image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
    if image.shape[2] == 1:
        return image[:, :, 0]
    return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)


def _to_rgb(image: np.ndarray) -> np.ndarray:
    if len(image.shape) == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2RGB)
    if image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2RGB)
    if image.shape[2] == 1:
        return cv2.cvtColor(image[:, :, 0], cv2.COLOR_GRAY2RGB)
    return cv2.cvtColor(image, cv2.COLOR_BGR2RGB)


class HaarLBFDetector:
    """Haar cascade 얼굴 검출 + LBF facemark fitting"""

    def __init__(self, cascade_path: str, lbf_model_path: str):
        """
        초기화

        Args:
            cascade_path: Haar cascade XML 경로 (없으면 OpenCV 내장 cascade 디렉토리에서 탐색)
            lbf_model_path: LBF 모델 (lbfmodel.yaml) 경로

        Raises:
            ConfigurationError: 모델 로드 실패
        """
        cascade_file = Path(cascade_path)
        if not cascade_file.exists():
            cascade_file = Path(cv2.data.haarcascades) / cascade_file.name

        self.classifier = cv2.CascadeClassifier(str(cascade_file))
        if self.classifier.empty():
            raise ConfigurationError(f"Failed to load Haar cascade: {cascade_file}")

        if not hasattr(cv2, 'face'):
            raise ConfigurationError("cv2.face is unavailable - install opencv-contrib-python")

        if not Path(lbf_model_path).exists():
            raise ConfigurationError(f"LBF model not found: {lbf_model_path}")

        try:
            self.facemark = cv2.face.createFacemarkLBF()
            self.facemark.loadModel(str(lbf_model_path))
        except cv2.error as e:
            raise ConfigurationError(f"Failed to load LBF model: {e}")

        logger.info(f"Haar/LBF detector initialized (cascade={cascade_file.name})")

    def detect(self, image: np.ndarray) -> List[np.ndarray]:
        """
        얼굴별 68점 픽셀 좌표 반환

        Args:
            image: BGR 또는 grayscale 이미지

        Returns:
            얼굴별 (68, 2) 배열 리스트 (없으면 빈 리스트)

        Raises:
            DetectionError: OpenCV 처리 실패 또는 close() 이후 호출
        """
        validate_image(image)
        if self.facemark is None or self.classifier is None:
            raise DetectionError("Haar/LBF detector is closed")

        try:
            gray = _to_gray(image)
            faces = self.classifier.detectMultiScale(gray)
            if len(faces) == 0:
                return []

            ok, landmarks = self.facemark.fit(gray, np.asarray(faces))
        except cv2.error as e:
            raise DetectionError(f"Facemark fitting failed: {e}")

        if not ok:
            logger.debug("Facemark fit returned no landmarks")
            return []

        return [np.asarray(shape, dtype=np.float64).reshape(-1, 2) for shape in landmarks]

    def close(self):
        """LBF 모델 및 cascade 해제 (이후 detect 호출 불가)"""
        self.facemark = None
        self.classifier = None


class MediaPipeLandmarkDetector:
    """MediaPipe Face Mesh 기반 68점 검출기"""

    def __init__(self, max_num_faces: int = 1, min_detection_confidence: float = 0.5):
        """
        Args:
            max_num_faces: 최대 얼굴 수
            min_detection_confidence: 최소 검출 신뢰도
        """
        try:
            self.face_mesh = mp.solutions.face_mesh.FaceMesh(
                static_image_mode=False,
                max_num_faces=max_num_faces,
                min_detection_confidence=min_detection_confidence,
                min_tracking_confidence=0.5
            )
        except Exception as e:
            raise ConfigurationError(f"Failed to initialize MediaPipe FaceMesh: {e}")

        logger.info(f"MediaPipe landmark detector initialized (max_faces={max_num_faces})")

    def detect(self, image: np.ndarray) -> List[np.ndarray]:
        """
        얼굴별 68점 픽셀 좌표 반환

        Args:
            image: BGR 또는 grayscale 이미지

        Returns:
            얼굴별 (68, 2) 배열 리스트 (없으면 빈 리스트)

        Raises:
            DetectionError: MediaPipe 처리 실패
        """
        validate_image(image)

        h, w = image.shape[:2]
        try:
            results = self.face_mesh.process(_to_rgb(image))
        except Exception as e:
            raise DetectionError(f"MediaPipe processing failed: {e}")

        if not results.multi_face_landmarks:
            logger.debug("No faces detected by MediaPipe")
            return []

        return [
            convert_mediapipe_to_dlib68(face_landmarks.landmark, w, h)
            for face_landmarks in results.multi_face_landmarks
        ]

    def close(self):
        """리소스 정리"""
        if hasattr(self, 'face_mesh'):
            self.face_mesh.close()


def create_detector(config: DetectionConfig):
    """
    설정에 맞는 검출기 생성

    Args:
        config: DetectionConfig

    Returns:
        detect(image) 메서드를 가진 검출기
    """
    if config.backend == 'haar_lbf':
        return HaarLBFDetector(config.cascade_path, config.lbf_model_path)
    return MediaPipeLandmarkDetector(min_detection_confidence=config.min_detection_confidence)
