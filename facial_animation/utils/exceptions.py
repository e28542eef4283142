"""커스텀 예외 클래스 정의"""


class FacialAnimationException(Exception):
    """기본 예외 클래스"""
    pass


class DetectionError(FacialAnimationException):
    """얼굴 검출/랜드마크 fitting 실패 예외 (해당 tick만 폐기)"""
    pass


class InvalidImageError(FacialAnimationException):
    """잘못된 이미지 입력 예외"""
    pass


class ConfigurationError(FacialAnimationException):
    """설정 오류 예외"""
    pass


class InvalidLandmarkFrameError(FacialAnimationException):
    """68점 규격에 맞지 않는 랜드마크 입력 예외"""
    pass
