"""
Configuration Loader Module
트래커 설정 파일(config.yaml) 로드
"""
import os
import yaml
from pathlib import Path
from typing import Any, Dict, Optional


CONFIG_ENV_VAR = 'FACIAL_ANIMATION_CONFIG_PATH'
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config.yaml"  # facial_animation/config.yaml


class Config:
    """
    config.yaml 래퍼

    Usage:
        config = Config()
        smoothing = config.get('tracking.smoothing_time')
        level = config.logging.level
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Args:
            config_path: config.yaml 경로
                (None이면 FACIAL_ANIMATION_CONFIG_PATH, 없으면 패키지 내장 파일)
        """
        if config_path is None:
            config_path = os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH)

        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {self.config_path}\n"
                f"Please create config.yaml or set {CONFIG_ENV_VAR} environment variable."
            )

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                self._config: Dict[str, Any] = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML format in {self.config_path}: {e}")

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        점(.) 구분 경로로 값 조회

        Example:
            >>> config.get('action_units.default_scale')
            0.05
        """
        value = self._config
        try:
            for key in key_path.split('.'):
                value = value[key]
            return value
        except (KeyError, TypeError):
            return default

    def __getattr__(self, name: str):
        if name.startswith('_'):
            raise AttributeError(f"'{self.__class__.__name__}' has no attribute '{name}'")
        if name not in self._config:
            raise AttributeError(f"Config has no key '{name}'")
        return _wrap(self._config[name])

    def __repr__(self):
        return f"Config(path={self.config_path})"


class ConfigSection:
    """중첩 섹션 속성 접근 (config.logging.file.enabled)"""

    def __init__(self, data: Dict[str, Any]):
        self._data = data

    def __getattr__(self, name: str):
        if name.startswith('_'):
            raise AttributeError(f"'{self.__class__.__name__}' has no attribute '{name}'")
        if name not in self._data:
            raise AttributeError(f"ConfigSection has no key '{name}'")
        return _wrap(self._data[name])

    def __repr__(self):
        return f"ConfigSection({list(self._data.keys())})"


def _wrap(value: Any) -> Any:
    return ConfigSection(value) if isinstance(value, dict) else value


_global_config: Optional[Config] = None


def get_config() -> Config:
    """전역 Config 인스턴스 (최초 호출 시 로드)"""
    global _global_config

    if _global_config is None:
        _global_config = Config()

    return _global_config
