"""
Utilities package.
"""
from .config_loader import get_config, Config
from .logging_config import get_logger, setup_logging
from .json_exporter import to_unity_json, to_json_string
from .tcp_sender import ActionUnitSender

__all__ = [
    'get_config', 'Config',
    'get_logger', 'setup_logging',
    'to_unity_json', 'to_json_string',
    'ActionUnitSender'
]
