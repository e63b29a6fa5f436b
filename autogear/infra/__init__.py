"""基础设施层 — 日志、配置、异常体系、文件工具。"""

from .config import (
    ConfigManager,
    LogConfig,
    NotificationConfig,
    StorageConfig,
    UserConfig,
)
from .exceptions import (
    AutoGearError,
    ConfigError,
    HookError,
    StorageCorruptedError,
    StorageError,
)
from .file_utils import load_yaml, merge_dicts, save_yaml
from .logger import setup_logger

__all__ = [
    # config
    "ConfigManager",
    "LogConfig",
    "NotificationConfig",
    "StorageConfig",
    "UserConfig",
    # exceptions
    "AutoGearError",
    "ConfigError",
    "HookError",
    "StorageCorruptedError",
    "StorageError",
    # file_utils
    "load_yaml",
    "merge_dicts",
    "save_yaml",
    # logger
    "setup_logger",
]
