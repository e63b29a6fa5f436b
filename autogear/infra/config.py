"""配置管理 — 基于 Pydantic v2。

配置从 YAML 文件加载，经过 Pydantic 校验后生成不可变的配置对象。

使用方式::

    from autogear.infra.config import ConfigManager

    config = ConfigManager.load("user_settings.yaml")
    print(config.storage.backend)
"""

from __future__ import annotations

import datetime
from pathlib import Path
from typing import Any, Literal

from loguru import logger
from pydantic import BaseModel, Field, ValidationError, model_validator

from .exceptions import ConfigError
from .file_utils import load_yaml, merge_dicts


# ── 子配置模型 ──


class LogConfig(BaseModel):
    """日志配置。"""

    model_config = {"frozen": True}

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    """日志级别"""
    root: Path = Path("log")
    """日志保存根目录"""
    dir: Path | None = None
    """日志保存路径。自动按日期生成"""
    to_file: bool = True
    """是否写入日志文件"""

    @model_validator(mode="after")
    def _set_log_dir(self) -> LogConfig:
        if self.dir is None:
            ts = datetime.datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
            object.__setattr__(self, "dir", self.root / ts)
        return self


class NotificationConfig(BaseModel):
    """游戏内通知配置。"""

    model_config = {"frozen": True}

    disabled: bool = False
    """关闭所有药水通知（决策与动作仍照常执行）"""
    default_icon: str = "assets/media/main/question.svg"
    """药水没有图标时使用的默认图标"""


class StorageConfig(BaseModel):
    """持久化存储配置。"""

    model_config = {"frozen": True}

    backend: Literal["memory", "yaml"] = "yaml"
    """存储后端"""
    path: Path = Path("data/autogear_storage.yaml")
    """YAML 后端的数据文件路径"""


# ── 顶层配置 ──


class UserConfig(BaseModel):
    """用户配置（顶层聚合）。"""

    model_config = {"frozen": True}

    log: LogConfig = Field(default_factory=LogConfig)
    notification: NotificationConfig = Field(default_factory=NotificationConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)

    @classmethod
    def from_yaml(
        cls,
        path: str | Path,
        overrides: dict[str, Any] | None = None,
    ) -> UserConfig:
        """从 YAML 文件加载配置，*overrides* 深度合并到文件内容之上。"""
        data = load_yaml(path)
        if overrides:
            data = merge_dicts(data, overrides)
        return cls.model_validate(data)


# ── ConfigManager ──


class ConfigManager:
    """配置管理器 — 提供加载入口。"""

    @staticmethod
    def load(
        path: str | Path | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> UserConfig:
        """从文件加载用户配置。不存在时返回默认配置。

        Parameters
        ----------
        path:
            YAML 配置文件路径，为 *None* 时使用默认配置。
        overrides:
            覆盖文件内容的字典（深度合并）。

        Raises
        ------
        ConfigError
            配置字段非法。
        """
        try:
            if path is not None and Path(path).exists():
                config = UserConfig.from_yaml(path, overrides)
                logger.info("已加载配置: {}", path)
                return config
            if path is not None:
                logger.warning("配置文件 {} 不存在，使用默认配置", path)
            return UserConfig.model_validate(overrides or {})
        except ValidationError as e:
            raise ConfigError(f"配置校验失败: {e}") from e
