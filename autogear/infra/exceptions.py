"""AutoGear 异常层级体系。

层级树::

    AutoGearError
    ├── ConfigError
    ├── StorageError
    │   └── StorageCorruptedError
    └── HookError

决策过程中的「药水不存在 / 药水不在背包 / 无合适装备组 / 区域禁止切换」
都不是异常，而是决策结果中的 ``SwapReason`` / ``PotionReason``，不会向宿主抛出。
"""

from __future__ import annotations


# ── 基类 ──


class AutoGearError(Exception):
    """所有 AutoGear 异常的基类。"""


# ── 基础设施异常 ──


class ConfigError(AutoGearError):
    """配置错误（文件缺失、字段非法等）。"""


# ── 存储异常 ──


class StorageError(AutoGearError):
    """持久化存储读写失败。"""


class StorageCorruptedError(StorageError):
    """已持久化的数据无法解析。"""

    def __init__(self, key: str, reason: str = "") -> None:
        self.key = key
        self.reason = reason
        msg = f"存储数据损坏: '{key}'"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


# ── 钩子异常 ──


class HookError(AutoGearError):
    """钩子注册失败（未知扩展点等）。"""

    def __init__(self, name: str, reason: str = "") -> None:
        self.name = name
        msg = f"无法注册钩子: '{name}'"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)
