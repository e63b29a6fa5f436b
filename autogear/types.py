"""全局枚举类型定义。

所有与战斗语义相关的枚举集中于此，供各层引用。
"""

from __future__ import annotations

from enum import Enum


# ── 枚举基类 ──


class BaseEnum(Enum):
    """提供更友好的中文报错信息。"""

    @classmethod
    def _missing_(cls, value: object) -> None:
        supported = ", ".join(str(m.value) for m in cls)
        raise ValueError(f'"{value}" 不是合法的 {cls.__name__} 取值。 支持: [{supported}]')


class StrEnum(str, BaseEnum):
    """字符串枚举基类。"""


class IntEnum(int, BaseEnum):
    """整数枚举基类。"""


# ── 战斗概念 ──


class AttackType(StrEnum):
    """攻击类型（由装备组的武器决定）。"""

    melee = "melee"
    """近战"""
    ranged = "ranged"
    """远程"""
    magic = "magic"
    """魔法"""


class ToggleName(StrEnum):
    """可持久化的自动化开关。

    宿主也可以使用驼峰名 ``autoSwap`` / ``autoPotion``。
    """

    auto_swap = "auto_swap"
    """敌人出现时自动切换装备组"""
    auto_potion = "auto_potion"
    """自动使用装备组绑定的药水"""

    @classmethod
    def _missing_(cls, value: object) -> ToggleName:
        if isinstance(value, str) and value in _TOGGLE_ALIASES:
            return cls(_TOGGLE_ALIASES[value])
        return super()._missing_(value)

    @property
    def storage_key(self) -> str:
        """对应的持久化键名。"""
        return _TOGGLE_STORAGE_KEYS[self.value]


_TOGGLE_ALIASES: dict[str, str] = {
    "autoSwap": "auto_swap",
    "autoPotion": "auto_potion",
}

_TOGGLE_STORAGE_KEYS: dict[str, str] = {
    "auto_swap": "autoSwapEnabled",
    "auto_potion": "autoPotionEnabled",
}


class NotifyKind(StrEnum):
    """通知类型。"""

    success = "success"
    error = "error"


class TriggerEvent(StrEnum):
    """驱动决策的外部触发事件。"""

    enemy_spawned = "enemy_spawned"
    """敌人出现"""
    equipment_set_changed = "equipment_set_changed"
    """装备组已切换"""
    equipment_sets_changed = "equipment_sets_changed"
    """装备组数量变化（如购买新装备组）"""
    selection_menu_closed = "selection_menu_closed"
    """药水选择菜单关闭"""
    toggle_changed = "toggle_changed"
    """开关状态变化"""
