"""宿主接口 — 决策核心依赖的查询与动作出口。

决策核心不拦截任何宿主方法，只通过 :class:`CombatHost` 读取战斗状态并发出动作。
宿主（游戏 Mod、模拟器脚本、测试替身）实现该抽象基类即可接入。
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from autogear.types import AttackType, NotifyKind


# ═══════════════════════════════════════════════════════════════════════════════
# 数据类
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class EquipmentSet:
    """宿主的一个装备组。

    Attributes
    ----------
    index:
        装备组索引 (0-based)。
    attack_type:
        当前武器的攻击类型，未装备武器时为 ``None``。
    """

    index: int
    attack_type: AttackType | None = None


@dataclass(frozen=True, slots=True)
class PotionRecord:
    """解析后的药水记录。"""

    id: str
    name: str
    media: str | None = None


@dataclass(frozen=True, slots=True)
class ActiveConsumable:
    """当前生效的战斗药水快照。"""

    potion_id: str
    charges: int = 0


@dataclass(frozen=True, slots=True)
class ZoneContext:
    """副本限制上下文。

    Attributes
    ----------
    in_dungeon:
        是否处于限制区域（地下城等）。
    dungeon_swap_allowed:
        限制区域内是否允许切换装备组。
    """

    in_dungeon: bool = False
    dungeon_swap_allowed: bool = False

    @property
    def swap_restricted(self) -> bool:
        return self.in_dungeon and not self.dungeon_swap_allowed


@dataclass(frozen=True, slots=True)
class Notification:
    """发往宿主的用户通知。

    Attributes
    ----------
    kind:
        通知类型。
    message:
        通知文本。
    icon:
        图标地址，可选。
    custom_id:
        宿主用于去重的通知 ID，可选。
    """

    kind: NotifyKind
    message: str
    icon: str | None = None
    custom_id: str | None = None


# ═══════════════════════════════════════════════════════════════════════════════
# 宿主抽象
# ═══════════════════════════════════════════════════════════════════════════════


class CombatHost(ABC):
    """战斗宿主抽象基类。

    查询方法在决策时同步调用，不应阻塞；动作方法可能同步触发新的事件
    （例如切换装备组后宿主立刻派发「装备组已切换」）。
    """

    # ── 查询 ──

    @abstractmethod
    def get_ordered_sets(self) -> list[EquipmentSet]:
        """按索引顺序返回全部装备组。"""
        ...

    @abstractmethod
    def get_current_set_index(self) -> int:
        """当前选中的装备组索引。"""
        ...

    @abstractmethod
    def get_active_consumable(self) -> ActiveConsumable | None:
        """当前生效的战斗药水，无则返回 ``None``。"""
        ...

    @abstractmethod
    def has_potion(self, potion_id: str) -> bool:
        """背包中是否持有该药水。"""
        ...

    @abstractmethod
    def resolve_potion(self, potion_id: str) -> PotionRecord | None:
        """将药水 ID 解析为药水记录，ID 失效时返回 ``None``。"""
        ...

    @abstractmethod
    def is_in_restricted_zone(self) -> bool:
        """是否处于限制切换的区域。"""
        ...

    @abstractmethod
    def is_swap_allowed_in_restricted_zone(self) -> bool:
        """限制区域内是否仍允许切换装备组。"""
        ...

    def get_num_sets(self) -> int:
        """装备组数量。默认取 :meth:`get_ordered_sets` 的长度。"""
        return len(self.get_ordered_sets())

    def get_zone_context(self) -> ZoneContext:
        """汇总副本限制上下文。"""
        return ZoneContext(
            in_dungeon=self.is_in_restricted_zone(),
            dungeon_swap_allowed=self.is_swap_allowed_in_restricted_zone(),
        )

    # ── 动作 ──

    @abstractmethod
    def change_equipment_set(self, index: int) -> None:
        """切换到指定装备组。"""
        ...

    @abstractmethod
    def activate_potion(self, potion: PotionRecord) -> None:
        """使用指定药水。"""
        ...

    @abstractmethod
    def notify(self, notification: Notification) -> None:
        """向用户发送通知。"""
        ...
