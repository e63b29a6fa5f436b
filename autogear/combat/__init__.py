"""战斗决策核心 — 装备组自动切换与药水自动使用。

模块组成::

    combat/
    ├── host.py           # 宿主接口（查询 / 动作）与数据类
    ├── resolver.py       # 攻击类型克制关系与装备组查找
    ├── swap.py           # 装备组切换决策
    ├── potion.py         # 药水使用策略
    ├── notifications.py  # 药水通知
    ├── history.py        # 决策记录
    ├── hooks.py          # 具名扩展点注册表
    └── coordinator.py    # 事件协调器（状态机）

典型使用::

    from autogear.combat import EventCoordinator, HookRegistry, PotionNotifier, PotionPolicy

    policy = PotionPolicy(host, store, PotionNotifier(host))
    coordinator = EventCoordinator(host, store, policy)
    coordinator.register(registry)
    registry.fire("on_enemy_spawned", AttackType.magic)
"""

from .coordinator import CoordinatorState, EventCoordinator
from .history import DecisionEvent, DecisionHistory, DecisionSource
from .hooks import HOOK_NAMES, HookRegistry
from .host import (
    ActiveConsumable,
    CombatHost,
    EquipmentSet,
    Notification,
    PotionRecord,
    ZoneContext,
)
from .notifications import PotionNotifier
from .potion import PotionDecision, PotionPolicy, PotionReason, PotionResult
from .resolver import SetMatch, counters, find_sets
from .swap import SwapDecision, SwapEngine, SwapReason, SwapResult, decide_swap

__all__ = [
    "ActiveConsumable",
    "CombatHost",
    "CoordinatorState",
    "DecisionEvent",
    "DecisionHistory",
    "DecisionSource",
    "EquipmentSet",
    "EventCoordinator",
    "HOOK_NAMES",
    "HookRegistry",
    "Notification",
    "PotionDecision",
    "PotionNotifier",
    "PotionPolicy",
    "PotionReason",
    "PotionRecord",
    "PotionResult",
    "SetMatch",
    "SwapDecision",
    "SwapEngine",
    "SwapReason",
    "SwapResult",
    "ZoneContext",
    "counters",
    "decide_swap",
    "find_sets",
]
