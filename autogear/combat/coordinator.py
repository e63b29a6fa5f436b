"""事件协调器（状态机核心）。

``EventCoordinator`` 接收宿主派发的触发事件，调用切换决策或药水策略::

    敌人出现            → SwapEngine.evaluate  (可能委托 PotionPolicy)
    装备组已切换        → PotionPolicy.apply
    药水选择菜单关闭    → PotionPolicy.apply   (仅 可见 → 隐藏)
    开关变化            → 自动药水开启时 PotionPolicy.apply；自动切换开启时等待下一次敌人出现
    装备组数量变化      → AssignmentStore.update_total_sets

敌人出现与装备组已切换在决策前也会按宿主当前的装备组数量同步绑定存储。

状态转移::

    IDLE → EVALUATING → IDLE

决策发出的动作可能同步触发新的事件（切换装备组 → 「装备组已切换」），
此时在 EVALUATING 中嵌套处理。协调器不加锁，也不丢弃嵌套事件；
递归由两个决策组件的幂等性终止：状态已满足时必然返回 NO_ACTION。
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from typing import TypeVar

from loguru import logger

from autogear.combat.history import DecisionEvent, DecisionHistory, DecisionSource
from autogear.combat.hooks import (
    HOOK_ENEMY_SPAWNED,
    HOOK_EQUIPMENT_SET_CHANGED,
    HOOK_EQUIPMENT_SETS_CHANGED,
    HOOK_SELECTION_MENU_VISIBILITY_CHANGED,
    HOOK_TOGGLE_CHANGED,
    HookRegistry,
)
from autogear.combat.host import CombatHost
from autogear.combat.potion import PotionDecision, PotionPolicy
from autogear.combat.swap import SwapDecision, SwapEngine
from autogear.storage.assignments import AssignmentStore
from autogear.types import AttackType, ToggleName, TriggerEvent

_T = TypeVar("_T")


class CoordinatorState(enum.Enum):
    """协调器状态。"""

    IDLE = enum.auto()
    """等待事件。"""

    EVALUATING = enum.auto()
    """正在处理事件（可能嵌套）。"""


class EventCoordinator:
    """触发事件 → 决策组件的调度器。

    Parameters
    ----------
    host:
        战斗宿主。
    store:
        绑定存储。
    potion_policy:
        药水策略。
    history:
        决策历史，为 ``None`` 时新建。
    menu_visible:
        药水选择菜单的初始可见状态。
    """

    def __init__(
        self,
        host: CombatHost,
        store: AssignmentStore,
        potion_policy: PotionPolicy,
        *,
        history: DecisionHistory | None = None,
        menu_visible: bool = False,
    ) -> None:
        self._host = host
        self._store = store
        self._potion = potion_policy
        self._history = history if history is not None else DecisionHistory()
        self._menu_visible = menu_visible
        self._state = CoordinatorState.IDLE
        self._depth = 0
        self._max_depth = 0
        self._swap = SwapEngine(
            host,
            store,
            use_potion=lambda: self._apply_potion(TriggerEvent.enemy_spawned),
        )

    # ── 属性 ──

    @property
    def state(self) -> CoordinatorState:
        return self._state

    @property
    def history(self) -> DecisionHistory:
        return self._history

    @property
    def max_depth(self) -> int:
        """出现过的最大事件嵌套深度。"""
        return self._max_depth

    def register(self, registry: HookRegistry) -> None:
        """将事件处理函数注册到宿主扩展点。"""
        registry.register(HOOK_ENEMY_SPAWNED, self.on_enemy_spawned)
        registry.register(HOOK_EQUIPMENT_SET_CHANGED, self.on_equipment_set_changed)
        registry.register(HOOK_EQUIPMENT_SETS_CHANGED, self.on_equipment_sets_changed)
        registry.register(
            HOOK_SELECTION_MENU_VISIBILITY_CHANGED,
            self.on_selection_menu_visibility_changed,
        )
        registry.register(HOOK_TOGGLE_CHANGED, self.on_toggle_changed)

    # ── 事件处理 ──

    def on_enemy_spawned(self, attack_type: AttackType | str | None) -> SwapDecision | None:
        """敌人出现：评估是否切换装备组。"""
        def _run() -> SwapDecision:
            self._sync_num_sets()
            return self._run_swap(attack_type)

        return self._evaluate(TriggerEvent.enemy_spawned, _run)

    def on_equipment_set_changed(self) -> PotionDecision | None:
        """装备组已切换：为新装备组使用药水。"""

        def _run() -> PotionDecision:
            self._sync_num_sets()
            return self._apply_potion(TriggerEvent.equipment_set_changed)

        return self._evaluate(TriggerEvent.equipment_set_changed, _run)

    def on_equipment_sets_changed(self) -> bool | None:
        """装备组数量变化（如购买新装备组）：补齐绑定存储，返回是否有变化。"""
        return self._evaluate(TriggerEvent.equipment_sets_changed, self._sync_num_sets)

    def on_selection_menu_visibility_changed(self, visible: bool) -> PotionDecision | None:
        """药水选择菜单可见性变化：仅在关闭时评估药水。"""
        was_visible = self._menu_visible
        self._menu_visible = visible
        if not was_visible or visible:
            return None
        return self._evaluate(
            TriggerEvent.selection_menu_closed,
            lambda: self._apply_potion(TriggerEvent.selection_menu_closed),
        )

    def on_toggle_changed(
        self,
        name: ToggleName | str,
        new_value: bool,
        old_value: bool | None = None,
    ) -> PotionDecision | None:
        """开关变化：自动药水开启立即生效，自动切换等到下一次敌人出现。"""
        try:
            toggle = ToggleName(name)
        except ValueError:
            logger.debug("忽略未知开关: {!r}", name)
            return None

        if toggle == ToggleName.auto_potion and new_value:
            return self._evaluate(
                TriggerEvent.toggle_changed,
                lambda: self._apply_potion(TriggerEvent.toggle_changed),
            )
        logger.debug("开关 {}: {} → {}，无需立即评估", toggle.value, old_value, new_value)
        return None

    # ── 内部 ──

    def _evaluate(self, trigger: TriggerEvent, func: Callable[[], _T]) -> _T | None:
        """在 EVALUATING 状态中执行一次决策。宿主查询异常不会向外传播。"""
        self._depth += 1
        self._max_depth = max(self._max_depth, self._depth)
        self._state = CoordinatorState.EVALUATING
        if self._depth > 1:
            logger.debug("嵌套事件 {} (深度 {})", trigger.value, self._depth)
        try:
            return func()
        except Exception:
            logger.exception("处理事件 {} 时出错", trigger.value)
            return None
        finally:
            self._depth -= 1
            if self._depth == 0:
                self._state = CoordinatorState.IDLE

    def _sync_num_sets(self) -> bool:
        return self._store.update_total_sets(self._host.get_num_sets())

    def _run_swap(self, attack_type: AttackType | str | None) -> SwapDecision:
        depth = self._depth
        decision = self._swap.evaluate(attack_type)
        self._history.add(
            DecisionEvent(
                trigger=TriggerEvent.enemy_spawned,
                source=DecisionSource.SWAP,
                result=decision.result.name,
                reason=decision.reason.name,
                set_index=decision.target,
                depth=depth,
            )
        )
        return decision

    def _apply_potion(self, trigger: TriggerEvent) -> PotionDecision:
        depth = self._depth
        decision = self._potion.apply()
        self._history.add(
            DecisionEvent(
                trigger=trigger,
                source=DecisionSource.POTION,
                result=decision.result.name,
                reason=decision.reason.name,
                set_index=decision.set_index,
                potion_id=decision.potion_id,
                depth=depth,
            )
        )
        return decision
