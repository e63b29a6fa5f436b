"""药水自动使用策略。

对当前装备组按以下顺序判断，命中即返回::

    自动药水关闭        → NO_ACTION (DISABLED)
    装备组未绑定药水    → NO_ACTION (UNASSIGNED)
    绑定药水已在生效    → NO_ACTION (ALREADY_ACTIVE)
    药水 ID 无法解析    → NOT_FOUND  (仅警告一次，不通知)
    背包中没有该药水    → UNAVAILABLE (错误通知)
    其余               → ACTIVATE   (使用药水 + 成功通知)

策略会被多个触发源反复调用（切换后委托、装备组变化、菜单关闭），
状态已正确时必然落在 ``ALREADY_ACTIVE``，因此不会重复使用或重复通知。
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from loguru import logger

from autogear.combat.host import CombatHost, PotionRecord
from autogear.combat.notifications import PotionNotifier
from autogear.storage.assignments import AssignmentStore


# ═══════════════════════════════════════════════════════════════════════════════
# 决策结果
# ═══════════════════════════════════════════════════════════════════════════════


class PotionResult(Enum):
    """药水策略的结果类型。"""

    NO_ACTION = auto()
    """不做任何事。"""

    ACTIVATE = auto()
    """已使用药水。"""

    UNAVAILABLE = auto()
    """药水有效但不在背包中。"""

    NOT_FOUND = auto()
    """绑定的药水 ID 已失效。"""


class PotionReason(Enum):
    """药水策略给出结果的原因。"""

    DISABLED = auto()
    UNASSIGNED = auto()
    ALREADY_ACTIVE = auto()
    ASSIGNED_POTION_NOT_FOUND = auto()
    ASSIGNED_POTION_UNAVAILABLE = auto()
    ACTIVATED = auto()


@dataclass(frozen=True, slots=True)
class PotionDecision:
    """一次药水策略评估的结果。

    Attributes
    ----------
    result:
        结果类型。
    reason:
        原因。
    set_index:
        评估时的当前装备组。
    potion_id:
        绑定的药水 ID（未绑定为 ``None``）。
    potion:
        解析后的药水记录（仅 ``ACTIVATE`` / ``UNAVAILABLE``）。
    """

    result: PotionResult
    reason: PotionReason
    set_index: int
    potion_id: str | None = None
    potion: PotionRecord | None = None

    @property
    def activated(self) -> bool:
        return self.result == PotionResult.ACTIVATE


# ═══════════════════════════════════════════════════════════════════════════════
# 策略
# ═══════════════════════════════════════════════════════════════════════════════


class PotionPolicy:
    """为当前装备组使用其绑定的药水。

    Parameters
    ----------
    host:
        战斗宿主。
    store:
        绑定存储（每次评估都重新读取开关与绑定）。
    notifier:
        通知发送器。
    """

    def __init__(
        self,
        host: CombatHost,
        store: AssignmentStore,
        notifier: PotionNotifier,
    ) -> None:
        self._host = host
        self._store = store
        self._notifier = notifier
        self._warned_missing: set[tuple[int, str]] = set()

    def apply(self) -> PotionDecision:
        """对当前装备组执行一次策略评估。"""
        set_index = self._host.get_current_set_index()
        decision = self._decide(set_index)
        logger.debug(
            "[药水] 装备组 {}: {} ({})",
            set_index + 1,
            decision.result.name,
            decision.reason.name,
        )
        return decision

    def _decide(self, set_index: int) -> PotionDecision:
        if not self._store.auto_potion_enabled:
            return PotionDecision(PotionResult.NO_ACTION, PotionReason.DISABLED, set_index)

        potion_id = self._store.get_assigned_potion(set_index)
        if potion_id is None:
            return PotionDecision(PotionResult.NO_ACTION, PotionReason.UNASSIGNED, set_index)

        active = self._host.get_active_consumable()
        if active is not None and active.potion_id == potion_id:
            return PotionDecision(
                PotionResult.NO_ACTION, PotionReason.ALREADY_ACTIVE, set_index, potion_id
            )

        potion = self._host.resolve_potion(potion_id)
        if potion is None:
            key = (set_index, potion_id)
            if key not in self._warned_missing:
                self._warned_missing.add(key)
                logger.warning("[药水] 装备组 {} 绑定的药水 {} 已失效", set_index + 1, potion_id)
            return PotionDecision(
                PotionResult.NOT_FOUND,
                PotionReason.ASSIGNED_POTION_NOT_FOUND,
                set_index,
                potion_id,
            )

        if not self._host.has_potion(potion.id):
            logger.info("[药水] 装备组 {} 绑定的 {} 不在背包中", set_index + 1, potion.name)
            self._notifier.unavailable(set_index, potion)
            return PotionDecision(
                PotionResult.UNAVAILABLE,
                PotionReason.ASSIGNED_POTION_UNAVAILABLE,
                set_index,
                potion_id,
                potion,
            )

        logger.info("[药水] 装备组 {} 使用 {}", set_index + 1, potion.name)
        self._host.activate_potion(potion)
        self._notifier.activated(set_index, potion)
        return PotionDecision(
            PotionResult.ACTIVATE, PotionReason.ACTIVATED, set_index, potion_id, potion
        )
