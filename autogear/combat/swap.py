"""装备组自动切换决策。

敌人出现时评估一次，结果只会是以下三者之一::

    NO_ACTION   — 开关关闭 / 没有合适装备组 / 区域禁止切换
    USE_POTION  — 最优装备组已在使用，委托药水策略
    SWAP        — 切换到克制组（优先）或同类型组

:func:`decide_swap` 是纯函数；:class:`SwapEngine` 负责从宿主和存储收集输入、
执行决策结果。同一次评估中不会既切换又直接使用药水：切换后的药水由宿主
派发的「装备组已切换」事件负责。
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum, auto

from loguru import logger

from autogear.combat.host import CombatHost, ZoneContext
from autogear.combat.resolver import SetMatch, find_sets, parse_attack_type
from autogear.storage.assignments import AssignmentStore
from autogear.types import AttackType


# ═══════════════════════════════════════════════════════════════════════════════
# 决策结果
# ═══════════════════════════════════════════════════════════════════════════════


class SwapResult(Enum):
    """切换决策的结果类型。"""

    NO_ACTION = auto()
    """不做任何事。"""

    USE_POTION = auto()
    """不切换，委托药水策略处理当前装备组。"""

    SWAP = auto()
    """切换到 ``SwapDecision.target``。"""


class SwapReason(Enum):
    """切换决策给出结果的原因。"""

    DISABLED = auto()
    NO_SUITABLE_SET = auto()
    SWAP_RESTRICTED = auto()
    ALREADY_OPTIMAL = auto()
    COUNTER = auto()
    MATCH = auto()


@dataclass(frozen=True, slots=True)
class SwapDecision:
    """一次切换决策。

    Attributes
    ----------
    result:
        结果类型。
    reason:
        原因。
    target:
        ``SWAP`` 时的目标装备组索引。
    match:
        克制组 / 同类型组查找结果（开关关闭时为空）。
    """

    result: SwapResult
    reason: SwapReason
    target: int | None = None
    match: SetMatch = SetMatch()

    @staticmethod
    def no_action(reason: SwapReason, match: SetMatch = SetMatch()) -> SwapDecision:
        return SwapDecision(result=SwapResult.NO_ACTION, reason=reason, match=match)

    @staticmethod
    def use_potion(match: SetMatch) -> SwapDecision:
        return SwapDecision(
            result=SwapResult.USE_POTION, reason=SwapReason.ALREADY_OPTIMAL, match=match
        )

    @staticmethod
    def swap(target: int, reason: SwapReason, match: SetMatch) -> SwapDecision:
        return SwapDecision(result=SwapResult.SWAP, reason=reason, target=target, match=match)


def decide_swap(
    *,
    enabled: bool,
    enemy: AttackType | None,
    set_types: Sequence[AttackType | None],
    current: int,
    zone: ZoneContext,
) -> SwapDecision:
    """根据战斗状态决定是否切换装备组。

    Parameters
    ----------
    enabled:
        自动切换开关。
    enemy:
        对手攻击类型。
    set_types:
        按索引排列的装备组攻击类型。
    current:
        当前装备组索引。
    zone:
        副本限制上下文。

    Returns
    -------
    SwapDecision
    """
    if not enabled:
        return SwapDecision.no_action(SwapReason.DISABLED)

    match = find_sets(set_types, enemy)

    if match.target is not None and match.target == current:
        return SwapDecision.use_potion(match)

    best = match.best
    if best is None:
        return SwapDecision.no_action(SwapReason.NO_SUITABLE_SET, match)

    # 没有克制组且当前已是同类型组：不切换到自身
    if best == current:
        return SwapDecision.use_potion(match)

    if zone.swap_restricted:
        return SwapDecision.no_action(SwapReason.SWAP_RESTRICTED, match)

    reason = SwapReason.COUNTER if best == match.target else SwapReason.MATCH
    return SwapDecision.swap(best, reason, match)


# ═══════════════════════════════════════════════════════════════════════════════
# 执行器
# ═══════════════════════════════════════════════════════════════════════════════

UsePotionFunc = Callable[[], object]
"""委托药水策略的回调: ``() → PotionDecision``"""


class SwapEngine:
    """收集输入、调用 :func:`decide_swap` 并执行结果。

    Parameters
    ----------
    host:
        战斗宿主。
    store:
        绑定存储（读取自动切换开关）。
    use_potion:
        ``USE_POTION`` 时调用的药水策略回调。
    """

    def __init__(
        self,
        host: CombatHost,
        store: AssignmentStore,
        use_potion: UsePotionFunc,
    ) -> None:
        self._host = host
        self._store = store
        self._use_potion = use_potion

    def decide(self, enemy_attack_type: AttackType | str | None) -> SwapDecision:
        """只做决策，不执行。"""
        if not self._store.auto_swap_enabled:
            return SwapDecision.no_action(SwapReason.DISABLED)
        enemy = parse_attack_type(enemy_attack_type)
        set_types = [s.attack_type for s in self._host.get_ordered_sets()]
        return decide_swap(
            enabled=True,
            enemy=enemy,
            set_types=set_types,
            current=self._host.get_current_set_index(),
            zone=self._host.get_zone_context(),
        )

    def evaluate(self, enemy_attack_type: AttackType | str | None) -> SwapDecision:
        """决策并执行：切换、委托药水策略，或什么都不做。"""
        decision = self.decide(enemy_attack_type)
        logger.debug(
            "[切换] 对手={} 结果={} ({}) 匹配={}",
            enemy_attack_type,
            decision.result.name,
            decision.reason.name,
            decision.match,
        )
        match decision:
            case SwapDecision(result=SwapResult.SWAP, target=int(target)):
                logger.info("[切换] 切换到装备组 {} ({})", target + 1, decision.reason.name)
                self._host.change_equipment_set(target)
            case SwapDecision(result=SwapResult.USE_POTION):
                self._use_potion()
        return decision
