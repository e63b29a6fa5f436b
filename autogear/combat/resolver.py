"""攻击类型克制关系与装备组查找。

克制关系是固定的三元循环::

    近战 克制 远程
    远程 克制 魔法
    魔法 克制 近战

``counters(x)`` 返回「对手使用 x 时应当穿戴的攻击类型」。
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from loguru import logger

from autogear.types import AttackType

_COUNTERED_BY: dict[AttackType, AttackType] = {
    AttackType.ranged: AttackType.melee,
    AttackType.magic: AttackType.ranged,
    AttackType.melee: AttackType.magic,
}


def counters(attack_type: AttackType) -> AttackType:
    """返回克制 *attack_type* 的攻击类型。"""
    return _COUNTERED_BY[attack_type]


def parse_attack_type(value: AttackType | str | None) -> AttackType | None:
    """宽松解析宿主给出的攻击类型，未知值返回 ``None``。"""
    if value is None or isinstance(value, AttackType):
        return value
    try:
        return AttackType(value)
    except ValueError:
        logger.debug("未知攻击类型: {!r}", value)
        return None


@dataclass(frozen=True, slots=True)
class SetMatch:
    """针对某个对手的装备组查找结果。

    Attributes
    ----------
    matched:
        与对手同类型的最小装备组索引，无则 ``None``。
    target:
        克制对手的最小装备组索引，无则 ``None``。
    """

    matched: int | None = None
    target: int | None = None

    @property
    def best(self) -> int | None:
        """优先克制组，其次同类型组。"""
        return self.target if self.target is not None else self.matched


def _first_index(set_types: Sequence[AttackType | None], wanted: AttackType) -> int | None:
    for i, attack_type in enumerate(set_types):
        if attack_type == wanted:
            return i
    return None


def find_sets(
    set_types: Sequence[AttackType | None],
    enemy: AttackType | None,
) -> SetMatch:
    """查找同类型装备组与克制装备组。

    多个装备组类型相同时总是取索引最小者。

    Parameters
    ----------
    set_types:
        按索引排列的装备组攻击类型，未装备武器为 ``None``。
    enemy:
        对手攻击类型，未知时两者都为 ``None``。
    """
    if enemy is None:
        return SetMatch()
    return SetMatch(
        matched=_first_index(set_types, enemy),
        target=_first_index(set_types, counters(enemy)),
    )
