"""决策事件记录与历史。

记录每次触发事件引发的决策（切换 / 药水），用于日志输出与测试断言。

使用方式::

    history = DecisionHistory()
    history.add(DecisionEvent(
        trigger=TriggerEvent.enemy_spawned,
        source=DecisionSource.SWAP,
        result="SWAP",
        reason="COUNTER",
        set_index=2,
    ))
    print(history)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from autogear.types import TriggerEvent


class DecisionSource(Enum):
    """做出决策的组件。"""

    SWAP = auto()
    POTION = auto()


@dataclass
class DecisionEvent:
    """单条决策记录。

    Attributes
    ----------
    trigger:
        引发决策的外部事件。
    source:
        做出决策的组件。
    result:
        结果类型名（如 ``"SWAP"``, ``"ACTIVATE"``）。
    reason:
        原因名（如 ``"COUNTER"``, ``"ALREADY_ACTIVE"``）。
    set_index:
        切换目标或药水评估时的装备组索引。
    potion_id:
        涉及的药水 ID。
    depth:
        事件嵌套深度（由决策自身动作同步触发的事件 > 1）。
    """

    trigger: TriggerEvent
    source: DecisionSource
    result: str
    reason: str
    set_index: int | None = None
    potion_id: str | None = None
    depth: int = 1

    def __str__(self) -> str:
        parts = [f"[{self.source.name}]", f"触发={self.trigger.value}"]
        parts.append(f"结果={self.result}")
        parts.append(f"原因={self.reason}")
        if self.set_index is not None:
            parts.append(f"装备组={self.set_index + 1}")
        if self.potion_id is not None:
            parts.append(f"药水={self.potion_id}")
        if self.depth > 1:
            parts.append(f"嵌套={self.depth}")
        return " | ".join(parts)


@dataclass
class DecisionHistory:
    """决策历史，按完成顺序保存（嵌套事件的决策先于外层记录）。"""

    events: list[DecisionEvent] = field(default_factory=list)

    def add(self, event: DecisionEvent) -> None:
        self.events.append(event)

    def reset(self) -> None:
        self.events.clear()

    def filter_by_source(self, source: DecisionSource) -> list[DecisionEvent]:
        return [e for e in self.events if e.source == source]

    def count(self, result: str) -> int:
        """某种结果出现的次数。"""
        return sum(1 for e in self.events if e.result == result)

    @property
    def last(self) -> DecisionEvent | None:
        return self.events[-1] if self.events else None

    def __len__(self) -> int:
        return len(self.events)

    def __str__(self) -> str:
        return "\n".join(str(e) for e in self.events)
