"""测试公共 fixtures。"""

from __future__ import annotations

from pathlib import Path

import pytest

from autogear.combat.hooks import HOOK_EQUIPMENT_SET_CHANGED, HookRegistry
from autogear.combat.host import (
    ActiveConsumable,
    CombatHost,
    EquipmentSet,
    Notification,
    PotionRecord,
)
from autogear.storage.assignments import AssignmentStore
from autogear.storage.backend import MemoryStorage
from autogear.types import AttackType


POTIONS: dict[str, PotionRecord] = {
    "P1": PotionRecord(id="P1", name="Melee Accuracy Potion", media="melee.png"),
    "P2": PotionRecord(id="P2", name="Ranged Assistance Potion", media="ranged.png"),
    "P3": PotionRecord(id="P3", name="Magic Assistance Potion"),
}


class FakeHost(CombatHost):
    """记录所有动作的宿主替身。

    ``registry`` 不为空时，切换装备组会像真实宿主一样同步派发「装备组已切换」。
    """

    def __init__(
        self,
        set_types: list[AttackType | None] | None = None,
        current: int = 0,
        bank: set[str] | None = None,
        potions: dict[str, PotionRecord] | None = None,
    ) -> None:
        self.set_types: list[AttackType | None] = list(set_types or [])
        self.current = current
        self.bank: set[str] = set(bank if bank is not None else POTIONS)
        self.potions = dict(potions if potions is not None else POTIONS)
        self.active: ActiveConsumable | None = None
        self.in_dungeon = False
        self.dungeon_swap_allowed = False
        self.registry: HookRegistry | None = None

        self.swaps: list[int] = []
        self.activations: list[PotionRecord] = []
        self.notifications: list[Notification] = []

    # ── 查询 ──

    def get_ordered_sets(self) -> list[EquipmentSet]:
        return [EquipmentSet(index=i, attack_type=t) for i, t in enumerate(self.set_types)]

    def get_current_set_index(self) -> int:
        return self.current

    def get_active_consumable(self) -> ActiveConsumable | None:
        return self.active

    def has_potion(self, potion_id: str) -> bool:
        return potion_id in self.bank

    def resolve_potion(self, potion_id: str) -> PotionRecord | None:
        return self.potions.get(potion_id)

    def is_in_restricted_zone(self) -> bool:
        return self.in_dungeon

    def is_swap_allowed_in_restricted_zone(self) -> bool:
        return self.dungeon_swap_allowed

    # ── 动作 ──

    def change_equipment_set(self, index: int) -> None:
        self.swaps.append(index)
        self.current = index
        if self.registry is not None:
            self.registry.fire(HOOK_EQUIPMENT_SET_CHANGED)

    def activate_potion(self, potion: PotionRecord) -> None:
        self.activations.append(potion)
        self.active = ActiveConsumable(potion_id=potion.id, charges=10)

    def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)


@pytest.fixture
def host() -> FakeHost:
    """三个装备组: [远程, 近战, 魔法]，当前为第 0 组。"""
    return FakeHost(set_types=[AttackType.ranged, AttackType.melee, AttackType.magic])


@pytest.fixture
def make_host():
    """按需构造宿主替身的工厂 fixture。"""
    return FakeHost


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def store(storage: MemoryStorage, host: FakeHost) -> AssignmentStore:
    return AssignmentStore(storage, num_sets=host.get_num_sets())


@pytest.fixture
def tmp_yaml(tmp_path: Path):
    """创建临时 YAML 文件的工厂 fixture。"""

    def _factory(name: str, content: str) -> Path:
        p = tmp_path / name
        p.write_text(content, encoding="utf-8")
        return p

    return _factory
