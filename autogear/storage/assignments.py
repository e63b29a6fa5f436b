"""装备组 ↔ 药水绑定存储。

:class:`AssignmentStore` 是决策组件唯一共享的可变状态，保存：

- ``potionAssignments``: ``{装备组索引: 药水 ID | None}``，``None`` 表示显式「未绑定」；
- ``autoSwapEnabled`` / ``autoPotionEnabled``: 两个独立的开关。

所有修改都在内部副本上完成，持久化成功后才替换当前状态，
随后向订阅者发布不可变快照。外部只能通过方法修改，绕不过持久化。

使用方式::

    store = AssignmentStore(MemoryStorage(), num_sets=4)
    store.assign_potion(2, "melvorF:Melee_Accuracy_Potion_II")
    store.snapshot[2]   # → "melvorF:Melee_Accuracy_Potion_II"
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from types import MappingProxyType

from loguru import logger
from pydantic import TypeAdapter, ValidationError

from autogear.infra.exceptions import StorageCorruptedError
from autogear.storage.backend import KeyValueStorage
from autogear.types import ToggleName

ASSIGNMENTS_KEY = "potionAssignments"
"""药水绑定的持久化键名。"""

_ASSIGNMENTS_ADAPTER: TypeAdapter[dict[int, str | None]] = TypeAdapter(dict[int, str | None])
_TOGGLE_ADAPTER: TypeAdapter[bool | None] = TypeAdapter(bool | None)

AssignmentSnapshot = Mapping[int, str | None]
SnapshotListener = Callable[[AssignmentSnapshot], None]
ToggleListener = Callable[[ToggleName, bool, bool], None]
"""开关监听回调: ``(name, new_value, old_value) → None``"""


class AssignmentStore:
    """药水绑定与自动化开关的持久化存储。

    Parameters
    ----------
    storage:
        键值存储后端。
    num_sets:
        当前装备组数量。``0..num_sets-1`` 中缺失的索引会被补为 ``None``。

    Raises
    ------
    StorageCorruptedError
        已持久化的数据格式非法。
    """

    def __init__(self, storage: KeyValueStorage, num_sets: int) -> None:
        if num_sets < 0:
            raise ValueError(f"装备组数量不能为负: {num_sets}")
        self._storage = storage
        self._num_sets = num_sets
        self._assignments = self._load_assignments()
        self._toggles = {name: self._load_toggle(name) for name in ToggleName}
        self._snapshot_listeners: list[SnapshotListener] = []
        self._toggle_listeners: list[ToggleListener] = []

        # 补齐缺失索引并保存初始状态
        self._commit(self._seeded(self._assignments, num_sets))
        logger.debug(
            "绑定存储已加载: {} 个装备组, 自动切换={}, 自动药水={}",
            num_sets,
            self.auto_swap_enabled,
            self.auto_potion_enabled,
        )

    # ── 加载 ──

    def _load_assignments(self) -> dict[int, str | None]:
        raw = self._storage.get_item(ASSIGNMENTS_KEY)
        if raw is None:
            return {}
        try:
            return _ASSIGNMENTS_ADAPTER.validate_python(raw)
        except ValidationError as e:
            raise StorageCorruptedError(ASSIGNMENTS_KEY, str(e)) from e

    def _load_toggle(self, name: ToggleName) -> bool:
        raw = self._storage.get_item(name.storage_key)
        try:
            value = _TOGGLE_ADAPTER.validate_python(raw)
        except ValidationError as e:
            raise StorageCorruptedError(name.storage_key, str(e)) from e
        return bool(value)

    @staticmethod
    def _seeded(assignments: dict[int, str | None], num_sets: int) -> dict[int, str | None]:
        seeded = dict(assignments)
        for i in range(num_sets):
            seeded.setdefault(i, None)
        return seeded

    # ── 读取 ──

    @property
    def num_sets(self) -> int:
        """当前装备组数量。"""
        return self._num_sets

    @property
    def snapshot(self) -> AssignmentSnapshot:
        """当前绑定的只读快照（包含超出装备组数量的历史条目）。"""
        return MappingProxyType(dict(self._assignments))

    def get_assigned_potion(self, set_index: int) -> str | None:
        """获取装备组绑定的药水 ID，未绑定或索引超出当前数量时返回 ``None``。"""
        if not 0 <= set_index < self._num_sets:
            return None
        return self._assignments.get(set_index)

    @property
    def auto_swap_enabled(self) -> bool:
        return self.is_enabled(ToggleName.auto_swap)

    @property
    def auto_potion_enabled(self) -> bool:
        return self.is_enabled(ToggleName.auto_potion)

    def is_enabled(self, name: ToggleName) -> bool:
        return self._toggles[name]

    # ── 修改 ──

    def assign_potion(self, set_index: int, potion_id: str) -> None:
        """将药水绑定到装备组并立即持久化。

        Raises
        ------
        ValueError
            索引越界或药水 ID 为空。
        """
        self._check_index(set_index)
        if not potion_id:
            raise ValueError("药水 ID 不能为空")
        updated = dict(self._assignments)
        updated[set_index] = potion_id
        self._commit(updated)
        logger.info("装备组 {} 绑定药水 {}", set_index + 1, potion_id)

    def unassign_potion(self, set_index: int) -> None:
        """解除装备组的药水绑定并立即持久化。"""
        self._check_index(set_index)
        updated = dict(self._assignments)
        updated[set_index] = None
        self._commit(updated)
        logger.info("装备组 {} 解除药水绑定", set_index + 1)

    def update_total_sets(self, num_sets: int) -> bool:
        """装备组数量变化后（如购买新装备组）补齐缺失索引。

        已有条目不会被删除，超出数量的条目保留但被忽略。
        数量未变化时不做任何事，返回 ``False``。
        """
        if num_sets < 0:
            raise ValueError(f"装备组数量不能为负: {num_sets}")
        if num_sets == self._num_sets:
            return False
        updated = self._seeded(self._assignments, num_sets)
        self._storage.set_item(ASSIGNMENTS_KEY, dict(updated))
        self._num_sets = num_sets
        self._assignments = updated
        self._publish()
        logger.info("装备组数量更新为 {}", num_sets)
        return True

    def set_toggle(self, name: ToggleName, value: bool) -> None:
        """设置开关、持久化并通知监听者。值未变化时不做任何事。"""
        old = self._toggles[name]
        if old == value:
            return
        self._storage.set_item(name.storage_key, value)
        self._toggles[name] = value
        logger.info("开关 {} → {}", name.value, value)
        for listener in list(self._toggle_listeners):
            listener(name, value, old)

    def toggle(self, name: ToggleName) -> bool:
        """翻转开关（用户点击开关按钮），返回新值。"""
        new_value = not self.is_enabled(name)
        self.set_toggle(name, new_value)
        return new_value

    # ── 订阅 ──

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """订阅绑定快照。每次修改持久化后以新快照回调。

        Returns
        -------
        Callable[[], None]
            取消订阅函数。
        """
        self._snapshot_listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._snapshot_listeners:
                self._snapshot_listeners.remove(listener)

        return _unsubscribe

    def add_toggle_listener(self, listener: ToggleListener) -> None:
        """注册开关变化监听者。"""
        self._toggle_listeners.append(listener)

    # ── 内部 ──

    def _check_index(self, set_index: int) -> None:
        if not 0 <= set_index < self._num_sets:
            raise ValueError(f"装备组索引越界: {set_index} (共 {self._num_sets} 组)")

    def _commit(self, updated: dict[int, str | None]) -> None:
        """持久化成功后再替换内存状态，随后发布快照。"""
        self._storage.set_item(ASSIGNMENTS_KEY, dict(updated))
        self._assignments = updated
        self._publish()

    def _publish(self) -> None:
        snapshot = self.snapshot
        for listener in list(self._snapshot_listeners):
            listener(snapshot)
