"""具名扩展点注册表。

宿主在对应时机调用 :meth:`HookRegistry.fire`，注册在该扩展点上的回调
按注册顺序同步执行。事件串行派发，不存在并发。
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from autogear.infra.exceptions import HookError

HOOK_ENEMY_SPAWNED = "on_enemy_spawned"
HOOK_EQUIPMENT_SET_CHANGED = "on_equipment_set_changed"
HOOK_EQUIPMENT_SETS_CHANGED = "on_equipment_sets_changed"
HOOK_SELECTION_MENU_VISIBILITY_CHANGED = "on_selection_menu_visibility_changed"
HOOK_TOGGLE_CHANGED = "on_toggle_changed"

HOOK_NAMES: frozenset[str] = frozenset(
    {
        HOOK_ENEMY_SPAWNED,
        HOOK_EQUIPMENT_SET_CHANGED,
        HOOK_EQUIPMENT_SETS_CHANGED,
        HOOK_SELECTION_MENU_VISIBILITY_CHANGED,
        HOOK_TOGGLE_CHANGED,
    }
)


class HookRegistry:
    """扩展点 → 回调列表。"""

    def __init__(self) -> None:
        self._hooks: dict[str, list[Callable[..., Any]]] = {name: [] for name in HOOK_NAMES}

    def register(self, name: str, callback: Callable[..., Any]) -> None:
        """在扩展点 *name* 上注册回调。

        Raises
        ------
        HookError
            扩展点不存在。
        """
        if name not in self._hooks:
            raise HookError(name, f"支持: {sorted(HOOK_NAMES)}")
        self._hooks[name].append(callback)

    def fire(self, name: str, *args: Any, **kwargs: Any) -> None:
        """按注册顺序同步调用扩展点上的全部回调。"""
        if name not in self._hooks:
            raise HookError(name, "未知扩展点")
        for callback in list(self._hooks[name]):
            callback(*args, **kwargs)

    def callbacks(self, name: str) -> list[Callable[..., Any]]:
        return list(self._hooks.get(name, []))
