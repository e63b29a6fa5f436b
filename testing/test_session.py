"""会话组装测试（配置 → 存储 → 协调器 → 扩展点）。"""

from __future__ import annotations

from pathlib import Path

import pytest
from loguru import logger

from autogear.combat.coordinator import CoordinatorState
from autogear.combat.hooks import (
    HOOK_ENEMY_SPAWNED,
    HOOK_EQUIPMENT_SETS_CHANGED,
    HOOK_SELECTION_MENU_VISIBILITY_CHANGED,
    HookRegistry,
)
from autogear.infra.config import NotificationConfig, StorageConfig, UserConfig
from autogear.scripts.main import build_storage, create_session, start_session
from autogear.storage.backend import MemoryStorage, YamlFileStorage
from autogear.types import AttackType, NotifyKind, ToggleName


@pytest.fixture
def session(host):
    registry = HookRegistry()
    host.registry = registry
    return create_session(UserConfig(), host, registry, storage=MemoryStorage())


class TestBuildStorage:
    def test_memory(self):
        assert isinstance(build_storage(StorageConfig(backend="memory")), MemoryStorage)

    def test_yaml(self, tmp_path: Path):
        path = tmp_path / "store.yaml"
        storage = build_storage(StorageConfig(backend="yaml", path=path))
        assert isinstance(storage, YamlFileStorage)
        assert storage.path == path


class TestCreateSession:
    def test_store_sized_from_host(self, session, host):
        assert session.store.num_sets == host.get_num_sets()
        assert dict(session.store.snapshot) == {0: None, 1: None, 2: None}

    def test_handlers_registered(self, session):
        assert len(session.registry.callbacks(HOOK_ENEMY_SPAWNED)) == 1

    def test_toggle_auto_potion_activates_immediately(self, session, host):
        session.store.assign_potion(0, "P2")
        session.store.toggle(ToggleName.auto_potion)
        assert [p.id for p in host.activations] == ["P2"]
        assert host.notifications[-1].kind == NotifyKind.success
        assert session.history.last.potion_id == "P2"

    def test_toggle_auto_swap_waits_for_enemy(self, session, host):
        session.store.toggle(ToggleName.auto_swap)
        assert host.swaps == []
        assert len(session.history) == 0

    def test_full_flow(self, session, host):
        store = session.store
        store.assign_potion(1, "P1")
        store.toggle(ToggleName.auto_swap)
        store.toggle(ToggleName.auto_potion)

        session.registry.fire(HOOK_ENEMY_SPAWNED, AttackType.ranged)

        assert host.swaps == [1]
        assert [p.id for p in host.activations] == ["P1"]
        assert session.coordinator.state is CoordinatorState.IDLE
        assert session.coordinator.max_depth == 2

    def test_bought_set_through_registry(self, make_host):
        host = make_host(set_types=[AttackType.ranged, AttackType.magic])
        registry = HookRegistry()
        host.registry = registry
        session = create_session(UserConfig(), host, registry, storage=MemoryStorage())

        host.set_types.append(AttackType.melee)
        registry.fire(HOOK_EQUIPMENT_SETS_CHANGED)
        session.store.assign_potion(2, "P1")
        session.store.toggle(ToggleName.auto_swap)
        session.store.toggle(ToggleName.auto_potion)
        registry.fire(HOOK_ENEMY_SPAWNED, AttackType.ranged)

        assert host.swaps == [2]
        assert [p.id for p in host.activations] == ["P1"]

    def test_menu_close_through_registry(self, host):
        registry = HookRegistry()
        session = create_session(
            UserConfig(), host, registry, storage=MemoryStorage(), menu_visible=True
        )
        session.store.set_toggle(ToggleName.auto_potion, True)
        host.activations.clear()
        session.store.assign_potion(0, "P3")
        registry.fire(HOOK_SELECTION_MENU_VISIBILITY_CHANGED, False)
        assert [p.id for p in host.activations] == ["P3"]

    def test_notifications_disabled(self, host):
        config = UserConfig(notification=NotificationConfig(disabled=True))
        session = create_session(config, host, storage=MemoryStorage())
        session.store.assign_potion(0, "P1")
        session.store.toggle(ToggleName.auto_potion)
        assert [p.id for p in host.activations] == ["P1"]
        assert host.notifications == []


class TestStartSession:
    def teardown_method(self):
        logger.remove()

    def test_from_settings_file(self, host, tmp_yaml, tmp_path: Path):
        data_path = tmp_path / "data" / "storage.yaml"
        settings = tmp_yaml(
            "settings.yaml",
            f"log:\n  to_file: false\nstorage:\n  backend: yaml\n  path: {data_path.as_posix()}\n",
        )
        session = start_session(settings, host)
        session.store.assign_potion(2, "P3")
        assert data_path.exists()
        assert session.config.storage.backend == "yaml"

    def test_missing_settings_uses_defaults(self, host, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        session = start_session(tmp_path / "missing.yaml", host)
        assert session.config.notification.disabled is False
        assert (tmp_path / "log").exists()
