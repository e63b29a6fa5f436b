"""会话启动入口。

每个角色会话启动一次：加载配置、初始化日志、打开存储、组装决策组件并注册到宿主扩展点。

使用方式::

    from autogear.scripts.main import start_session

    session = start_session("user_settings.yaml", host, registry)
    session.store.assign_potion(0, "melvorF:Melee_Accuracy_Potion_II")
    session.store.toggle(ToggleName.auto_potion)
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from autogear.combat.coordinator import EventCoordinator
from autogear.combat.history import DecisionHistory
from autogear.combat.hooks import HOOK_TOGGLE_CHANGED, HookRegistry
from autogear.combat.host import CombatHost
from autogear.combat.notifications import PotionNotifier
from autogear.combat.potion import PotionPolicy
from autogear.infra.config import ConfigManager, StorageConfig, UserConfig
from autogear.infra.logger import setup_logger
from autogear.storage.assignments import AssignmentStore
from autogear.storage.backend import KeyValueStorage, MemoryStorage, YamlFileStorage


def build_storage(config: StorageConfig) -> KeyValueStorage:
    """按配置创建存储后端。"""
    match config.backend:
        case "memory":
            return MemoryStorage()
        case "yaml":
            return YamlFileStorage(config.path)
    raise ValueError(f"未知存储后端: {config.backend}")


@dataclass
class AutoGearSession:
    """一次角色会话中组装好的全部组件。"""

    config: UserConfig
    registry: HookRegistry
    store: AssignmentStore
    coordinator: EventCoordinator

    @property
    def history(self) -> DecisionHistory:
        return self.coordinator.history


def create_session(
    config: UserConfig,
    host: CombatHost,
    registry: HookRegistry | None = None,
    *,
    storage: KeyValueStorage | None = None,
    menu_visible: bool = False,
) -> AutoGearSession:
    """用已加载的配置组装会话（不初始化日志）。

    Parameters
    ----------
    config:
        用户配置。
    host:
        战斗宿主。
    registry:
        宿主扩展点注册表，为 ``None`` 时新建。
    storage:
        存储后端，为 ``None`` 时按 ``config.storage`` 创建。
    menu_visible:
        药水选择菜单的初始可见状态。
    """
    registry = registry if registry is not None else HookRegistry()
    storage = storage if storage is not None else build_storage(config.storage)

    store = AssignmentStore(storage, num_sets=host.get_num_sets())
    notifier = PotionNotifier(host, config.notification)
    policy = PotionPolicy(host, store, notifier)
    coordinator = EventCoordinator(host, store, policy, menu_visible=menu_visible)
    coordinator.register(registry)

    # 用户点击开关 → 经由扩展点派发「开关变化」
    store.add_toggle_listener(
        lambda name, new, old: registry.fire(HOOK_TOGGLE_CHANGED, name, new, old)
    )

    logger.info("AutoGear 会话已启动: {} 个装备组", store.num_sets)
    return AutoGearSession(
        config=config,
        registry=registry,
        store=store,
        coordinator=coordinator,
    )


def start_session(
    settings_path: str | Path | None,
    host: CombatHost,
    registry: HookRegistry | None = None,
) -> AutoGearSession:
    """从配置文件路径启动会话：加载配置、初始化日志、组装组件。"""
    config = ConfigManager.load(settings_path)
    setup_logger(
        log_dir=config.log.dir if config.log.to_file else None,
        level=config.log.level,
    )
    return create_session(config, host, registry)
