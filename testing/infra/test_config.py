"""测试配置系统。"""

from pathlib import Path

import pytest

from autogear.infra.config import (
    ConfigManager,
    LogConfig,
    NotificationConfig,
    StorageConfig,
    UserConfig,
)
from autogear.infra.exceptions import ConfigError


# ── LogConfig ──


class TestLogConfig:
    def test_dir_auto_generated(self):
        cfg = LogConfig()
        assert cfg.dir is not None
        assert str(cfg.root) in str(cfg.dir)

    def test_explicit_dir_kept(self, tmp_path: Path):
        assert LogConfig(dir=tmp_path).dir == tmp_path

    def test_invalid_level(self):
        with pytest.raises(Exception):
            LogConfig(level="VERBOSE")


# ── 子配置 ──


class TestNotificationConfig:
    def test_defaults(self):
        cfg = NotificationConfig()
        assert cfg.disabled is False
        assert cfg.default_icon

    def test_frozen(self):
        cfg = NotificationConfig()
        with pytest.raises(Exception):
            cfg.disabled = True


class TestStorageConfig:
    def test_defaults(self):
        cfg = StorageConfig()
        assert cfg.backend == "yaml"
        assert cfg.path.suffix == ".yaml"

    def test_invalid_backend(self):
        with pytest.raises(Exception):
            StorageConfig(backend="redis")


# ── UserConfig ──


class TestUserConfig:
    def test_from_yaml(self, tmp_yaml):
        content = """\
log:
  level: "DEBUG"
notification:
  disabled: true
storage:
  backend: "memory"
"""
        cfg = UserConfig.from_yaml(tmp_yaml("config.yaml", content))
        assert cfg.log.level == "DEBUG"
        assert cfg.notification.disabled is True
        assert cfg.storage.backend == "memory"

    def test_from_yaml_with_overrides(self, tmp_yaml):
        path = tmp_yaml("config.yaml", "notification:\n  disabled: true\n")
        cfg = UserConfig.from_yaml(path, overrides={"notification": {"default_icon": "x.svg"}})
        assert cfg.notification.disabled is True
        assert cfg.notification.default_icon == "x.svg"

    def test_partial_yaml_uses_defaults(self, tmp_yaml):
        cfg = UserConfig.from_yaml(tmp_yaml("partial.yaml", "notification:\n  disabled: true\n"))
        assert cfg.storage == StorageConfig()


# ── ConfigManager ──


class TestConfigManager:
    def test_load_existing_file(self, tmp_yaml):
        path = tmp_yaml("settings.yaml", 'storage:\n  path: "char/alice.yaml"\n')
        cfg = ConfigManager.load(path)
        assert cfg.storage.path == Path("char/alice.yaml")

    def test_load_nonexistent_returns_default(self, tmp_path: Path):
        cfg = ConfigManager.load(tmp_path / "no_such_file.yaml")
        assert isinstance(cfg, UserConfig)
        assert cfg.notification.disabled is False

    def test_load_none_returns_default(self):
        assert ConfigManager.load(None).storage.backend == "yaml"

    def test_overrides_merged(self, tmp_yaml):
        path = tmp_yaml("settings.yaml", "storage:\n  backend: yaml\n  path: a.yaml\n")
        cfg = ConfigManager.load(path, overrides={"storage": {"backend": "memory"}})
        assert cfg.storage.backend == "memory"
        assert cfg.storage.path == Path("a.yaml")

    def test_invalid_raises_config_error(self, tmp_yaml):
        path = tmp_yaml("bad.yaml", "storage:\n  backend: sqlite\n")
        with pytest.raises(ConfigError):
            ConfigManager.load(path)
