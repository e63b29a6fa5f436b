"""键值持久化后端。

存储的实际传输方式属于宿主，本模块只约定最小接口
(:class:`KeyValueStorage`)，并提供两个实现：

- :class:`MemoryStorage` — 进程内字典，测试与临时会话使用。
- :class:`YamlFileStorage` — 单个 YAML 文件，每次写入都原子落盘。
"""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import yaml
from loguru import logger

from autogear.infra.exceptions import StorageError
from autogear.infra.file_utils import load_yaml, save_yaml


class KeyValueStorage(ABC):
    """按角色/会话隔离的键值存储抽象基类。"""

    @abstractmethod
    def get_item(self, key: str) -> Any:
        """读取键值，不存在时返回 ``None``。"""
        ...

    @abstractmethod
    def set_item(self, key: str, value: Any) -> None:
        """写入键值。返回前必须已完成持久化。

        Raises
        ------
        StorageError
            写入失败。
        """
        ...


class MemoryStorage(KeyValueStorage):
    """基于字典的内存存储。

    读写均做深拷贝，调用方持有的对象与存储内容互不影响。
    """

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def get_item(self, key: str) -> Any:
        return copy.deepcopy(self._data.get(key))

    def set_item(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)


class YamlFileStorage(KeyValueStorage):
    """基于单个 YAML 文件的存储。

    构造时读取整个文件，之后每次 :meth:`set_item` 都将完整文档原子写回。

    Parameters
    ----------
    path:
        数据文件路径。文件不存在时视为空存储。
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._data: dict[str, Any] = {}
        if self._path.exists():
            try:
                self._data = load_yaml(self._path)
            except yaml.YAMLError as e:
                raise StorageError(f"无法读取存储文件 {self._path}: {e}") from e
            if not isinstance(self._data, dict):
                raise StorageError(f"存储文件 {self._path} 顶层必须为字典")
            logger.debug("已加载存储文件: {}", self._path)

    @property
    def path(self) -> Path:
        return self._path

    def get_item(self, key: str) -> Any:
        return copy.deepcopy(self._data.get(key))

    def set_item(self, key: str, value: Any) -> None:
        data = dict(self._data)
        data[key] = copy.deepcopy(value)
        try:
            save_yaml(data, self._path)
        except (OSError, yaml.YAMLError) as e:
            raise StorageError(f"写入存储文件 {self._path} 失败: {e}") from e
        self._data = data
