"""持久化层 — 键值存储后端与药水绑定存储。"""

from .assignments import ASSIGNMENTS_KEY, AssignmentSnapshot, AssignmentStore
from .backend import KeyValueStorage, MemoryStorage, YamlFileStorage

__all__ = [
    "ASSIGNMENTS_KEY",
    "AssignmentSnapshot",
    "AssignmentStore",
    "KeyValueStorage",
    "MemoryStorage",
    "YamlFileStorage",
]
