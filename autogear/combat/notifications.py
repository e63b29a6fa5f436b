"""药水通知的文本格式与发送开关。"""

from __future__ import annotations

from loguru import logger

from autogear.combat.host import CombatHost, Notification, PotionRecord
from autogear.infra.config import NotificationConfig
from autogear.types import NotifyKind

POTION_NOT_FOUND_ID = "potion-not-found"
"""「药水不在背包」错误通知的去重 ID。"""


class PotionNotifier:
    """格式化药水通知并交给宿主发送。

    ``config.disabled`` 为真时丢弃所有通知，不影响决策本身。
    """

    def __init__(self, host: CombatHost, config: NotificationConfig | None = None) -> None:
        self._host = host
        self._config = config or NotificationConfig()

    @property
    def disabled(self) -> bool:
        return self._config.disabled

    def activated(self, set_index: int, potion: PotionRecord) -> Notification | None:
        return self._send(
            Notification(
                kind=NotifyKind.success,
                message=f"Set {set_index + 1} {potion.name} Activated",
                icon=potion.media or self._config.default_icon,
            )
        )

    def unavailable(self, set_index: int, potion: PotionRecord) -> Notification | None:
        return self._send(
            Notification(
                kind=NotifyKind.error,
                message=f"{potion.name} assigned to set {set_index + 1} not found in bank",
                custom_id=POTION_NOT_FOUND_ID,
            )
        )

    def _send(self, notification: Notification) -> Notification | None:
        if self._config.disabled:
            logger.debug("通知已关闭，丢弃: {}", notification.message)
            return None
        self._host.notify(notification)
        return notification
