# backend/reminder/notifications/factory.py

"""
通知サービスの簡易ファクトリ。

設定に応じて以下の Sender を束ねた CompositeNotificationService を返す。
- EventBroadcaster（常に有効。ホスト内リスナー向け）
- LoggingNotificationSender（REMINDER_LOG_DELIVERIES=true のとき）
- WebhookNotificationSender（REMINDER_WEBHOOK_URL 設定時）
"""

from __future__ import annotations

import threading
from typing import List, Optional

from reminder.scheduling.config import SchedulerConfig, get_scheduler_config

from .schemas import NotificationEvent
from .service import (
    CompositeNotificationService,
    EventBroadcaster,
    LoggingNotificationSender,
    NotificationSender,
)
from .webhook import WebhookNotificationSender

_notification_service: Optional[CompositeNotificationService] = None
_broadcaster: Optional[EventBroadcaster] = None
# 再入可能: build_notification_service() は get_event_broadcaster() を呼ぶ
_lock = threading.RLock()


def get_event_broadcaster() -> EventBroadcaster:
    """
    アプリ全体で共有する EventBroadcaster を返す。
    """
    global _broadcaster
    with _lock:
        if _broadcaster is None:
            _broadcaster = EventBroadcaster()
        return _broadcaster


def build_notification_service(
    config: SchedulerConfig | None = None,
) -> CompositeNotificationService:
    config = config or get_scheduler_config()

    senders: List[NotificationSender] = [get_event_broadcaster()]
    if config.log_deliveries:
        senders.append(LoggingNotificationSender())
    if config.webhook_enabled:
        senders.append(WebhookNotificationSender(config))
    return CompositeNotificationService(senders)


def get_notification_service() -> CompositeNotificationService:
    """
    アプリ全体で共有する CompositeNotificationService を返す。

    初回呼び出し時にのみ生成し、それ以降は同じインスタンスを返す。
    """
    global _notification_service
    with _lock:
        if _notification_service is None:
            _notification_service = build_notification_service()
        return _notification_service


def reset_notification_service() -> None:
    """
    テスト用に共有インスタンスと設定キャッシュをリセットする。
    """
    global _notification_service, _broadcaster
    with _lock:
        _notification_service = None
        _broadcaster = None
    get_scheduler_config.cache_clear()


__all__ = [
    "NotificationEvent",
    "CompositeNotificationService",
    "EventBroadcaster",
    "LoggingNotificationSender",
    "WebhookNotificationSender",
    "build_notification_service",
    "get_event_broadcaster",
    "get_notification_service",
    "reset_notification_service",
]
