# backend/reminder/scheduling/commands.py

"""
ホストアプリに公開する境界操作。

HTTP ルーターなどのトランスポートはここを呼ぶだけにし、
スケジューラの詳細は知らなくてよいようにする。
"""

from __future__ import annotations

from typing import Optional

from .scheduler import NotificationScheduler
from .state import get_scheduler


def schedule_notification(
    notification_id: int,
    time: str,
    message: str,
    *,
    scheduler: Optional[NotificationScheduler] = None,
) -> bool:
    """
    通知を予約する。実行中のイベントループ上から呼び出すこと。

    :raises InvalidTimeFormat: time の形式が不正な場合。
    :return: タイマーが起動されたら True、時刻が過ぎていて破棄された場合は False。
    """
    scheduler = scheduler or get_scheduler()
    return scheduler.schedule(notification_id, time, message) is not None


def cancel_notification(
    notification_id: int,
    *,
    scheduler: Optional[NotificationScheduler] = None,
) -> None:
    """
    予約をキャンセルする。ID が存在しなくても失敗しない。
    """
    scheduler = scheduler or get_scheduler()
    scheduler.cancel(notification_id)
