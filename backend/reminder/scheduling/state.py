# backend/reminder/scheduling/state.py

"""
NotificationScheduler のシンプルな状態管理モジュール。

- アプリ全体で共有する NotificationScheduler インスタンスを提供
- テスト時にリセットできるようにする

FastAPI の DI で使うことも、素朴なグローバル状態として使うことも可能。
同期 Depends はスレッドプールから呼ばれるため、生成はロックで直列化する。
"""

from __future__ import annotations

import threading
from typing import Optional

from reminder.notifications.factory import get_notification_service, reset_notification_service

from .scheduler import NotificationScheduler

_scheduler: Optional[NotificationScheduler] = None
_lock = threading.Lock()


def get_scheduler() -> NotificationScheduler:
    """
    共有の NotificationScheduler インスタンスを返す。

    初回呼び出し時にのみ生成し、それ以降は同じインスタンスを返す。
    複数スレッドから同時に呼ばれても生成されるのは 1 つだけ。
    """
    global _scheduler
    with _lock:
        if _scheduler is None:
            _scheduler = NotificationScheduler(get_notification_service())
        return _scheduler


def reset_state() -> None:
    """
    テスト用にスケジューラと通知サービスのシングルトン状態をリセットする。

    未発火のタイマーは shutdown() で止める。
    """
    global _scheduler
    with _lock:
        if _scheduler is not None:
            _scheduler.shutdown()
        _scheduler = None
    reset_notification_service()
