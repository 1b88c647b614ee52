# backend/reminder/notifications/schemas.py

"""
配信イベントの共通スキーマ定義。

スケジューラが発火時に生成し、各 Sender に渡す。
payload は予約時に受け取った ScheduledNotification をそのまま保持し、
リスナーには {id, time, message} の形で届く。
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict

from pydantic import BaseModel, Field

from reminder.scheduling.schemas import NOTIFICATION_EVENT, ScheduledNotification


class NotificationEvent(BaseModel):
    """
    配信イベント 1件分。

    受信確認のチャネルはなく、一方向のブロードキャストとして扱う。
    """

    event: str = Field(
        default=NOTIFICATION_EVENT,
        description="イベント名（固定値）。",
    )
    payload: ScheduledNotification = Field(
        ...,
        description="予約時に渡された通知ペイロード。",
    )
    emitted_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="イベント生成時刻（UTC）。",
    )

    def payload_dict(self) -> Dict[str, Any]:
        """リスナー / Webhook に渡す {id, time, message} の辞書。"""
        return self.payload.model_dump()
