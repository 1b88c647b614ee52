# backend/reminder/scheduling/schemas.py

"""
通知スケジューラで扱うデータ構造の定義。

- ScheduledNotification: 呼び出し側から受け取り、配信時にそのまま渡すペイロード
- Registration: Registry に保持される「配信待ち」1件分
- PendingNotification / ScheduleResponse / CancelResponse: HTTP 境界のレスポンス
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

# 外部表現の時刻フォーマット（タイムゾーン情報なし・ローカル時刻として解釈）
TIME_FORMAT = "%Y-%m-%dT%H:%M"

# 配信イベント名（ホスト側の他のイベントと区別するための固定値）
NOTIFICATION_EVENT = "notification_"


class ScheduledNotification(BaseModel):
    """
    予約通知 1件分のペイロード。

    スケジューラは中身を解釈せず、配信時にこのまま Sender へ渡す。
    time は呼び出し側が指定した文字列をそのまま保持する。
    """

    id: int = Field(..., description="呼び出し側が採番する通知 ID")
    time: str = Field(
        ...,
        description="配信予定時刻（ローカル時刻, 形式: YYYY-MM-DDTHH:MM）",
        examples=["2025-06-01T14:30"],
    )
    message: str = Field(..., description="通知本文")


@dataclass(frozen=True, eq=False)
class Registration:
    """
    Registry に保持される配信待ちエントリ。

    eq=False なので同じ id でも別インスタンスは別物として扱われる。
    （上書き登録された古いタイマーが新しいエントリを消さないために使う）
    """

    id: int
    fire_at: datetime
    payload: ScheduledNotification = field(repr=False)


class PendingNotification(BaseModel):
    """GET /notifications/pending の 1 要素。"""

    id: int
    time: str
    message: str
    fire_at: datetime

    @classmethod
    def from_registration(cls, registration: Registration) -> PendingNotification:
        return cls(
            id=registration.id,
            time=registration.payload.time,
            message=registration.payload.message,
            fire_at=registration.fire_at,
        )


class ScheduleResponse(BaseModel):
    """
    POST /notifications/schedule のレスポンス。

    - scheduled: タイマーが起動された
    - dropped: 指定時刻が既に過ぎていたため登録されなかった
    """

    id: int
    status: Literal["scheduled", "dropped"]


class CancelResponse(BaseModel):
    """DELETE /notifications/{id} のレスポンス。未知の ID でも常に cancelled。"""

    id: int
    status: Literal["cancelled"] = "cancelled"
