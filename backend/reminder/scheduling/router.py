# backend/reminder/scheduling/router.py

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from . import commands
from .scheduler import InvalidTimeFormat, NotificationScheduler
from .schemas import (
    CancelResponse,
    PendingNotification,
    ScheduleResponse,
    ScheduledNotification,
)
from .state import get_scheduler

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.post(
    "/schedule",
    response_model=ScheduleResponse,
    summary="通知を予約",
    description="指定したローカル時刻（YYYY-MM-DDTHH:MM）に通知を配信する。過去の時刻は破棄される。",
)
async def post_schedule_notification(
    body: ScheduledNotification,
    scheduler: NotificationScheduler = Depends(get_scheduler),
) -> ScheduleResponse:
    """
    通知予約エンドポイント。

    タイマーをイベントループ上に起動するため async で定義している。

    - 時刻形式エラー → 400 Bad Request（人間向けのメッセージのみ）
    """
    try:
        scheduled = commands.schedule_notification(
            body.id, body.time, body.message, scheduler=scheduler
        )
    except InvalidTimeFormat as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    return ScheduleResponse(id=body.id, status="scheduled" if scheduled else "dropped")


@router.delete(
    "/{notification_id}",
    response_model=CancelResponse,
    summary="通知予約をキャンセル",
)
def delete_notification(
    notification_id: int,
    scheduler: NotificationScheduler = Depends(get_scheduler),
) -> CancelResponse:
    """
    予約キャンセルエンドポイント。未知の ID でも 200 を返す。
    """
    commands.cancel_notification(notification_id, scheduler=scheduler)
    return CancelResponse(id=notification_id)


@router.get(
    "/pending",
    response_model=List[PendingNotification],
    summary="配信待ちの通知一覧",
)
def list_pending_notifications(
    scheduler: NotificationScheduler = Depends(get_scheduler),
) -> List[PendingNotification]:
    return [PendingNotification.from_registration(r) for r in scheduler.pending()]
