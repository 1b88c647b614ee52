# backend/reminder/scheduling/scheduler.py

"""
予約通知スケジューラ本体。

- schedule(): 時刻をパースし、Registry に登録して 1件ごとに独立したタイマータスクを起動する
- cancel(): Registry から削除するだけ（タスク自体には触らない）
- タイマーが満了したタスクは remove_if_present() に成功した場合のみ配信する

発火とキャンセルが競合しても、Registry の「削除できたかどうか」で勝者が 1 つに決まるため、
同じ ID が二重に配信されたり、キャンセル後に配信されたりすることはない。
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Awaitable, Callable, List, Optional, Set

from reminder.notifications.schemas import NotificationEvent
from reminder.notifications.service import NotificationSender

from .registry import NotificationRegistry
from .schemas import TIME_FORMAT, Registration, ScheduledNotification

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
Sleep = Callable[[float], Awaitable[None]]


class InvalidTimeFormat(ValueError):
    """配信時刻の文字列がパースできなかった場合の例外。"""

    def __init__(self, value: str) -> None:
        super().__init__(
            f"Invalid time format: {value!r} (expected YYYY-MM-DDTHH:MM, e.g. 2025-06-01T14:30)"
        )
        self.value = value


def parse_fire_at(value: str) -> datetime:
    """
    外部表現の時刻文字列をローカル時刻の naive datetime に変換する。

    :raises InvalidTimeFormat: 形式が TIME_FORMAT と一致しない場合。
    """
    try:
        return datetime.strptime(value, TIME_FORMAT)
    except (TypeError, ValueError) as exc:
        raise InvalidTimeFormat(value) from exc


class NotificationScheduler:
    """
    予約通知の登録・キャンセル・発火を管理する。

    - sink: 配信先。send(event) を持つ任意のオブジェクト（スレッドプール上で呼ばれる）
    - clock: 現在時刻（ローカル naive datetime）を返す関数。テストで差し替える
    - sleep: 待機関数。テストで差し替える
    """

    def __init__(
        self,
        sink: NotificationSender,
        *,
        registry: Optional[NotificationRegistry] = None,
        clock: Optional[Clock] = None,
        sleep: Optional[Sleep] = None,
    ) -> None:
        self._sink = sink
        self._registry = registry if registry is not None else NotificationRegistry()
        self._clock: Clock = clock or datetime.now
        self._sleep: Sleep = sleep or asyncio.sleep
        self._tasks: Set[asyncio.Task] = set()

    @property
    def registry(self) -> NotificationRegistry:
        return self._registry

    @property
    def pending_count(self) -> int:
        return len(self._registry)

    def pending(self) -> List[Registration]:
        return self._registry.snapshot()

    def schedule(self, notification_id: int, time: str, message: str) -> Optional[Registration]:
        """
        通知を予約する。実行中のイベントループ上から呼び出すこと。

        指定時刻が既に過ぎている（残り 1 秒未満を含む）場合は登録も配信もせず None を返す。

        :raises InvalidTimeFormat: time がパースできない場合（登録は行われない）。
        :return: 登録された Registration。
        """
        fire_at = parse_fire_at(time)

        delay = int((fire_at - self._clock()).total_seconds())
        if delay <= 0:
            logger.info(f"Notification {notification_id} at {time} is already past; dropped.")
            return None

        loop = asyncio.get_running_loop()

        registration = Registration(
            id=notification_id,
            fire_at=fire_at,
            payload=ScheduledNotification(id=notification_id, time=time, message=message),
        )
        replaced = self._registry.insert(registration)
        if replaced is not None:
            logger.warning(
                f"Notification {notification_id} was already pending; replaced by the new registration."
            )

        task = loop.create_task(
            self._fire_after(registration, delay),
            name=f"notification-{notification_id}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

        logger.info(f"Notification {notification_id} scheduled at {time} (in {delay}s).")
        return registration

    def cancel(self, notification_id: int) -> bool:
        """
        予約をキャンセルする。

        未知の ID や配信済みの ID でもエラーにはしない。
        戻り値は実際に削除したかどうか（呼び出し側には成功として扱ってよい）。
        """
        removed = self._registry.remove_if_present(notification_id)
        if removed:
            logger.info(f"Notification {notification_id} cancelled.")
        else:
            logger.debug(f"Cancel for notification {notification_id} was a no-op.")
        return removed

    async def _fire_after(self, registration: Registration, delay: int) -> None:
        await self._sleep(delay)

        if not self._registry.remove_if_present(registration.id, registration):
            logger.debug(f"Notification {registration.id} is no longer pending; skipped.")
            return

        event = NotificationEvent(payload=registration.payload)
        try:
            await asyncio.to_thread(self._sink.send, event)
        except Exception:  # noqa: BLE001 - 配信失敗はリトライも通知もしない
            logger.exception(f"Failed to deliver notification {registration.id}.")
            return

        logger.info(f"Notification {registration.id} delivered.")

    async def wait_idle(self) -> None:
        """起動済みのタイマータスクがすべて終わるまで待つ。"""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def shutdown(self) -> None:
        """
        未発火のタスクをすべてキャンセルし、Registry を空にする。

        配信前に永続的な副作用はないため、途中打ち切りでかまわない。
        """
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        self._registry.clear()
        if tasks:
            logger.info(f"Scheduler shut down; {len(tasks)} pending timer(s) cancelled.")
