# backend/reminder/notifications/service.py

"""
通知配信インターフェースと実装。

- NotificationEvent を受け取る send() インターフェース
- ログ出力のみ行う LoggingNotificationSender
- ホスト内のリスナーへブロードキャストする EventBroadcaster
- 複数 Sender にファンアウトする CompositeNotificationService

配信はベストエフォートで、失敗はリトライせず呼び出し元にも返さない。
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, Iterable, List, Protocol

from .schemas import NotificationEvent

logger = logging.getLogger(__name__)

NotificationListener = Callable[[str, Dict[str, Any]], None]


class NotificationSender(Protocol):
    """
    通知配信の最小インターフェース。

    実装例:
    - LoggingNotificationSender: ログ出力のみ
    - EventBroadcaster: プロセス内リスナーへの配信
    - WebhookNotificationSender: HTTP POST で外部へ配信
    """

    def send(self, event: NotificationEvent) -> None:  # pragma: no cover - Protocol
        ...


class LoggingNotificationSender:
    """
    NotificationEvent を Python の logger に記録するだけの Sender。
    """

    def __init__(self, logger_: logging.Logger | None = None) -> None:
        self._logger = logger_ or logger

    def send(self, event: NotificationEvent) -> None:
        payload = event.payload
        self._logger.info(
            f"[{event.event}] id={payload.id} time={payload.time} {payload.message}"
        )


class EventBroadcaster:
    """
    ホストアプリ内のリスナーへイベントを一方向に配信する Sender。

    リスナーは (イベント名, {id, time, message}) を受け取る。
    subscribe() は登録解除用の関数を返す。
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._listeners: List[NotificationListener] = []

    def subscribe(self, listener: NotificationListener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        with self._lock:
            return len(self._listeners)

    def send(self, event: NotificationEvent) -> None:
        """
        登録済みの全リスナーにイベントを配信する。

        1つのリスナーが失敗しても残りのリスナーには配信を続ける。
        """
        with self._lock:
            listeners = list(self._listeners)

        data = event.payload_dict()
        for listener in listeners:
            try:
                listener(event.event, data)
            except Exception:  # noqa: BLE001 - リスナーの失敗は配信を止めない
                logger.exception("Notification listener failed. Continuing with others.")


class CompositeNotificationService:
    """
    複数の NotificationSender に通知をファンアウトするサービス。

    Sender が到達不能でも例外は外に出さずログに残すだけ
    （通知はベストエフォートで、リトライもしない）。
    """

    def __init__(self, senders: Iterable[NotificationSender]) -> None:
        self._senders: List[NotificationSender] = list(senders)

    @property
    def senders(self) -> List[NotificationSender]:
        return list(self._senders)

    def send(self, event: NotificationEvent) -> None:
        """
        受け取った NotificationEvent を全 Sender に送信する。
        """
        for sender in self._senders:
            try:
                sender.send(event)
            except Exception:  # noqa: BLE001 - 通知は本処理を止めない
                logger.exception("Notification sender failed. Continuing with others.")
