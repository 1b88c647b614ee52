# backend/reminder/notifications/webhook.py

from typing import Dict

import httpx

from reminder.scheduling.config import SchedulerConfig, get_scheduler_config

from .schemas import NotificationEvent


class NotificationSinkError(Exception):
    """配信先（Sender）全般の基底例外。"""


class WebhookHTTPError(NotificationSinkError):
    """Webhook が 2xx 以外を返した場合の例外。"""

    def __init__(self, status_code: int, body: str | None = None) -> None:
        super().__init__(f"Notification webhook error: status_code={status_code}")
        self.status_code = status_code
        self.body = body


class WebhookConnectionError(NotificationSinkError):
    """接続エラー・タイムアウト時の例外。"""


class WebhookNotificationSender:
    """
    配信イベントを外部 Webhook へ HTTP POST する Sender。

    ボディは {"event": ..., "payload": {id, time, message}} の JSON。
    失敗時は例外を投げ、握りつぶすかどうかは呼び出し側（CompositeNotificationService）に任せる。
    """

    def __init__(self, config: SchedulerConfig | None = None) -> None:
        self._config = config or get_scheduler_config()
        if not self._config.webhook_url:
            raise ValueError("REMINDER_WEBHOOK_URL is not configured.")

    @property
    def url(self) -> str:
        return self._config.webhook_url or ""

    @property
    def timeout(self) -> int:
        return self._config.webhook_timeout_seconds

    def _build_headers(self) -> Dict[str, str]:
        return {"Content-Type": "application/json"}

    def send(self, event: NotificationEvent) -> None:
        """
        :raises WebhookHTTPError: Webhook が 4xx/5xx を返した場合。
        :raises WebhookConnectionError: 接続エラーやタイムアウト時。
        """
        body = {"event": event.event, "payload": event.payload_dict()}
        try:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.post(
                    self.url,
                    json=body,
                    headers=self._build_headers(),
                )
        except httpx.RequestError as exc:  # 接続エラー・タイムアウトなど
            raise WebhookConnectionError(str(exc)) from exc

        if response.status_code // 100 != 2:
            raise WebhookHTTPError(status_code=response.status_code, body=response.text)

    def __repr__(self) -> str:
        return f"WebhookNotificationSender(url={self.url!r}, timeout={self.timeout})"
