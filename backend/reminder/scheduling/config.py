# backend/reminder/scheduling/config.py

"""
通知スケジューラと配信先（Sender）の設定値をまとめるモジュール。
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from reminder.utils.config import get_env, get_env_bool, get_env_int


@dataclass(frozen=True)
class SchedulerConfig:
    """スケジューラ用の設定値コンテナ。"""

    webhook_url: Optional[str] = None
    webhook_timeout_seconds: int = 10
    log_deliveries: bool = True

    @property
    def webhook_enabled(self) -> bool:
        return bool(self.webhook_url)


@lru_cache()
def get_scheduler_config() -> SchedulerConfig:
    """
    環境変数からスケジューラ設定を読み込む。

    任意:
      - REMINDER_WEBHOOK_URL              (未設定なら Webhook 配信は無効)
      - REMINDER_WEBHOOK_TIMEOUT_SECONDS  (デフォルト: 10)
      - REMINDER_LOG_DELIVERIES           (デフォルト: true)
    """
    return SchedulerConfig(
        webhook_url=get_env("REMINDER_WEBHOOK_URL", required=False),
        webhook_timeout_seconds=get_env_int("REMINDER_WEBHOOK_TIMEOUT_SECONDS", default=10),
        log_deliveries=get_env_bool("REMINDER_LOG_DELIVERIES", default=True),
    )
