# backend/reminder/main.py

"""
バックエンドアプリケーションのエントリーポイント。

主な責務:
- /notifications/* エンドポイント（予約・キャンセル・一覧）を公開する
- 終了時に未発火のタイマーを止める
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from reminder.scheduling.router import router as notifications_router
from reminder.scheduling.state import get_scheduler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    アプリのライフサイクル管理。

    起動時に共有スケジューラ（と通知サービス）を生成しておき、
    終了時にその未発火タスクをキャンセルして終了を待つ。
    """
    scheduler = get_scheduler()
    yield
    scheduler.shutdown()
    await scheduler.wait_idle()
    logger.info("Reminder backend stopped.")


def create_app() -> FastAPI:
    """
    FastAPI アプリケーションファクトリ。

    - 通知予約エンドポイント (/notifications/*)
    - ヘルスチェックエンドポイント (/health)
    """
    app = FastAPI(title="Reminder Backend", lifespan=lifespan)

    # ルーター登録
    app.include_router(notifications_router)

    @app.get("/health", tags=["health"])
    def health_check() -> dict:
        """
        簡易ヘルスチェックエンドポイント。
        配信待ち件数も併せて返す。
        """
        return {"status": "ok", "pending": get_scheduler().pending_count}

    return app


# uvicorn 実行時のエントリーポイント
app = create_app()
