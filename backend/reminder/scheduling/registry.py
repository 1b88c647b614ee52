# backend/reminder/scheduling/registry.py

"""
配信待ち Registration の共有ストア。

全タイマータスクと外部からのキャンセル要求が同じインスタンスを参照する。
ロックは 1 回の参照・追加・削除の間だけ保持し、待機中に保持することはない。
"""

from __future__ import annotations

import threading
from typing import Dict, List, Optional

from .schemas import Registration


class NotificationRegistry:
    """
    通知 ID → Registration のスレッドセーフなマッピング。

    remove_if_present() の戻り値で「発火」と「キャンセル」の競合を解決する。
    削除に成功した側だけが後続処理（配信）を行う。
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: Dict[int, Registration] = {}

    def insert(self, registration: Registration) -> Optional[Registration]:
        """
        Registration を追加する。

        同じ ID が既にある場合は上書きし（last-write-wins）、置き換えられた方を返す。
        """
        with self._lock:
            replaced = self._entries.get(registration.id)
            self._entries[registration.id] = registration
        return replaced

    def remove_if_present(
        self,
        notification_id: int,
        registration: Optional[Registration] = None,
    ) -> bool:
        """
        ID のエントリが存在すれば削除し、削除できたかどうかを返す。

        registration を渡した場合は、格納中のエントリがその同一インスタンスのときだけ削除する。
        """
        with self._lock:
            current = self._entries.get(notification_id)
            if current is None:
                return False
            if registration is not None and current is not registration:
                return False
            del self._entries[notification_id]
            return True

    def contains(self, notification_id: int) -> bool:
        with self._lock:
            return notification_id in self._entries

    def get(self, notification_id: int) -> Optional[Registration]:
        with self._lock:
            return self._entries.get(notification_id)

    def snapshot(self) -> List[Registration]:
        """配信予定時刻順（同時刻は ID 順）のコピーを返す。"""
        with self._lock:
            entries = list(self._entries.values())
        return sorted(entries, key=lambda r: (r.fire_at, r.id))

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, notification_id: object) -> bool:
        with self._lock:
            return notification_id in self._entries
