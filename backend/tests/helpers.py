# backend/tests/helpers.py

import asyncio
from datetime import datetime
from typing import List

from reminder.notifications.schemas import NotificationEvent


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class RecordingSleep:
    """Yields to the loop once instead of actually waiting."""

    def __init__(self) -> None:
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        await asyncio.sleep(0)


class DummySender:
    def __init__(self) -> None:
        self.events: List[NotificationEvent] = []

    def send(self, event: NotificationEvent) -> None:
        self.events.append(event)


class FailingSender:
    def __init__(self) -> None:
        self.calls = 0

    def send(self, event: NotificationEvent) -> None:
        self.calls += 1
        raise ConnectionError("sink unreachable")
