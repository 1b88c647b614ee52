# backend/tests/conftest.py
"""
Pytest configuration for Reminder backend tests.

- Ensures that the project root (backend/) is added to sys.path
  so that `import reminder.*` works correctly in tests.
- Removes delivery-related environment variables so that tests
  never post to a real webhook.
- Resets the shared scheduler / notification service between tests.
"""

import os
import sys
from pathlib import Path

import pytest


def _ensure_project_root_in_sys_path() -> None:
    # This file is located at: backend/tests/conftest.py
    # parents[1] -> backend/
    project_root = Path(__file__).resolve().parents[1]
    project_root_str = str(project_root)

    if project_root_str not in sys.path:
        # Insert at the beginning so it has priority over site-packages, etc.
        sys.path.insert(0, project_root_str)


def _ensure_test_env_vars() -> None:
    """
    Make sure no real delivery target leaks into tests from the shell.
    """
    os.environ.pop("REMINDER_WEBHOOK_URL", None)
    os.environ.setdefault("REMINDER_LOG_DELIVERIES", "true")


_ensure_project_root_in_sys_path()
_ensure_test_env_vars()


@pytest.fixture(autouse=True)
def _reset_reminder_state():
    from reminder.scheduling.state import reset_state

    reset_state()
    yield
    reset_state()
