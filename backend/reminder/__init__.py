# backend/reminder/__init__.py
"""
Reminder backend application package.

This package contains:
- main: FastAPI application entrypoint
- scheduling: deferred notification scheduler (registry, timers, HTTP router)
- notifications: delivery sinks (listener broadcast, logging, webhook)
"""
