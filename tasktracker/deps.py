"""Dependency injection helpers for FastAPI."""

from functools import lru_cache

from fastapi import Request

from .config import Settings, settings
from .services.task_store import TaskStore


@lru_cache()
def get_settings() -> Settings:
    """Get application settings (cached)."""
    return settings


def get_task_store(request: Request) -> TaskStore:
    """Get the task store created during application startup."""
    return request.app.state.task_store
