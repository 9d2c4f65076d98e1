"""Dependency injection utilities"""

from fastapi import Depends

from app.config import Settings, get_settings
from services.schedule import ScheduleLayout


def get_config() -> Settings:
    """Dependency for getting application config"""
    return get_settings()


def get_schedule_layout(settings: Settings = Depends(get_config)) -> ScheduleLayout:
    """Dependency for the configured schedule timing rules"""
    return ScheduleLayout.from_settings(settings)
