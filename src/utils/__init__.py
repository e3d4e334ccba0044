"""Utility modules for the dashboard data service."""

from .config import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
