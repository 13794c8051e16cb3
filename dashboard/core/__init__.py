"""Core app configuration, database, security and errors."""

from dashboard.core.config import Settings, get_settings
from dashboard.core.database import build_engine, build_session_factory

__all__ = ["Settings", "get_settings", "build_engine", "build_session_factory"]
