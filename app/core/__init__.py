"""Core infrastructure shared by every feature."""

from app.core.config import Settings, get_settings
from app.core.database import Base, dispose_engine, get_db, get_session_maker
from app.core.logging import configure_logging, get_logger, request_id_ctx

__all__ = [
    "Base",
    "Settings",
    "configure_logging",
    "dispose_engine",
    "get_db",
    "get_logger",
    "get_session_maker",
    "get_settings",
    "request_id_ctx",
]
