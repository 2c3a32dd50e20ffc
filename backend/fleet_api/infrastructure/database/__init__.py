from .base import Base
from .session import (
    WRITE_LOCK_OPTIONS,
    build_engine,
    build_session_factory,
    create_tables,
    ensure_database,
)
from .models import DocumentModel

__all__ = [
    "Base",
    "WRITE_LOCK_OPTIONS",
    "build_engine",
    "build_session_factory",
    "create_tables",
    "ensure_database",
    "DocumentModel",
]
