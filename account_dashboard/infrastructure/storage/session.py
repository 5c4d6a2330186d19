"""Storage engine and session management"""

from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from account_dashboard.config import settings
from account_dashboard.infrastructure.storage.models import Base


def build_engine(url: str) -> Engine:
    """Create an engine; SQLite connections are shared with FastAPI's threadpool"""
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, pool_pre_ping=True, connect_args=connect_args)


def build_session_factory(url: Optional[str]) -> Optional[sessionmaker]:
    """Session factory for url, or None when no backend is configured"""
    if not url:
        return None
    engine = build_engine(url)
    Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


SessionLocal: Optional[sessionmaker] = None


def init_storage() -> Optional[sessionmaker]:
    """Create tables and the module session factory from settings (idempotent)"""
    global SessionLocal
    if SessionLocal is None:
        SessionLocal = build_session_factory(settings.storage_url)
    return SessionLocal
