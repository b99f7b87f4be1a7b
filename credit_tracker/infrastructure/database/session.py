"""Database session management and write serialization"""

import threading
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from credit_tracker.config import settings
from credit_tracker.infrastructure.database.models import Base


def build_engine(database_url: str) -> Engine:
    """Create engine; SQLite connections are shared across FastAPI worker threads"""
    if database_url.startswith("sqlite"):
        return create_engine(database_url, connect_args={"check_same_thread": False})

    # Connection pool: max 20 connections, recycle after 1 hour to avoid stale connections
    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=10,
        pool_recycle=3600,
    )


engine = build_engine(settings.database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Held by every writer and by snapshot reads: ledger increments never lose
# updates and a schedule computation sees one consistent (purchases, ledger) pair.
write_lock = threading.RLock()


def init_db(bind: Engine = engine) -> None:
    """Create tables if they do not exist"""
    Base.metadata.create_all(bind=bind)


def get_db() -> Generator[Session, None, None]:
    """Dependency injection for database sessions"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
