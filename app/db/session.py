"""
Database gateway: pooled engine plus one session per request.

Routers receive the session through `Depends(get_db)`, so tests swap the
engine with `app.dependency_overrides[get_db]`.
"""

from __future__ import annotations

from collections.abc import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import settings


def build_engine(url: str | None = None) -> Engine:
    url = url or settings.DATABASE_URL
    kwargs: dict = {"echo": settings.DB_ECHO, "pool_pre_ping": True}
    is_sqlite = url.startswith("sqlite")
    if not is_sqlite:
        kwargs["pool_size"] = settings.DB_POOL_SIZE
        kwargs["pool_recycle"] = settings.DB_POOL_RECYCLE_SEC
    engine = create_engine(url, **kwargs)

    if is_sqlite:
        # SQLite ignores foreign keys unless asked per connection.
        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_conn, _connection_record):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


engine = build_engine()
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
