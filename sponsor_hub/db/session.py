# sponsor_hub/db/session.py
import logging
from typing import Generator
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sponsor_hub.core.config import settings

logger = logging.getLogger(__name__)

DB_URL = settings.DATABASE_URL  # e.g., "sqlite:///./sponsor_hub.db"


def make_engine(db_url: str, **kwargs) -> Engine:
    """Create an engine; SQLite gets thread-friendly args and pragmas."""
    is_sqlite = db_url.startswith("sqlite")
    connect_args = {"check_same_thread": False, "timeout": 30} if is_sqlite else {}

    eng = create_engine(
        db_url,
        pool_pre_ping=True,
        connect_args=connect_args,
        **kwargs,
    )

    # WAL + foreign keys so survey/sponsor cascades run in the database too
    if is_sqlite:
        @event.listens_for(eng, "connect")
        def _set_sqlite_pragmas(dbapi_connection, connection_record):
            cur = dbapi_connection.cursor()
            try:
                cur.execute("PRAGMA journal_mode=WAL;")
                cur.execute("PRAGMA synchronous=NORMAL;")
                cur.execute("PRAGMA foreign_keys=ON;")
            finally:
                cur.close()
            logger.debug("sqlite pragmas applied")

    return eng


engine = make_engine(DB_URL)

SessionLocal = sessionmaker(
    bind=engine,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)

def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a request-scoped Session.
    Use this SAME session for all writes within a request to avoid SQLite locks.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
