"""
PostgreSQL Connection Utility

PostgreSQL stores the structured records:
- users (login accounts for students, companies, admins)
- students (profiles used for eligibility)
- companies (recruiters, pending until approved)
- drives (recruitment events with eligibility constraints)

Tables are defined in database/schema.sql.
"""
import logging
from contextlib import contextmanager
from typing import Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from app.core.config import get_settings

logger = logging.getLogger(__name__)

_engine: Engine = None
_session_factory: sessionmaker = None


def get_engine() -> Engine:
    """Create the engine on first use (connection pool: 5 ready, 10 overflow)"""
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = create_engine(
            settings.postgres_url,
            pool_size=5,
            max_overflow=10,
            echo=settings.debug  # Log SQL queries in debug mode
        )
    return _engine


def get_session_factory() -> sessionmaker:
    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
    return _session_factory


@contextmanager
def get_db_session():
    """
    Context manager for database sessions.
    Commits on success, rolls back on any exception.
    Usage:
        with get_db_session() as db:
            db.execute(text("SELECT * FROM students"))
    """
    session = get_session_factory()()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def test_postgres_connection() -> bool:
    """
    Test if PostgreSQL is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        with get_db_session() as db:
            row = db.execute(text("SELECT 1 as test")).fetchone()
            return row[0] == 1
    except Exception as e:
        logger.warning("PostgreSQL connection failed: %s", e)
        return False


def execute_raw_sql(sql: str, params: dict = None) -> list:
    """
    Execute raw SQL and return results as list of dicts.
    """
    with get_db_session() as db:
        result = db.execute(text(sql), params or {})
        return [dict(row._mapping) for row in result.fetchall()]


def fetch_one(sql: str, params: dict = None) -> Optional[dict]:
    """Execute raw SQL and return the first row as a dict (or None)."""
    rows = execute_raw_sql(sql, params)
    return rows[0] if rows else None
