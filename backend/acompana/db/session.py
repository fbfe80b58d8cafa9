"""
Database engine and session management.

The engine owns the connection pool for the whole process; every request
borrows a session through ``get_db`` and hands it back when it finishes.
"""

import os

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

DATABASE_URL = os.getenv(
    "DATABASE_URL", "postgresql://postgres:postgres@db:5432/acompana"
)

# Pool sizing, kept small for serverless-style deployments
DB_POOL_SIZE = int(os.environ.get("DB_POOL_SIZE", "5"))
DB_MAX_OVERFLOW = int(os.environ.get("DB_MAX_OVERFLOW", "5"))
DB_POOL_TIMEOUT = float(os.environ.get("DB_POOL_TIMEOUT", "5"))
SQL_DEBUG = os.environ.get("SQL_DEBUG", "").lower() in ("1", "true", "yes")

engine_options = {"pool_pre_ping": True, "echo": SQL_DEBUG}
if not DATABASE_URL.startswith("sqlite"):
    engine_options.update(
        pool_size=DB_POOL_SIZE,
        max_overflow=DB_MAX_OVERFLOW,
        pool_timeout=DB_POOL_TIMEOUT,
    )

engine = create_engine(DATABASE_URL, **engine_options)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Yield a database session and always return it to the pool."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
