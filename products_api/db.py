# products_api/db.py

"""
Database configuration and session management for the Products API.
"""
import os

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

# Read DB settings from environment variables, with defaults for local/dev
POSTGRES_USER = os.getenv("POSTGRES_USER", "postgres")
POSTGRES_PASSWORD = os.getenv("POSTGRES_PASSWORD", "postgres")
POSTGRES_DB = os.getenv("POSTGRES_DB", "postgres")
POSTGRES_HOST = os.getenv("POSTGRES_HOST", "localhost")
POSTGRES_PORT = os.getenv("POSTGRES_PORT", "5432")

# A full URL wins over the individual Postgres settings
DATABASE_URL = os.getenv("DATABASE_URL") or (
    "postgresql://"
    f"{POSTGRES_USER}:{POSTGRES_PASSWORD}@"
    f"{POSTGRES_HOST}:{POSTGRES_PORT}/{POSTGRES_DB}"
)


def _engine_options(url: str) -> dict:
    if not url.startswith("sqlite"):
        # pool_pre_ping=True helps maintain healthy connections in a pool
        return {"pool_pre_ping": True}
    options = {"connect_args": {"check_same_thread": False}}
    if url in ("sqlite://", "sqlite:///:memory:"):
        # In-memory databases live inside a single connection
        options["poolclass"] = StaticPool
    return options


engine = create_engine(DATABASE_URL, **_engine_options(DATABASE_URL))

# autocommit=False ensures transactions must be committed explicitly.
# autoflush=False means changes aren't flushed to DB until commit or explicit flush.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for the ORM models
Base = declarative_base()


def get_db():
    """
    Dependency to provide a new database session for FastAPI endpoints.
    A session is created for each request and automatically closed after use.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
