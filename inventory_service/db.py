# inventory_service/db.py

"""
Database configuration and session management for the Inventory Service.
"""
import os

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker

# Read DB settings from environment variables, with defaults for local/dev
RDS_USERNAME = os.getenv("RDS_USERNAME", "postgres")
RDS_PASSWORD = os.getenv("RDS_PASSWORD", "postgres")
RDS_DB_NAME = os.getenv("RDS_DB_NAME", "inventory_db")
RDS_HOSTNAME = os.getenv("RDS_HOSTNAME", "localhost")
RDS_PORT = os.getenv("RDS_PORT", "5432")

# Compose the SQLAlchemy database URL, split for linting
DATABASE_URL = os.getenv(
    "DATABASE_URL",
    "postgresql://"
    f"{RDS_USERNAME}:{RDS_PASSWORD}@"
    f"{RDS_HOSTNAME}:{RDS_PORT}/{RDS_DB_NAME}",
)

# Connection pool settings
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "20"))
DB_POOL_TIMEOUT = int(os.getenv("DB_POOL_TIMEOUT", "30"))
DB_POOL_RECYCLE = int(os.getenv("DB_POOL_RECYCLE", "30"))
DB_CONNECT_TIMEOUT = int(os.getenv("DB_CONNECT_TIMEOUT", "2"))

# Startup connection attempts before falling back to in-memory storage
DB_CONNECT_ATTEMPTS = int(os.getenv("DB_CONNECT_ATTEMPTS", "1"))
DB_CONNECT_RETRY_DELAY = float(os.getenv("DB_CONNECT_RETRY_DELAY", "2"))

# Base class for your ORM models
Base = declarative_base()


def build_engine(database_url: str = DATABASE_URL):
    """
    Create the SQLAlchemy engine for the relational store.

    The pool is bounded (no overflow) and connections are recycled after
    DB_POOL_RECYCLE seconds. PostgreSQL connection attempts give up after
    DB_CONNECT_TIMEOUT seconds instead of blocking.
    """
    url = make_url(database_url)
    connect_args = {}
    if url.get_backend_name() == "postgresql":
        connect_args["connect_timeout"] = DB_CONNECT_TIMEOUT

    # pool_pre_ping=True helps maintain healthy connections in a pool
    return create_engine(
        url,
        pool_size=DB_POOL_SIZE,
        max_overflow=0,
        pool_timeout=DB_POOL_TIMEOUT,
        pool_recycle=DB_POOL_RECYCLE,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


def make_session_factory(engine):
    # expire_on_commit=False keeps committed rows readable after the session closes.
    return sessionmaker(
        autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
    )
