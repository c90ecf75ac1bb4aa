"""
Storage backends and the startup selection between them.

``initialize`` runs once per process: it tries to reach the relational store
and prepare its schema, and falls back to in-memory storage on any failure.
The choice is never revisited while the process is running.
"""

import logging
import time

from .. import db
from .base import BackendMode, ProductBackend, parse_product_id
from .memory import MemoryBackend
from .sql import SQLBackend

logger = logging.getLogger(__name__)

__all__ = [
    "BackendMode",
    "MemoryBackend",
    "ProductBackend",
    "SQLBackend",
    "initialize",
    "parse_product_id",
]


def initialize(engine=None, max_attempts=None, retry_delay_seconds=None) -> ProductBackend:
    """
    Select the storage backend for this process.

    Returns a ``SQLBackend`` when the database is reachable and its schema is
    ready, otherwise a seeded ``MemoryBackend``. Connection and schema errors
    are logged and never raised.
    """
    if max_attempts is None:
        max_attempts = db.DB_CONNECT_ATTEMPTS
    if retry_delay_seconds is None:
        retry_delay_seconds = db.DB_CONNECT_RETRY_DELAY

    for i in range(max_attempts):
        try:
            logger.info(
                f"Attempting to connect to PostgreSQL and create tables (attempt {i+1}/{max_attempts})..."
            )
            backend = SQLBackend(engine if engine is not None else db.build_engine())
            backend.initialize_schema()
            logger.info("PostgreSQL database initialized successfully.")
            return backend
        except Exception as e:
            logger.warning(f"Failed to connect to PostgreSQL: {e}")
            if i < max_attempts - 1:
                logger.info(f"Retrying in {retry_delay_seconds} seconds...")
                time.sleep(retry_delay_seconds)

    logger.warning("PostgreSQL not available, using in-memory storage.")
    return MemoryBackend()
