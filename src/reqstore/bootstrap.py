"""
Single entry-point that wires an SQLAlchemy engine into a RecordStore.
Call once per host, e.g. in FastAPI startup, and pass the store around.
"""

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from .persistence.models import Base
from .persistence.store import RecordStore

log = logging.getLogger(__name__)


def init_store(engine: Engine) -> RecordStore:
    """Create the table and owner index if missing, then return a store."""
    Base.metadata.create_all(engine)
    log.debug("Schema ready on %s", engine.url)
    return RecordStore(engine)


def store_from_url(database_url: str) -> RecordStore:
    engine = create_engine(database_url, pool_pre_ping=True)
    return init_store(engine)
