"""
Database layer for CampCheck.

Structure:
- entities/: SQLModel entity models, one module per business domain
- store.py: RecordStore, the keyed record store with secondary indexes
- repositories/: typed repositories enforcing cascade and link rules
- utils.py: engine and session factory helpers
"""

from .base import Base
from .store import COLLECTIONS, SCHEMA_VERSION, Collection, RecordStore
from .utils import create_engine, create_sessionmaker

__all__ = [
    "COLLECTIONS",
    "SCHEMA_VERSION",
    "Base",
    "Collection",
    "RecordStore",
    "create_engine",
    "create_sessionmaker",
]
