"""
PostgreSQL collaborators: connection pool and transaction tables.
"""

from .connection import DatabaseConnectionPool
from .tables import CLEAN_TABLE, RAW_TABLE, TableManager

__all__ = [
    "DatabaseConnectionPool",
    "TableManager",
    "RAW_TABLE",
    "CLEAN_TABLE",
]
