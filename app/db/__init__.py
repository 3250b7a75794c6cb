"""
Database access module.

- ConnDB: connection and session management
- schema: table definitions
- repositories: order, product and order line stores
"""

from app.db.connection import (
    ConnDB,
    close_database,
    get_db_connection,
    initialize_database,
)

__all__ = [
    "ConnDB",
    "get_db_connection",
    "initialize_database",
    "close_database",
]
