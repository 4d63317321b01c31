"""Database module for SQLite persistence.

Provides:
- Database connection management
- Schema initialization (problems, progress)
- Repository functions for both tables
"""

from lctrack.db.database import get_db, init_db

__all__ = ["get_db", "init_db"]
