"""
Cosmic Garden - Database Connection Layer
PostgreSQL in production (DATABASE_URL), SQLite for local development and tests
"""
import logging
import os
import sqlite3
from typing import Optional

import psycopg2

logger = logging.getLogger(__name__)


class Database:
    def __init__(self, database_url: Optional[str] = None, db_path: Optional[str] = None):
        self.postgres_url = database_url or None
        self.use_postgres = bool(self.postgres_url)

        if self.use_postgres:
            self.db_path = None
            logger.info(f"Using PostgreSQL database: {self.postgres_url[:30]}...")
        else:
            if not db_path:
                raise ValueError("db_path is required when no database_url is configured")
            self.db_path = db_path
            directory = os.path.dirname(os.path.abspath(db_path))
            os.makedirs(directory, exist_ok=True)
            logger.info(f"Using SQLite database: {self.db_path}")

    @property
    def placeholder(self) -> str:
        return "%s" if self.use_postgres else "?"

    def format_query(self, query: str) -> str:
        """Convert SQLite ? placeholders to PostgreSQL %s if needed"""
        if self.use_postgres:
            return query.replace("?", "%s")
        return query

    def get_connection(self):
        """Get a new database connection; callers close it"""
        if self.use_postgres:
            return psycopg2.connect(self.postgres_url)
        return sqlite3.connect(self.db_path)

    def ping(self) -> bool:
        """Cheap connectivity check used by the readiness probe"""
        conn = None
        try:
            conn = self.get_connection()
            cursor = conn.cursor()
            cursor.execute("SELECT 1")
            cursor.fetchone()
            return True
        except Exception as e:
            logger.warning(f"Database ping failed: {e}")
            return False
        finally:
            if conn is not None:
                conn.close()
