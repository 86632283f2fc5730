"""
Cosmic Garden - Flower Repository
Create-only storage for planted flowers (PostgreSQL or SQLite).
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from .errors import PersistenceError
from .models import FlowerRecord, parse_timestamp

logger = logging.getLogger(__name__)

COLUMNS = (
    "id", "species", "type", "message", "author", "mood",
    "x", "y", "latitude", "longitude", "country", "city", "created_at",
)

_SCHEMA = """
    CREATE TABLE IF NOT EXISTS flowers (
        id VARCHAR(32) PRIMARY KEY,
        species VARCHAR(64) NOT NULL,
        type VARCHAR(16) NOT NULL,
        message TEXT NOT NULL,
        author VARCHAR(64) NOT NULL,
        mood TEXT,
        x {real} NOT NULL,
        y {real} NOT NULL,
        latitude {real},
        longitude {real},
        country VARCHAR(100),
        city VARCHAR(100),
        created_at {timestamp} NOT NULL
    )
"""

_INDEX = "CREATE INDEX IF NOT EXISTS idx_flowers_created_at ON flowers (created_at)"


class FlowerRepository:
    """Reads and appends FlowerRecords; rows are never updated or deleted"""

    def __init__(self, database):
        self.database = database

    @property
    def _use_postgres(self) -> bool:
        return bool(getattr(self.database, "use_postgres", False))

    def ensure_schema(self):
        """Create the flowers table if it is missing"""
        if self._use_postgres:
            ddl = _SCHEMA.format(real="DOUBLE PRECISION", timestamp="TIMESTAMPTZ")
        else:
            ddl = _SCHEMA.format(real="REAL", timestamp="TEXT")

        conn = self.database.get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(ddl)
            cursor.execute(_INDEX)
            conn.commit()
            logger.info("✅ flowers table ready")
        finally:
            conn.close()

    def _to_db_timestamp(self, value: datetime):
        # SQLite keeps ISO text; every value carries the same +00:00 offset so text order == time order
        if self._use_postgres:
            return value
        return value.astimezone(timezone.utc).isoformat(timespec="microseconds")

    def _from_row(self, row) -> FlowerRecord:
        data = dict(zip(COLUMNS, row))
        data["created_at"] = parse_timestamp(data["created_at"])
        return FlowerRecord.from_dict(data)

    def insert(self, record: FlowerRecord) -> FlowerRecord:
        """Persist a new flower; assigns id and created_at when missing"""
        if not record.id:
            record.id = uuid.uuid4().hex
        if record.created_at is None:
            record.created_at = datetime.now(timezone.utc)

        values = (
            record.id, record.species, record.type, record.message, record.author, record.mood,
            record.x, record.y, record.latitude, record.longitude, record.country, record.city,
            self._to_db_timestamp(record.created_at),
        )
        placeholders = ", ".join(["?"] * len(COLUMNS))
        query = self.database.format_query(
            f"INSERT INTO flowers ({', '.join(COLUMNS)}) VALUES ({placeholders})"
        )

        conn = None
        try:
            conn = self.database.get_connection()
            cursor = conn.cursor()
            cursor.execute(query, values)
            conn.commit()
        except Exception as e:
            logger.error(f"❌ Failed to save flower {record.id}: {e}")
            raise PersistenceError("Failed to save flower") from e
        finally:
            if conn is not None:
                conn.close()

        logger.info(f"🌸 Planted {record.species} ({record.type}) as {record.id}")
        return record

    def load_all(self) -> List[FlowerRecord]:
        """Every flower, oldest first"""
        query = f"SELECT {', '.join(COLUMNS)} FROM flowers ORDER BY created_at ASC, id ASC"
        conn = self.database.get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(query)
            rows = cursor.fetchall()
        finally:
            conn.close()
        return [self._from_row(row) for row in rows]

    def get(self, flower_id: str) -> Optional[FlowerRecord]:
        query = self.database.format_query(
            f"SELECT {', '.join(COLUMNS)} FROM flowers WHERE id = ?"
        )
        conn = self.database.get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(query, (flower_id,))
            row = cursor.fetchone()
        finally:
            conn.close()
        return self._from_row(row) if row else None

    def count(self) -> int:
        conn = self.database.get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT COUNT(*) FROM flowers")
            row = cursor.fetchone()
        finally:
            conn.close()
        return int(row[0]) if row else 0
