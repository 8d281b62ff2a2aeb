"""SQLite-backed persistence for plan snapshots, saved weekend plans and mood check-ins."""

import json
import logging
import os
import sqlite3
from datetime import datetime
from typing import List, Optional

from pydantic import ValidationError

from .models import MoodEntry, SavedPlan, ScheduleState
from .observability import log_event

logger = logging.getLogger("weekendly.persistence")

SNAPSHOT_KEY = "current"


class SnapshotStore:
    """
    Persistence port for the planner.

    Holds a single current snapshot (one local user) plus any number of named
    plans. The planner does not version snapshots; a row that no longer
    validates is reported and treated as missing.
    """

    def __init__(self, db_path: Optional[str] = None):
        """
        Args:
            db_path: Path to SQLite database (default: $WEEKENDLY_DB_PATH or ./weekendly.db)
        """
        self.db_path = db_path or os.getenv("WEEKENDLY_DB_PATH", "./weekendly.db")
        self._init_db()
        log_event(logger, logging.INFO, "snapshot_store_initialized", db_path=self.db_path)

    def _init_db(self):
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS snapshots (
                    key TEXT PRIMARY KEY,
                    data TEXT NOT NULL,
                    saved_at TEXT NOT NULL
                )
            """)

            conn.execute("""
                CREATE TABLE IF NOT EXISTS weekend_plans (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    theme TEXT,
                    weekend_option TEXT NOT NULL,
                    data TEXT NOT NULL,
                    created_at TEXT NOT NULL
                )
            """)

            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_weekend_plans_created
                ON weekend_plans(created_at)
            """)

            conn.execute("""
                CREATE TABLE IF NOT EXISTS mood_entries (
                    id TEXT PRIMARY KEY,
                    data TEXT NOT NULL,
                    recorded_at TEXT NOT NULL
                )
            """)

            conn.commit()

    # -------------------------------------------------------------------------
    # Current snapshot
    # -------------------------------------------------------------------------

    def save_snapshot(self, state: ScheduleState) -> None:
        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                """INSERT OR REPLACE INTO snapshots (key, data, saved_at)
                   VALUES (?, ?, ?)""",
                (SNAPSHOT_KEY, state.model_dump_json(), state.saved_at)
            )
            conn.commit()

    def load_snapshot(self) -> Optional[ScheduleState]:
        with sqlite3.connect(self.db_path) as conn:
            row = conn.execute(
                "SELECT data FROM snapshots WHERE key = ?",
                (SNAPSHOT_KEY,)
            ).fetchone()

        if not row:
            return None
        try:
            return ScheduleState.model_validate_json(row[0])
        except ValidationError as e:
            log_event(logger, logging.WARNING, "snapshot_invalid", error=str(e))
            return None

    def clear_snapshot(self) -> None:
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("DELETE FROM snapshots WHERE key = ?", (SNAPSHOT_KEY,))
            conn.commit()

    # -------------------------------------------------------------------------
    # Saved plans
    # -------------------------------------------------------------------------

    def save_plan(self, plan: SavedPlan) -> None:
        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                """INSERT OR REPLACE INTO weekend_plans
                   (id, name, theme, weekend_option, data, created_at)
                   VALUES (?, ?, ?, ?, ?, ?)""",
                (
                    plan.id,
                    plan.name,
                    plan.theme,
                    plan.weekend_option,
                    plan.model_dump_json(),
                    plan.created_at,
                )
            )
            conn.commit()

    def get_plan(self, plan_id: str) -> Optional[SavedPlan]:
        with sqlite3.connect(self.db_path) as conn:
            row = conn.execute(
                "SELECT data FROM weekend_plans WHERE id = ?",
                (plan_id,)
            ).fetchone()
        if not row:
            return None
        return SavedPlan.model_validate_json(row[0])

    def list_plans(self, limit: int = 10, offset: int = 0) -> List[dict]:
        """Plan headers, newest first."""
        with sqlite3.connect(self.db_path) as conn:
            conn.row_factory = sqlite3.Row
            rows = conn.execute(
                """SELECT id, name, theme, weekend_option, data, created_at
                   FROM weekend_plans
                   ORDER BY created_at DESC
                   LIMIT ? OFFSET ?""",
                (limit, offset)
            ).fetchall()

        return [
            {
                "id": row["id"],
                "name": row["name"],
                "theme": row["theme"],
                "weekend_option": row["weekend_option"],
                "metadata": json.loads(row["data"]).get("metadata", {}),
                "created_at": row["created_at"],
            }
            for row in rows
        ]

    def delete_plan(self, plan_id: str) -> bool:
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute("DELETE FROM weekend_plans WHERE id = ?", (plan_id,))
            conn.commit()
            return cursor.rowcount > 0

    # -------------------------------------------------------------------------
    # Mood history
    # -------------------------------------------------------------------------

    def save_mood_entry(self, entry: MoodEntry) -> None:
        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                "INSERT OR REPLACE INTO mood_entries (id, data, recorded_at) VALUES (?, ?, ?)",
                (entry.id, entry.model_dump_json(), entry.recorded_at.isoformat())
            )
            conn.commit()

    def list_mood_entries(self, since: Optional[datetime] = None, limit: int = 500) -> List[MoodEntry]:
        """Mood check-ins, oldest first."""
        cutoff = since.isoformat() if since else ""
        with sqlite3.connect(self.db_path) as conn:
            rows = conn.execute(
                """SELECT data FROM mood_entries
                   WHERE recorded_at >= ?
                   ORDER BY recorded_at ASC
                   LIMIT ?""",
                (cutoff, limit)
            ).fetchall()
        return [MoodEntry.model_validate_json(row[0]) for row in rows]
