import os
import sqlite3
from dataclasses import dataclass
from typing import List, Optional, Sequence

from utility.errors import StoreError, ValidationError
from utility.logger import get_logger
log = get_logger()

STATUS_ACTIVE = "active"
STATUS_PAUSED = "paused"

_SCHEMA = """
CREATE TABLE IF NOT EXISTS objectives (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    objective TEXT NOT NULL,
    zone TEXT NOT NULL,
    end_time INTEGER,
    remaining_seconds INTEGER,
    status TEXT NOT NULL DEFAULT 'active'
)
"""

# Active rows by deadline first, paused rows after them in creation order
_ORDERED_SELECT = """
SELECT id, objective, zone, status, end_time, remaining_seconds FROM objectives
ORDER BY CASE status WHEN 'active' THEN 0 ELSE 1 END,
         CASE status WHEN 'active' THEN end_time END,
         id
"""

@dataclass(frozen=True)
class Objective:
    id: int
    objective: str
    zone: str
    status: str
    end_time: Optional[int] = None
    remaining_seconds: Optional[int] = None

    @property
    def is_paused(self) -> bool:
        return self.status == STATUS_PAUSED

    @classmethod
    def from_row(cls, row) -> "Objective":
        return cls(
            id=row["id"],
            objective=row["objective"],
            zone=row["zone"],
            status=row["status"],
            end_time=row["end_time"],
            remaining_seconds=row["remaining_seconds"],
        )


class ObjectiveStore:
    """
    SQLite table of tracked objectives.

    Every mutation is a single statement inside one transaction, so a record
    either fully flips between active and paused or is left untouched.
    Database failures surface as StoreError.
    """

    def __init__(self, db_path: str, kinds: Sequence[str], zones: Sequence[str]):
        self.db_path = db_path
        self.kinds = list(kinds)
        self.zones = list(zones)
        try:
            if db_path != ":memory:":
                directory = os.path.dirname(db_path)
                if directory:
                    os.makedirs(directory, exist_ok=True)
            self._conn = sqlite3.connect(db_path)
            self._conn.row_factory = sqlite3.Row
            with self._conn:
                self._conn.execute(_SCHEMA)
        except (sqlite3.Error, OSError) as e:
            raise StoreError(f"Failed to open objective database {db_path}: {e}") from e
        log.debug(f"Objective store opened at {db_path}")

    def close(self):
        self._conn.close()

    def _execute(self, sql: str, params=()) -> sqlite3.Cursor:
        try:
            with self._conn:
                return self._conn.execute(sql, params)
        except (sqlite3.Error, OverflowError) as e:
            raise StoreError(f"Objective database error: {e}") from e

    # ──────────────────────────
    # Queries
    # ──────────────────────────
    def get(self, objective_id: int) -> Optional[Objective]:
        row = self._execute(
            "SELECT id, objective, zone, status, end_time, remaining_seconds FROM objectives WHERE id = ?",
            (objective_id,),
        ).fetchone()
        return Objective.from_row(row) if row else None

    def list_ordered(self) -> List[Objective]:
        """
        All objectives, active ones ordered by deadline (ties by id) followed by
        paused ones ordered by id.
        """
        return [Objective.from_row(row) for row in self._execute(_ORDERED_SELECT).fetchall()]

    def count(self) -> int:
        return self._execute("SELECT COUNT(*) FROM objectives").fetchone()[0]

    # ──────────────────────────
    # Mutations
    # ──────────────────────────
    def insert(self, objective: str, zone: str, end_time: Optional[int] = None,
               remaining_seconds: Optional[int] = None) -> int:
        """
        Insert an active objective (end_time given) or a paused one
        (remaining_seconds given).
        Returns:
            int: The new objective id.
        """
        if objective not in self.kinds:
            raise ValidationError(f"Unknown objective: {objective}")
        if zone not in self.zones:
            raise ValidationError(f"Unknown zone: {zone}")
        if (end_time is None) == (remaining_seconds is None):
            raise ValidationError("Exactly one of end_time and remaining_seconds must be given")

        if end_time is not None:
            cursor = self._execute(
                "INSERT INTO objectives (objective, zone, end_time, status) VALUES (?, ?, ?, ?)",
                (objective, zone, int(end_time), STATUS_ACTIVE),
            )
        else:
            if remaining_seconds < 0:
                raise ValidationError("remaining_seconds cannot be negative")
            cursor = self._execute(
                "INSERT INTO objectives (objective, zone, remaining_seconds, status) VALUES (?, ?, ?, ?)",
                (objective, zone, int(remaining_seconds), STATUS_PAUSED),
            )
        log.debug(f"Store: inserted objective {cursor.lastrowid} ({objective} in {zone})")
        return cursor.lastrowid

    def delete_expired_active(self, now: int) -> int:
        """Delete active objectives whose deadline is at or before now. Returns how many."""
        cursor = self._execute(
            "DELETE FROM objectives WHERE status = ? AND end_time <= ?",
            (STATUS_ACTIVE, int(now)),
        )
        return cursor.rowcount

    def clear_all(self) -> int:
        return self._execute("DELETE FROM objectives").rowcount

    def mark_all_active_as_paused(self, now: int) -> int:
        """Freeze every active objective into the time it still has left at now."""
        cursor = self._execute(
            "UPDATE objectives SET status = ?, remaining_seconds = MAX(0, end_time - ?), end_time = NULL "
            "WHERE status = ?",
            (STATUS_PAUSED, int(now), STATUS_ACTIVE),
        )
        return cursor.rowcount

    def resume_all_paused(self, now: int) -> int:
        """Re-anchor every paused objective to an absolute deadline counted from now."""
        cursor = self._execute(
            "UPDATE objectives SET status = ?, end_time = ? + remaining_seconds, remaining_seconds = NULL "
            "WHERE status = ?",
            (STATUS_ACTIVE, int(now), STATUS_PAUSED),
        )
        return cursor.rowcount
