"""
SQLite State Store for examprep.

Reference persistence for the host side of the load -> mutate -> store
round trip:
- Memorized items with their review state
- Weak areas keyed by (subject, topic)
- Immutable test records
- The learner's XP/level/streak row

Database location: ~/.examprep/state.db (configurable)
"""

from __future__ import annotations

import sqlite3
from datetime import datetime
from pathlib import Path

from loguru import logger

from examprep.core.errors import NotFoundError
from examprep.core.models import (
    LearnerProgress,
    MemorizedItem,
    TestRecord,
    WeakArea,
    as_utc,
    utcnow,
)


def _to_text(value: datetime) -> str:
    return as_utc(value).isoformat()


def _from_text(value: str) -> datetime:
    return as_utc(datetime.fromisoformat(value))


class StateStore:
    """
    SQLite-backed state persistence for a single learner.

    One connection, one writer. Callers serialise updates to the same entity.
    """

    def __init__(self, db_path: Path | str):
        """
        Initialize the state store.

        Args:
            db_path: Database file path, or ":memory:"
        """
        self.db_path = db_path
        if str(db_path) != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

        self._conn: sqlite3.Connection | None = None
        self._init_schema()

        logger.info(f"StateStore initialized at {self.db_path}")

    @property
    def conn(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._conn is None:
            self._conn = sqlite3.connect(str(self.db_path))
            self._conn.row_factory = sqlite3.Row
        return self._conn

    def _init_schema(self) -> None:
        """Initialize database schema."""
        cursor = self.conn.cursor()

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS items (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                question TEXT NOT NULL,
                answer TEXT NOT NULL,
                subject TEXT NOT NULL,
                topic TEXT NOT NULL,
                next_review_at TEXT NOT NULL,
                interval_days INTEGER NOT NULL DEFAULT 1,
                ease_factor REAL NOT NULL DEFAULT 2.5,
                times_reviewed INTEGER NOT NULL DEFAULT 0,
                last_score INTEGER NOT NULL DEFAULT 0
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS weak_areas (
                subject TEXT NOT NULL,
                topic TEXT NOT NULL,
                accuracy REAL NOT NULL,
                attempts INTEGER NOT NULL,
                PRIMARY KEY (subject, topic)
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS test_records (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                subject TEXT NOT NULL,
                topic TEXT NOT NULL,
                questions_count INTEGER NOT NULL,
                correct_answers INTEGER,
                created_at TEXT NOT NULL
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS learner_progress (
                id INTEGER PRIMARY KEY CHECK (id = 1),
                xp INTEGER NOT NULL DEFAULT 0,
                level INTEGER NOT NULL DEFAULT 1,
                streak INTEGER NOT NULL DEFAULT 0,
                last_active_at TEXT NOT NULL,
                learner_id TEXT
            )
        """)

        # Stores created before learner_id was persisted
        columns = {row[1] for row in cursor.execute("PRAGMA table_info(learner_progress)")}
        if "learner_id" not in columns:
            cursor.execute("ALTER TABLE learner_progress ADD COLUMN learner_id TEXT")

        # Index for fast due-date queries
        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_items_next_review
            ON items(next_review_at)
        """)

        self.conn.commit()

    # =========================================================================
    # Item Operations
    # =========================================================================

    def add_item(self, item: MemorizedItem) -> MemorizedItem:
        """Insert a new item and set its id."""
        cursor = self.conn.cursor()
        cursor.execute(
            """
            INSERT INTO items (
                question, answer, subject, topic, next_review_at,
                interval_days, ease_factor, times_reviewed, last_score
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
            (
                item.question,
                item.answer,
                item.subject,
                item.topic,
                _to_text(item.next_review_at),
                item.interval_days,
                item.ease_factor,
                item.times_reviewed,
                item.last_score,
            ),
        )
        self.conn.commit()
        item.id = cursor.lastrowid
        logger.debug(f"Added item {item.id} ({item.subject}/{item.topic})")
        return item

    def get_item(self, item_id: int) -> MemorizedItem:
        """
        Load an item by id.

        Raises:
            NotFoundError: if no item has this id
        """
        cursor = self.conn.cursor()
        cursor.execute("SELECT * FROM items WHERE id = ?", (item_id,))
        row = cursor.fetchone()

        if row is None:
            raise NotFoundError(f"Item {item_id} not found")

        return self._row_to_item(row)

    def save_item(self, item: MemorizedItem) -> None:
        """Persist the review state of an existing item."""
        if item.id is None:
            raise NotFoundError("Cannot save an item that was never added")

        cursor = self.conn.cursor()
        cursor.execute(
            """
            UPDATE items SET
                next_review_at = ?,
                interval_days = ?,
                ease_factor = ?,
                times_reviewed = ?,
                last_score = ?
            WHERE id = ?
        """,
            (
                _to_text(item.next_review_at),
                item.interval_days,
                item.ease_factor,
                item.times_reviewed,
                item.last_score,
                item.id,
            ),
        )
        if cursor.rowcount == 0:
            raise NotFoundError(f"Item {item.id} not found")
        self.conn.commit()

    def list_items(self) -> list[MemorizedItem]:
        """All items, soonest review first."""
        cursor = self.conn.cursor()
        cursor.execute("SELECT * FROM items ORDER BY next_review_at ASC, id ASC")
        return [self._row_to_item(row) for row in cursor.fetchall()]

    @staticmethod
    def _row_to_item(row: sqlite3.Row) -> MemorizedItem:
        return MemorizedItem(
            id=row["id"],
            question=row["question"],
            answer=row["answer"],
            subject=row["subject"],
            topic=row["topic"],
            next_review_at=_from_text(row["next_review_at"]),
            interval_days=row["interval_days"],
            ease_factor=row["ease_factor"],
            times_reviewed=row["times_reviewed"],
            last_score=row["last_score"],
        )

    # =========================================================================
    # Weak Area Operations
    # =========================================================================

    def get_weak_areas(self) -> list[WeakArea]:
        cursor = self.conn.cursor()
        cursor.execute("SELECT * FROM weak_areas ORDER BY rowid ASC")
        return [
            WeakArea(
                subject=row["subject"],
                topic=row["topic"],
                accuracy=row["accuracy"],
                attempts=row["attempts"],
            )
            for row in cursor.fetchall()
        ]

    def save_weak_areas(self, weak_areas: list[WeakArea]) -> None:
        """Upsert every weak area in the list. Nothing is ever deleted."""
        self.conn.executemany(
            """
            INSERT INTO weak_areas (subject, topic, accuracy, attempts)
            VALUES (?, ?, ?, ?)
            ON CONFLICT(subject, topic) DO UPDATE SET
                accuracy = excluded.accuracy,
                attempts = excluded.attempts
        """,
            [(a.subject, a.topic, a.accuracy, a.attempts) for a in weak_areas],
        )
        self.conn.commit()

    # =========================================================================
    # Test Record Operations
    # =========================================================================

    def add_test_record(self, record: TestRecord) -> TestRecord:
        """Insert a test record. Returns a copy carrying the new id."""
        cursor = self.conn.cursor()
        cursor.execute(
            """
            INSERT INTO test_records (
                subject, topic, questions_count, correct_answers, created_at
            ) VALUES (?, ?, ?, ?, ?)
        """,
            (
                record.subject,
                record.topic,
                record.questions_count,
                record.correct_answers,
                _to_text(record.created_at),
            ),
        )
        self.conn.commit()
        return TestRecord(
            id=cursor.lastrowid,
            subject=record.subject,
            topic=record.topic,
            questions_count=record.questions_count,
            correct_answers=record.correct_answers,
            created_at=record.created_at,
        )

    def list_test_records(self) -> list[TestRecord]:
        cursor = self.conn.cursor()
        cursor.execute("SELECT * FROM test_records ORDER BY created_at ASC, id ASC")
        return [
            TestRecord(
                id=row["id"],
                subject=row["subject"],
                topic=row["topic"],
                questions_count=row["questions_count"],
                correct_answers=row["correct_answers"],
                created_at=_from_text(row["created_at"]),
            )
            for row in cursor.fetchall()
        ]

    # =========================================================================
    # Learner Progress Operations
    # =========================================================================

    def get_progress(self) -> LearnerProgress:
        """Load the learner's progress, creating the default row on first use."""
        cursor = self.conn.cursor()
        cursor.execute("SELECT * FROM learner_progress WHERE id = 1")
        row = cursor.fetchone()

        if row is None:
            progress = LearnerProgress(last_active_at=utcnow())
            self.save_progress(progress)
            logger.info("Created learner progress record")
            return progress

        return LearnerProgress(
            xp=row["xp"],
            level=row["level"],
            streak=row["streak"],
            last_active_at=_from_text(row["last_active_at"]),
            learner_id=row["learner_id"],
        )

    def save_progress(self, progress: LearnerProgress) -> None:
        self.conn.execute(
            """
            INSERT INTO learner_progress (id, xp, level, streak, last_active_at, learner_id)
            VALUES (1, ?, ?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                xp = excluded.xp,
                level = excluded.level,
                streak = excluded.streak,
                last_active_at = excluded.last_active_at,
                learner_id = excluded.learner_id
        """,
            (
                progress.xp,
                progress.level,
                progress.streak,
                _to_text(progress.last_active_at),
                progress.learner_id,
            ),
        )
        self.conn.commit()

    def close(self) -> None:
        """Close the database connection."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
