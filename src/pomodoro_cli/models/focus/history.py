"""Session history store backed by SQLite."""

import logging
import sqlite3
import uuid
from datetime import date, datetime, timedelta, timezone
from pathlib import Path

from .session import SessionRecord, SessionStats, SessionType

logger = logging.getLogger(__name__)


class HistoryLogger:
    """Append-only store of session records.

    Failures never propagate: writes are logged and dropped, reads are logged
    and return empty results.
    """

    def __init__(self, db_path: Path | None = None):
        """Initialize history store."""
        if db_path is None:
            from platformdirs import user_data_dir

            data_dir = Path(user_data_dir("pomodoro_cli"))
            db_path = data_dir / "pomodoro_history.db"

        self.db_path = Path(db_path)
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._init_database()
        except (OSError, sqlite3.Error):
            logger.exception("could not initialise history database at %s", self.db_path)

    def _init_database(self) -> None:
        """Initialize database schema."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS pomodoro_sessions (
                    id TEXT PRIMARY KEY,
                    session_type TEXT NOT NULL,
                    planned_duration INTEGER NOT NULL,
                    actual_duration INTEGER NOT NULL,
                    started_at TEXT NOT NULL,
                    started_date TEXT NOT NULL,
                    completed INTEGER NOT NULL DEFAULT 0,
                    completed_at TEXT,
                    created_at TEXT NOT NULL
                )
                """
            )

            conn.execute(
                """
                CREATE INDEX IF NOT EXISTS idx_sessions_started
                ON pomodoro_sessions(started_at)
                """
            )

            conn.execute(
                """
                CREATE INDEX IF NOT EXISTS idx_sessions_date
                ON pomodoro_sessions(started_date)
                """
            )

            conn.commit()

    def append(self, record: SessionRecord) -> None:
        """Persist one session record."""
        try:
            with sqlite3.connect(self.db_path) as conn:
                conn.execute(
                    """
                    INSERT INTO pomodoro_sessions (
                        id, session_type, planned_duration, actual_duration,
                        started_at, started_date, completed, completed_at,
                        created_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        str(uuid.uuid4()),
                        record.session_type.value,
                        record.planned_duration,
                        record.actual_duration,
                        _utc(record.started_at),
                        record.started_at.date().isoformat(),
                        1 if record.completed else 0,
                        _utc(record.completed_at) if record.completed_at else None,
                        _utc(datetime.now(timezone.utc)),
                    ),
                )
                conn.commit()
        except sqlite3.Error:
            logger.exception(
                "failed to save %s session (%ss)",
                record.session_type.value,
                record.actual_duration,
            )
            return

        logger.debug(
            "saved %s session: %ss of %ss, completed=%s",
            record.session_type.value,
            record.actual_duration,
            record.planned_duration,
            record.completed,
        )

    def save_session(
        self, session_type: SessionType, duration: int, completed: bool
    ) -> None:
        """Record a session that ends now and lasted *duration* seconds."""
        now = datetime.now().astimezone()
        self.append(
            SessionRecord(
                session_type=session_type,
                planned_duration=duration,
                actual_duration=duration,
                started_at=now - timedelta(seconds=duration),
                completed=completed,
                completed_at=now if completed else None,
            )
        )

    def get_todays_sessions(self, today: date | None = None) -> list[SessionRecord]:
        """Sessions started on *today* (default: local today), newest first."""
        if today is None:
            today = datetime.now().astimezone().date()

        return self._query(
            """
            SELECT * FROM pomodoro_sessions
            WHERE started_date = ?
            ORDER BY started_at DESC
            """,
            (today.isoformat(),),
        )

    def get_recent_sessions(self, limit: int = 8) -> list[SessionRecord]:
        """The most recent sessions, newest first."""
        return self._query(
            """
            SELECT * FROM pomodoro_sessions
            ORDER BY started_at DESC
            LIMIT ?
            """,
            (limit,),
        )

    def get_stats(self, days: int = 7) -> SessionStats:
        """
        Aggregate sessions from the last N days.

        Args:
            days: Size of the trailing window

        Returns:
            SessionStats with totals, completions and work counts
        """
        cutoff = _utc(datetime.now(timezone.utc) - timedelta(days=days))

        try:
            with sqlite3.connect(self.db_path) as conn:
                total, completed, work_count, work_seconds = conn.execute(
                    """
                    SELECT
                        COUNT(*),
                        COALESCE(SUM(completed), 0),
                        COALESCE(SUM(CASE WHEN session_type = 'work' THEN 1 ELSE 0 END), 0),
                        COALESCE(SUM(CASE WHEN session_type = 'work'
                                          THEN actual_duration ELSE 0 END), 0)
                    FROM pomodoro_sessions
                    WHERE started_at >= ?
                    """,
                    (cutoff,),
                ).fetchone()
        except sqlite3.Error:
            logger.exception("failed to compute stats for last %s days", days)
            return SessionStats(days=days)

        return SessionStats(
            days=days,
            total=total,
            completed=completed,
            work_count=work_count,
            work_seconds=work_seconds,
        )

    def delete_old_sessions(self, days: int = 90) -> int:
        """
        Delete sessions older than N days.

        Returns:
            Number of sessions deleted
        """
        cutoff = _utc(datetime.now(timezone.utc) - timedelta(days=days))

        try:
            with sqlite3.connect(self.db_path) as conn:
                cursor = conn.execute(
                    """
                    DELETE FROM pomodoro_sessions
                    WHERE started_at < ?
                    """,
                    (cutoff,),
                )
                conn.commit()
        except sqlite3.Error:
            logger.exception("failed to prune sessions older than %s days", days)
            return 0

        if cursor.rowcount:
            logger.info("pruned %d sessions older than %d days", cursor.rowcount, days)
        return cursor.rowcount

    def _query(self, sql: str, params: tuple) -> list[SessionRecord]:
        try:
            with sqlite3.connect(self.db_path) as conn:
                conn.row_factory = sqlite3.Row
                rows = conn.execute(sql, params).fetchall()
        except sqlite3.Error:
            logger.exception("history query failed")
            return []

        return [SessionRecord.from_row(dict(row)) for row in rows]


def _utc(moment: datetime) -> str:
    # Stored in UTC so string order matches time order across offset changes
    return moment.astimezone(timezone.utc).isoformat()
