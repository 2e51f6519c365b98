"""Database queries for profiles, logged entries and goals."""

from __future__ import annotations

import logging
import sqlite3
from datetime import date, datetime
from typing import Optional

from fittrack.insights.models import Metric, Observation
from fittrack.tracking.models import Goal, LogEntry, UserProfile

logger = logging.getLogger(__name__)


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


def _row_to_profile(row: sqlite3.Row) -> UserProfile:
    return UserProfile(
        user_id=row[0],
        age=row[1],
        sex=row[2],
        height_cm=row[3],
        weight_kg=row[4],
        name=row[5],
        created_at=_parse_timestamp(row[6]),
    )


def _row_to_entry(row: sqlite3.Row) -> LogEntry:
    return LogEntry(
        log_id=row[0],
        user_id=row[1],
        metric=Metric(row[2]),
        measured_on=date.fromisoformat(row[3]),
        value=row[4],
        notes=row[5],
    )


def _row_to_goal(row: sqlite3.Row) -> Goal:
    return Goal(
        goal_id=row[0],
        user_id=row[1],
        metric=Metric(row[2]),
        target_value=row[3],
        created_at=_parse_timestamp(row[4]),
    )


class UserQueries:
    """Database queries for user profiles."""

    @staticmethod
    def create_user(conn: sqlite3.Connection, profile: UserProfile) -> int:
        """Create a new user profile and return the user_id."""
        cursor = conn.execute(
            """
            INSERT INTO user_profiles (name, age, sex, height_cm, weight_kg)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                profile.name,
                profile.age,
                profile.sex,
                profile.height_cm,
                profile.weight_kg,
            ),
        )
        conn.commit()
        logger.info("Created user profile %s", cursor.lastrowid)
        return cursor.lastrowid or 0

    @staticmethod
    def get_user(conn: sqlite3.Connection, user_id: int) -> Optional[UserProfile]:
        """Get user profile by ID."""
        row = conn.execute(
            """
            SELECT user_id, age, sex, height_cm, weight_kg, name, created_at
            FROM user_profiles WHERE user_id = ?
            """,
            (user_id,),
        ).fetchone()

        return _row_to_profile(row) if row else None

    @staticmethod
    def get_default_user(conn: sqlite3.Connection) -> Optional[UserProfile]:
        """Get the first (default) user profile."""
        row = conn.execute(
            """
            SELECT user_id, age, sex, height_cm, weight_kg, name, created_at
            FROM user_profiles ORDER BY user_id LIMIT 1
            """
        ).fetchone()

        return _row_to_profile(row) if row else None

    @staticmethod
    def update_user(conn: sqlite3.Connection, profile: UserProfile) -> None:
        """Update an existing user profile."""
        if profile.user_id is None:
            raise ValueError("Cannot update profile without user_id")

        conn.execute(
            """
            UPDATE user_profiles
            SET name = ?, age = ?, sex = ?, height_cm = ?, weight_kg = ?
            WHERE user_id = ?
            """,
            (
                profile.name,
                profile.age,
                profile.sex,
                profile.height_cm,
                profile.weight_kg,
                profile.user_id,
            ),
        )
        conn.commit()


class ObservationQueries:
    """Database queries for logged metric entries."""

    @staticmethod
    def add_entry(
        conn: sqlite3.Connection,
        user_id: int,
        metric: Metric,
        value: float,
        measured_on: date,
        notes: Optional[str] = None,
    ) -> LogEntry:
        """
        Log a measurement.

        Entries are never replaced: a second entry on the same day is kept
        alongside the first. Daily rollups happen when insights are built.
        """
        cursor = conn.execute(
            """
            INSERT INTO activity_log (user_id, metric, measured_on, value, notes)
            VALUES (?, ?, ?, ?, ?)
            """,
            (user_id, metric.value, measured_on.isoformat(), value, notes),
        )
        conn.commit()
        logger.debug("Logged %s=%s on %s for user %s", metric.value, value, measured_on, user_id)

        return LogEntry(
            log_id=cursor.lastrowid,
            user_id=user_id,
            metric=metric,
            measured_on=measured_on,
            value=value,
            notes=notes,
        )

    @staticmethod
    def add_entries(
        conn: sqlite3.Connection,
        user_id: int,
        metric: Metric,
        rows: list[tuple[date, float, Optional[str]]],
    ) -> int:
        """Bulk insert (date, value, notes) rows. Returns the count inserted."""
        conn.executemany(
            """
            INSERT INTO activity_log (user_id, metric, measured_on, value, notes)
            VALUES (?, ?, ?, ?, ?)
            """,
            [
                (user_id, metric.value, day.isoformat(), value, notes)
                for day, value, notes in rows
            ],
        )
        conn.commit()
        return len(rows)

    @staticmethod
    def get_entries(
        conn: sqlite3.Connection,
        user_id: int,
        metric: Metric,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[LogEntry]:
        """
        Get logged entries for a metric in chronological order.

        Args:
            user_id: User ID
            metric: Metric to fetch
            start_date: If set, return entries on or after this date
            end_date: If set, return entries on or before this date
        """
        query = """
            SELECT log_id, user_id, metric, measured_on, value, notes
            FROM activity_log
            WHERE user_id = ? AND metric = ?
        """
        params: list = [user_id, metric.value]

        if start_date:
            query += " AND measured_on >= ?"
            params.append(start_date.isoformat())
        if end_date:
            query += " AND measured_on <= ?"
            params.append(end_date.isoformat())

        query += " ORDER BY measured_on, log_id"

        rows = conn.execute(query, params).fetchall()
        return [_row_to_entry(row) for row in rows]

    @staticmethod
    def get_observations(
        conn: sqlite3.Connection,
        user_id: int,
        metric: Metric,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Observation]:
        """Get (date, value) observations ascending by date."""
        entries = ObservationQueries.get_entries(conn, user_id, metric, start_date, end_date)
        return [entry.to_observation() for entry in entries]

    @staticmethod
    def get_latest_entry(
        conn: sqlite3.Connection, user_id: int, metric: Metric
    ) -> Optional[LogEntry]:
        """Get the most recent entry for a metric."""
        row = conn.execute(
            """
            SELECT log_id, user_id, metric, measured_on, value, notes
            FROM activity_log
            WHERE user_id = ? AND metric = ?
            ORDER BY measured_on DESC, log_id DESC LIMIT 1
            """,
            (user_id, metric.value),
        ).fetchone()

        return _row_to_entry(row) if row else None

    @staticmethod
    def delete_entry(conn: sqlite3.Connection, user_id: int, log_id: int) -> bool:
        """Delete an entry. Returns True if a row was removed."""
        cursor = conn.execute(
            "DELETE FROM activity_log WHERE user_id = ? AND log_id = ?",
            (user_id, log_id),
        )
        conn.commit()
        return cursor.rowcount > 0


class GoalQueries:
    """Database queries for metric goals."""

    @staticmethod
    def set_goal(
        conn: sqlite3.Connection, user_id: int, metric: Metric, target_value: float
    ) -> Goal:
        """Set the goal for a metric, replacing any existing one."""
        cursor = conn.execute(
            """
            INSERT OR REPLACE INTO goals (user_id, metric, target_value)
            VALUES (?, ?, ?)
            """,
            (user_id, metric.value, target_value),
        )
        conn.commit()
        logger.info("Set %s goal to %s for user %s", metric.value, target_value, user_id)

        return Goal(
            goal_id=cursor.lastrowid,
            user_id=user_id,
            metric=metric,
            target_value=target_value,
        )

    @staticmethod
    def get_goal(
        conn: sqlite3.Connection, user_id: int, metric: Metric
    ) -> Optional[Goal]:
        """Get the active goal for a metric, if any."""
        row = conn.execute(
            """
            SELECT goal_id, user_id, metric, target_value, created_at
            FROM goals WHERE user_id = ? AND metric = ?
            """,
            (user_id, metric.value),
        ).fetchone()

        return _row_to_goal(row) if row else None

    @staticmethod
    def list_goals(conn: sqlite3.Connection, user_id: int) -> list[Goal]:
        """List all goals for a user."""
        rows = conn.execute(
            """
            SELECT goal_id, user_id, metric, target_value, created_at
            FROM goals WHERE user_id = ? ORDER BY metric
            """,
            (user_id,),
        ).fetchall()

        return [_row_to_goal(row) for row in rows]

    @staticmethod
    def clear_goal(conn: sqlite3.Connection, user_id: int, metric: Metric) -> bool:
        """Remove the goal for a metric. Returns True if one existed."""
        cursor = conn.execute(
            "DELETE FROM goals WHERE user_id = ? AND metric = ?",
            (user_id, metric.value),
        )
        conn.commit()
        return cursor.rowcount > 0
