"""Activity logging for fitness metrics.

Stores weigh-ins, activities, meals and stamina sessions along with the
user profile and per-metric goals. Entries are kept as logged; the
insights package rolls them up to daily values.

Key components:
- User profile, log entry and goal models
- SQLite queries for each
- CSV import of historical measurements
"""

from __future__ import annotations

from fittrack.tracking.models import Goal, LogEntry, UserProfile
from fittrack.tracking.queries import GoalQueries, ObservationQueries, UserQueries

__all__ = [
    "Goal",
    "GoalQueries",
    "LogEntry",
    "ObservationQueries",
    "UserProfile",
    "UserQueries",
]
