"""Pytest fixtures for fittrack tests."""

from __future__ import annotations

import tempfile
from datetime import date
from pathlib import Path

import pytest

from fittrack.config import settings as settings_module
from fittrack.config.settings import Settings
from fittrack.db.connection import DatabaseConnection, set_db
from fittrack.insights.models import Metric
from fittrack.tracking.models import UserProfile
from fittrack.tracking.queries import ObservationQueries, UserQueries


@pytest.fixture
def temp_db():
    """Create a temporary database with schema."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    db = DatabaseConnection(db_path)
    db.initialize_schema()

    yield db

    # Cleanup
    db_path.unlink(missing_ok=True)


@pytest.fixture
def user_id(temp_db):
    """Create a default user profile and return its ID."""
    profile = UserProfile(
        user_id=None,
        age=30,
        sex="male",
        height_cm=180.0,
        weight_kg=80.0,
        name="Test",
    )
    with temp_db.get_connection() as conn:
        return UserQueries.create_user(conn, profile)


@pytest.fixture
def sample_weights(temp_db, user_id):
    """Log a sparse run of weigh-ins: 80 kg on Jan 1 down to 76 kg on Jan 5."""
    with temp_db.get_connection() as conn:
        ObservationQueries.add_entry(conn, user_id, Metric.WEIGHT, 80.0, date(2024, 1, 1))
        ObservationQueries.add_entry(conn, user_id, Metric.WEIGHT, 76.0, date(2024, 1, 5))
    return temp_db


@pytest.fixture
def cli_db(temp_db, monkeypatch):
    """Point the CLI at the temporary database with default settings."""
    monkeypatch.setattr(settings_module, "_settings", Settings())
    set_db(temp_db)
    yield temp_db
    set_db(None)
