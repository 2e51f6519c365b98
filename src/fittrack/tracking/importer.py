"""Import logged measurements from CSV files."""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Optional

import pandas as pd

from fittrack.insights.models import Metric
from fittrack.tracking.queries import ObservationQueries

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("date", "value")


@dataclass
class ImportResult:
    """Outcome of a CSV import."""

    metric: Metric
    rows_read: int
    imported: int
    skipped: int


def read_observation_csv(csv_path: Path) -> tuple[list[tuple[date, float, Optional[str]]], int]:
    """
    Read (date, value, notes) rows from a CSV file.

    The file needs ``date`` and ``value`` columns; a ``notes`` column is
    optional. Timestamps are truncated to their calendar day. Rows whose
    date or value cannot be parsed are skipped.

    Args:
        csv_path: Path to the CSV file

    Returns:
        (rows, skipped) where rows are sorted by date

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If required columns are missing
    """
    if not csv_path.exists():
        raise FileNotFoundError(f"CSV file not found: {csv_path}")

    df = pd.read_csv(csv_path)
    df.columns = [str(c).strip().lower() for c in df.columns]

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(
            f"CSV file {csv_path.name} is missing required column(s): {', '.join(missing)}"
        )

    df["date"] = pd.to_datetime(df["date"], errors="coerce", format="mixed")
    df["value"] = pd.to_numeric(df["value"], errors="coerce")

    valid = df.dropna(subset=["date", "value"])
    skipped = len(df) - len(valid)
    if skipped:
        logger.warning("Skipped %d unparseable row(s) in %s", skipped, csv_path)

    valid = valid.sort_values("date", kind="stable")
    has_notes = "notes" in valid.columns

    rows: list[tuple[date, float, Optional[str]]] = []
    for _, row in valid.iterrows():
        notes = None
        if has_notes and pd.notna(row["notes"]):
            notes = str(row["notes"])
        rows.append((row["date"].date(), float(row["value"]), notes))

    return rows, skipped


def import_observations(
    conn: sqlite3.Connection,
    user_id: int,
    metric: Metric,
    csv_path: Path,
) -> ImportResult:
    """Import a CSV of measurements into the activity log."""
    rows, skipped = read_observation_csv(csv_path)
    imported = ObservationQueries.add_entries(conn, user_id, metric, rows) if rows else 0

    logger.info("Imported %d %s entries from %s", imported, metric.value, csv_path)

    return ImportResult(
        metric=metric,
        rows_read=len(rows) + skipped,
        imported=imported,
        skipped=skipped,
    )
