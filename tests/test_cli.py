"""Tests for CLI commands."""

from __future__ import annotations

import json
from datetime import date, timedelta

import pytest
from typer.testing import CliRunner

from fittrack.cli import app

runner = CliRunner()

CREATE_USER = ["user", "create", "--age", "30", "--sex", "male", "--height", "180", "--weight", "80"]


def _json(result) -> dict:
    return json.loads(result.stdout)


@pytest.fixture
def cli_user(cli_db):
    """CLI database with a default user profile."""
    result = runner.invoke(app, CREATE_USER)
    assert result.exit_code == 0
    return cli_db


class TestMainCommands:
    """Tests for top-level CLI behavior."""

    def test_help(self):
        """Test that --help works."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "insights" in result.output.lower()

    def test_log_add_requires_args(self, cli_db):
        result = runner.invoke(app, ["log", "add"])
        assert result.exit_code != 0

    def test_goal_help(self):
        result = runner.invoke(app, ["goal", "--help"])
        assert result.exit_code == 0


class TestUserCommands:
    """Tests for user subcommands."""

    def test_show_without_profile(self, cli_db):
        result = runner.invoke(app, ["user", "show", "--json"])
        assert result.exit_code == 1
        data = _json(result)
        assert data["success"] is False
        assert data["errors"] == ["No user profile found"]

    def test_create_and_show(self, cli_user):
        result = runner.invoke(app, ["user", "show", "--json"])
        assert result.exit_code == 0
        data = _json(result)["data"]
        assert data["age"] == 30
        assert data["height_cm"] == 180

    def test_create_invalid_sex(self, cli_db):
        result = runner.invoke(
            app, ["user", "create", "--age", "30", "--sex", "robot", "--height", "180", "--weight", "80"]
        )
        assert result.exit_code == 1

    def test_update(self, cli_user):
        result = runner.invoke(app, ["user", "update", "--weight", "78"])
        assert result.exit_code == 0
        data = _json(runner.invoke(app, ["user", "show", "--json"]))["data"]
        assert data["weight_kg"] == 78

    def test_update_rejects_invalid_value(self, cli_user):
        result = runner.invoke(app, ["user", "update", "--height", "0", "--json"])
        assert result.exit_code == 1
        assert "height_cm must be positive" in _json(result)["errors"][0]

        data = _json(runner.invoke(app, ["user", "show", "--json"]))["data"]
        assert data["height_cm"] == 180


class TestLogCommands:
    """Tests for log subcommands."""

    def test_add_and_list(self, cli_user):
        result = runner.invoke(app, ["log", "add", "food", "200", "--date", "2024-01-01", "--notes", "oats"])
        assert result.exit_code == 0

        result = runner.invoke(app, ["log", "list", "food", "--days", "0", "--json"])
        assert result.exit_code == 0
        entries = _json(result)["data"]["entries"]
        assert entries == [
            {"log_id": entries[0]["log_id"], "date": "2024-01-01", "value": 200.0, "notes": "oats"}
        ]

    def test_unknown_metric(self, cli_user):
        result = runner.invoke(app, ["log", "add", "steps", "1000", "--json"])
        assert result.exit_code == 1
        assert "Unknown metric" in _json(result)["errors"][0]

    def test_bad_date(self, cli_user):
        result = runner.invoke(app, ["log", "add", "weight", "80", "--date", "01/02/2024"])
        assert result.exit_code != 0

    def test_add_without_profile(self, cli_db):
        result = runner.invoke(app, ["log", "add", "weight", "80"])
        assert result.exit_code == 1

    def test_delete(self, cli_user):
        added = _json(runner.invoke(app, ["log", "add", "weight", "80", "--json"]))
        log_id = added["data"]["log_id"]

        assert runner.invoke(app, ["log", "delete", str(log_id)]).exit_code == 0
        assert runner.invoke(app, ["log", "delete", str(log_id)]).exit_code == 1

    def test_import(self, cli_user, tmp_path):
        csv_path = tmp_path / "stamina.csv"
        csv_path.write_text("date,value\n2024-01-01,30\n2024-01-03,45\n")

        result = runner.invoke(app, ["log", "import", "stamina", str(csv_path), "--json"])
        assert result.exit_code == 0
        assert _json(result)["data"]["imported"] == 2

    def test_import_missing_file(self, cli_user, tmp_path):
        result = runner.invoke(app, ["log", "import", "stamina", str(tmp_path / "nope.csv")])
        assert result.exit_code == 1


class TestGoalCommands:
    """Tests for goal subcommands."""

    def test_set_show_clear(self, cli_user):
        runner.invoke(app, ["log", "add", "weight", "80", "--date", "2024-01-01"])
        runner.invoke(app, ["log", "add", "weight", "75", "--date", "2024-01-08"])

        assert runner.invoke(app, ["goal", "set", "weight", "70"]).exit_code == 0

        goals = _json(runner.invoke(app, ["goal", "show", "--json"]))["data"]["goals"]
        assert goals == [
            {"metric": "weight", "target_value": 70.0, "current_value": 75.0, "progress_pct": 50}
        ]

        assert runner.invoke(app, ["goal", "clear", "weight"]).exit_code == 0
        assert runner.invoke(app, ["goal", "clear", "weight"]).exit_code == 1

    def test_progress_uses_daily_totals(self, cli_user):
        today = date.today().isoformat()
        runner.invoke(app, ["log", "add", "calories", "300", "--date", today])
        runner.invoke(app, ["log", "add", "calories", "200", "--date", today])
        runner.invoke(app, ["goal", "set", "calories", "500"])

        goals = _json(runner.invoke(app, ["goal", "show", "--json"]))["data"]["goals"]
        assert goals[0]["current_value"] == 500
        assert goals[0]["progress_pct"] == 100


class TestInsightsCommand:
    """Tests for the insights command."""

    def test_trend_and_forecast(self, cli_user):
        today = date.today()
        start = today - timedelta(days=9)
        runner.invoke(app, ["log", "add", "weight", "80", "--date", start.isoformat()])
        runner.invoke(app, ["log", "add", "weight", "71", "--date", today.isoformat()])
        runner.invoke(app, ["goal", "set", "weight", "65"])

        result = runner.invoke(app, ["insights", "weight", "--series", "--json"])
        assert result.exit_code == 0
        data = _json(result)["data"]

        assert data["points"] == 10
        assert data["trend"]["description"] == "losing 1.00 per day"
        assert data["forecast"]["days_to_goal"] == 6
        assert data["forecast"]["date"] == (today + timedelta(days=6)).isoformat()
        assert data["series"][0]["is_interpolated"] is False
        assert data["series"][1]["is_interpolated"] is True

    def test_no_data(self, cli_user):
        result = runner.invoke(app, ["insights", "stamina", "--json"])
        assert result.exit_code == 0
        data = _json(result)["data"]
        assert data["points"] == 0
        assert data["trend"]["description"] == "No data available"

    def test_table_output(self, cli_user):
        runner.invoke(app, ["log", "add", "food", "500"])
        result = runner.invoke(app, ["insights", "food", "--series"])
        assert result.exit_code == 0
        assert "Calories Consumed Insights" in result.output


class TestBodyCommand:
    """Tests for the body command."""

    def test_uses_latest_weight(self, cli_user):
        runner.invoke(app, ["log", "add", "weight", "81", "--date", "2024-01-01"])

        result = runner.invoke(app, ["body", "--json"])
        assert result.exit_code == 0
        data = _json(result)["data"]
        assert data["weight_kg"] == 81
        assert data["bmi"] == 25.0
        assert data["bmi_category"] == "Overweight"
        assert data["bmr"] == 1790
