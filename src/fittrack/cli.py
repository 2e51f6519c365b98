"""CLI interface using Typer."""

from __future__ import annotations

import json
import logging
import sqlite3
from dataclasses import replace
from datetime import date, timedelta
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from fittrack.config import get_settings
from fittrack.db import get_db
from fittrack.insights.models import Metric
from fittrack.tracking.models import UserProfile
from fittrack.tracking.queries import GoalQueries, ObservationQueries, UserQueries

app = typer.Typer(
    help="Personal fitness tracking with trend insights",
    no_args_is_help=True,
)
console = Console()

# Subcommand groups
user_app = typer.Typer(help="Manage your profile (height, weight, age)")
log_app = typer.Typer(help="Log weight, calories burned, food intake and stamina sessions")
goal_app = typer.Typer(help="Set per-metric goals used for forecasts")

app.add_typer(user_app, name="user")
app.add_typer(log_app, name="log")
app.add_typer(goal_app, name="goal")

METRIC_HELP = "Metric (weight/calories/food/stamina)"


# ============================================================================
# Helpers
# ============================================================================


def output_json(response: dict, file=None) -> None:
    """Output JSON response to stdout or file."""
    json_str = json.dumps(response, indent=2)
    if file:
        file.write(json_str)
    else:
        print(json_str)


def ensure_tables() -> None:
    """Ensure tables exist (idempotent)."""
    db = get_db()
    db.initialize_schema()


def wants_json(flag: bool) -> bool:
    """JSON output if requested by flag or configured as the default."""
    return flag or get_settings().defaults.output_format == "json"


def fail(
    command: str, message: str, json_output: bool, suggestion: Optional[str] = None
) -> NoReturn:
    """Report an error and exit with code 1."""
    if json_output:
        response: dict = {"success": False, "command": command, "errors": [message]}
        if suggestion:
            response["suggestions"] = [suggestion]
        output_json(response)
    else:
        console.print(f"[red]{message}[/red]")
        if suggestion:
            console.print(suggestion)
    raise typer.Exit(1)


def parse_metric(name: str, command: str, json_output: bool) -> Metric:
    try:
        return Metric.parse(name)
    except ValueError as e:
        fail(command, str(e), json_output)


def parse_date(value: Optional[str], option: str = "--date") -> Optional[date]:
    """Parse a YYYY-MM-DD option value."""
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter(f"expected YYYY-MM-DD, got '{value}'", param_hint=option)


def resolve_user(
    conn: sqlite3.Connection,
    user_id: Optional[int],
    command: str,
    json_output: bool,
) -> UserProfile:
    """Look up the requested user (default: first user) or exit."""
    if user_id:
        profile = UserQueries.get_user(conn, user_id)
    else:
        profile = UserQueries.get_default_user(conn)

    if profile is None:
        fail(
            command,
            "No user profile found",
            json_output,
            "Create one with: fittrack user create --age 30 --sex male --height 180 --weight 80",
        )
    return profile


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Personal fitness tracking with trend insights."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Callbacks for sub-apps to auto-create tables on first use
@user_app.callback()
def user_callback() -> None:
    """Ensure tables exist before any user command."""
    ensure_tables()


@log_app.callback()
def log_callback() -> None:
    """Ensure tables exist before any log command."""
    ensure_tables()


@goal_app.callback()
def goal_callback() -> None:
    """Ensure tables exist before any goal command."""
    ensure_tables()


# ============================================================================
# User Profile Commands
# ============================================================================


@user_app.command("create")
def user_create(
    age: int = typer.Option(..., "--age", help="Age in years"),
    sex: str = typer.Option(..., "--sex", help="Sex (male/female)"),
    height: float = typer.Option(..., "--height", help="Height in cm"),
    weight: float = typer.Option(..., "--weight", help="Current weight in kg"),
    name: Optional[str] = typer.Option(None, "--name", help="Display name"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Create a user profile."""
    json_output = wants_json(json_output)

    try:
        profile = UserProfile(
            user_id=None,
            age=age,
            sex=sex.lower(),
            height_cm=height,
            weight_kg=weight,
            name=name,
        )
    except ValueError as e:
        fail("user create", str(e), json_output)

    db = get_db()
    with db.get_connection() as conn:
        user_id = UserQueries.create_user(conn, profile)

    if json_output:
        output_json({
            "success": True,
            "command": "user create",
            "data": {"user_id": user_id, "profile": {
                "name": name, "age": age, "sex": profile.sex,
                "height_cm": height, "weight_kg": weight,
            }},
            "human_summary": f"Created user profile (ID: {user_id})",
        })
    else:
        console.print(f"[green]Created user profile (ID: {user_id})[/green]")


@user_app.command("show")
def user_show(
    user_id: Optional[int] = typer.Option(None, "--id", help="User ID (default: first user)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show user profile."""
    json_output = wants_json(json_output)

    db = get_db()
    with db.get_connection() as conn:
        profile = resolve_user(conn, user_id, "user show", json_output)

    if json_output:
        output_json({
            "success": True,
            "command": "user show",
            "data": {
                "user_id": profile.user_id,
                "name": profile.name,
                "age": profile.age,
                "sex": profile.sex,
                "height_cm": profile.height_cm,
                "weight_kg": profile.weight_kg,
            },
            "human_summary": f"User {profile.user_id}: {profile.sex}, {profile.age}y, {profile.height_cm}cm, {profile.weight_kg}kg",
        })
    else:
        title = f"User Profile (ID: {profile.user_id})"
        if profile.name:
            title += f" - {profile.name}"
        console.print(f"[bold]{title}[/bold]")
        console.print(f"  Age: {profile.age}")
        console.print(f"  Sex: {profile.sex}")
        console.print(f"  Height: {profile.height_cm} cm")
        console.print(f"  Weight: {profile.weight_kg} kg")


@user_app.command("update")
def user_update(
    user_id: Optional[int] = typer.Option(None, "--id", help="User ID (default: first user)"),
    age: Optional[int] = typer.Option(None, "--age", help="Update age"),
    height: Optional[float] = typer.Option(None, "--height", help="Update height in cm"),
    weight: Optional[float] = typer.Option(None, "--weight", help="Update weight in kg"),
    name: Optional[str] = typer.Option(None, "--name", help="Update display name"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Update user profile."""
    json_output = wants_json(json_output)

    db = get_db()
    with db.get_connection() as conn:
        current = resolve_user(conn, user_id, "user update", json_output)
        changes = {
            field: value
            for field, value in (
                ("age", age),
                ("height_cm", height),
                ("weight_kg", weight),
                ("name", name),
            )
            if value is not None
        }

        try:
            profile = replace(current, **changes)
        except ValueError as e:
            fail("user update", str(e), json_output)

        UserQueries.update_user(conn, profile)

    if json_output:
        output_json({
            "success": True,
            "command": "user update",
            "data": {"user_id": profile.user_id},
            "human_summary": "Profile updated",
        })
    else:
        console.print("[green]Profile updated[/green]")


# ============================================================================
# Logging Commands
# ============================================================================


@log_app.command("add")
def log_add(
    metric_name: str = typer.Argument(..., metavar="METRIC", help=METRIC_HELP),
    value: float = typer.Argument(..., help="Value (kg, calories or minutes)"),
    date_str: Optional[str] = typer.Option(
        None, "--date", "-d", help="Date (YYYY-MM-DD, default: today)"
    ),
    notes: Optional[str] = typer.Option(None, "--notes", "-n", help="Optional notes"),
    user_id: Optional[int] = typer.Option(None, "--user", help="User ID (default: first user)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Log a measurement. Calories and food entries add up per day."""
    json_output = wants_json(json_output)
    metric = parse_metric(metric_name, "log add", json_output)
    measured_on = parse_date(date_str) or date.today()

    db = get_db()
    with db.get_connection() as conn:
        profile = resolve_user(conn, user_id, "log add", json_output)
        entry = ObservationQueries.add_entry(
            conn, profile.user_id, metric, value, measured_on, notes  # type: ignore[arg-type]
        )

    if json_output:
        output_json({
            "success": True,
            "command": "log add",
            "data": {
                "log_id": entry.log_id,
                "metric": metric.value,
                "value": entry.value,
                "measured_on": entry.measured_on.isoformat(),
            },
            "human_summary": f"Logged {metric.value} {value:g} {metric.unit} on {measured_on}",
        })
    else:
        console.print(
            f"[green]Logged:[/green] {metric.value} {value:g} {metric.unit} on {measured_on}"
        )


@log_app.command("list")
def log_list(
    metric_name: str = typer.Argument(..., metavar="METRIC", help=METRIC_HELP),
    days: int = typer.Option(30, "--days", "-d", help="Number of days to show (0 = all)"),
    user_id: Optional[int] = typer.Option(None, "--user", help="User ID"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List logged entries for a metric."""
    json_output = wants_json(json_output)
    metric = parse_metric(metric_name, "log list", json_output)
    start_date = date.today() - timedelta(days=days - 1) if days > 0 else None

    db = get_db()
    with db.get_connection() as conn:
        profile = resolve_user(conn, user_id, "log list", json_output)
        entries = ObservationQueries.get_entries(
            conn, profile.user_id, metric, start_date=start_date  # type: ignore[arg-type]
        )

    if json_output:
        output_json({
            "success": True,
            "command": "log list",
            "data": {
                "metric": metric.value,
                "entries": [
                    {
                        "log_id": e.log_id,
                        "date": e.measured_on.isoformat(),
                        "value": e.value,
                        "notes": e.notes,
                    }
                    for e in entries
                ],
            },
            "human_summary": f"{len(entries)} {metric.value} entries",
        })
        return

    if not entries:
        console.print(f"No {metric.value} entries found")
        return

    date_format = get_settings().insights.date_format
    period = f"last {days} days" if days > 0 else "all time"
    table = Table(title=f"{metric.label} ({period})")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Date", style="cyan")
    table.add_column("Value", justify="right")
    table.add_column("Notes")

    for entry in entries:
        table.add_row(
            str(entry.log_id),
            entry.measured_on.strftime(date_format),
            f"{entry.value:g} {metric.unit}",
            entry.notes or "",
        )

    console.print(table)


@log_app.command("delete")
def log_delete(
    log_id: int = typer.Argument(..., help="Entry ID (see 'fittrack log list')"),
    user_id: Optional[int] = typer.Option(None, "--user", help="User ID"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Delete a logged entry."""
    json_output = wants_json(json_output)

    db = get_db()
    with db.get_connection() as conn:
        profile = resolve_user(conn, user_id, "log delete", json_output)
        deleted = ObservationQueries.delete_entry(conn, profile.user_id, log_id)  # type: ignore[arg-type]

    if not deleted:
        fail("log delete", f"Entry {log_id} not found", json_output)

    if json_output:
        output_json({
            "success": True,
            "command": "log delete",
            "data": {"log_id": log_id},
            "human_summary": f"Deleted entry {log_id}",
        })
    else:
        console.print(f"[green]Deleted entry {log_id}[/green]")


@log_app.command("import")
def log_import(
    metric_name: str = typer.Argument(..., metavar="METRIC", help=METRIC_HELP),
    csv_path: Path = typer.Argument(..., help="CSV file with date,value[,notes] columns"),
    user_id: Optional[int] = typer.Option(None, "--user", help="User ID"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Import historical measurements from a CSV file."""
    from fittrack.tracking.importer import import_observations

    json_output = wants_json(json_output)
    metric = parse_metric(metric_name, "log import", json_output)

    db = get_db()
    with db.get_connection() as conn:
        profile = resolve_user(conn, user_id, "log import", json_output)
        try:
            result = import_observations(conn, profile.user_id, metric, csv_path)  # type: ignore[arg-type]
        except (FileNotFoundError, ValueError) as e:
            fail("log import", str(e), json_output)

    summary = f"Imported {result.imported} {metric.value} entries"
    if result.skipped:
        summary += f" ({result.skipped} rows skipped)"

    if json_output:
        output_json({
            "success": True,
            "command": "log import",
            "data": {
                "metric": metric.value,
                "rows_read": result.rows_read,
                "imported": result.imported,
                "skipped": result.skipped,
            },
            "human_summary": summary,
        })
    else:
        console.print(f"[green]{summary}[/green]")


# ============================================================================
# Goal Commands
# ============================================================================


@goal_app.command("set")
def goal_set(
    metric_name: str = typer.Argument(..., metavar="METRIC", help=METRIC_HELP),
    target: float = typer.Argument(..., help="Target value"),
    user_id: Optional[int] = typer.Option(None, "--user", help="User ID"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Set the goal for a metric (replaces any existing goal)."""
    json_output = wants_json(json_output)
    metric = parse_metric(metric_name, "goal set", json_output)

    db = get_db()
    with db.get_connection() as conn:
        profile = resolve_user(conn, user_id, "goal set", json_output)
        goal = GoalQueries.set_goal(conn, profile.user_id, metric, target)  # type: ignore[arg-type]

    if json_output:
        output_json({
            "success": True,
            "command": "goal set",
            "data": {"metric": metric.value, "target_value": goal.target_value},
            "human_summary": f"{metric.value} goal set to {target:g} {metric.unit}",
        })
    else:
        console.print(f"[green]{metric.value} goal set to {target:g} {metric.unit}[/green]")


@goal_app.command("show")
def goal_show(
    user_id: Optional[int] = typer.Option(None, "--user", help="User ID"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show goals with progress from the latest logged value."""
    from fittrack.insights.aggregate import rollup
    from fittrack.profiles.body_calc import goal_progress

    json_output = wants_json(json_output)

    db = get_db()
    rows = []
    with db.get_connection() as conn:
        profile = resolve_user(conn, user_id, "goal show", json_output)
        for goal in GoalQueries.list_goals(conn, profile.user_id):  # type: ignore[arg-type]
            daily = rollup(
                goal.metric,
                ObservationQueries.get_observations(conn, profile.user_id, goal.metric),  # type: ignore[arg-type]
            )
            start = daily[0].value if daily else None
            current = daily[-1].value if daily else None
            progress = (
                goal_progress(start, current, goal.target_value)
                if start is not None and current is not None
                else None
            )
            rows.append((goal, current, progress))

    if json_output:
        output_json({
            "success": True,
            "command": "goal show",
            "data": {
                "goals": [
                    {
                        "metric": goal.metric.value,
                        "target_value": goal.target_value,
                        "current_value": current,
                        "progress_pct": progress,
                    }
                    for goal, current, progress in rows
                ]
            },
            "human_summary": f"{len(rows)} goal(s)",
        })
        return

    if not rows:
        console.print("No goals set. Set one with: fittrack goal set weight 70")
        return

    table = Table(title="Goals")
    table.add_column("Metric", style="cyan")
    table.add_column("Target", justify="right")
    table.add_column("Current", justify="right")
    table.add_column("Progress", justify="right")

    for goal, current, progress in rows:
        unit = goal.metric.unit
        table.add_row(
            goal.metric.value,
            f"{goal.target_value:g} {unit}",
            f"{current:g} {unit}" if current is not None else "-",
            f"{progress}%" if progress is not None else "-",
        )

    console.print(table)


@goal_app.command("clear")
def goal_clear(
    metric_name: str = typer.Argument(..., metavar="METRIC", help=METRIC_HELP),
    user_id: Optional[int] = typer.Option(None, "--user", help="User ID"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Remove the goal for a metric."""
    json_output = wants_json(json_output)
    metric = parse_metric(metric_name, "goal clear", json_output)

    db = get_db()
    with db.get_connection() as conn:
        profile = resolve_user(conn, user_id, "goal clear", json_output)
        cleared = GoalQueries.clear_goal(conn, profile.user_id, metric)  # type: ignore[arg-type]

    if not cleared:
        fail("goal clear", f"No {metric.value} goal set", json_output)

    if json_output:
        output_json({
            "success": True,
            "command": "goal clear",
            "data": {"metric": metric.value},
            "human_summary": f"Cleared {metric.value} goal",
        })
    else:
        console.print(f"[green]Cleared {metric.value} goal[/green]")


# ============================================================================
# Insights Commands
# ============================================================================


@app.command("insights")
def insights(
    metric_name: str = typer.Argument("weight", metavar="METRIC", help=METRIC_HELP),
    start_str: Optional[str] = typer.Option(
        None, "--start", help="Series start (YYYY-MM-DD, default: first entry)"
    ),
    end_str: Optional[str] = typer.Option(
        None, "--end", help="Series end (YYYY-MM-DD, default: today)"
    ),
    days: Optional[int] = typer.Option(
        None, "--days", "-d", help="Only use entries from the last N days (0 = all)"
    ),
    show_series: bool = typer.Option(False, "--series", help="Show the daily series"),
    user_id: Optional[int] = typer.Option(None, "--user", help="User ID"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show trend, goal forecast and statistics for a metric."""
    from fittrack.insights.report import (
        build_metric_insights,
        format_insights,
        insights_to_dict,
    )

    ensure_tables()
    json_output = wants_json(json_output)
    metric = parse_metric(metric_name, "insights", json_output)
    start = parse_date(start_str, "--start")
    end = parse_date(end_str, "--end")
    today = date.today()

    if days is None:
        days = get_settings().insights.history_days

    # --start wins over the --days window
    window_start = start
    if window_start is None and days > 0:
        window_start = (end or today) - timedelta(days=days - 1)

    db = get_db()
    with db.get_connection() as conn:
        profile = resolve_user(conn, user_id, "insights", json_output)
        observations = ObservationQueries.get_observations(
            conn, profile.user_id, metric, start_date=window_start, end_date=end  # type: ignore[arg-type]
        )
        goal = GoalQueries.get_goal(conn, profile.user_id, metric)  # type: ignore[arg-type]

    result = build_metric_insights(
        metric,
        observations,
        target=goal.target_value if goal else None,
        start=start,
        end=end,
        today=today,
    )

    if json_output:
        output_json({
            "success": True,
            "command": "insights",
            "data": insights_to_dict(result, include_series=show_series),
            "human_summary": f"{metric.value}: {result.trend.description}",
        })
        return

    console.print(Panel(format_insights(result), expand=False))

    if show_series and result.series:
        date_format = get_settings().insights.date_format
        table = Table(title=f"Daily {metric.value}")
        table.add_column("Date", style="cyan")
        table.add_column("Value", justify="right")
        table.add_column("", style="dim")

        for point in result.series:
            table.add_row(
                point.date.strftime(date_format),
                f"{point.value:.1f}",
                "interpolated" if point.is_interpolated else "",
            )

        console.print(table)


@app.command("body")
def body(
    user_id: Optional[int] = typer.Option(None, "--user", help="User ID"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show BMI and BMR from your profile and latest weigh-in."""
    from fittrack.profiles.body_calc import body_metrics_to_dict, calculate_body_metrics

    ensure_tables()
    json_output = wants_json(json_output)

    db = get_db()
    with db.get_connection() as conn:
        profile = resolve_user(conn, user_id, "body", json_output)
        latest = ObservationQueries.get_latest_entry(conn, profile.user_id, Metric.WEIGHT)  # type: ignore[arg-type]

    weight_kg = latest.value if latest else profile.weight_kg
    metrics = calculate_body_metrics(weight_kg, profile.height_cm, profile.age, profile.sex)

    if json_output:
        data = body_metrics_to_dict(metrics)
        data["weight_kg"] = weight_kg
        data["height_cm"] = profile.height_cm
        output_json({
            "success": True,
            "command": "body",
            "data": data,
            "human_summary": f"BMI {metrics.bmi:.1f} ({metrics.bmi_category}), BMR {metrics.bmr} kcal/day",
        })
    else:
        console.print(f"[bold]Body metrics[/bold] ({weight_kg:g} kg, {profile.height_cm:g} cm)")
        console.print(metrics.summary())


if __name__ == "__main__":
    app()
