"""SQLite database schema definitions."""

SCHEMA_SQL = """
-- User profiles (body measurements for BMI/BMR)
CREATE TABLE IF NOT EXISTS user_profiles (
    user_id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT,
    age INTEGER NOT NULL,
    sex TEXT CHECK(sex IN ('male', 'female')),
    height_cm REAL NOT NULL,
    weight_kg REAL NOT NULL,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

-- Logged measurements, several per day allowed (meals, activities)
CREATE TABLE IF NOT EXISTS activity_log (
    log_id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id INTEGER NOT NULL,
    metric TEXT NOT NULL CHECK(metric IN ('weight', 'calories', 'food', 'stamina')),
    measured_on DATE NOT NULL,
    value REAL NOT NULL,
    notes TEXT,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    FOREIGN KEY (user_id) REFERENCES user_profiles(user_id)
);

CREATE INDEX IF NOT EXISTS idx_activity_log_user_metric_date
ON activity_log(user_id, metric, measured_on);

-- One active goal per metric
CREATE TABLE IF NOT EXISTS goals (
    goal_id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id INTEGER NOT NULL,
    metric TEXT NOT NULL CHECK(metric IN ('weight', 'calories', 'food', 'stamina')),
    target_value REAL NOT NULL,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    UNIQUE(user_id, metric),
    FOREIGN KEY (user_id) REFERENCES user_profiles(user_id)
);
"""


def get_schema_sql() -> str:
    """Return the complete schema SQL."""
    return SCHEMA_SQL
