import pytest
from sqlalchemy import create_engine, inspect, text

from townhub.migrations import (
    create_super_admin,
    math_game,
    multi_tenant,
    seed_jobs,
    seed_plugins,
    seed_settings,
    user_status,
)
from townhub.migrations.runner import MigrationError, run_migration
from townhub.models.user import ROLE_SUPER_ADMIN

LEGACY_SCHEMA = [
    """CREATE TABLE users (
        id INTEGER PRIMARY KEY,
        username VARCHAR(255) NOT NULL,
        password_hash VARCHAR(255) NOT NULL,
        role VARCHAR(20) NOT NULL,
        first_name VARCHAR(255),
        last_name VARCHAR(255),
        class VARCHAR(10),
        email VARCHAR(255),
        job_id INTEGER,
        job_level INTEGER NOT NULL DEFAULT 1,
        job_experience_points INTEGER NOT NULL DEFAULT 0,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )""",
    """CREATE TABLE accounts (
        id INTEGER PRIMARY KEY,
        user_id INTEGER NOT NULL UNIQUE,
        account_number VARCHAR(50) NOT NULL UNIQUE,
        balance NUMERIC(10, 2) NOT NULL DEFAULT 0,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )""",
    """CREATE TABLE jobs (
        id INTEGER PRIMARY KEY,
        name VARCHAR(255) NOT NULL UNIQUE,
        description TEXT,
        salary NUMERIC(10, 2) NOT NULL DEFAULT 0,
        company_name VARCHAR(255),
        location VARCHAR(255),
        requirements TEXT,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )""",
    "INSERT INTO users (id, username, password_hash, role, class) "
    "VALUES (1, 'alex', 'x', 'student', '6A'), (2, 'mrs_smith', 'x', 'teacher', NULL)",
    "INSERT INTO accounts (id, user_id, account_number, balance) VALUES (1, 1, 'ACC1', 25)",
    "INSERT INTO jobs (name, salary) VALUES ('Nurse', 100)",
]

ALL_MIGRATIONS = (
    user_status, multi_tenant, math_game, seed_plugins, seed_jobs, seed_settings
)


@pytest.fixture
def legacy_url(tmp_path):
    url = f"sqlite:///{tmp_path / 'legacy.db'}"
    engine = create_engine(url)
    with engine.begin() as conn:
        for statement in LEGACY_SCHEMA:
            conn.execute(text(statement))
    engine.dispose()
    return url


def _query(url, sql):
    engine = create_engine(url)
    try:
        with engine.connect() as conn:
            return [tuple(row) for row in conn.execute(text(sql))]
    finally:
        engine.dispose()


def _columns(url, table):
    engine = create_engine(url)
    try:
        return [c["name"] for c in inspect(engine).get_columns(table)]
    finally:
        engine.dispose()


def _indexes(url, table):
    engine = create_engine(url)
    try:
        return {i["name"] for i in inspect(engine).get_indexes(table)}
    finally:
        engine.dispose()


def test_migrations_are_idempotent(legacy_url):
    for _ in range(2):
        for migration in ALL_MIGRATIONS:
            migration.run(legacy_url)

    user_columns = _columns(legacy_url, "users")
    assert user_columns.count("status") == 1
    assert user_columns.count("school_id") == 1
    assert _columns(legacy_url, "accounts").count("school_id") == 1
    assert _columns(legacy_url, "math_game_sessions").count("submitted_at") == 1

    assert {"ix_users_status", "ix_users_role_status", "uq_users_school_username"} <= _indexes(
        legacy_url, "users"
    )
    assert "ix_math_game_sessions_played_at" in _indexes(legacy_url, "math_game_sessions")

    schools = _query(legacy_url, "SELECT id, code FROM schools")
    assert len(schools) == 1
    school_id, code = schools[0]
    assert code == "stpeters"

    assert _query(legacy_url, "SELECT DISTINCT school_id, status FROM users") == [
        (school_id, "approved")
    ]
    assert _query(legacy_url, "SELECT school_id FROM accounts") == [(school_id,)]

    plugin_count = _query(legacy_url, "SELECT COUNT(*) FROM plugins")[0][0]
    assert plugin_count == len(seed_plugins.DEFAULT_PLUGINS)
    doubles = _query(
        legacy_url, "SELECT enabled FROM plugins WHERE route_path = '/doubles-day'"
    )
    assert doubles == [(False,)] or doubles == [(0,)]

    assert _query(legacy_url, "SELECT COUNT(*) FROM jobs")[0][0] == len(seed_jobs.DEFAULT_JOBS)
    assert _query(legacy_url, "SELECT salary FROM jobs WHERE name = 'Nurse'")[0][0] == 6000
    assert _query(
        legacy_url, "SELECT setting_key, setting_value FROM bank_settings ORDER BY setting_key"
    ) == [("wordle_chores_enabled", "true"), ("wordle_game_daily_limit", "3")]


def test_create_super_admin_promotes_existing(legacy_url):
    for migration in ALL_MIGRATIONS:
        migration.run(legacy_url)

    create_super_admin.run("mrs_smith", "topsecret", legacy_url)
    create_super_admin.run("mrs_smith", "topsecret", legacy_url)

    rows = _query(
        legacy_url, "SELECT role, school_id FROM users WHERE username = 'mrs_smith'"
    )
    assert rows == [(ROLE_SUPER_ADMIN, None)]


def test_create_super_admin_rejects_short_password(legacy_url):
    with pytest.raises(SystemExit) as exc_info:
        create_super_admin.main(["root", "123", "--database-url", legacy_url])
    assert exc_info.value.code == 1


def test_unreachable_database(tmp_path):
    url = f"sqlite:///{tmp_path / 'missing' / 'town.db'}"
    with pytest.raises(MigrationError):
        run_migration("broken", lambda m: None, url)


def test_cli_exits_with_error(tmp_path):
    url = f"sqlite:///{tmp_path / 'missing' / 'town.db'}"
    with pytest.raises(SystemExit) as exc_info:
        user_status.main(["--database-url", url])
    assert exc_info.value.code == 1
