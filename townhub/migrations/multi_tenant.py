# townhub/migrations/multi_tenant.py
"""Move a single-school database to multi-tenant schools.

Creates the schools table, adds school_id to the tenant tables, creates the
default school and assigns every existing row (except super admins) to it.
"""
from sqlalchemy import select

from townhub.migrations.runner import Migration, cli, run_migration
from townhub.models.school import DEFAULT_CLASSES, School

NAME = "multi_tenant"

DEFAULT_SCHOOL = {
    "name": "St Peter's Boys Prep",
    "code": "stpeters",
    "archived": False,
    "settings": {"classes": DEFAULT_CLASSES},
}

TENANT_TABLES = ("users", "accounts")


def default_school_id(m: Migration) -> int:
    schools = School.__table__
    with m.engine.connect() as conn:
        return conn.execute(
            select(schools.c.id).where(schools.c.code == DEFAULT_SCHOOL["code"])
        ).scalar_one()


def steps(m: Migration) -> None:
    m.create_table(School.__table__)

    for table in TENANT_TABLES:
        m.add_column(table, "school_id", "INTEGER REFERENCES schools(id)")
        m.create_index(f"ix_{table}_school_id", table, "school_id")

    m.insert_missing(School.__table__, "code", [DEFAULT_SCHOOL])
    school_id = default_school_id(m)

    m.execute(
        "assigned users to the default school",
        "UPDATE users SET school_id = :school_id "
        "WHERE school_id IS NULL AND role != 'super_admin'",
        school_id=school_id,
    )
    m.execute(
        "assigned accounts to the default school",
        "UPDATE accounts SET school_id = :school_id WHERE school_id IS NULL",
        school_id=school_id,
    )

    # usernames are unique per school from now on
    if m.dialect == "postgresql":
        m.execute(
            "dropped global username constraint",
            "ALTER TABLE users DROP CONSTRAINT IF EXISTS users_username_key",
        )
    m.create_index("uq_users_school_username", "users", "school_id, username", unique=True)


def run(database_url=None) -> None:
    run_migration(NAME, steps, database_url)


def main(argv=None) -> None:
    cli(NAME, steps, __doc__, argv)


if __name__ == "__main__":
    main()
