# townhub/migrations/user_status.py
"""Add the approval status column to users; existing users become approved."""
from townhub.migrations.runner import Migration, cli, run_migration

NAME = "user_status"


def steps(m: Migration) -> None:
    m.add_column("users", "status", "VARCHAR(20) NOT NULL DEFAULT 'approved'")
    m.execute(
        "backfilled users without status",
        "UPDATE users SET status = 'approved' WHERE status IS NULL OR status = ''",
    )
    m.create_index("ix_users_status", "users", "status")
    m.create_index("ix_users_role_status", "users", "role, status")


def run(database_url=None) -> None:
    run_migration(NAME, steps, database_url)


def main(argv=None) -> None:
    cli(NAME, steps, __doc__, argv)


if __name__ == "__main__":
    main()
