# townhub/migrations/runner.py
"""Shared plumbing for the one-off migration scripts.

Each script is a fixed list of idempotent steps run in order against the
configured database. Every statement commits on its own; a failure stops the
script with exit status 1 and leaves earlier steps applied. Reruns rely on
the guards (IF NOT EXISTS, column checks, existence checks before inserts).
"""
import argparse
import logging
import sys
from typing import Callable, Optional

from sqlalchemy import Table, inspect, select, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from townhub.core.config import settings
from townhub.core.logging_config import setup_logging
from townhub.db.session import build_engine

logger = logging.getLogger(__name__)


class MigrationError(Exception):
    pass


class Migration:
    def __init__(self, name: str, engine: Engine):
        self.name = name
        self.engine = engine

    @property
    def dialect(self) -> str:
        return self.engine.dialect.name

    def _connect(self) -> Connection:
        return self.engine.connect().execution_options(isolation_level="AUTOCOMMIT")

    def execute(self, description: str, sql: str, **params) -> int:
        with self._connect() as conn:
            result = conn.execute(text(sql), params)
            rowcount = result.rowcount if result.rowcount is not None else -1
        if rowcount >= 0:
            logger.info("%s: %s (%d rows)", self.name, description, rowcount)
        else:
            logger.info("%s: %s", self.name, description)
        return rowcount

    def table_exists(self, table: str) -> bool:
        return inspect(self.engine).has_table(table)

    def has_column(self, table: str, column: str) -> bool:
        return column in {c["name"] for c in inspect(self.engine).get_columns(table)}

    def create_table(self, table: Table) -> None:
        existed = self.table_exists(table.name)
        with self._connect() as conn:
            table.create(conn, checkfirst=True)
        logger.info(
            "%s: table %s %s",
            self.name, table.name, "already exists" if existed else "created",
        )

    def add_column(self, table: str, column: str, ddl: str) -> None:
        """ALTER TABLE ... ADD COLUMN unless the column is already there."""
        if self.dialect == "postgresql":
            self.execute(
                f"column {table}.{column} ensured",
                f"ALTER TABLE {table} ADD COLUMN IF NOT EXISTS {column} {ddl}",
            )
            return
        # SQLite has no ADD COLUMN IF NOT EXISTS
        if self.has_column(table, column):
            logger.info("%s: column %s.%s already exists", self.name, table, column)
            return
        self.execute(
            f"column {table}.{column} added",
            f"ALTER TABLE {table} ADD COLUMN {column} {ddl}",
        )

    def create_index(self, name: str, table: str, columns: str, unique: bool = False) -> None:
        kind = "UNIQUE INDEX" if unique else "INDEX"
        self.execute(
            f"index {name} ensured",
            f"CREATE {kind} IF NOT EXISTS {name} ON {table} ({columns})",
        )

    def insert_missing(self, table: Table, key: str, rows: list[dict]) -> int:
        """Insert the rows whose ``key`` value is not present yet."""
        inserted = 0
        with self._connect() as conn:
            for row in rows:
                exists = conn.execute(
                    select(table.c.id).where(table.c[key] == row[key])
                ).first()
                if exists is None:
                    conn.execute(table.insert().values(**row))
                    inserted += 1
        logger.info(
            "%s: %d %s rows inserted, %d already present",
            self.name, inserted, table.name, len(rows) - inserted,
        )
        return inserted

    def upsert(self, table: Table, key: str, rows: list[dict]) -> tuple[int, int]:
        """Insert new rows and overwrite existing ones matched on ``key``."""
        inserted = updated = 0
        with self._connect() as conn:
            for row in rows:
                result = conn.execute(
                    table.update().where(table.c[key] == row[key]).values(**row)
                )
                if result.rowcount:
                    updated += 1
                else:
                    conn.execute(table.insert().values(**row))
                    inserted += 1
        logger.info(
            "%s: %d %s rows inserted, %d updated",
            self.name, inserted, table.name, updated,
        )
        return inserted, updated


def run_migration(
    name: str,
    steps: Callable[[Migration], None],
    database_url: Optional[str] = None,
) -> None:
    """Run ``steps`` once; raise MigrationError on connection or statement failure."""
    url = database_url or settings.sqlalchemy_database_url
    engine = build_engine(url)
    logger.info("%s: connecting to %s", name, engine.url.render_as_string(hide_password=True))
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        steps(Migration(name, engine))
    except SQLAlchemyError as exc:
        logger.error("%s: migration failed: %s", name, exc)
        raise MigrationError(str(exc)) from exc
    finally:
        engine.dispose()
    logger.info("%s: migration completed", name)


def build_parser(description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument(
        "--database-url",
        default=None,
        help="Target database (defaults to DATABASE_PUBLIC_URL / DATABASE_URL / DB_PATH)",
    )
    return parser


def cli(name: str, steps: Callable[[Migration], None], description: str, argv=None) -> None:
    args = build_parser(description).parse_args(argv)
    setup_logging(settings.LOG_LEVEL)
    try:
        run_migration(name, steps, args.database_url)
    except MigrationError:
        sys.exit(1)
