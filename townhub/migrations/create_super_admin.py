# townhub/migrations/create_super_admin.py
"""Create a super admin, or promote an existing user to super admin.

Usage: python -m townhub.migrations.create_super_admin USERNAME PASSWORD
"""
import logging
import sys

from sqlalchemy.orm import Session

from townhub.core.config import settings
from townhub.core.logging_config import setup_logging
from townhub.migrations.runner import Migration, MigrationError, build_parser, run_migration
from townhub.services import user_service

logger = logging.getLogger(__name__)

NAME = "create_super_admin"

MIN_PASSWORD_LENGTH = 6


def run(username: str, password: str, database_url=None) -> None:
    def steps(m: Migration) -> None:
        with Session(bind=m.engine) as db:
            user = user_service.create_or_promote_super_admin(
                db, username=username, password=password
            )
            logger.info("%s: %s is now a super admin (id %s)", NAME, user.username, user.id)

    run_migration(NAME, steps, database_url)


def main(argv=None) -> None:
    parser = build_parser(__doc__.splitlines()[0])
    parser.add_argument("username")
    parser.add_argument("password")
    args = parser.parse_args(argv)
    setup_logging(settings.LOG_LEVEL)

    if len(args.password) < MIN_PASSWORD_LENGTH:
        logger.error("Password must be at least %d characters", MIN_PASSWORD_LENGTH)
        sys.exit(1)
    try:
        run(args.username, args.password, args.database_url)
    except MigrationError:
        sys.exit(1)


if __name__ == "__main__":
    main()
