#!/usr/bin/env python3
"""Apply Alembic migrations to the MemeX database.

Usage:
    python scripts/run_migrations.py            # upgrade to head
    python scripts/run_migrations.py 3f1c2a9d7b40
"""

import sys

import logfire
from alembic import command
from alembic.config import Config

from memex.config import Settings
from memex.util.observability import configure_logfire


def main(argv: list[str]) -> int:
    """Upgrade the schema to the given revision (head by default)."""
    settings = Settings()
    configure_logfire(settings)

    revision = argv[0] if argv else "head"
    with logfire.span("run_migrations", revision=revision):
        try:
            command.upgrade(Config("alembic.ini"), revision)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                revision=revision,
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # The deploy must stop rather than serve a stale schema
            raise

        logfire.info("Database migrations applied", revision=revision)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
