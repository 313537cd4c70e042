#!/usr/bin/env python3
"""Upgrade the database schema to the latest Alembic revision.

Run before the API starts; a failure exits non-zero so the deploy stops.
"""

import sys

import logfire
from alembic import command
from alembic.config import Config

from picket.config import Settings
from picket.util.observability import configure_logfire, reported_failure


def main(revision: str = "head") -> int:
    configure_logfire(Settings())

    with reported_failure("Database migration"):
        command.upgrade(Config("alembic.ini"), revision)
        logfire.info("Database schema upgraded", revision=revision)
    return 0


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))
