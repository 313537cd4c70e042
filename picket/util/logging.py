"""Standard library logging setup.

Application code logs through logfire; this routes the stdlib loggers used
by uvicorn and SQLAlchemy to stdout and into logfire.
"""

import logging
import sys

import logfire

from picket.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"

QUIET_LOGGERS = ("asyncio", "urllib3", "sqlalchemy.engine.Engine")


def log_level(settings: Settings) -> int:
    if settings.debug:
        return logging.DEBUG
    if settings.environment == "production":
        return logging.WARNING
    return logging.INFO


def setup_logging(settings: Settings) -> None:
    """Install stdout and logfire handlers on the root logger.

    Args:
        settings: Application settings
    """
    level = log_level(settings)

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logging.basicConfig(
        level=level,
        handlers=[console, logfire.LogfireLoggingHandler()],
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logging.getLogger(__name__).info(
        "Logging configured: environment=%s, level=%s",
        settings.environment,
        logging.getLevelName(level),
    )
