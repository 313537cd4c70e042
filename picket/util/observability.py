"""Logfire setup for the API process and maintenance scripts.

Services log with ``logfire`` directly::

    logfire.info("Invitation issued", invitation_id=str(invitation.id))

    with logfire.span("invitation_service.consume", token=token.masked):
        ...

Identifiers only. Passwords, hashes and full invitation tokens never go into
log attributes; scrubbing below is a second line for anything that slips.
"""

import sys
from collections.abc import Iterator
from contextlib import contextmanager

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from picket.config import Settings

# Attribute names whose values are redacted before export
SCRUB_PATTERNS = ["password", "password_hash", "jwt", "vapid", "x-auth-token"]


def _should_send(settings: Settings) -> bool:
    if settings.observability.send_to_logfire is not None:
        return settings.observability.send_to_logfire
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once per process.

    Sends to the Logfire backend when a token is configured (or
    OBSERVABILITY__SEND_TO_LOGFIRE forces it), console output otherwise.
    """
    send = _should_send(settings)
    logfire.configure(
        service_name="picket-api",
        service_version="0.1.0",
        environment=settings.environment,
        token=settings.observability.logfire_token,
        send_to_logfire=send,
        console=logfire.ConsoleOptions(
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
        scrubbing=logfire.ScrubbingOptions(extra_patterns=SCRUB_PATTERNS),
    )
    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request. Headers are left out, they carry session tokens."""
    logfire.instrument_fastapi(app, capture_headers=False)


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    logfire.instrument_sqlalchemy(engine=engine.sync_engine)


@contextmanager
def reported_failure(operation: str) -> Iterator[None]:
    """Log an exception escaping ``operation`` with its traceback, then re-raise.

    Used by the scripts so startup and maintenance failures reach Logfire
    before the process exits.
    """
    try:
        yield
    except Exception as e:
        logfire.error(
            "{operation} failed",
            operation=operation,
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise
