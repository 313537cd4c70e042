#!/usr/bin/env python3
"""Serve the API with uvicorn.

The app is built by ``create_app`` in factory mode, after logging and Logfire
are configured here.
"""

import sys

import logfire
import uvicorn

from picket.config import Settings
from picket.util.logging import setup_logging
from picket.util.observability import configure_logfire, reported_failure


def main() -> int:
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    with reported_failure("API startup"):
        logfire.info("Starting Picket API", base_url=settings.api.base_url)
        uvicorn.run(
            "picket.interface.api.app:create_app",
            factory=True,
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
            proxy_headers=settings.environment in ("staging", "production"),
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
