#!/usr/bin/env python3
"""Delete expired, never redeemed invitations.

Meant to run periodically (cron or a scheduled container). Expiry is also
checked on every redemption, so a late run only leaves dead rows behind.
"""

import asyncio
import sys

import logfire

from picket.config import Settings
from picket.domain.service import InvitationService
from picket.util.di.container import create_container
from picket.util.observability import configure_logfire, reported_failure


async def purge() -> int:
    container = create_container()
    try:
        async with container() as request_container:
            invitation_service = await request_container.get(InvitationService)
            return await invitation_service.purge_expired()
    finally:
        await container.close()


def main() -> int:
    configure_logfire(Settings())

    with reported_failure("Invitation purge"):
        removed = asyncio.run(purge())
        logfire.info("Invitation purge finished", removed=removed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
