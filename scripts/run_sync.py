#!/usr/bin/env python3
"""
Cron job script to drain the offline action queue once.
Add to crontab: */15 * * * * cd /path/to/app && /path/to/venv/bin/python scripts/run_sync.py

This runs the drain as a standalone script, not through the web server.
Exits with status 1 when actions remain queued for a later pass.
"""

import asyncio
import logging
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dairy_ledger.config import settings
from dairy_ledger.context import DataContext

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


async def main():
    logger.info("Starting scheduled queue drain...")

    context = DataContext.from_settings(settings)
    await context.start(seed=False)

    try:
        pending = await context.queue.get_pending_actions_count()
        if pending == 0:
            logger.info("No pending actions")
            return

        drained = await context.queue.sync_pending_actions()
        report = context.queue.last_report

        if report:
            logger.info(
                f"Drain completed: {len(report.succeeded)} synced, "
                f"{len(report.retrying)} retrying, {len(report.dropped)} dropped"
            )

        if not drained:
            remaining = await context.queue.get_pending_actions_count()
            logger.error(f"{remaining} actions still pending")
            sys.exit(1)

    finally:
        await context.close()


if __name__ == "__main__":
    asyncio.run(main())
