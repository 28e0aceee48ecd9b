"""Entry point - create the database schema."""

import asyncio
import logging
import sys

from subway_core.config import settings
from subway_core.database import get_engine, init_db


def setup_logging() -> None:
    """Configure logging for the process."""
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )


async def main() -> None:
    """Create all tables, then release the engine."""
    setup_logging()
    logger = logging.getLogger(__name__)
    logger.info("Creating subway tables...")
    try:
        await init_db()
    finally:
        await get_engine().dispose()
    logger.info("Subway tables ready")


def run() -> None:
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
