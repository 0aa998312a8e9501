import argparse
import asyncio
import os

import uvicorn

from logging_config import setup_logging

# Setup logging before importing app
log_level = os.getenv("LOG_LEVEL", "INFO")
log_file = os.getenv("LOG_FILE", None)
setup_logging(log_level=log_level, log_file=log_file)

from backend import create_store
from sweeper import SweepEngine, cleanup_old_rooms
from logging_config import get_logger

logger = get_logger(__name__)


async def sweep_once():
    store = create_store()
    try:
        await cleanup_old_rooms(SweepEngine(store))
    finally:
        await store.close()


def main():
    parser = argparse.ArgumentParser(description="Expired room sweeper")
    parser.add_argument("--once", action="store_true", help="Run a single sweep and exit")
    args = parser.parse_args()

    if args.once:
        logger.info("Running a single room sweep")
        asyncio.run(sweep_once())
        return

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", 8000))
    logger.info(f"Starting room sweeper on {host}:{port}")
    uvicorn.run("app:create_app", factory=True, host=host, port=port)


if __name__ == "__main__":
    main()
