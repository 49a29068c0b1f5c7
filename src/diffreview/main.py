"""Main entry point for the diff review CLI."""

import asyncio
import logging
import sys
from pathlib import Path

from .config import config
from .interfaces.cli import ReviewCLI

logger = logging.getLogger(__name__)


async def _run(paths: list[str]):
    cli = ReviewCLI()
    for raw in paths:
        path = Path(raw).expanduser()
        if not path.exists():
            logger.error("Proposal file not found: %s", path)
            continue
        count = await cli.load(path)
        logger.info("Loaded %d proposal(s) from %s", count, path)
    await cli.run()


def cli_main():
    """Entry point for CLI. Arguments are proposal files to load first."""
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        asyncio.run(_run(sys.argv[1:]))
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    cli_main()
