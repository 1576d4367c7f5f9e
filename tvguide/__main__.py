import asyncio
import logging
import sys

import httpx

from tvguide.config import settings, setup_logging
from tvguide.services.schedule_types import ScrapeError
from tvguide.services.scrape_service import scrape_and_save


# Setup logging before anything else
setup_logging()

logger = logging.getLogger("tvguide.main")


async def run_once() -> int:
    """Run a single scrape, returning the process exit status"""
    logger.info("Starting scraper...")
    try:
        result = await scrape_and_save()
    except ScrapeError as e:
        logger.error(f"Error during scraping: {e}")
        return 1
    except httpx.HTTPError as e:
        logger.error(f"Error during scraping: could not download guide page: {e}")
        return 1
    except OSError as e:
        logger.error(f"Error during scraping: could not write output: {e}")
        return 1

    logger.info(
        "Scrape finished: %s programs saved to %s",
        result.get("programs_saved", 0),
        result.get("output_path"),
    )
    return 0


def main() -> None:
    settings.log_summary()
    try:
        exit_code = asyncio.run(run_once())
    except KeyboardInterrupt:
        logger.info("Interrupted, exiting")
        exit_code = 130
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
