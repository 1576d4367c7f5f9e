"""
Structured logging helpers for consistent log formatting.
"""
import logging
from datetime import datetime, timezone


def log_section_start(logger: logging.Logger, section_name: str) -> None:
    """Log the start of a processing section."""
    logger.info(f"Starting: {section_name}")


def log_section_end(logger: logging.Logger, section_name: str) -> None:
    """Log the end of a processing section."""
    logger.info(f"Completed: {section_name}")


def log_scrape_start(logger: logging.Logger) -> None:
    """Log scrape operation start."""
    logger.info(f"Schedule scrape started at {datetime.now(timezone.utc).isoformat()}")


def log_scrape_end(logger: logging.Logger) -> None:
    """Log scrape operation end."""
    logger.info(f"Schedule scrape completed at {datetime.now(timezone.utc).isoformat()}")


def log_normalize_summary(
    logger: logging.Logger,
    raw_count: int,
    normalized_count: int
) -> None:
    """
    Log normalization summary.

    Args:
        logger: Logger instance
        raw_count: Number of raw entries extracted from the page
        normalized_count: Number of entries that survived normalization
    """
    logger.info(
        f"Normalized {normalized_count} programs ({raw_count - normalized_count} skipped)"
    )
