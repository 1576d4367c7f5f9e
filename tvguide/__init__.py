"""TV guide scraper: fetches a channel schedule page and writes normalized program times."""

__version__ = "0.1.0"
