"""
Services package for the TV guide scraper

This package contains all business logic and service layer components.
"""
from tvguide.services.normalizer_service import normalize_schedule
from tvguide.services.guide_parser_service import parse_guide_html

__all__ = [
    'normalize_schedule',
    'parse_guide_html',
]
