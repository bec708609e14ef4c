"""G2 package — slug resolution, review fetch & date filtering."""

from relay.g2.client import G2Client
from relay.g2.filters import filter_reviews, parse_bound
from relay.g2.models import ScrapeRequest, ScrapeResult
from relay.g2.pipeline import scrape_reviews, validate_request

__all__ = [
    "G2Client",
    "filter_reviews",
    "parse_bound",
    "ScrapeRequest",
    "ScrapeResult",
    "scrape_reviews",
    "validate_request",
]
