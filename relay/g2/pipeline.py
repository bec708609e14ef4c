"""The scrape pipeline: validate, resolve, fetch, filter.

``scrape_reviews`` is shared by the ``/scrape`` endpoint and the CLI so both
surfaces behave identically.
"""

from __future__ import annotations

import logging

from relay.errors import UpstreamError, ValidationError
from relay.g2.client import G2Client
from relay.g2.filters import filter_reviews, parse_bound
from relay.g2.models import SUPPORTED_SOURCE, ScrapeRequest, ScrapeResult, ValidatedRequest

logger = logging.getLogger(__name__)


def validate_request(request: ScrapeRequest) -> ValidatedRequest:
    """Check required fields and parse the date bounds.

    Raises:
        ValidationError: If *company* is empty, *source* is missing or not
            G2, or a bound is not a valid date.
    """
    company = (request.company or "").strip()
    if not company:
        raise ValidationError("Company (slug or ID) is required")
    if not request.source or request.source.lower() != SUPPORTED_SOURCE:
        raise ValidationError("Only G2 source is currently supported")
    return ValidatedRequest(
        company=company,
        start=parse_bound(request.start_date, "startDate"),
        end=parse_bound(request.end_date, "endDate"),
    )


def scrape_reviews(request: ScrapeRequest, client: G2Client) -> ScrapeResult:
    """Run one scrape request end to end.

    Raises:
        ValidationError: On invalid input; no upstream call is made.
        UpstreamError: If slug resolution or the review fetch fails for any
            reason.  The original error is chained as ``__cause__``.
    """
    validated = validate_request(request)

    try:
        if validated.is_product_id:
            logger.info("Using raw product ID: %s", validated.company)
            product_id = validated.company
        else:
            logger.info("Resolving slug -> product ID: %s", validated.company)
            product_id = client.resolve_product_id(validated.company)
            logger.info("Resolved product ID: %s", product_id)

        reviews = client.fetch_reviews(product_id)
    except Exception as exc:
        raise UpstreamError.wrap(exc) from exc

    return ScrapeResult(
        product_id=product_id,
        reviews=filter_reviews(reviews, validated.start, validated.end),
    )
