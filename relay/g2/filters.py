"""Date parsing and the inclusive created-at filter."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from relay.errors import ValidationError
from relay.g2.models import Review

logger = logging.getLogger(__name__)


def _parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 date or datetime into an aware UTC ``datetime``.

    A trailing ``Z`` is accepted.  Date-only strings and naive datetimes are
    taken as UTC, so ``"2024-07-01"`` means midnight UTC of that day.

    Raises:
        ValueError: If *value* is not ISO-8601.
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def parse_bound(value: Optional[str], name: str = "date") -> Optional[datetime]:
    """Parse an optional start/end bound from the request.

    Returns ``None`` for a missing or blank value.

    Raises:
        ValidationError: If *value* is present but not an ISO-8601 date.
    """
    if value is None or not str(value).strip():
        return None
    try:
        return _parse_timestamp(str(value))
    except ValueError as exc:
        raise ValidationError(f"Invalid {name}: {value!r}") from exc


def review_created_at(review: Review) -> Optional[datetime]:
    """Return the review's ``attributes.created_at`` or ``None`` if unusable."""
    attributes = review.get("attributes") if isinstance(review, dict) else None
    if not isinstance(attributes, dict):
        return None
    raw = attributes.get("created_at")
    if not isinstance(raw, str):
        return None
    try:
        return _parse_timestamp(raw)
    except ValueError:
        return None


def filter_reviews(
    reviews: Iterable[Review],
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> List[Review]:
    """Keep reviews created within ``[start, end]``; both bounds inclusive.

    With neither bound every review is returned.  When a bound is set,
    reviews without a usable ``created_at`` are dropped.
    """
    if start is None and end is None:
        return list(reviews)

    kept: List[Review] = []
    for review in reviews:
        created_at = review_created_at(review)
        if created_at is None:
            logger.debug("Dropping review without a usable created_at: %r", review)
            continue
        if start is not None and created_at < start:
            continue
        if end is not None and created_at > end:
            continue
        kept.append(review)
    return kept
