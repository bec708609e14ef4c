"""Request-scoped data for the scrape pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

SUPPORTED_SOURCE = "g2"

# A review is passed through exactly as G2 returns it.
Review = Dict[str, Any]


@dataclass
class ScrapeRequest:
    """An inbound scrape request, before validation.

    Every field is optional here so that missing values can be reported as
    clean validation errors rather than parse failures.
    """

    company: Optional[str] = None
    source: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None


@dataclass
class ValidatedRequest:
    """A :class:`ScrapeRequest` that passed validation."""

    company: str
    start: Optional[datetime] = None
    end: Optional[datetime] = None

    @property
    def is_product_id(self) -> bool:
        """``True`` when *company* should be used verbatim as a G2 product id.

        G2 product ids are UUIDs, so anything containing a hyphen is treated
        as an id and everything else as a slug.  Known limitation: hyphenated
        slugs such as ``"google-workspace"`` are mistaken for ids.
        """
        return "-" in self.company


@dataclass
class ScrapeResult:
    """Reviews returned to the client, in upstream order."""

    product_id: str
    reviews: List[Review] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"reviews": self.reviews}
