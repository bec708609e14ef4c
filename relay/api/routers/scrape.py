"""Scrape endpoint.

Routes
------
POST /scrape    Body: {"company": "slack", "startDate": "2024-01-01",
                       "endDate": "2024-12-31", "source": "G2"}
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Request
from pydantic import BaseModel, ConfigDict, Field

from relay.g2 import G2Client, ScrapeRequest, scrape_reviews

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class ScrapeBody(BaseModel):
    """Inbound JSON body.

    Fields are optional so that missing values reach the relay's own
    validation and come back as ``400 {"error": ...}``.
    """

    model_config = ConfigDict(populate_by_name=True)

    company: Optional[str] = None
    source: Optional[str] = None
    start_date: Optional[str] = Field(default=None, alias="startDate")
    end_date: Optional[str] = Field(default=None, alias="endDate")


class ScrapeResponse(BaseModel):
    reviews: list[dict[str, Any]]


# ---------------------------------------------------------------------------
# Endpoint
# ---------------------------------------------------------------------------

@router.post("/scrape", response_model=ScrapeResponse)
def scrape_endpoint(body: ScrapeBody, request: Request) -> dict[str, Any]:
    """Resolve *company*, fetch its first page of G2 reviews and filter by date.

    Validation failures become 400 and upstream failures a generic 500 via
    the exception handlers registered in :func:`relay.api.app.create_app`.
    """
    settings = request.app.state.settings
    scrape_request = ScrapeRequest(
        company=body.company,
        source=body.source,
        start_date=body.start_date,
        end_date=body.end_date,
    )
    with G2Client(settings) as g2:
        result = scrape_reviews(scrape_request, g2)
    return result.to_dict()
