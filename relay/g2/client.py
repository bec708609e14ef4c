"""Thin synchronous client for the two G2 endpoints the relay uses.

Both calls authenticate with the configured bearer token.  HTTP and transport
errors are raised as-is (``httpx.HTTPError``); nothing is retried.
"""

from __future__ import annotations

import json
import logging
from typing import Any, List, Optional

import httpx

from relay.config import Settings
from relay.errors import NotFoundError
from relay.g2.models import Review

logger = logging.getLogger(__name__)


class G2Client:
    """Slug resolution and first-page review listing against the G2 API.

    Use as a context manager so the underlying ``httpx.Client`` is closed::

        with G2Client(settings) as g2:
            product_id = g2.resolve_product_id("slack")
            reviews = g2.fetch_reviews(product_id)
    """

    def __init__(self, settings: Settings, http: Optional[httpx.Client] = None) -> None:
        self.settings = settings
        self._owns_http = http is None
        self._http = http or httpx.Client(timeout=settings.request_timeout)

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.settings.g2_api_token}",
            "Accept": "application/json",
        }

    def __enter__(self) -> "G2Client":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    def _get(self, url: str, params: dict[str, Any]) -> httpx.Response:
        response = self._http.get(url, params=params, headers=self._headers())
        response.raise_for_status()
        return response

    def resolve_product_id(self, slug: str) -> str:
        """Return the G2 product id for *slug*.

        The slug is matched case-insensitively by lower-casing it before the
        lookup.

        Raises:
            NotFoundError: If no product matches *slug*.
            httpx.HTTPError: On any transport or HTTP status failure.
        """
        response = self._get(
            self.settings.g2_products_url,
            params={"filter[slug]": slug.lower()},
        )
        payload = _json_or_none(response)
        products = _data_list(payload)
        if products and isinstance(products[0], dict) and products[0].get("id"):
            return str(products[0]["id"])

        logger.error(
            "G2 API response for slug %r: %s",
            slug,
            json.dumps(payload, indent=2) if payload is not None else response.text,
        )
        raise NotFoundError(f"Product not found for slug: {slug}")

    def fetch_reviews(self, product_id: str) -> List[Review]:
        """Return the first page of reviews for *product_id*.

        A missing or malformed payload yields an empty list.

        Raises:
            httpx.HTTPError: On any transport or HTTP status failure.
        """
        response = self._get(
            self.settings.g2_reviews_url,
            params={
                "filter[product_id]": product_id,
                "page[size]": self.settings.g2_page_size,
                "page[number]": 1,
            },
        )
        reviews = _data_list(_json_or_none(response))
        logger.info("G2 API status: %s", response.status_code)
        logger.info("Reviews returned: %d", len(reviews))
        return reviews


# ---------------------------------------------------------------------------
# Payload helpers
# ---------------------------------------------------------------------------

def _json_or_none(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def _data_list(payload: Any) -> List[Any]:
    """Return ``payload["data"]`` when it is a list, else ``[]``."""
    if isinstance(payload, dict) and isinstance(payload.get("data"), list):
        return payload["data"]
    return []
