"""Settings for the review relay: G2 endpoints, credential, server and logging.

Each field reads its environment variable when a ``Settings`` is built.  A
`.env` next to `pyproject.toml` is merged into the environment on import,
without overriding variables that are already set.

The G2 bearer token is only ever read from the environment; there is no
built-in default credential.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Project root is one level up from this package
_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(_ROOT / ".env", override=False)


@dataclass(frozen=True)
class Settings:
    # ------------------------------------------------------------------
    # G2 upstream
    # ------------------------------------------------------------------
    g2_api_token: str = field(
        default_factory=lambda: os.environ.get("G2_API_TOKEN", "")
    )
    g2_products_url: str = field(
        default_factory=lambda: os.environ.get(
            "G2_PRODUCTS_URL", "https://data.g2.com/api/v2/products"
        )
    )
    g2_reviews_url: str = field(
        default_factory=lambda: os.environ.get(
            "G2_REVIEWS_URL", "https://data.g2.com/api/v2/syndication/reviews"
        )
    )
    # Only the first page of this size is ever requested.
    g2_page_size: int = 25
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("G2_REQUEST_TIMEOUT", "30.0"))
    )

    # ------------------------------------------------------------------
    # HTTP server
    # ------------------------------------------------------------------
    host: str = field(default_factory=lambda: os.environ.get("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.environ.get("PORT", "3000")))
    static_dir: Path = field(
        default_factory=lambda: Path(
            os.environ.get("RELAY_STATIC_DIR", _ROOT / "public")
        )
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO")
    )

    @property
    def index_path(self) -> Path:
        """Absolute path to the static entry page."""
        return self.static_dir / "index.html"


# Module-level singleton used by the CLI; the app factory builds its own:
#   from relay.config import settings
settings = Settings()
