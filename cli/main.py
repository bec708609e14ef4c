"""Review relay CLI — entry-point for the server and one-off lookups.

Usage:
    python cli/main.py --help

Commands:
    serve     → run the HTTP relay with uvicorn
    resolve   → print the G2 product id for a slug
    reviews   → fetch and filter reviews, same pipeline as POST /scrape
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from relay.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import json
import os
from typing import Optional

import httpx
import typer

from relay.config import settings
from relay.errors import NotFoundError, RelayError
from relay.g2 import G2Client, ScrapeRequest, scrape_reviews
from relay.logging_config import configure_logging

app = typer.Typer(
    name="review-relay",
    help="G2 review relay CLI.",
    no_args_is_help=True,
)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override LOG_LEVEL."),
) -> None:
    """Configure logging before any command runs."""
    if log_level:
        # Exported so the server app, built by uvicorn, picks up the same level.
        os.environ["LOG_LEVEL"] = log_level.upper()
    configure_logging(log_level or settings.log_level)


# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------
@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address (default: HOST or 0.0.0.0)."),
    port: Optional[int] = typer.Option(None, help="Listen port (default: PORT or 3000)."),
    reload: bool = typer.Option(False, help="Reload on code changes (development only)."),
) -> None:
    """Run the review relay HTTP server."""
    import uvicorn  # noqa: PLC0415

    bind_host = host or settings.host
    bind_port = port or settings.port
    level = os.environ.get("LOG_LEVEL", settings.log_level)
    typer.echo(f"[serve] Server running on http://localhost:{bind_port}")
    uvicorn.run(
        "relay.api.app:create_app",
        factory=True,
        host=bind_host,
        port=bind_port,
        reload=reload,
        log_level=level.lower(),
    )


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------
@app.command("resolve")
def resolve(slug: str = typer.Argument(..., help="G2 product slug, e.g. 'slack'.")) -> None:
    """Print the G2 product id for SLUG."""
    try:
        with G2Client(settings) as g2:
            product_id = g2.resolve_product_id(slug)
    except NotFoundError as exc:
        typer.echo(f"[resolve] {exc}", err=True)
        raise typer.Exit(1)
    except httpx.HTTPError as exc:
        typer.echo(f"[resolve] G2 request failed: {exc}", err=True)
        raise typer.Exit(1)
    typer.echo(product_id)


@app.command("reviews")
def reviews(
    company: str = typer.Argument(..., help="G2 product slug or product id."),
    start: Optional[str] = typer.Option(None, "--start", help="Inclusive start date (YYYY-MM-DD)."),
    end: Optional[str] = typer.Option(None, "--end", help="Inclusive end date (YYYY-MM-DD)."),
    source: str = typer.Option("g2", help="Review source; only G2 is supported."),
) -> None:
    """Fetch the first page of G2 reviews for COMPANY and print them as JSON."""
    request = ScrapeRequest(company=company, source=source, start_date=start, end_date=end)
    try:
        with G2Client(settings) as g2:
            result = scrape_reviews(request, g2)
    except RelayError as exc:
        typer.echo(f"[reviews] {exc}", err=True)
        raise typer.Exit(1)
    typer.echo(json.dumps(result.to_dict(), indent=2))


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
