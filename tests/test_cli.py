"""Tests for the review-relay CLI commands."""

from __future__ import annotations

import json
import logging
from unittest.mock import patch

import httpx
import pytest
import respx
from typer.testing import CliRunner

from relay.config import Settings
from cli.main import app

runner = CliRunner()

_PRODUCTS_URL = "https://g2.test/api/v2/products"
_REVIEWS_URL = "https://g2.test/api/v2/syndication/reviews"
_SLACK_ID = "a7d324a4-06eb-4be2-ad8e-65938bce5fd5"


@pytest.fixture(autouse=True)
def fake_settings(tmp_path, monkeypatch):
    """Point the CLI at a fake G2 host."""
    settings = Settings(
        g2_api_token="cli-token",
        g2_products_url=_PRODUCTS_URL,
        g2_reviews_url=_REVIEWS_URL,
        port=4321,
        static_dir=tmp_path,
    )
    monkeypatch.setattr("cli.main.settings", settings)
    return settings


class TestResolve:
    def test_prints_product_id(self):
        with respx.mock:
            respx.get(_PRODUCTS_URL).mock(
                return_value=httpx.Response(200, json={"data": [{"id": _SLACK_ID}]})
            )
            result = runner.invoke(app, ["resolve", "slack"])

        assert result.exit_code == 0
        assert _SLACK_ID in result.output

    def test_unknown_slug_exits_1(self):
        with respx.mock:
            respx.get(_PRODUCTS_URL).mock(return_value=httpx.Response(200, json={"data": []}))
            result = runner.invoke(app, ["resolve", "nosuchproduct"])

        assert result.exit_code == 1
        assert "Product not found for slug: nosuchproduct" in result.output

    def test_http_error_exits_1(self):
        with respx.mock:
            respx.get(_PRODUCTS_URL).mock(return_value=httpx.Response(401))
            result = runner.invoke(app, ["resolve", "slack"])

        assert result.exit_code == 1
        assert "G2 request failed" in result.output


class TestReviews:
    def test_prints_filtered_reviews_as_json(self):
        reviews = [
            {"id": "jan", "attributes": {"created_at": "2024-01-01T00:00:00Z"}},
            {"id": "jun", "attributes": {"created_at": "2024-06-15T00:00:00Z"}},
        ]
        with respx.mock:
            respx.get(_REVIEWS_URL).mock(
                return_value=httpx.Response(200, json={"data": reviews})
            )
            result = runner.invoke(
                app, ["reviews", _SLACK_ID, "--start", "2024-02-01", "--end", "2024-07-01"]
            )

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"reviews": [reviews[1]]}

    def test_unsupported_source_exits_1(self):
        result = runner.invoke(app, ["reviews", "slack", "--source", "capterra"])
        assert result.exit_code == 1
        assert "Only G2 source is currently supported" in result.output

    def test_upstream_failure_exits_1(self):
        with respx.mock:
            respx.get(_REVIEWS_URL).mock(return_value=httpx.Response(500, text="boom"))
            result = runner.invoke(app, ["reviews", _SLACK_ID])

        assert result.exit_code == 1


class TestServe:
    def test_runs_uvicorn_with_configured_port(self):
        with patch("uvicorn.run") as mock_run:
            result = runner.invoke(app, ["serve"])

        assert result.exit_code == 0
        mock_run.assert_called_once()
        args, kwargs = mock_run.call_args
        assert args == ("relay.api.app:create_app",)
        assert kwargs["factory"] is True
        assert kwargs["port"] == 4321
        assert "http://localhost:4321" in result.output

    def test_port_option_overrides_settings(self):
        with patch("uvicorn.run") as mock_run:
            result = runner.invoke(app, ["serve", "--port", "8080"])

        assert result.exit_code == 0
        assert mock_run.call_args.kwargs["port"] == 8080

    def test_log_level_option_reaches_server_app(self, monkeypatch):
        from relay.api.app import create_app

        monkeypatch.setenv("LOG_LEVEL", "INFO")
        root = logging.getLogger()
        monkeypatch.setattr(root, "level", root.level)
        with patch("uvicorn.run") as mock_run:
            result = runner.invoke(app, ["--log-level", "debug", "serve"])

        assert result.exit_code == 0
        assert mock_run.call_args.kwargs["log_level"] == "debug"
        # The factory uvicorn calls must see the override, not the old LOG_LEVEL.
        assert create_app().state.settings.log_level == "DEBUG"
