"""Tests for generate_sitemaps.cli module."""

from pathlib import Path
from unittest.mock import patch

import pytest

from common.config import ConfigurationError
from generate_sitemaps import cli
from generate_sitemaps.generate_sitemaps import SitemapRunResult

CREDENTIALS = {
    "STORE_HASH": "abc123",
    "TOKEN": "token",
    "CLIENT_ID": "client",
    "WEBDAV_URL": "https://store.example.com/dav",
    "WEBDAV_USERNAME": "user",
    "WEBDAV_PASSWORD": "secret",
}


@pytest.fixture
def credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    for name, value in CREDENTIALS.items():
        monkeypatch.setenv(name, value)
    monkeypatch.delenv("PUBLIC_BASE_URL", raising=False)


@patch("generate_sitemaps.cli.generate_sitemaps")
class TestMain:
    def test_success_returns_zero(self, mock_generate, credentials) -> None:
        mock_generate.return_value = SitemapRunResult(
            total_urls=21,
            sitemap_urls=["https://shop.example.com/content/sitemaps/pages-1-21-sitemap.xml"],
            index_url="https://shop.example.com/content/sitemaps/sitemap-index.xml",
        )

        assert cli.main(["--config", "prod"]) == 0

        client, store, config, public_base = mock_generate.call_args.args
        assert isinstance(client, cli.BigCommerceClient)
        assert isinstance(store, cli.WebDAVClient)
        assert config.page_size == 250
        assert public_base is None

    def test_load_local_uses_local_store(self, mock_generate, credentials, tmp_path: Path) -> None:
        mock_generate.return_value = SitemapRunResult(0, [], "https://shop.example.com/x.xml")

        assert cli.main(["--config", "prod", "--load-local", "--output-dir", str(tmp_path)]) == 0

        store = mock_generate.call_args.args[1]
        assert isinstance(store, cli.LocalFileStore)
        assert store.output_dir == tmp_path

    def test_failure_is_logged_and_returns_one(self, mock_generate, credentials, caplog) -> None:
        mock_generate.side_effect = ConfigurationError("No storefront URL available, exiting")

        assert cli.main(["--config", "prod"]) == 1
        assert "Job failed with error" in caplog.text

    def test_missing_credentials_fail_before_running(self, mock_generate, monkeypatch) -> None:
        for name in CREDENTIALS:
            monkeypatch.delenv(name, raising=False)

        assert cli.main(["--config", "prod"]) == 1
        mock_generate.assert_not_called()
