"""CLI for generating and publishing storefront sitemaps."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from dotenv import load_dotenv

from common.bigcommerce import BigCommerceClient
from common.cli_helpers import setup_logging
from common.config import (
    get_public_base_url,
    load_bigcommerce_credentials,
    load_config,
    load_webdav_credentials,
)
from common.local_io import LocalFileStore
from common.webdav import WebDAVClient
from generate_sitemaps.generate_sitemaps import generate_sitemaps
from generate_sitemaps.helpers import apply_overrides, parse_generate_sitemaps_args

load_dotenv()

setup_logging()
logger = logging.getLogger(__name__)


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_generate_sitemaps_args(argv)

    logger.info("Starting job")
    try:
        config = apply_overrides(load_config(args.config), args)

        credentials = load_bigcommerce_credentials()
        client = BigCommerceClient(
            store_hash=credentials.store_hash,
            access_token=credentials.access_token,
            client_id=credentials.client_id,
            timeout=config.request_timeout,
        )

        if args.load_local:
            store = LocalFileStore(args.output_dir)
        else:
            webdav = load_webdav_credentials()
            store = WebDAVClient(
                webdav.url,
                webdav.username,
                webdav.password,
                timeout=config.request_timeout,
            )

        result = generate_sitemaps(client, store, config, get_public_base_url())
    except Exception:
        logger.exception("Job failed with error")
        return 1

    logger.info("Total pages in sitemaps: %d", result.total_urls)
    logger.info("Individual sitemaps:")
    for sitemap_url in result.sitemap_urls:
        logger.info("  %s", sitemap_url)
    logger.info("Sitemap index: %s", result.index_url)
    return 0


if __name__ == "__main__":
    sys.exit(main())
