"""Configuration loading for the sitemap job.

Job settings come from YAML files under ``configs/``; credentials come from the
environment (populated from ``.env`` by python-dotenv in the CLI).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

CONFIG_DIR = Path(__file__).resolve().parent.parent.parent / "configs"
CONFIG_ENV_VAR = "SITEMAP_CONFIG"

CATEGORY_ORDER = ("categories", "products", "brands", "pages", "blog_posts")

MAX_PAGE_SIZE = 250
MAX_URLS_PER_SITEMAP = 50000

BIGCOMMERCE_ENV_VARS = ("STORE_HASH", "TOKEN", "CLIENT_ID")
WEBDAV_ENV_VARS = ("WEBDAV_URL", "WEBDAV_USERNAME", "WEBDAV_PASSWORD")


class ConfigurationError(Exception):
    """Raised when the job cannot run with the configuration it was given."""


@dataclass
class SitemapConfig:
    """Settings for one sitemap generation run."""

    webdav_path: str = "/content/sitemaps"
    index_filename: str = "sitemap-index.xml"
    filename_prefix: str = "pages"
    page_size: int = MAX_PAGE_SIZE
    max_urls_per_sitemap: int = MAX_URLS_PER_SITEMAP
    request_timeout: int = 30
    split_by_category: bool = False
    categories: list[str] = field(default_factory=lambda: list(CATEGORY_ORDER))

    def __post_init__(self) -> None:
        if not 1 <= self.page_size <= MAX_PAGE_SIZE:
            raise ValueError(
                f"Invalid page_size: {self.page_size}. Must be between 1 and {MAX_PAGE_SIZE}"
            )

        if not 1 <= self.max_urls_per_sitemap <= MAX_URLS_PER_SITEMAP:
            raise ValueError(
                f"Invalid max_urls_per_sitemap: {self.max_urls_per_sitemap}. "
                f"Must be between 1 and {MAX_URLS_PER_SITEMAP}"
            )

        if not self.webdav_path.startswith("/"):
            raise ValueError(f"Invalid webdav_path: {self.webdav_path}. Must be absolute")

        # Trailing slash would double up when joined with filenames
        if self.webdav_path != "/":
            self.webdav_path = self.webdav_path.rstrip("/")

        invalid = [c for c in self.categories if c not in CATEGORY_ORDER]
        if invalid:
            raise ValueError(
                f"Invalid categories: {', '.join(invalid)}. "
                f"Must be among {', '.join(CATEGORY_ORDER)}"
            )


@dataclass
class BigCommerceCredentials:
    store_hash: str
    access_token: str
    client_id: str


@dataclass
class WebDAVCredentials:
    url: str
    username: str
    password: str


def find_config_path(
    config_name: str | None,
    config_dir: Path = CONFIG_DIR,
    default_name: str = "prod",
    env_var: str | None = CONFIG_ENV_VAR,
) -> Path:
    """Find config file path, checking env var and defaults.

    Args:
        config_name: Name of config (without .yaml), a path to a YAML file, or
            None for the default
        config_dir: Directory containing config files
        default_name: Default config name if config_name is None
        env_var: Environment variable to check for config name

    Returns:
        Path to the config file

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    if config_name is None:
        config_name = os.environ.get(env_var, default_name) if env_var else default_name

    if "/" in config_name or config_name.endswith((".yaml", ".yml")):
        config_path = Path(config_name)
    else:
        config_path = config_dir / f"{config_name}.yaml"

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    return config_path


def load_yaml(path: Path) -> dict:
    """Load YAML file and return dict."""
    with open(path) as f:
        return yaml.safe_load(f) or {}


def load_config(config_name: str | None = None) -> SitemapConfig:
    """Load sitemap job config by name (e.g., 'test' or 'prod')."""
    data = load_yaml(find_config_path(config_name))
    return _parse_config(data)


def _parse_config(data: dict) -> SitemapConfig:
    defaults = SitemapConfig()
    return SitemapConfig(
        webdav_path=data.get("webdav_path", defaults.webdav_path),
        index_filename=data.get("index_filename", defaults.index_filename),
        filename_prefix=data.get("filename_prefix", defaults.filename_prefix),
        page_size=int(data.get("page_size", defaults.page_size)),
        max_urls_per_sitemap=int(data.get("max_urls_per_sitemap", defaults.max_urls_per_sitemap)),
        request_timeout=int(data.get("request_timeout", defaults.request_timeout)),
        split_by_category=bool(data.get("split_by_category", defaults.split_by_category)),
        categories=list(data.get("categories") or defaults.categories),
    )


def _require_env(names: tuple[str, ...]) -> dict[str, str]:
    missing = [name for name in names if not os.environ.get(name)]
    if missing:
        raise ConfigurationError(f"Missing required environment variables: {', '.join(missing)}")
    return {name: os.environ[name] for name in names}


def load_bigcommerce_credentials() -> BigCommerceCredentials:
    """Read commerce API credentials from the environment."""
    values = _require_env(BIGCOMMERCE_ENV_VARS)
    return BigCommerceCredentials(
        store_hash=values["STORE_HASH"],
        access_token=values["TOKEN"],
        client_id=values["CLIENT_ID"],
    )


def load_webdav_credentials() -> WebDAVCredentials:
    """Read WebDAV credentials from the environment."""
    values = _require_env(WEBDAV_ENV_VARS)
    return WebDAVCredentials(
        url=values["WEBDAV_URL"],
        username=values["WEBDAV_USERNAME"],
        password=values["WEBDAV_PASSWORD"],
    )


def get_public_base_url() -> str | None:
    """Optional override for the base of published sitemap links."""
    return os.environ.get("PUBLIC_BASE_URL") or None
