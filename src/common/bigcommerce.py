"""BigCommerce REST API client (v2 and v3 surfaces)."""

from __future__ import annotations

import logging
from typing import Any

import requests

logger = logging.getLogger(__name__)

API_ROOT = "https://api.bigcommerce.com/stores"
API_VERSIONS = ("v2", "v3")


class BigCommerceError(Exception):
    """Raised when a BigCommerce API request fails."""


class BigCommerceClient:
    """Thin wrapper around a requests session authenticated for one store."""

    def __init__(
        self,
        store_hash: str,
        access_token: str,
        client_id: str,
        timeout: int = 30,
        session: requests.Session | None = None,
    ) -> None:
        self.store_hash = store_hash
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "X-Auth-Token": access_token,
            "X-Auth-Client": client_id,
            "Accept": "application/json",
        })

    def url(self, path: str, version: str = "v3") -> str:
        if version not in API_VERSIONS:
            raise ValueError(f"Unsupported API version: {version}")
        return f"{API_ROOT}/{self.store_hash}/{version}/{path.lstrip('/')}"

    def get(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        version: str = "v3",
    ) -> Any:
        """GET a resource and return its decoded JSON body.

        The v2 API answers 204 with no body when a listing is empty; that case
        returns None.

        Raises:
            BigCommerceError: On transport failure, non-2xx status or a body
                that is not JSON.
        """
        url = self.url(path, version)
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise BigCommerceError(f"GET {version} {path} failed: {e}") from e

        if response.status_code == 204 or not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise BigCommerceError(f"GET {version} {path} returned invalid JSON") from e

    def get_store(self) -> dict[str, Any]:
        """Return the store metadata record (v2 ``/store``)."""
        return self.get("/store", version="v2") or {}
