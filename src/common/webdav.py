"""WebDAV file store client with digest authentication."""

from __future__ import annotations

import logging
from urllib.parse import quote

import requests
from requests.auth import HTTPDigestAuth

logger = logging.getLogger(__name__)

PROPFIND_BODY = (
    '<?xml version="1.0" encoding="utf-8"?>'
    '<d:propfind xmlns:d="DAV:"><d:prop><d:resourcetype/></d:prop></d:propfind>'
)


class WebDAVError(Exception):
    """Raised when a WebDAV operation fails."""


class WebDAVClient:
    """Minimal WebDAV client: existence check, directory creation, file write."""

    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        timeout: int = 30,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.auth = HTTPDigestAuth(username, password)

    def url(self, path: str) -> str:
        return f"{self.base_url}/{quote(path.lstrip('/'))}"

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        try:
            return self.session.request(method, self.url(path), timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise WebDAVError(f"{method} {path} failed: {e}") from e

    def exists(self, path: str) -> bool:
        response = self._request(
            "PROPFIND",
            path,
            data=PROPFIND_BODY,
            headers={"Depth": "0", "Content-Type": "application/xml"},
        )
        if response.status_code in (200, 207):
            return True
        if response.status_code == 404:
            return False
        raise WebDAVError(f"PROPFIND {path} returned HTTP {response.status_code}")

    def create_directory(self, path: str) -> None:
        """Create a collection; an existing collection is not an error."""
        response = self._request("MKCOL", path)
        if response.status_code == 201:
            logger.info("Created WebDAV directory %s", path)
            return
        # 405 Method Not Allowed: the collection already exists
        if response.status_code == 405:
            logger.info("WebDAV directory %s already exists", path)
            return
        raise WebDAVError(f"MKCOL {path} returned HTTP {response.status_code}")

    def put_file_contents(self, path: str, data: str) -> None:
        """Write a file, replacing any existing content at the path."""
        response = self._request(
            "PUT",
            path,
            data=data.encode("utf-8"),
            headers={"Content-Type": "application/xml; charset=utf-8"},
        )
        if response.status_code not in (200, 201, 204):
            raise WebDAVError(f"PUT {path} returned HTTP {response.status_code}")
