"""Local file I/O utilities."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class LocalFileStore:
    """Local directory exposing the same operations as the WebDAV client.

    Remote-style absolute paths (``/content/sitemaps/x.xml``) are resolved
    under ``output_dir``.
    """

    def __init__(self, output_dir: str = "output") -> None:
        self.output_dir = Path(output_dir)

    def resolve(self, path: str) -> Path:
        return self.output_dir / path.lstrip("/")

    def exists(self, path: str) -> bool:
        return self.resolve(path).exists()

    def create_directory(self, path: str) -> None:
        self.resolve(path).mkdir(parents=True, exist_ok=True)

    def put_file_contents(self, path: str, data: str) -> None:
        filepath = self.resolve(path)
        filepath.parent.mkdir(parents=True, exist_ok=True)
        filepath.write_text(data, encoding="utf-8")
        logger.info("Saved %s", filepath)
