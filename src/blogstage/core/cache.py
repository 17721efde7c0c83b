"""File-based cache with source fingerprint invalidation.

Cache structure:
    .cache/
    ├── .gitignore
    └── sitemap.json    # Site map snapshot with the fingerprint of its sources
"""

import hashlib
import json
import logging
from pathlib import Path
from typing import Any, TypedDict

logger = logging.getLogger(__name__)


class CachedSiteMap(TypedDict):
    """Cached site map structure."""

    fingerprint: str
    pages: dict[str, Any]


def compute_sources_hash(blog_root: str, sources: list[tuple[str, float]]) -> str:
    """Compute a fingerprint of the inputs of a site map scan.

    Args:
        blog_root: Root URL path baked into the route paths
        sources: (relative path, mtime) pairs of every post file

    Returns:
        SHA-256 hash of the root and the sorted source list
    """
    lines = [blog_root, *(f"{path}:{mtime!r}" for path, mtime in sorted(sources))]
    return hashlib.sha256("\n".join(lines).encode()).hexdigest()


class FileCache:
    """File-based cache for the loaded site map.

    Uses a fingerprint of the post files and blog root for invalidation. The
    cached snapshot is considered valid when its recorded fingerprint matches
    the current one.
    """

    _GITIGNORE_CONTENT = "# Ignore everything in this directory\n*\n"
    _SITEMAP_FILENAME = "sitemap.json"

    def __init__(self, cache_dir: Path) -> None:
        """Initialize cache with directory path.

        Args:
            cache_dir: Root directory for cache files (e.g., .cache/)
        """
        self._cache_dir = cache_dir

    @property
    def cache_dir(self) -> Path:
        """Root cache directory."""
        return self._cache_dir

    def _ensure_cache_dir(self) -> None:
        """Create cache directory with .gitignore if it doesn't exist."""
        if not self._cache_dir.exists():
            self._cache_dir.mkdir(parents=True, exist_ok=True)
            gitignore_path = self._cache_dir / ".gitignore"
            gitignore_path.write_text(self._GITIGNORE_CONTENT, encoding="utf-8")

    def get_sitemap(self, fingerprint: str) -> dict[str, Any] | None:
        """Retrieve the cached site map if still valid.

        Args:
            fingerprint: Fingerprint of the current scan inputs

        Returns:
            Site map pages dictionary on a valid hit, None otherwise
        """
        sitemap_path = self._cache_dir / self._SITEMAP_FILENAME
        if not sitemap_path.exists():
            return None

        try:
            data = json.loads(sitemap_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            logger.debug(f"Ignoring unreadable cache file {sitemap_path}")
            return None

        if not isinstance(data, dict):
            return None
        if data.get("fingerprint") != fingerprint:
            return None

        pages = data.get("pages")
        if not isinstance(pages, dict):
            return None
        return pages

    def set_sitemap(self, pages: dict[str, Any], fingerprint: str) -> None:
        """Store the site map in cache.

        Args:
            pages: Site map pages dictionary
            fingerprint: Fingerprint of the scan inputs for invalidation
        """
        self._ensure_cache_dir()
        cached: CachedSiteMap = {"fingerprint": fingerprint, "pages": pages}
        sitemap_path = self._cache_dir / self._SITEMAP_FILENAME
        sitemap_path.write_text(json.dumps(cached), encoding="utf-8")

    def invalidate_sitemap(self) -> None:
        """Remove the cached site map."""
        sitemap_path = self._cache_dir / self._SITEMAP_FILENAME
        if sitemap_path.exists():
            sitemap_path.unlink()
