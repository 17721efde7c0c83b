"""Site map provider.

Builds the site map either by scanning the posts directory or by reading a
prebuilt JSON snapshot. The scan result is cached and reused until a post
file changes.

Posts directory layout:
    posts/
    ├── 2014-07-16-bem/
    │   └── post.toml       # title, tags, spoiler, optional date
    └── 2017-01-05-refactoring-react-redux-async/
        └── post.toml
"""

import json
import logging
import re
import tomllib
from datetime import date
from pathlib import Path
from typing import Any

from blogstage.core.cache import FileCache, compute_sources_hash
from blogstage.core.sitemap import SiteMap
from blogstage.core.views import join_path

logger = logging.getLogger(__name__)

POST_FILENAME = "post.toml"

DATE_PREFIX_RE = re.compile(r"^(\d{4}-\d{2}-\d{2})-")


def load_snapshot(path: Path) -> SiteMap:
    """Load a prebuilt site map snapshot.

    Args:
        path: Path to JSON snapshot file

    Returns:
        SiteMap parsed from the snapshot

    Raises:
        FileNotFoundError: If the snapshot doesn't exist
        ValueError: If the snapshot is not valid site map JSON
    """
    if not path.exists():
        raise FileNotFoundError(f"Site map snapshot not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid site map snapshot {path}: {e}") from e

    return SiteMap.from_dict(data)


class SiteMapLoader:
    """Loads the site map from the posts directory or a snapshot.

    When a snapshot path is configured it takes precedence and the posts
    directory is not scanned.
    """

    def __init__(
        self,
        posts_dir: Path,
        cache: FileCache | None = None,
        *,
        blog_root: str = "/",
        snapshot: Path | None = None,
    ) -> None:
        """Initialize loader.

        Args:
            posts_dir: Directory with one subdirectory per post
            cache: FileCache for the scanned site map, None disables caching
            blog_root: Root URL path of the blog
            snapshot: Prebuilt JSON snapshot to read instead of scanning
        """
        self._posts_dir = posts_dir
        self._cache = cache
        self._blog_root = blog_root
        self._snapshot = snapshot

    @property
    def posts_dir(self) -> Path:
        """Directory containing post sources."""
        return self._posts_dir

    @property
    def blog_root(self) -> str:
        """Root URL path of the blog."""
        return self._blog_root

    def load(self) -> SiteMap:
        """Load the current site map.

        Returns:
            SiteMap snapshot, empty if the posts directory doesn't exist
        """
        if self._snapshot is not None:
            return load_snapshot(self._snapshot)

        if not self._posts_dir.is_dir():
            logger.debug(f"Posts directory {self._posts_dir} not found")
            return SiteMap()

        post_files = sorted(self._posts_dir.glob(f"*/{POST_FILENAME}"))
        fingerprint = compute_sources_hash(
            self._blog_root,
            [(p.relative_to(self._posts_dir).as_posix(), p.stat().st_mtime) for p in post_files],
        )

        if self._cache is not None:
            cached = self._cache.get_sitemap(fingerprint)
            if cached is not None:
                return SiteMap.from_dict(cached)

        pages = self._scan(post_files)
        if self._cache is not None:
            self._cache.set_sitemap(pages, fingerprint)
        return SiteMap.from_dict(pages)

    def invalidate(self) -> None:
        """Drop the cached site map so the next load rescans."""
        if self._cache is not None:
            self._cache.invalidate_sitemap()

    def _scan(self, post_files: list[Path]) -> dict[str, Any]:
        """Read post metadata files into the site map JSON shape."""
        pages: dict[str, Any] = {}
        for post_file in post_files:
            try:
                with post_file.open("rb") as f:
                    data = tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError) as e:
                logger.warning(f"Skipping {post_file}: {e}")
                continue

            slug = post_file.parent.name
            path = join_path(self._blog_root, "posts", slug) + "/"
            pages[path] = {
                "meta": _post_meta(data, slug),
                "url": {"href": path},
            }

        logger.info(f"Loaded {len(pages)} posts from {self._posts_dir}")
        return pages


def _post_meta(data: dict[str, Any], slug: str) -> dict[str, Any]:
    """Build route metadata from a post file.

    The date falls back to a ``YYYY-MM-DD-`` prefix of the post directory.
    """
    meta = {key: data[key] for key in ("title", "tags", "spoiler") if key in data}

    post_date = data.get("date")
    if isinstance(post_date, date):
        meta["date"] = post_date.isoformat()
    elif isinstance(post_date, str):
        meta["date"] = post_date
    else:
        match = DATE_PREFIX_RE.match(slug)
        if match is not None:
            meta["date"] = match.group(1)

    return meta
