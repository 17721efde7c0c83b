"""Static site build.

Writes the tag listing pages, the paginated blog index and a site map
snapshot into an output directory:

    dist/
    ├── index.html
    ├── page/2/index.html
    ├── tags/<tag>/index.html
    └── sitemap.json
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from blogstage.config import SiteConfig
from blogstage.core.bio import AuthorBio
from blogstage.core.document import render_document
from blogstage.core.index import paginate_index
from blogstage.core.sitemap import SiteMap
from blogstage.core.tags import build_tag_index
from blogstage.core.views import render_tag_page

logger = logging.getLogger(__name__)

SITEMAP_FILENAME = "sitemap.json"


@dataclass
class BuildResult:
    """Summary of a static build."""

    output_dir: Path
    tag_pages: list[Path] = field(default_factory=list)
    index_pages: list[Path] = field(default_factory=list)
    skipped_tags: list[str] = field(default_factory=list)
    sitemap_path: Path | None = None

    @property
    def written(self) -> list[Path]:
        """All files written by the build."""
        files = [*self.index_pages, *self.tag_pages]
        if self.sitemap_path is not None:
            files.append(self.sitemap_path)
        return files


def build_site(
    site_map: SiteMap,
    output_dir: Path,
    site: SiteConfig,
    *,
    blog_root: str = "/",
    bio: AuthorBio | None = None,
) -> BuildResult:
    """Render every static page of the blog.

    Args:
        site_map: Site map snapshot to render
        output_dir: Directory receiving the generated files
        site: Site metadata
        blog_root: Root URL path of the blog
        bio: Author bio for the page footer

    Returns:
        BuildResult listing the files written
    """
    result = BuildResult(output_dir=output_dir)

    tag_index = build_tag_index(site_map)
    for tag in tag_index:
        if not _is_safe_dirname(tag):
            logger.warning(f"Skipping tag {tag!r}: not usable as a directory name")
            result.skipped_tags.append(tag)
    linked_tags = {tag for tag in tag_index if tag not in result.skipped_tags}
    _warn_case_collisions(linked_tags)

    pages = paginate_index(site_map, site.index_page_size, blog_root, linked_tags=linked_tags)
    for page in pages:
        target = output_dir / "index.html"
        if page.number > 1:
            target = output_dir / "page" / str(page.number) / "index.html"
        page_title = f"Page {page.number}" if page.number > 1 else None
        _write(
            target,
            render_document(
                site,
                page.to_html(),
                page_title=page_title,
                blog_root=blog_root,
                bio=bio,
            ),
        )
        result.index_pages.append(target)

    for tag, routes in tag_index.items():
        if tag not in linked_tags:
            continue

        view = render_tag_page(tag, blog_root, routes, linked_tags=linked_tags)
        target = output_dir / "tags" / tag / "index.html"
        _write(
            target,
            render_document(site, view.to_html(), page_title=view.heading, blog_root=blog_root),
        )
        result.tag_pages.append(target)

    result.sitemap_path = output_dir / SITEMAP_FILENAME
    _write(result.sitemap_path, json.dumps({"pages": site_map.to_dict()}, indent=2))

    logger.info(
        f"Built {len(result.index_pages)} index pages and "
        f"{len(result.tag_pages)} tag pages in {output_dir}",
    )
    return result


def _is_safe_dirname(tag: str) -> bool:
    return bool(tag.strip()) and tag not in (".", "..") and "/" not in tag and "\\" not in tag


def _warn_case_collisions(tags: set[str]) -> None:
    """Warn about tags whose directories clash on case-insensitive filesystems."""
    groups: dict[str, list[str]] = {}
    for tag in sorted(tags):
        groups.setdefault(tag.casefold(), []).append(tag)
    for group in groups.values():
        if len(group) > 1:
            logger.warning(
                f"Tags {', '.join(repr(tag) for tag in group)} differ only in case "
                "and share a directory on case-insensitive filesystems",
            )


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    logger.debug(f"Wrote {path}")
