"""Paginated blog index.

Lists every post newest first, split into pages of a configured size.
"""

from collections.abc import Collection
from dataclasses import dataclass
from html import escape
from typing import NotRequired, TypedDict

from blogstage.core.sitemap import Route, SiteMap
from blogstage.core.views import ArticleSummary, ArticleSummaryDict, join_path


class IndexPageDict(TypedDict):
    """Dictionary representation of an index page."""

    page: int
    page_count: int
    path: str
    posts: list[ArticleSummaryDict]
    previous: NotRequired[str]
    next: NotRequired[str]


@dataclass(frozen=True)
class IndexPage:
    """One page of the blog index."""

    number: int
    page_count: int
    path: str
    posts: tuple[ArticleSummary, ...]
    previous_path: str | None = None
    next_path: str | None = None

    def to_dict(self) -> IndexPageDict:
        """Convert to dictionary for JSON serialization."""
        result: IndexPageDict = {
            "page": self.number,
            "page_count": self.page_count,
            "path": self.path,
            "posts": [post.to_dict() for post in self.posts],
        }
        if self.previous_path is not None:
            result["previous"] = self.previous_path
        if self.next_path is not None:
            result["next"] = self.next_path
        return result

    def to_html(self) -> str:
        items = "".join(f"<li>{post.to_html()}</li>" for post in self.posts)
        nav = []
        if self.previous_path is not None:
            nav.append(f'<a rel="prev" href="{escape(self.previous_path)}">Newer posts</a>')
        if self.next_path is not None:
            nav.append(f'<a rel="next" href="{escape(self.next_path)}">Older posts</a>')
        pagination = f'<nav class="Pagination">{"".join(nav)}</nav>' if nav else ""
        return f'<div class="BlogIndexPage"><ul>{items}</ul>{pagination}</div>'


def index_page_path(blog_root_path: str, number: int) -> str:
    """Return the URL path of an index page (1-based)."""
    if number == 1:
        return join_path(blog_root_path) + ("/" if blog_root_path.strip("/") else "")
    return join_path(blog_root_path, "page", str(number))


def sort_newest_first(routes: list[Route]) -> list[Route]:
    """Order routes by date descending; undated routes go last.

    Ties are broken by path so the order is deterministic.
    """
    dated = sorted((route for route in routes if _date(route)), key=lambda route: route.path)
    dated.sort(key=_date, reverse=True)
    undated = sorted((route for route in routes if not _date(route)), key=lambda route: route.path)
    return dated + undated


def paginate_index(
    site_map: SiteMap,
    page_size: int,
    blog_root_path: str,
    *,
    linked_tags: Collection[str] | None = None,
) -> list[IndexPage]:
    """Split the posts of a site map into index pages.

    Args:
        site_map: Site map snapshot
        page_size: Number of posts per page
        blog_root_path: Root path of the blog
        linked_tags: Tags that have a listing page, None links every tag

    Returns:
        Index pages, at least one even for an empty site map

    Raises:
        ValueError: If page_size is less than 1
    """
    if page_size < 1:
        raise ValueError("page_size must be at least 1")

    routes = sort_newest_first(list(site_map.values()))
    chunks = [routes[i : i + page_size] for i in range(0, len(routes), page_size)] or [[]]
    page_count = len(chunks)

    pages: list[IndexPage] = []
    for number, chunk in enumerate(chunks, start=1):
        pages.append(
            IndexPage(
                number=number,
                page_count=page_count,
                path=index_page_path(blog_root_path, number),
                posts=tuple(
                    ArticleSummary.from_route(route, blog_root_path, linked_tags=linked_tags)
                    for route in chunk
                ),
                previous_path=index_page_path(blog_root_path, number - 1) if number > 1 else None,
                next_path=(
                    index_page_path(blog_root_path, number + 1) if number < page_count else None
                ),
            ),
        )
    return pages


def _date(route: Route) -> str:
    if route.meta is None or route.meta.date is None:
        return ""
    return route.meta.date
