"""Presentational views for blog pages.

Views are plain data projected from routes. Each view converts to a
dictionary for the JSON API and to an HTML fragment for static pages.
"""

from collections.abc import Collection, Sequence
from dataclasses import dataclass, field
from html import escape
from typing import NotRequired, TypedDict
from urllib.parse import quote

from blogstage.core.sitemap import Route


class TagLinkDict(TypedDict):
    """Dictionary representation of a tag link."""

    name: str
    href: NotRequired[str]


class ArticleSummaryDict(TypedDict):
    """Dictionary representation of an article summary."""

    title: str
    href: str
    spoiler: NotRequired[str]
    date: NotRequired[str]
    tags: list[TagLinkDict]


class TagPageEntryDict(TypedDict):
    """Dictionary representation of a tag page list entry."""

    key: str
    summary: ArticleSummaryDict


class TagPageDict(TypedDict):
    """Dictionary representation of a tag page."""

    tag: str
    heading: str
    entries: list[TagPageEntryDict]


def join_path(root: str, *parts: str) -> str:
    """Join URL path segments under a root path.

    Args:
        root: Root path (e.g., "/blog", "/blog/" or "/")
        parts: Segments appended in order

    Returns:
        Path with a single leading slash and no doubled separators
    """
    segments = [root.strip("/"), *(part.strip("/") for part in parts)]
    return "/" + "/".join(segment for segment in segments if segment)


def tag_href(blog_root_path: str, tag: str) -> str:
    """Build the URL of a tag listing page."""
    return join_path(blog_root_path, "tags", quote(tag, safe=""))


@dataclass(frozen=True)
class TagLink:
    """Link to a tag listing page.

    ``href`` is None when the tag has no listing page to link to.
    """

    name: str
    href: str | None = None

    def to_dict(self) -> TagLinkDict:
        result: TagLinkDict = {"name": self.name}
        if self.href is not None:
            result["href"] = self.href
        return result

    def to_html(self) -> str:
        if self.href is None:
            return f"<span>{escape(self.name)}</span>"
        return f'<a href="{escape(self.href)}">{escape(self.name)}</a>'


@dataclass(frozen=True)
class ArticleSummary:
    """Summary of a single post, as shown in listings."""

    title: str
    href: str
    spoiler: str | None = None
    date: str | None = None
    tags: tuple[TagLink, ...] = ()

    @classmethod
    def from_route(
        cls,
        route: Route,
        blog_root_path: str,
        *,
        linked_tags: Collection[str] | None = None,
    ) -> "ArticleSummary":
        """Project a route into a summary.

        The title falls back to the route path when metadata has none. When
        ``linked_tags`` is given, only those tags get an href.
        """
        meta = route.meta
        return cls(
            title=route.title or route.path,
            href=route.url.href,
            spoiler=meta.spoiler if meta is not None else None,
            date=meta.date if meta is not None else None,
            tags=tuple(
                TagLink(
                    name=tag,
                    href=(
                        tag_href(blog_root_path, tag)
                        if linked_tags is None or tag in linked_tags
                        else None
                    ),
                )
                for tag in dict.fromkeys(route.tags)
            ),
        )

    def to_dict(self) -> ArticleSummaryDict:
        """Convert to dictionary for JSON serialization."""
        result: ArticleSummaryDict = {
            "title": self.title,
            "href": self.href,
            "tags": [tag.to_dict() for tag in self.tags],
        }
        if self.spoiler is not None:
            result["spoiler"] = self.spoiler
        if self.date is not None:
            result["date"] = self.date
        return result

    def to_html(self) -> str:
        parts = [
            '<article class="ArticleSummary">',
            f'<h2><a href="{escape(self.href)}">{escape(self.title)}</a></h2>',
        ]
        meta = []
        if self.date is not None:
            meta.append(f'<time datetime="{escape(self.date)}">{escape(self.date)}</time>')
        if self.tags:
            links = " ".join(tag.to_html() for tag in self.tags)
            meta.append(f'<span class="tags">{links}</span>')
        if meta:
            parts.append(f'<div class="ArticleMeta">{"".join(meta)}</div>')
        if self.spoiler is not None:
            parts.append(f"<p>{escape(self.spoiler)}</p>")
        parts.append("</article>")
        return "".join(parts)


@dataclass(frozen=True)
class TagPageEntry:
    """List entry keyed by the route path for stable reconciliation."""

    key: str
    summary: ArticleSummary

    def to_dict(self) -> TagPageEntryDict:
        return {"key": self.key, "summary": self.summary.to_dict()}


@dataclass(frozen=True)
class TagPageView:
    """Listing of the posts carrying a tag."""

    tag: str
    heading: str
    entries: tuple[TagPageEntry, ...] = field(default_factory=tuple)

    @property
    def keys(self) -> list[str]:
        """Entry keys in display order."""
        return [entry.key for entry in self.entries]

    def to_dict(self) -> TagPageDict:
        """Convert to dictionary for JSON serialization."""
        return {
            "tag": self.tag,
            "heading": self.heading,
            "entries": [entry.to_dict() for entry in self.entries],
        }

    def to_html(self) -> str:
        """Render as an HTML fragment.

        An empty listing still renders the heading and an empty list.
        """
        items = "".join(
            f'<li data-key="{escape(entry.key)}">{entry.summary.to_html()}</li>'
            for entry in self.entries
        )
        return (
            '<div class="TagPage">'
            f"<h1>{escape(self.heading)}</h1>"
            f"<ul>{items}</ul>"
            "</div>"
        )


def render_tag_page(
    tag_name: str,
    blog_root_path: str,
    routes: Sequence[Route],
    *,
    linked_tags: Collection[str] | None = None,
) -> TagPageView:
    """Render the listing page for a tag.

    The routes are expected to be already filtered to those carrying the
    tag (see ``blogstage.core.tags.routes_for_tag``); they are rendered in
    the given order.

    Args:
        tag_name: Tag shown in the heading
        blog_root_path: Root path used to build tag links
        routes: Routes tagged with ``tag_name``
        linked_tags: Tags that have a listing page, None links every tag

    Returns:
        TagPageView with one entry per route
    """
    return TagPageView(
        tag=tag_name,
        heading=f"{tag_name} posts",
        entries=tuple(
            TagPageEntry(
                key=route.path,
                summary=ArticleSummary.from_route(
                    route,
                    blog_root_path,
                    linked_tags=linked_tags,
                ),
            )
            for route in routes
        ),
    )
