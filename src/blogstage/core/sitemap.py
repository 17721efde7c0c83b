"""Site map of published content pages.

A site map is an immutable snapshot mapping each route path to the route's
metadata. It is produced by a content provider (see ``blogstage.core.loader``)
and read by the tag index and views, which never modify it.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict

from blogstage.core.types import URLPath


class RouteMetaDict(TypedDict, total=False):
    """Dictionary representation of route metadata."""

    title: str
    tags: list[str]
    spoiler: str
    date: str


class RouteUrlDict(TypedDict):
    """Dictionary representation of a route URL."""

    href: str


class RouteDict(TypedDict):
    """Dictionary representation of a route."""

    meta: NotRequired[RouteMetaDict]
    url: RouteUrlDict


@dataclass(frozen=True)
class RouteMeta:
    """Descriptive metadata attached to a content page."""

    title: str | None = None
    tags: tuple[str, ...] = ()
    spoiler: str | None = None
    date: str | None = None

    def to_dict(self) -> RouteMetaDict:
        """Convert to dictionary for JSON serialization."""
        result: RouteMetaDict = {}
        if self.title is not None:
            result["title"] = self.title
        if self.tags:
            result["tags"] = list(self.tags)
        if self.spoiler is not None:
            result["spoiler"] = self.spoiler
        if self.date is not None:
            result["date"] = self.date
        return result


@dataclass(frozen=True)
class RouteUrl:
    """Link target of a route."""

    href: str


@dataclass(frozen=True)
class Route:
    """Single addressable content page."""

    path: URLPath
    url: RouteUrl
    meta: RouteMeta | None = None

    @property
    def tags(self) -> tuple[str, ...]:
        """Tags of the route, empty when metadata is missing."""
        if self.meta is None:
            return ()
        return self.meta.tags

    @property
    def title(self) -> str | None:
        if self.meta is None:
            return None
        return self.meta.title

    def to_dict(self) -> RouteDict:
        """Convert to dictionary for JSON serialization."""
        result: RouteDict = {"url": {"href": self.url.href}}
        if self.meta is not None:
            result["meta"] = self.meta.to_dict()
        return result


class SiteMap(Mapping[str, Route]):
    """Immutable mapping of route path to Route.

    Iteration follows insertion order, which is the order the content
    provider supplied the routes in.
    """

    __slots__ = ("_routes",)

    def __init__(self, routes: Mapping[str, Route] | None = None) -> None:
        self._routes: dict[str, Route] = dict(routes or {})

    def __getitem__(self, path: str) -> Route:
        return self._routes[path]

    def __iter__(self) -> Iterator[str]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    @property
    def routes(self) -> list[Route]:
        """Routes in site map order."""
        return list(self._routes.values())

    @classmethod
    def from_routes(cls, routes: list[Route]) -> "SiteMap":
        """Build a site map from a list of routes.

        Later routes replace earlier ones with the same path.
        """
        return cls({route.path: route for route in routes})

    @classmethod
    def from_dict(cls, data: object) -> "SiteMap":
        """Parse a site map from its JSON representation.

        Accepts ``{path: {"meta": {...}, "url": {"href": ...}}}``, optionally
        wrapped in a top-level ``{"pages": {...}}`` object.

        Args:
            data: Decoded JSON data

        Returns:
            SiteMap instance

        Raises:
            ValueError: If the structure is not a mapping of route objects
        """
        if not isinstance(data, dict):
            raise ValueError("Site map must be a dictionary")

        pages = data["pages"] if "pages" in data else data
        if not isinstance(pages, dict):
            raise ValueError("Site map pages must be a dictionary")

        routes: list[Route] = []
        for path, raw in pages.items():
            if not isinstance(path, str):
                raise ValueError("Site map paths must be strings")
            routes.append(_parse_route(path, raw))
        return cls.from_routes(routes)

    def to_dict(self) -> dict[str, RouteDict]:
        """Convert to dictionary for JSON serialization."""
        return {path: route.to_dict() for path, route in self._routes.items()}


def _parse_route(path: str, data: object) -> Route:
    """Parse a single route entry."""
    if not isinstance(data, dict):
        raise ValueError(f"Route {path!r} must be a dictionary")

    href = path
    url = data.get("url")
    if url is not None:
        if not isinstance(url, dict) or not isinstance(url.get("href"), str):
            raise ValueError(f"Route {path!r} url.href must be a string")
        href = url["href"]

    meta = _parse_meta(data.get("meta"))
    return Route(path=URLPath(path), url=RouteUrl(href=href), meta=meta)


def _parse_meta(data: Any) -> RouteMeta | None:
    """Parse route metadata leniently.

    A non-list ``tags`` value is treated as no tags, and non-string tag
    items are dropped.
    """
    if not isinstance(data, dict):
        return None

    tags_raw = data.get("tags")
    tags: tuple[str, ...] = ()
    if isinstance(tags_raw, list):
        tags = tuple(tag for tag in tags_raw if isinstance(tag, str))

    return RouteMeta(
        title=_optional_str(data.get("title")),
        tags=tags,
        spoiler=_optional_str(data.get("spoiler")),
        date=_optional_str(data.get("date")),
    )


def _optional_str(value: object) -> str | None:
    return value if isinstance(value, str) else None
