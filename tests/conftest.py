"""Shared test fixtures."""

from pathlib import Path

import pytest
from blogstage.config import (
    BuildConfig,
    Config,
    ContentConfig,
    ServerConfig,
    SiteConfig,
)
from blogstage.core.bio import AuthorBio
from blogstage.core.sitemap import Route, RouteMeta, RouteUrl, SiteMap
from blogstage.core.types import URLPath


def make_route(path: str, *tags: str, title: str | None = None, date: str | None = None) -> Route:
    """Create a route with metadata for testing."""
    return Route(
        path=URLPath(path),
        url=RouteUrl(href=path),
        meta=RouteMeta(title=title, tags=tags, date=date),
    )


@pytest.fixture
def posts_dir(tmp_path: Path) -> Path:
    """Create posts directory with two sample posts."""
    posts = tmp_path / "posts"
    posts.mkdir()

    bem = posts / "2014-07-16-bem"
    bem.mkdir()
    (bem / "post.toml").write_text(
        'title = "Developer Sanity with BEM!"\n'
        'tags = ["css", "bem", "sass"]\n'
        'spoiler = "A brief look at using BEM methodology with CSS"\n',
    )

    redux = posts / "2017-01-05-refactoring-react-redux-async"
    redux.mkdir()
    (redux / "post.toml").write_text(
        "title = \"The three 'R's, Refactoring, React and Redux for robust async JS\"\n"
        'tags = ["javascript", "redux", "react", "redux saga"]\n'
        'spoiler = "The final in a three-part series on frontend development practices"\n',
    )

    return posts


@pytest.fixture
def site_map() -> SiteMap:
    """Site map with overlapping tags and an untagged page."""
    return SiteMap.from_routes(
        [
            make_route("/a", "css", "bem", title="A", date="2014-07-16"),
            make_route("/b", "javascript", title="B", date="2017-01-05"),
            make_route("/c", "css", "sass", title="C", date="2015-03-01"),
            Route(path=URLPath("/about"), url=RouteUrl(href="/about")),
        ],
    )


@pytest.fixture
def test_config(tmp_path: Path, posts_dir: Path) -> Config:
    """Create a test configuration with tmp_path directories."""
    return Config(
        server=ServerConfig(),
        content=ContentConfig(posts_dir=posts_dir, cache_dir=tmp_path / ".cache"),
        site=SiteConfig(title="jishaal.com", author="Jishaal Kalyan", index_page_size=10),
        build=BuildConfig(output_dir=tmp_path / "dist"),
        bio=AuthorBio(name="Jishaal Kalyan", location="Auckland, New Zealand"),
    )
