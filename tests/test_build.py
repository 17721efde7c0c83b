"""Tests for the static site build."""

import json
import logging
import re
from pathlib import Path
from urllib.parse import unquote

import pytest
from blogstage.build import build_site
from blogstage.config import SiteConfig
from blogstage.core.bio import AuthorBio
from blogstage.core.sitemap import SiteMap
from conftest import make_route


class TestBuildSite:
    """Tests for build_site()."""

    def test__writes_one_page_per_tag(self, tmp_path: Path, site_map: SiteMap) -> None:
        """Write a listing page for every tag in the vocabulary."""
        output = tmp_path / "dist"

        result = build_site(site_map, output, SiteConfig(title="jishaal.com"))

        tag_dirs = sorted(path.parent.name for path in result.tag_pages)
        assert tag_dirs == ["bem", "css", "javascript", "sass"]
        css_page = (output / "tags" / "css" / "index.html").read_text()
        assert "<h1>css posts</h1>" in css_page
        assert '<li data-key="/a">' in css_page
        assert '<li data-key="/c">' in css_page
        assert '<li data-key="/b">' not in css_page
        assert "<title>css posts - jishaal.com</title>" in css_page

    def test__writes_paginated_index(self, tmp_path: Path, site_map: SiteMap) -> None:
        """Split the index by the configured page size."""
        output = tmp_path / "dist"

        result = build_site(site_map, output, SiteConfig(index_page_size=3))

        assert result.index_pages == [
            output / "index.html",
            output / "page" / "2" / "index.html",
        ]
        assert 'href="/page/2"' in (output / "index.html").read_text()

    def test__writes_sitemap_snapshot(self, tmp_path: Path, site_map: SiteMap) -> None:
        """Snapshot can be read back as the same site map."""
        output = tmp_path / "dist"

        build_site(site_map, output, SiteConfig())

        data = json.loads((output / "sitemap.json").read_text())
        assert SiteMap.from_dict(data) == site_map

    def test__bio__rendered_on_index(self, tmp_path: Path, site_map: SiteMap) -> None:
        output = tmp_path / "dist"

        build_site(site_map, output, SiteConfig(), bio=AuthorBio(name="Jishaal Kalyan"))

        assert '<footer><div class="Bio">' in (output / "index.html").read_text()

    def test__empty_site_map__writes_index_only(self, tmp_path: Path) -> None:
        """Empty blog has an index page and no tag pages."""
        output = tmp_path / "dist"

        result = build_site(SiteMap(), output, SiteConfig())

        assert result.tag_pages == []
        assert (output / "index.html").exists()
        assert not (output / "tags").exists()

    def test__unsafe_tag__skipped(self, tmp_path: Path) -> None:
        """Skip tags that cannot be used as directory names."""
        site_map = SiteMap.from_routes([make_route("/a", "ci/cd", "..", "css")])

        result = build_site(site_map, tmp_path / "dist", SiteConfig())

        assert sorted(result.skipped_tags) == ["..", "ci/cd"]
        assert [path.parent.name for path in result.tag_pages] == ["css"]

    def test__tag_with_space__written(self, tmp_path: Path) -> None:
        site_map = SiteMap.from_routes([make_route("/a", "redux saga")])
        output = tmp_path / "dist"

        build_site(site_map, output, SiteConfig())

        assert (output / "tags" / "redux saga" / "index.html").exists()

    def test__written__lists_all_files(self, tmp_path: Path, site_map: SiteMap) -> None:
        output = tmp_path / "dist"

        result = build_site(site_map, output, SiteConfig())

        assert result.sitemap_path == output / "sitemap.json"
        assert all(path.exists() for path in result.written)
        assert len(result.written) == 1 + 4 + 1

    def test__tag_links__resolve_to_written_pages(self, tmp_path: Path) -> None:
        """Every tag link in the output points at a generated tag page."""
        site_map = SiteMap.from_routes(
            [
                make_route("/a", "ci/cd", "redux saga", title="A", date="2017-01-05"),
                make_route("/b", "css", "ci/cd", title="B", date="2014-07-16"),
            ],
        )
        output = tmp_path / "dist"

        result = build_site(site_map, output, SiteConfig())

        hrefs = {
            href
            for path in result.index_pages + result.tag_pages
            for href in re.findall(r'href="(/tags/[^"]+)"', path.read_text())
        }
        assert hrefs == {"/tags/redux%20saga", "/tags/css"}
        for href in hrefs:
            assert (output / unquote(href).lstrip("/") / "index.html").exists()

    def test__skipped_tag__rendered_as_text(self, tmp_path: Path) -> None:
        site_map = SiteMap.from_routes([make_route("/a", "ci/cd", "css", title="A")])
        output = tmp_path / "dist"

        build_site(site_map, output, SiteConfig())

        html = (output / "index.html").read_text()
        assert "<span>ci/cd</span>" in html
        assert "ci%2Fcd" not in html

    def test__case_colliding_tags__warns(
        self,
        tmp_path: Path,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Warn when tag directories would clash on case-insensitive filesystems."""
        site_map = SiteMap.from_routes([make_route("/a", "CSS"), make_route("/b", "css")])

        with caplog.at_level(logging.WARNING, logger="blogstage.build"):
            result = build_site(site_map, tmp_path / "dist", SiteConfig())

        assert "'CSS', 'css' differ only in case" in caplog.text
        assert len(result.tag_pages) == 2

    def test__distinct_tags__no_case_warning(
        self,
        tmp_path: Path,
        site_map: SiteMap,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="blogstage.build"):
            build_site(site_map, tmp_path / "dist", SiteConfig())

        assert "differ only in case" not in caplog.text
