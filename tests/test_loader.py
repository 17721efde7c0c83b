"""Tests for the site map loader."""

import json
import logging
import os
from pathlib import Path

import pytest
from blogstage.core.cache import FileCache
from blogstage.core.loader import SiteMapLoader, load_snapshot
from blogstage.core.tags import compute_tag_vocabulary


class TestSiteMapLoaderScan:
    """Tests for scanning the posts directory."""

    def test__posts__builds_routes(self, posts_dir: Path) -> None:
        """Build one route per post directory."""
        site_map = SiteMapLoader(posts_dir).load()

        assert list(site_map) == [
            "/posts/2014-07-16-bem/",
            "/posts/2017-01-05-refactoring-react-redux-async/",
        ]
        route = site_map["/posts/2014-07-16-bem/"]
        assert route.url.href == "/posts/2014-07-16-bem/"
        assert route.title == "Developer Sanity with BEM!"
        assert route.tags == ("css", "bem", "sass")
        assert route.meta is not None
        assert route.meta.date == "2014-07-16"

    def test__posts__feeds_tag_vocabulary(self, posts_dir: Path) -> None:
        site_map = SiteMapLoader(posts_dir).load()

        assert compute_tag_vocabulary(site_map) == {
            "css",
            "bem",
            "sass",
            "javascript",
            "redux",
            "react",
            "redux saga",
        }

    def test__blog_root__prefixes_paths(self, posts_dir: Path) -> None:
        site_map = SiteMapLoader(posts_dir, blog_root="/blog/").load()

        assert "/blog/posts/2014-07-16-bem/" in site_map

    def test__explicit_date__overrides_directory_prefix(self, posts_dir: Path) -> None:
        """Use a TOML date from the post file."""
        post = posts_dir / "2020-01-01-dated"
        post.mkdir()
        (post / "post.toml").write_text('title = "Dated"\ndate = 2021-02-03\n')

        site_map = SiteMapLoader(posts_dir).load()

        meta = site_map["/posts/2020-01-01-dated/"].meta
        assert meta is not None
        assert meta.date == "2021-02-03"

    def test__post_without_tags__has_no_tags(self, posts_dir: Path) -> None:
        post = posts_dir / "about"
        post.mkdir()
        (post / "post.toml").write_text('title = "About"\n')

        site_map = SiteMapLoader(posts_dir).load()

        route = site_map["/posts/about/"]
        assert route.tags == ()
        assert route.meta is not None
        assert route.meta.date is None

    def test__invalid_post__skipped_with_warning(
        self,
        posts_dir: Path,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Skip a post whose file fails to parse."""
        broken = posts_dir / "broken"
        broken.mkdir()
        (broken / "post.toml").write_text("title = \n")

        with caplog.at_level(logging.WARNING, logger="blogstage.core.loader"):
            site_map = SiteMapLoader(posts_dir).load()

        assert "/posts/broken/" not in site_map
        assert len(site_map) == 2
        assert "Skipping" in caplog.text

    def test__directory_without_post_file__ignored(self, posts_dir: Path) -> None:
        (posts_dir / "drafts").mkdir()

        assert len(SiteMapLoader(posts_dir).load()) == 2

    def test__missing_posts_dir__returns_empty(self, tmp_path: Path) -> None:
        assert len(SiteMapLoader(tmp_path / "missing").load()) == 0


class TestSiteMapLoaderCache:
    """Tests for site map caching."""

    def test__load__populates_cache(self, tmp_path: Path, posts_dir: Path) -> None:
        cache = FileCache(tmp_path / ".cache")

        SiteMapLoader(posts_dir, cache).load()

        assert (tmp_path / ".cache" / "sitemap.json").exists()

    def test__unchanged_posts__served_from_cache(self, tmp_path: Path, posts_dir: Path) -> None:
        """Reuse the cached snapshot while post files are unchanged."""
        cache_dir = tmp_path / ".cache"
        loader = SiteMapLoader(posts_dir, FileCache(cache_dir))
        loader.load()

        cache_file = cache_dir / "sitemap.json"
        cached = json.loads(cache_file.read_text())
        cached["pages"] = {"/cached": {"meta": {"tags": ["from-cache"]}, "url": {"href": "/cached"}}}
        cache_file.write_text(json.dumps(cached))

        site_map = loader.load()

        assert list(site_map) == ["/cached"]

    def test__modified_post__rescanned(self, tmp_path: Path, posts_dir: Path) -> None:
        """Rescan when a post file's mtime changes."""
        loader = SiteMapLoader(posts_dir, FileCache(tmp_path / ".cache"))
        loader.load()

        post_file = posts_dir / "2014-07-16-bem" / "post.toml"
        post_file.write_text('title = "BEM"\ntags = ["css", "methodology"]\n')
        future = post_file.stat().st_mtime + 100
        os.utime(post_file, (future, future))

        site_map = loader.load()

        assert "methodology" in compute_tag_vocabulary(site_map)

    def test__changed_blog_root__rescanned(self, tmp_path: Path, posts_dir: Path) -> None:
        """Route paths follow the blog root even when the cache is shared."""
        cache = FileCache(tmp_path / ".cache")
        SiteMapLoader(posts_dir, cache).load()

        site_map = SiteMapLoader(posts_dir, cache, blog_root="/blog").load()

        assert "/blog/posts/2014-07-16-bem/" in site_map
        assert "/posts/2014-07-16-bem/" not in site_map

    def test__deleted_older_post__dropped(self, tmp_path: Path, posts_dir: Path) -> None:
        """Removing a post that isn't the newest file still triggers a rescan."""
        loader = SiteMapLoader(posts_dir, FileCache(tmp_path / ".cache"))
        loader.load()

        (posts_dir / "2014-07-16-bem" / "post.toml").unlink()
        site_map = loader.load()

        assert "/posts/2014-07-16-bem/" not in site_map
        assert "bem" not in compute_tag_vocabulary(site_map)

    def test__added_post_with_older_mtime__included(self, tmp_path: Path, posts_dir: Path) -> None:
        """A copied-in post with an old mtime still shows up."""
        loader = SiteMapLoader(posts_dir, FileCache(tmp_path / ".cache"))
        loader.load()

        old = posts_dir / "2013-01-01-old"
        old.mkdir()
        post_file = old / "post.toml"
        post_file.write_text('title = "Old"\ntags = ["archive"]\n')
        os.utime(post_file, (1_000_000, 1_000_000))
        os.utime(old, (1_000_000, 1_000_000))
        os.utime(posts_dir, (1_000_000, 1_000_000))

        site_map = loader.load()

        assert "/posts/2013-01-01-old/" in site_map
        assert "archive" in compute_tag_vocabulary(site_map)

    def test__invalidate__drops_cache(self, tmp_path: Path, posts_dir: Path) -> None:
        loader = SiteMapLoader(posts_dir, FileCache(tmp_path / ".cache"))
        loader.load()

        loader.invalidate()

        assert not (tmp_path / ".cache" / "sitemap.json").exists()


class TestLoadSnapshot:
    """Tests for prebuilt snapshots."""

    def test__snapshot__loaded_instead_of_posts(self, tmp_path: Path, posts_dir: Path) -> None:
        """Configured snapshot takes precedence over scanning."""
        snapshot = tmp_path / "sitemap.json"
        snapshot.write_text(
            json.dumps({"pages": {"/a": {"meta": {"tags": ["css"]}, "url": {"href": "/a"}}}}),
        )

        site_map = SiteMapLoader(posts_dir, snapshot=snapshot).load()

        assert list(site_map) == ["/a"]

    def test__missing_snapshot__raises_error(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Site map snapshot not found"):
            load_snapshot(tmp_path / "missing.json")

    def test__invalid_json__raises_error(self, tmp_path: Path) -> None:
        snapshot = tmp_path / "sitemap.json"
        snapshot.write_text("{")

        with pytest.raises(ValueError, match="Invalid site map snapshot"):
            load_snapshot(snapshot)
