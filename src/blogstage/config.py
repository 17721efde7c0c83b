"""Configuration management for Blogstage.

Supports TOML configuration format with auto-discovery.
"""

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

from blogstage.core.bio import AuthorBio

CONFIG_FILENAME = "blogstage.toml"


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class ContentConfig:
    """Content collection configuration."""

    posts_dir: Path = field(default_factory=lambda: Path("posts"))
    cache_dir: Path = field(default_factory=lambda: Path(".cache"))
    snapshot: Path | None = None
    blog_root: str = "/"


@dataclass
class SiteConfig:
    """Site metadata."""

    title: str = "Blog"
    author: str | None = None
    description: str | None = None
    index_page_size: int = 10


@dataclass
class BuildConfig:
    """Static build configuration."""

    output_dir: Path = field(default_factory=lambda: Path("dist"))


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig
    content: ContentConfig
    site: SiteConfig
    build: BuildConfig
    bio: AuthorBio | None
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for blogstage.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents."""
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> "Config":
        """Create config with all defaults."""
        return cls(
            server=ServerConfig(),
            content=ContentConfig(),
            site=SiteConfig(),
            build=BuildConfig(),
            bio=None,
        )

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ValueError(f"Invalid TOML in {path}: {e}") from e

        config_dir = path.parent

        return cls(
            server=cls._parse_server(data.get("server")),
            content=cls._parse_content(data.get("content"), config_dir),
            site=cls._parse_site(data.get("site")),
            build=cls._parse_build(data.get("build"), config_dir),
            bio=cls._parse_bio(data.get("bio")),
            config_path=path,
        )

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        """Parse server configuration section."""
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 8080)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    @classmethod
    def _parse_content(cls, data: object, config_dir: Path) -> ContentConfig:
        """Parse content configuration section.

        Args:
            data: Raw content section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            ContentConfig instance
        """
        if data is None:
            return ContentConfig(
                posts_dir=config_dir / "posts",
                cache_dir=config_dir / ".cache",
            )

        if not isinstance(data, dict):
            raise ValueError("content section must be a dictionary")

        posts_dir = data.get("posts_dir", "posts")
        if not isinstance(posts_dir, str):
            raise ValueError("content.posts_dir must be a string")

        cache_dir = data.get("cache_dir", ".cache")
        if not isinstance(cache_dir, str):
            raise ValueError("content.cache_dir must be a string")

        snapshot = data.get("snapshot")
        if snapshot is not None and not isinstance(snapshot, str):
            raise ValueError("content.snapshot must be a string")

        blog_root = data.get("blog_root", "/")
        if not isinstance(blog_root, str):
            raise ValueError("content.blog_root must be a string")
        if not blog_root.startswith("/"):
            raise ValueError("content.blog_root must start with '/'")

        return ContentConfig(
            posts_dir=config_dir / posts_dir,
            cache_dir=config_dir / cache_dir,
            snapshot=config_dir / snapshot if snapshot is not None else None,
            blog_root=blog_root,
        )

    @classmethod
    def _parse_site(cls, data: object) -> SiteConfig:
        """Parse site metadata section."""
        if data is None:
            return SiteConfig()

        if not isinstance(data, dict):
            raise ValueError("site section must be a dictionary")

        title = data.get("title", "Blog")
        if not isinstance(title, str):
            raise ValueError("site.title must be a string")

        author = data.get("author")
        if author is not None and not isinstance(author, str):
            raise ValueError("site.author must be a string")

        description = data.get("description")
        if description is not None and not isinstance(description, str):
            raise ValueError("site.description must be a string")

        index_page_size = data.get("index_page_size", 10)
        if not isinstance(index_page_size, int) or isinstance(index_page_size, bool):
            raise ValueError("site.index_page_size must be an integer")
        if index_page_size < 1:
            raise ValueError("site.index_page_size must be at least 1")

        return SiteConfig(
            title=title,
            author=author,
            description=description,
            index_page_size=index_page_size,
        )

    @classmethod
    def _parse_build(cls, data: object, config_dir: Path) -> BuildConfig:
        """Parse build configuration section."""
        if data is None:
            return BuildConfig(output_dir=config_dir / "dist")

        if not isinstance(data, dict):
            raise ValueError("build section must be a dictionary")

        output_dir = data.get("output_dir", "dist")
        if not isinstance(output_dir, str):
            raise ValueError("build.output_dir must be a string")

        return BuildConfig(output_dir=config_dir / output_dir)

    @classmethod
    def _parse_bio(cls, data: object) -> AuthorBio | None:
        """Parse bio configuration section.

        Returns:
            AuthorBio instance or None if section not present
        """
        if data is None:
            return None

        if not isinstance(data, dict):
            raise ValueError("bio section must be a dictionary")

        name = data.get("name")
        if not isinstance(name, str):
            raise ValueError("bio.name must be a string")

        optional: dict[str, str | None] = {}
        for key in (
            "profile_url",
            "role",
            "employer",
            "employer_url",
            "tagline",
            "location",
            "picture",
        ):
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"bio.{key} must be a string")
            optional[key] = value

        return AuthorBio(name=name, **optional)

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        posts_dir: Path | None = None,
        cache_dir: Path | None = None,
        snapshot: Path | None = None,
        output_dir: Path | None = None,
    ) -> "Config":
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config; the original
        Config is not modified.

        Args:
            host: Override server.host
            port: Override server.port
            posts_dir: Override content.posts_dir
            cache_dir: Override content.cache_dir
            snapshot: Override content.snapshot
            output_dir: Override build.output_dir

        Returns:
            New Config instance with overrides applied
        """
        server = self.server
        if host is not None or port is not None:
            server = replace(
                self.server,
                host=host if host is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        content = self.content
        if posts_dir is not None or cache_dir is not None or snapshot is not None:
            content = replace(
                self.content,
                posts_dir=posts_dir if posts_dir is not None else self.content.posts_dir,
                cache_dir=cache_dir if cache_dir is not None else self.content.cache_dir,
                snapshot=snapshot if snapshot is not None else self.content.snapshot,
            )

        build = self.build
        if output_dir is not None:
            build = replace(self.build, output_dir=output_dir)

        return replace(self, server=server, content=content, build=build)
