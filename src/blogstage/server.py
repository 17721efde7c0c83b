"""aiohttp server for Blogstage.

Application factory and route registration for the development server.
"""

import logging

from aiohttp import web

from blogstage.api.index import create_index_routes
from blogstage.api.site import create_site_routes
from blogstage.api.sitemap import create_sitemap_routes
from blogstage.api.tags import create_tags_routes
from blogstage.app_keys import bio_key, site_config_key, site_loader_key
from blogstage.config import Config
from blogstage.core.cache import FileCache
from blogstage.core.document import render_document
from blogstage.core.index import paginate_index
from blogstage.core.loader import SiteMapLoader
from blogstage.core.tags import routes_for_tag
from blogstage.core.views import join_path, render_tag_page

logger = logging.getLogger(__name__)


def create_app(config: Config) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration

    Returns:
        Configured aiohttp application
    """
    app = web.Application()

    cache = FileCache(config.content.cache_dir)
    site_loader = SiteMapLoader(
        config.content.posts_dir,
        cache,
        blog_root=config.content.blog_root,
        snapshot=config.content.snapshot,
    )

    app[site_loader_key] = site_loader
    app[site_config_key] = config.site
    app[bio_key] = config.bio

    # API routes (must be registered first to take precedence over page routes)
    app.router.add_routes(create_sitemap_routes())
    app.router.add_routes(create_tags_routes())
    app.router.add_routes(create_index_routes())
    app.router.add_routes(create_site_routes())

    blog_root = config.content.blog_root
    app.router.add_get(join_path(blog_root, "tags", "{tag}"), tag_page)
    app.router.add_get(join_path(blog_root, "page", "{page:\\d+}"), index_page)
    app.router.add_get(join_path(blog_root), index_page)
    if blog_root.strip("/"):
        app.router.add_get(join_path(blog_root) + "/", index_page)

    return app


async def tag_page(request: web.Request) -> web.Response:
    """Serve the HTML listing page of a tag."""
    tag = request.match_info["tag"]
    site_loader = request.app[site_loader_key]
    site_map = site_loader.load()

    view = render_tag_page(tag, site_loader.blog_root, routes_for_tag(site_map, tag))
    html = render_document(
        request.app[site_config_key],
        view.to_html(),
        page_title=view.heading,
        blog_root=site_loader.blog_root,
    )
    return web.Response(text=html, content_type="text/html")


async def index_page(request: web.Request) -> web.Response:
    """Serve an HTML page of the blog index."""
    number = int(request.match_info.get("page", "1"))
    site_loader = request.app[site_loader_key]
    site = request.app[site_config_key]

    pages = paginate_index(site_loader.load(), site.index_page_size, site_loader.blog_root)
    if not 1 <= number <= len(pages):
        raise web.HTTPNotFound()

    page = pages[number - 1]
    html = render_document(
        site,
        page.to_html(),
        page_title=f"Page {number}" if number > 1 else None,
        blog_root=site_loader.blog_root,
        bio=request.app[bio_key],
    )
    return web.Response(text=html, content_type="text/html")


def run_server(config: Config) -> None:
    """Run the server.

    Args:
        config: Application configuration
    """
    app = create_app(config)
    logger.info(f"Serving {config.site.title} on {config.server.host}:{config.server.port}")
    web.run_app(app, host=config.server.host, port=config.server.port)
