"""Tag API endpoints.

Provides the tag vocabulary and per-tag listing pages.
"""

from aiohttp import web

from blogstage.app_keys import site_loader_key
from blogstage.core.tags import routes_for_tag, sorted_tags
from blogstage.core.views import render_tag_page, tag_href


def create_tags_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/tags", get_tags),
        web.get("/api/tags/{tag}", get_tag_page),
    ]


async def get_tags(request: web.Request) -> web.Response:
    site_loader = request.app[site_loader_key]
    site_map = site_loader.load()
    blog_root = site_loader.blog_root
    return web.json_response(
        {
            "tags": [
                {"name": tag, "href": tag_href(blog_root, tag)}
                for tag in sorted_tags(site_map)
            ],
        },
    )


async def get_tag_page(request: web.Request) -> web.Response:
    # Unknown tags render an empty listing rather than a 404
    tag = request.match_info["tag"]
    site_loader = request.app[site_loader_key]
    site_map = site_loader.load()

    view = render_tag_page(tag, site_loader.blog_root, routes_for_tag(site_map, tag))
    return web.json_response(view.to_dict())
