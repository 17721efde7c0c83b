"""Blog index API endpoints.

Serves the paginated list of posts, newest first.
"""

from aiohttp import web

from blogstage.app_keys import site_config_key, site_loader_key
from blogstage.core.index import paginate_index


def create_index_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/index", get_index),
        web.get("/api/index/{page}", get_index_page),
    ]


async def get_index(request: web.Request) -> web.Response:
    return _index_response(request, 1)


async def get_index_page(request: web.Request) -> web.Response:
    page = request.match_info["page"]
    try:
        number = int(page)
    except ValueError:
        return web.json_response({"error": "Page not found", "page": page}, status=404)
    return _index_response(request, number)


def _index_response(request: web.Request, number: int) -> web.Response:
    site_loader = request.app[site_loader_key]
    page_size = request.app[site_config_key].index_page_size

    pages = paginate_index(site_loader.load(), page_size, site_loader.blog_root)
    if not 1 <= number <= len(pages):
        return web.json_response(
            {"error": "Page not found", "page": str(number)},
            status=404,
        )
    return web.json_response(pages[number - 1].to_dict())
