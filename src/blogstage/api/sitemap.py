"""Site map API endpoint."""

from aiohttp import web

from blogstage.app_keys import site_loader_key


def create_sitemap_routes() -> list[web.RouteDef]:
    return [web.get("/api/sitemap", get_sitemap)]


async def get_sitemap(request: web.Request) -> web.Response:
    site_map = request.app[site_loader_key].load()
    return web.json_response({"pages": site_map.to_dict()})
