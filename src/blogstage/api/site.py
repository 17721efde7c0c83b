"""Site metadata API endpoint."""

from aiohttp import web

from blogstage.app_keys import bio_key, site_config_key, site_loader_key


def create_site_routes() -> list[web.RouteDef]:
    return [web.get("/api/site", get_site)]


async def get_site(request: web.Request) -> web.Response:
    site = request.app[site_config_key]
    bio = request.app[bio_key]
    return web.json_response(
        {
            "title": site.title,
            "author": site.author,
            "description": site.description,
            "indexPageSize": site.index_page_size,
            "blogRoot": request.app[site_loader_key].blog_root,
            "bio": bio.to_dict() if bio is not None else None,
        },
    )
