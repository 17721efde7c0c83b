"""Application keys for type-safe app configuration access."""

from aiohttp import web

from blogstage.config import SiteConfig
from blogstage.core.bio import AuthorBio
from blogstage.core.loader import SiteMapLoader

site_loader_key = web.AppKey("site_loader", SiteMapLoader)
site_config_key = web.AppKey("site_config", SiteConfig)
bio_key = web.AppKey("bio", AuthorBio | None)
