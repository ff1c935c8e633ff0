"""
aiohttp Integration for visitorip

Provides middleware that resolves the visitor address from the forwarded
header for aiohttp applications.

Example:
    from aiohttp import web
    from visitorip import ResolverConfig
    from visitorip.integrations.aiohttp import create_visitor_ip_middleware

    app = web.Application(middlewares=[
        create_visitor_ip_middleware(config=ResolverConfig(header_ip_index=0))
    ])

    async def index(request):
        return web.json_response({"ip": request["visit"].ip_string})

    app.router.add_get("/", index)
"""

from .middleware import create_visitor_ip_middleware
from .utils import build_visit, get_client_ip

__all__ = [
    # Middleware
    "create_visitor_ip_middleware",
    # Utilities
    "build_visit",
    "get_client_ip",
]
