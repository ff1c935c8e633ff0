"""
Sanic Integration for visitorip

Registers request middleware that resolves the visitor address from the
forwarded header for Sanic applications.

Example:
    from sanic import Sanic, json
    from visitorip import ResolverConfig
    from visitorip.integrations.sanic import setup_visitor_ip

    app = Sanic("MyApp")
    setup_visitor_ip(app, config=ResolverConfig(header_ip_index=0))

    @app.get("/")
    async def index(request):
        return json({"ip": request.ctx.visit.ip_string})
"""

from .middleware import setup_visitor_ip
from .utils import build_visit, get_client_ip

__all__ = [
    # Setup
    "setup_visitor_ip",
    # Utilities
    "build_visit",
    "get_client_ip",
]
