"""
FastAPI / Starlette Integration for visitorip

Provides middleware and dependencies that resolve the visitor address
from the forwarded header.

Available Middleware:
- ForwardedAddressMiddleware: Attach a VisitRecord to request.state.visit

Available Dependencies:
- visitor_ip_dependency: FastAPI dependency returning the visitor IP

Utilities:
- get_client_ip: Extract client IP via the forwarded address resolver

Example:
    from fastapi import FastAPI, Request
    from visitorip import ResolverConfig
    from visitorip.integrations.fastapi import ForwardedAddressMiddleware

    app = FastAPI()
    app.add_middleware(ForwardedAddressMiddleware, config=ResolverConfig(header_ip_index=0))

    @app.get("/")
    async def index(request: Request):
        return {"ip": request.state.visit.ip_string}
"""

from .middleware import ForwardedAddressMiddleware
from .dependencies import visitor_ip_dependency
from .utils import build_visit, get_client_ip

__all__ = [
    # Middleware
    "ForwardedAddressMiddleware",
    # Dependencies
    "visitor_ip_dependency",
    # Utilities
    "build_visit",
    "get_client_ip",
]
