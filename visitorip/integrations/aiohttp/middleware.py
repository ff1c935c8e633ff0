"""
aiohttp middleware for visitorip
"""

from typing import Optional, Set

from aiohttp import web

from ...config import ResolverConfig
from ...logging import get_logger
from ...visit import ForwardedForProcessor
from .utils import VISIT_KEY, build_visit

logger = get_logger(__name__)


def create_visitor_ip_middleware(
    config: Optional[ResolverConfig] = None,
    processor: Optional[ForwardedForProcessor] = None,
    exclude_paths: Optional[Set[str]] = None,
    request_key: str = VISIT_KEY,
):
    """
    Create aiohttp middleware that attaches a VisitRecord to each request.

    Example:
        from aiohttp import web
        from visitorip.integrations.aiohttp import create_visitor_ip_middleware

        app = web.Application()
        app.middlewares.append(create_visitor_ip_middleware())

    Args:
        config: ResolverConfig (ignored when ``processor`` is given)
        processor: Optional preconfigured ForwardedForProcessor
        exclude_paths: Paths to skip
        request_key: Request key the visit is stored under (default: "visit")

    Returns:
        aiohttp middleware function
    """
    processor = processor if processor is not None else ForwardedForProcessor(config=config)

    health_paths = exclude_paths or {"/health", "/metrics", "/ready", "/healthz"}

    @web.middleware
    async def visitor_ip_middleware(request, handler):
        """Attach the resolved visit before handling the request"""
        if request.path not in health_paths:
            request[request_key] = build_visit(request, processor)
        return await handler(request)

    logger.info("Visitor IP middleware configured for aiohttp app")
    return visitor_ip_middleware
