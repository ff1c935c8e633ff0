"""
Sanic middleware setup for visitorip
"""

from typing import Optional, Set

from ...config import ResolverConfig
from ...logging import get_logger
from ...visit import ForwardedForProcessor
from .utils import build_visit

logger = get_logger(__name__)


def setup_visitor_ip(
    app,
    config: Optional[ResolverConfig] = None,
    processor: Optional[ForwardedForProcessor] = None,
    exclude_paths: Optional[Set[str]] = None,
    ctx_attribute: str = "visit",
):
    """
    Setup visitor address resolution for a Sanic application.

    Registers a request middleware that stores a VisitRecord on
    ``request.ctx``.

    Example:
        from sanic import Sanic
        from visitorip.integrations.sanic import setup_visitor_ip

        app = Sanic("MyApp")
        setup_visitor_ip(app)

    Args:
        app: Sanic application instance
        config: ResolverConfig (ignored when ``processor`` is given)
        processor: Optional preconfigured ForwardedForProcessor
        exclude_paths: Paths to skip
        ctx_attribute: Name of the request.ctx attribute (default: "visit")
    """
    processor = processor if processor is not None else ForwardedForProcessor(config=config)

    health_paths = exclude_paths or {"/health", "/metrics", "/ready", "/healthz"}

    @app.middleware("request")
    async def attach_visitor_ip(request):
        """Attach the resolved visit before each request"""
        if request.path in health_paths:
            return None
        setattr(request.ctx, ctx_attribute, build_visit(request, processor))
        return None

    logger.info("Visitor IP resolution configured for Sanic app")
