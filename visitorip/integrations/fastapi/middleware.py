"""
Forwarded Address Middleware for FastAPI
"""

from typing import Callable, Optional, List
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from ...config import ResolverConfig
from ...logging import get_logger
from ...visit import ForwardedForProcessor
from .utils import build_visit

logger = get_logger(__name__)


class ForwardedAddressMiddleware(BaseHTTPMiddleware):
    """
    FastAPI middleware resolving the visitor address.

    Attaches a VisitRecord to ``request.state.visit``; its IP is taken
    from the forwarded header when it holds a valid address and from the
    direct peer otherwise.

    Example:
        from fastapi import FastAPI
        from visitorip import ResolverConfig
        from visitorip.integrations.fastapi import ForwardedAddressMiddleware

        app = FastAPI()
        app.add_middleware(
            ForwardedAddressMiddleware,
            config=ResolverConfig(header_name="X-Forwarded-For"),
        )
    """

    def __init__(
        self,
        app,
        config: Optional[ResolverConfig] = None,
        processor: Optional[ForwardedForProcessor] = None,
        exclude_paths: Optional[List[str]] = None,
        state_attribute: str = "visit",
    ):
        """
        Initialize middleware

        Args:
            config: ResolverConfig (ignored when ``processor`` is given)
            processor: Optional preconfigured ForwardedForProcessor
            exclude_paths: Paths to skip
            state_attribute: Name of the request.state attribute (default: "visit")
        """
        super().__init__(app)
        self.processor = processor if processor is not None else ForwardedForProcessor(config=config)

        self.exclude_paths = set(exclude_paths or ["/health", "/metrics", "/ready", "/healthz"])
        self.state_attribute = state_attribute

        logger.info(f"Forwarded address middleware reading {self.processor.config.header_name or '<disabled>'}")

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Attach the resolved visit before handling the request"""
        if request.url.path not in self.exclude_paths:
            setattr(request.state, self.state_attribute, build_visit(request, self.processor))
        return await call_next(request)
