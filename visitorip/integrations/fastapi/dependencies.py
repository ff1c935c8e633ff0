"""
FastAPI dependency injection utilities for visitorip
"""

from typing import Optional

from fastapi import Request

from ...config import ResolverConfig
from ...visit import ForwardedForProcessor
from .utils import build_visit


def visitor_ip_dependency(
    config: Optional[ResolverConfig] = None,
    processor: Optional[ForwardedForProcessor] = None,
    default: Optional[str] = None,
):
    """
    Create FastAPI dependency returning the visitor IP address.

    Reuses the visit attached by ForwardedAddressMiddleware when present.

    Example:
        from fastapi import FastAPI, Depends
        from visitorip.integrations.fastapi import visitor_ip_dependency

        app = FastAPI()
        visitor_ip = visitor_ip_dependency()

        @app.get("/whoami")
        async def whoami(ip: str = Depends(visitor_ip)):
            return {"ip": ip}

    Args:
        config: ResolverConfig (ignored when ``processor`` is given)
        processor: Optional preconfigured ForwardedForProcessor
        default: Value returned when no IP address is known

    Returns:
        FastAPI dependency function
    """
    processor = processor if processor is not None else ForwardedForProcessor(config=config)

    async def get_visitor_ip(request: Request) -> Optional[str]:
        """Resolve the visitor IP for the current request"""
        visit = getattr(request.state, "visit", None)
        if visit is None:
            visit = build_visit(request, processor)
        ip = visit.ip_string
        return ip if ip is not None else default

    return get_visitor_ip
