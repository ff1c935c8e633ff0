"""
Utility functions for Sanic integration
"""

from typing import Optional

from ...config import ResolverConfig
from ...visit import ForwardedForProcessor, VisitRecord


def build_visit(request, processor: ForwardedForProcessor) -> VisitRecord:
    """
    Create a visit for a Sanic request and apply the forwarded header to it.

    Args:
        request: Sanic Request object
        processor: ForwardedForProcessor to apply

    Returns:
        VisitRecord seeded with the peer address
    """
    visit = VisitRecord.from_peer(request.ip or None)
    processor.process(request.headers, visit)
    return visit


def get_client_ip(request, config: Optional[ResolverConfig] = None) -> str:
    """
    Extract client IP address from Sanic request with proxy support.

    Args:
        request: Sanic Request object
        config: Optional ResolverConfig used when no visit is attached

    Returns:
        Client IP address string
    """
    visit = getattr(request.ctx, "visit", None)
    if visit is None:
        visit = build_visit(request, ForwardedForProcessor(config=config))

    if visit.ip is not None:
        return visit.ip_string

    return request.ip or "unknown"
