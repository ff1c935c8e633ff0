"""
Utility functions for FastAPI integration
"""

from typing import Optional

from fastapi import Request

from ...config import ResolverConfig
from ...visit import ForwardedForProcessor, VisitRecord


def build_visit(request: Request, processor: ForwardedForProcessor) -> VisitRecord:
    """
    Create a visit for the request and apply the forwarded header to it.

    Args:
        request: FastAPI Request object
        processor: ForwardedForProcessor to apply

    Returns:
        VisitRecord seeded with the peer address
    """
    peer = request.client.host if request.client else None
    visit = VisitRecord.from_peer(peer)
    processor.process(request.headers, visit)
    return visit


def get_client_ip(request: Request, config: Optional[ResolverConfig] = None) -> str:
    """
    Extract client IP address from request with proxy support.

    Uses the visit attached by ForwardedAddressMiddleware when present,
    otherwise resolves the forwarded header on the spot.

    Args:
        request: FastAPI Request object
        config: Optional ResolverConfig used when no visit is attached

    Returns:
        Client IP address string
    """
    visit = getattr(request.state, "visit", None)
    if visit is None:
        visit = build_visit(request, ForwardedForProcessor(config=config))

    if visit.ip is not None:
        return visit.ip_string

    # Peer host that is not an IP literal
    if request.client and request.client.host:
        return request.client.host

    return "unknown"
