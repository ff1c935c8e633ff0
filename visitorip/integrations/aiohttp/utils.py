"""
Utility functions for aiohttp integration
"""

from typing import Optional

from ...config import ResolverConfig
from ...visit import ForwardedForProcessor, VisitRecord

VISIT_KEY = "visit"


def _peer_host(request) -> Optional[str]:
    peername = request.transport.get_extra_info('peername') if request.transport else None
    if peername:
        return peername[0]
    return None


def build_visit(request, processor: ForwardedForProcessor) -> VisitRecord:
    """
    Create a visit for an aiohttp request and apply the forwarded header to it.

    Args:
        request: aiohttp Request object
        processor: ForwardedForProcessor to apply

    Returns:
        VisitRecord seeded with the peer address
    """
    visit = VisitRecord.from_peer(_peer_host(request))
    processor.process(request.headers, visit)
    return visit


def get_client_ip(request, config: Optional[ResolverConfig] = None) -> str:
    """
    Extract client IP address from aiohttp request with proxy support.

    Args:
        request: aiohttp Request object
        config: Optional ResolverConfig used when no visit is attached

    Returns:
        Client IP address string
    """
    visit = request.get(VISIT_KEY)
    if visit is None:
        visit = build_visit(request, ForwardedForProcessor(config=config))

    if visit.ip is not None:
        return visit.ip_string

    return _peer_host(request) or "unknown"
