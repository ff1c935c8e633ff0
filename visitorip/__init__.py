"""
visitorip - Forwarded Client Address Resolution for Python

Resolves the originating client address of a request from a proxy
forwarding header (X-Forwarded-For by default) and records it on an
analytics visit.

Core Features (No Optional Dependencies):
- Forwarded Address Resolution - Last-hop or fixed-index selection with IP validation
- Pluggable Selection Policies - Swap the candidate selection strategy
- Visit Processing - Apply the resolved address to a visit record
- Flexible Logging - Silent by default, supports any logging framework

Optional Features (Require Installation):
- Framework Integrations - FastAPI, aiohttp, Sanic

Usage:
    from visitorip import ForwardedAddressResolver, ResolverConfig

    resolver = ForwardedAddressResolver(config=ResolverConfig(header_ip_index=0))
    resolution = resolver.resolve("203.0.113.7, 10.0.0.2")
    if resolution:
        print(resolution.address, resolution.packed)

    # Visit processing
    from visitorip import ForwardedForProcessor, VisitRecord

    visit = VisitRecord.from_peer("10.0.0.2")
    ForwardedForProcessor().process({"X-Forwarded-For": "203.0.113.7"}, visit)

    # Logging configuration
    from visitorip import configure_logging, set_warning_handler
"""

# Configuration classes
from .config import (
    DEFAULT_HEADER_NAME,
    ResolverConfig,
)

# Exception System
from .exceptions import (
    ParseFailure,
    VisitorIPError,
    ResolutionContext,
    NoForwardedHeaderError,
    InvalidForwardedHeaderError,
)

from .selection import (
    SelectionPolicy,
    last_candidate,
    IndexSelection,
    selection_for,
)

from .resolver import (
    IPAddress,
    Resolution,
    ForwardedAddressResolver,
    resolve_forwarded_address,
)

from .visit import (
    VisitRecord,
    ForwardedForProcessor,
    apply_resolution,
    get_header,
)

# Logging Configuration
from .logging import (
    configure_logging,
    set_warning_handler,
    disable_logging,
    is_logging_enabled,
)

__all__ = [
    # Configuration Classes
    "DEFAULT_HEADER_NAME",
    "ResolverConfig",

    # Exception System
    "ParseFailure",
    "VisitorIPError",
    "ResolutionContext",
    "NoForwardedHeaderError",
    "InvalidForwardedHeaderError",

    # Selection
    "SelectionPolicy",
    "last_candidate",
    "IndexSelection",
    "selection_for",

    # Resolution
    "IPAddress",
    "Resolution",
    "ForwardedAddressResolver",
    "resolve_forwarded_address",

    # Visits
    "VisitRecord",
    "ForwardedForProcessor",
    "apply_resolution",
    "get_header",

    # Logging Configuration
    "configure_logging",
    "set_warning_handler",
    "disable_logging",
    "is_logging_enabled",
]

__version__ = "0.1.0"
__license__ = "MIT"
