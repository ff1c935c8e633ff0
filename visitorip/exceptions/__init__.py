"""
Exception handling system for visitorip.

Provides:
- Reason enum describing why a forwarded header could not be resolved
- Base exception class with header context
- Specific exception types for strict callers
"""

from .reasons import ParseFailure
from .base import (
    VisitorIPError,
    ResolutionContext,
)
from .errors import (
    NoForwardedHeaderError,
    InvalidForwardedHeaderError,
)

__all__ = [
    # Reason enum
    "ParseFailure",

    # Base classes
    "VisitorIPError",
    "ResolutionContext",

    # Exception types
    "NoForwardedHeaderError",
    "InvalidForwardedHeaderError",
]
