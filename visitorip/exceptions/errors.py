"""
Specific exception types for forwarded header resolution.

All inherit from VisitorIPError to provide header context.
"""

from .base import VisitorIPError


class NoForwardedHeaderError(VisitorIPError):
    """
    Raised when the forwarded header is absent or empty.

    Only raised by strict resolution; the default path treats this
    as a silent no-op.
    """
    pass


class InvalidForwardedHeaderError(VisitorIPError):
    """
    Raised when the forwarded header does not store a valid IP address.

    The selected candidate was missing, blank after trimming,
    or not a well-formed IPv4/IPv6 address.
    """
    pass
