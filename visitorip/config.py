"""
Configuration Classes for visitorip

Provides reusable configuration objects for forwarded address resolution.
"""

from dataclasses import dataclass
from typing import Optional

DEFAULT_HEADER_NAME = "X-Forwarded-For"


@dataclass
class ResolverConfig:
    """
    Configuration for forwarded address resolution.

    Only use this in deployments that sit behind a load balancer known to
    rewrite the forwarded header; otherwise the header is trivially spoofed.

    Args:
        header_name: Request header carrying the forwarded address chain.
            An empty string disables processing entirely.
        header_ip_index: Optional 0-based position of the address to use.
            None (default) selects the last (rightmost) address. An index
            beyond the number of addresses also falls back to the last one.

    Example:
        >>> config = ResolverConfig(header_name="X-Forwarded-For", header_ip_index=0)
        >>> resolver = ForwardedAddressResolver(config=config)
    """
    header_name: str = DEFAULT_HEADER_NAME
    header_ip_index: Optional[int] = None

    def __post_init__(self):
        """Validate configuration"""
        if not isinstance(self.header_name, str):
            raise ValueError("header_name must be a string")
        if self.header_ip_index is not None:
            if isinstance(self.header_ip_index, bool) or not isinstance(self.header_ip_index, int):
                raise ValueError("header_ip_index must be an integer or None")
            if self.header_ip_index < 0:
                raise ValueError("header_ip_index must be non-negative or None")

    @property
    def enabled(self) -> bool:
        """True when a header name is configured"""
        return bool(self.header_name)
