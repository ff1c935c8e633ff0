"""
Visit records and the forwarded-for visit processor.

A visit starts out with the address of the direct peer (usually the load
balancer). ForwardedForProcessor replaces it with the client address found
in the forwarded header, leaving the visit untouched when the header is
absent or malformed.
"""

from dataclasses import dataclass, field
from ipaddress import ip_address
from typing import Any, Dict, Mapping, Optional

from .config import ResolverConfig
from .exceptions import ParseFailure
from .logging import get_logger
from .resolver import ForwardedAddressResolver, IPAddress, Resolution

logger = get_logger(__name__)


@dataclass
class VisitRecord:
    """
    Analytics visit whose IP field holds canonical address bytes.

    Attributes:
        ip: 4 (IPv4) or 16 (IPv6) address bytes, or None when unknown
        metadata: Free-form data owned by the host application
    """
    ip: Optional[bytes] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_peer(cls, host: Optional[str], **metadata) -> "VisitRecord":
        """
        Create a visit seeded with the direct connection address.

        Hosts that are not IP literals (e.g. "testclient") leave ``ip`` unset.
        """
        packed = None
        if host:
            try:
                packed = ip_address(host).packed
            except ValueError:
                logger.debug(f"Peer host is not an IP address: {host!r}")
        return cls(ip=packed, metadata=metadata)

    @property
    def ip_address(self) -> Optional[IPAddress]:
        return ip_address(self.ip) if self.ip is not None else None

    @property
    def ip_string(self) -> Optional[str]:
        address = self.ip_address
        return str(address) if address is not None else None


def get_header(headers: Optional[Mapping[str, str]], name: str) -> Optional[str]:
    """
    Look up a header value by name.

    Repeated header lines are joined with commas in arrival order, so a
    proxy that adds its own line instead of appending still ends up
    rightmost. Multidicts (aiohttp, Sanic) expose ``getall`` and Starlette
    exposes ``getlist``; plain dicts are searched case-insensitively.
    """
    if not headers or not name:
        return None

    getall = getattr(headers, "getall", None)
    if getall is not None:
        values = getall(name, [])
        return ",".join(values) if values else None

    getlist = getattr(headers, "getlist", None)
    if getlist is not None:
        values = getlist(name)
        return ",".join(values) if values else None

    value = headers.get(name)
    if value is not None:
        return value
    lowered = name.lower()
    for key, candidate in headers.items():
        if isinstance(key, str) and key.lower() == lowered:
            return candidate
    return None


def apply_resolution(visit: VisitRecord, resolution: Resolution) -> bool:
    """
    Write a successful resolution into a visit.

    Returns:
        True if the visit IP was updated
    """
    if not resolution.ok:
        return False
    visit.ip = resolution.packed
    return True


class ForwardedForProcessor:
    """
    Updates a visit's IP from the configured forwarded header.

    Use only behind a load balancer that is known to rewrite the header;
    otherwise clients can spoof it freely.

    Example:
        processor = ForwardedForProcessor(ResolverConfig(header_ip_index=0))

        visit = VisitRecord.from_peer(peer_host)
        processor.process(request.headers, visit)
    """

    def __init__(
        self,
        config: Optional[ResolverConfig] = None,
        resolver: Optional[ForwardedAddressResolver] = None,
    ):
        """
        Initialize processor.

        Args:
            config: ResolverConfig (ignored when ``resolver`` is given)
            resolver: Optional preconfigured resolver
        """
        self.resolver = resolver if resolver is not None else ForwardedAddressResolver(config=config)

    @property
    def config(self) -> ResolverConfig:
        return self.resolver.config

    def process(self, headers: Optional[Mapping[str, str]], visit: VisitRecord) -> Resolution:
        """
        Resolve the forwarded header and update the visit on success.

        Args:
            headers: Request headers
            visit: Visit to update

        Returns:
            Resolution describing the outcome
        """
        header_name = self.config.header_name
        if not header_name:
            return Resolution(failure=ParseFailure.NO_HEADER, header_name=header_name)

        resolution = self.resolver.resolve(get_header(headers, header_name))
        apply_resolution(visit, resolution)
        return resolution
