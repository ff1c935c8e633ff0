"""
Forwarded Address Resolution

Extracts the originating client address from a proxy forwarding header
such as X-Forwarded-For.

Resolution never raises: an absent header is a silent no-op and a malformed
one is reported through visitorip logging as a single warning.
"""

from dataclasses import dataclass
from ipaddress import IPv4Address, IPv6Address, ip_address
from typing import Optional, Union

from .config import DEFAULT_HEADER_NAME, ResolverConfig
from .exceptions import (
    InvalidForwardedHeaderError,
    NoForwardedHeaderError,
    ParseFailure,
    ResolutionContext,
)
from .logging import log_warning
from .selection import SelectionPolicy, last_candidate, selection_for

IPAddress = Union[IPv4Address, IPv6Address]

INVALID_ADDRESS_MESSAGE = "{header_name} header does not store a valid IP address ({header_value})"


@dataclass(frozen=True)
class Resolution:
    """
    Outcome of resolving a forwarded header.

    Exactly one of ``address`` and ``failure`` is set. Instances are truthy
    only when an address was resolved.

    Attributes:
        address: Resolved IPv4Address/IPv6Address, or None
        failure: ParseFailure reason, or None on success
        header_name: Name of the header that was read
        header_value: Raw header value as received
    """
    address: Optional[IPAddress] = None
    failure: Optional[ParseFailure] = None
    header_name: str = DEFAULT_HEADER_NAME
    header_value: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.address is not None

    @property
    def packed(self) -> Optional[bytes]:
        """Canonical address bytes (4 for IPv4, 16 for IPv6)"""
        return self.address.packed if self.address is not None else None

    def __bool__(self) -> bool:
        return self.ok


def _report_invalid(header_name: str, header: str, index: Optional[int]) -> Resolution:
    context = ResolutionContext(
        header_name=header_name,
        header_value=header,
        reason=ParseFailure.INVALID_FORMAT,
        index=index,
    )
    log_warning(
        __name__,
        INVALID_ADDRESS_MESSAGE.format(header_name=header_name, header_value=header),
        **context.to_dict()
    )
    return Resolution(
        failure=ParseFailure.INVALID_FORMAT,
        header_name=header_name,
        header_value=header,
    )


def resolve_forwarded_address(
    header: Optional[str],
    index: Optional[int] = None,
    header_name: str = DEFAULT_HEADER_NAME,
    selection: Optional[SelectionPolicy] = None,
) -> Resolution:
    """
    Resolve the client address stored in a forwarded header value.

    The header is split on commas; the last entry is used unless ``index``
    points at an existing entry. Negative or out-of-range indexes fall back
    to the last entry. The chosen entry is trimmed and parsed as an IPv4 or
    IPv6 address. A selection policy that raises LookupError or ValueError
    is reported as INVALID_FORMAT.

    Args:
        header: Raw header value (may be None or empty)
        index: Optional 0-based entry to use instead of the last one
        header_name: Header name, used in the diagnostic message
        selection: Optional policy overriding ``index``

    Returns:
        Resolution with the address, or a NO_HEADER / INVALID_FORMAT failure

    Example:
        >>> resolve_forwarded_address("1.2.3.4, 5.6.7.8").address
        IPv4Address('5.6.7.8')
        >>> resolve_forwarded_address("1.2.3.4, 5.6.7.8", index=0).address
        IPv4Address('1.2.3.4')
    """
    if not header:
        return Resolution(failure=ParseFailure.NO_HEADER, header_name=header_name, header_value=header)

    if selection is None:
        selection = last_candidate if index is None or index < 0 else selection_for(index)

    try:
        candidate = selection(header.split(","))
    except (LookupError, ValueError):
        return _report_invalid(header_name, header, index)
    candidate = candidate.strip() if candidate else ""
    if not candidate:
        return _report_invalid(header_name, header, index)

    try:
        address = ip_address(candidate)
    except ValueError:
        return _report_invalid(header_name, header, index)

    return Resolution(address=address, header_name=header_name, header_value=header)


class ForwardedAddressResolver:
    """
    Resolver bound to a configuration and selection policy.

    The selection policy is fixed per instance; pass ``selection`` to plug in
    a custom policy instead of the index-based default.

    Example:
        resolver = ForwardedAddressResolver(config=ResolverConfig(header_ip_index=0))

        resolution = resolver.resolve("203.0.113.7, 10.0.0.2")
        if resolution:
            visit.ip = resolution.packed
    """

    def __init__(
        self,
        config: Optional[ResolverConfig] = None,
        selection: Optional[SelectionPolicy] = None,
    ):
        """
        Initialize resolver.

        Args:
            config: ResolverConfig (defaults to X-Forwarded-For, last entry)
            selection: Optional custom selection policy
        """
        self.config = config if config is not None else ResolverConfig()
        self.selection = selection if selection is not None else selection_for(self.config.header_ip_index)

    @property
    def header_name(self) -> str:
        return self.config.header_name

    def resolve(self, header: Optional[str], index: Optional[int] = None) -> Resolution:
        """
        Resolve a header value.

        Args:
            header: Raw header value
            index: Optional call-time index. When given it replaces the instance
                policy for this call, including a custom ``selection``.

        Returns:
            Resolution
        """
        if index is not None:
            return resolve_forwarded_address(header, index=index, header_name=self.header_name)
        return resolve_forwarded_address(
            header,
            index=self.config.header_ip_index,
            header_name=self.header_name,
            selection=self.selection,
        )

    def resolve_or_raise(self, header: Optional[str], index: Optional[int] = None) -> IPAddress:
        """
        Resolve a header value, raising on failure.

        Invalid headers are still logged once before raising.

        Raises:
            NoForwardedHeaderError: Header absent or empty
            InvalidForwardedHeaderError: Header holds no valid address
        """
        resolution = self.resolve(header, index=index)
        if resolution.ok:
            return resolution.address

        if resolution.failure == ParseFailure.NO_HEADER:
            raise NoForwardedHeaderError(
                f"{self.header_name} header is not present",
                header_name=self.header_name,
                header_value=header,
                reason=ParseFailure.NO_HEADER,
            )
        raise InvalidForwardedHeaderError(
            INVALID_ADDRESS_MESSAGE.format(header_name=self.header_name, header_value=header),
            header_name=self.header_name,
            header_value=header,
            reason=ParseFailure.INVALID_FORMAT,
        )

    def __repr__(self):
        return f"ForwardedAddressResolver(header_name={self.header_name!r}, selection={self.selection!r})"


__all__ = [
    "IPAddress",
    "Resolution",
    "ForwardedAddressResolver",
    "resolve_forwarded_address",
]
