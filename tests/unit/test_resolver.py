"""
Unit tests for forwarded address resolution
"""

import pytest
from dataclasses import FrozenInstanceError
from ipaddress import IPv4Address, IPv6Address, ip_address

from visitorip import (
    ForwardedAddressResolver,
    IndexSelection,
    InvalidForwardedHeaderError,
    NoForwardedHeaderError,
    ParseFailure,
    Resolution,
    ResolverConfig,
    resolve_forwarded_address,
)


class TestResolveForwardedAddress:
    """Test the resolve_forwarded_address function"""

    @pytest.mark.parametrize("index", [None, 0, 3])
    def test_empty_header_is_no_header(self, captured_warnings, index):
        """Test empty header returns NO_HEADER for any index without logging"""
        resolution = resolve_forwarded_address("", index=index)

        assert resolution.failure == ParseFailure.NO_HEADER
        assert resolution.address is None
        assert not resolution
        assert captured_warnings == []

    def test_none_header_is_no_header(self, captured_warnings):
        """Test absent header returns NO_HEADER without logging"""
        resolution = resolve_forwarded_address(None)

        assert resolution.failure == ParseFailure.NO_HEADER
        assert captured_warnings == []

    def test_last_address_selected_by_default(self):
        """Test the rightmost address is used when no index is given"""
        resolution = resolve_forwarded_address("1.2.3.4, 5.6.7.8, 9.10.11.12")

        assert resolution.ok
        assert resolution.address == IPv4Address("9.10.11.12")
        assert resolution.packed == bytes([9, 10, 11, 12])

    def test_index_selects_position(self):
        """Test index picks the address at that position"""
        resolution = resolve_forwarded_address("1.2.3.4, 5.6.7.8", index=0)

        assert resolution.address == IPv4Address("1.2.3.4")

    def test_index_selects_middle_position_with_whitespace(self):
        """Test indexed candidates are trimmed too"""
        resolution = resolve_forwarded_address("1.2.3.4,   5.6.7.8  , 9.9.9.9", index=1)

        assert resolution.address == IPv4Address("5.6.7.8")

    def test_out_of_range_index_falls_back_to_last(self, captured_warnings):
        """Test out-of-range index uses the last address instead of failing"""
        resolution = resolve_forwarded_address("1.2.3.4", index=5)

        assert resolution.address == IPv4Address("1.2.3.4")
        assert captured_warnings == []

    def test_out_of_range_index_with_several_addresses(self):
        """Test fallback picks the last of several addresses"""
        resolution = resolve_forwarded_address("1.2.3.4, 5.6.7.8", index=2)

        assert resolution.address == IPv4Address("5.6.7.8")

    def test_ipv6_loopback_trimmed(self):
        """Test surrounding whitespace is tolerated for IPv6"""
        resolution = resolve_forwarded_address("  ::1  ")

        assert resolution.address == IPv6Address("::1")
        assert resolution.packed == b"\x00" * 15 + b"\x01"
        assert len(resolution.packed) == 16

    def test_ipv6_in_chain(self):
        """Test IPv6 addresses inside a chain"""
        resolution = resolve_forwarded_address("2001:db8::1, 10.0.0.1", index=0)

        assert resolution.address == ip_address("2001:db8::1")
        assert resolution.packed == ip_address("2001:db8::1").packed

    def test_only_commas_is_invalid(self, captured_warnings):
        """Test a header made of commas logs exactly one warning"""
        resolution = resolve_forwarded_address(",,,")

        assert resolution.failure == ParseFailure.INVALID_FORMAT
        assert resolution.header_value == ",,,"
        assert len(captured_warnings) == 1

    def test_single_comma_is_invalid(self, captured_warnings):
        """Test ',' yields an empty candidate"""
        resolution = resolve_forwarded_address(",")

        assert resolution.failure == ParseFailure.INVALID_FORMAT
        assert len(captured_warnings) == 1

    def test_blank_selected_candidate_is_invalid(self, captured_warnings):
        """Test whitespace-only selected candidate is rejected"""
        resolution = resolve_forwarded_address("1.2.3.4,   ")

        assert resolution.failure == ParseFailure.INVALID_FORMAT
        assert len(captured_warnings) == 1

    def test_malformed_text_is_invalid(self, captured_warnings):
        """Test non-address text is rejected without raising"""
        resolution = resolve_forwarded_address("not-an-ip")

        assert resolution.failure == ParseFailure.INVALID_FORMAT
        assert resolution.address is None
        assert resolution.packed is None
        assert len(captured_warnings) == 1

    def test_out_of_range_octets_are_invalid(self, captured_warnings):
        """Test 999.999.999.999 is rejected"""
        resolution = resolve_forwarded_address("999.999.999.999")

        assert resolution.failure == ParseFailure.INVALID_FORMAT
        assert len(captured_warnings) == 1

    def test_only_selected_candidate_is_validated(self, captured_warnings):
        """Test garbage outside the selected slot does not matter"""
        resolution = resolve_forwarded_address("garbage, 5.6.7.8")

        assert resolution.address == IPv4Address("5.6.7.8")
        assert captured_warnings == []

    def test_warning_message_format(self, captured_warnings):
        """Test the diagnostic carries header name and raw value"""
        resolve_forwarded_address("bogus", header_name="X-Real-Client")

        assert captured_warnings[0]['message'] == (
            "X-Real-Client header does not store a valid IP address (bogus)"
        )
        assert captured_warnings[0]['name'] == "visitorip.resolver"
        assert captured_warnings[0]['context']['header_name'] == "X-Real-Client"
        assert captured_warnings[0]['context']['header_value'] == "bogus"
        assert captured_warnings[0]['context']['reason'] == "INVALID_FORMAT"

    def test_header_is_not_mutated(self):
        """Test the input header string is returned unchanged"""
        header = " 1.2.3.4 , 5.6.7.8 "
        resolution = resolve_forwarded_address(header)

        assert header == " 1.2.3.4 , 5.6.7.8 "
        assert resolution.header_value == header

    def test_repeated_calls_are_identical(self, captured_warnings):
        """Test resolution is deterministic and keeps no hidden state"""
        first = resolve_forwarded_address("1.2.3.4, 5.6.7.8")
        second = resolve_forwarded_address("1.2.3.4, 5.6.7.8")
        assert first == second
        assert captured_warnings == []

        resolve_forwarded_address("junk")
        resolve_forwarded_address("junk")
        assert len(captured_warnings) == 2

    def test_custom_selection_policy(self):
        """Test a pluggable selection policy overrides the default"""
        def first_candidate(tokens):
            return tokens[0] if tokens else None

        resolution = resolve_forwarded_address("1.2.3.4, 5.6.7.8", selection=first_candidate)

        assert resolution.address == IPv4Address("1.2.3.4")

    def test_selection_returning_none_is_invalid(self, captured_warnings):
        """Test a policy that finds nothing yields INVALID_FORMAT"""
        resolution = resolve_forwarded_address("1.2.3.4", selection=lambda tokens: None)

        assert resolution.failure == ParseFailure.INVALID_FORMAT
        assert len(captured_warnings) == 1

    def test_negative_index_falls_back_to_last(self, captured_warnings):
        """Test a negative call-time index is treated as out of range"""
        resolution = resolve_forwarded_address("1.2.3.4, 5.6.7.8", index=-1)

        assert resolution.address == IPv4Address("5.6.7.8")
        assert captured_warnings == []

    def test_raising_selection_policy_is_invalid(self, captured_warnings):
        """Test a policy that raises IndexError is reported, not propagated"""
        resolution = resolve_forwarded_address("1.2.3.4", selection=lambda tokens: tokens[1])

        assert resolution.failure == ParseFailure.INVALID_FORMAT
        assert len(captured_warnings) == 1

    def test_selection_policy_value_error_is_invalid(self, captured_warnings):
        """Test a policy that raises ValueError is reported, not propagated"""
        def strict(tokens):
            raise ValueError("too many hops")

        resolution = resolve_forwarded_address("1.2.3.4, 5.6.7.8", selection=strict)

        assert resolution.failure == ParseFailure.INVALID_FORMAT
        assert len(captured_warnings) == 1


class TestResolution:
    """Test the Resolution result type"""

    def test_success_is_truthy(self):
        resolution = Resolution(address=IPv4Address("1.2.3.4"))
        assert resolution
        assert resolution.ok
        assert resolution.packed == b"\x01\x02\x03\x04"

    def test_failure_is_falsy(self):
        resolution = Resolution(failure=ParseFailure.INVALID_FORMAT, header_value="x")
        assert not resolution
        assert resolution.packed is None

    def test_frozen(self):
        resolution = Resolution(address=IPv4Address("1.2.3.4"))
        with pytest.raises(FrozenInstanceError):
            resolution.address = None


class TestForwardedAddressResolver:
    """Test the configured resolver"""

    def test_default_config(self):
        """Test default resolver reads X-Forwarded-For and picks last"""
        resolver = ForwardedAddressResolver()

        assert resolver.header_name == "X-Forwarded-For"
        assert resolver.resolve("1.2.3.4, 5.6.7.8").address == IPv4Address("5.6.7.8")

    def test_configured_index(self):
        """Test index from configuration is used"""
        resolver = ForwardedAddressResolver(config=ResolverConfig(header_ip_index=0))

        assert isinstance(resolver.selection, IndexSelection)
        assert resolver.resolve("1.2.3.4, 5.6.7.8").address == IPv4Address("1.2.3.4")

    def test_call_time_index_overrides(self):
        """Test a call-time index wins over the instance policy"""
        resolver = ForwardedAddressResolver(config=ResolverConfig(header_ip_index=0))

        assert resolver.resolve("1.2.3.4, 5.6.7.8, 9.9.9.9", index=1).address == IPv4Address("5.6.7.8")

    def test_configured_header_name_in_warning(self, captured_warnings):
        """Test the configured header name appears in diagnostics"""
        resolver = ForwardedAddressResolver(config=ResolverConfig(header_name="X-Client-Chain"))

        resolution = resolver.resolve("nope")

        assert resolution.header_name == "X-Client-Chain"
        assert captured_warnings[0]['message'].startswith("X-Client-Chain header")

    def test_custom_selection(self):
        """Test injecting a selection policy"""
        resolver = ForwardedAddressResolver(selection=IndexSelection(1))

        assert resolver.resolve("1.2.3.4, 5.6.7.8, 9.9.9.9").address == IPv4Address("5.6.7.8")

    def test_call_time_index_replaces_custom_selection(self):
        """Test an explicit index wins over an injected selection policy"""
        resolver = ForwardedAddressResolver(selection=IndexSelection(1))

        resolution = resolver.resolve("1.2.3.4, 5.6.7.8, 9.9.9.9", index=0)

        assert resolution.address == IPv4Address("1.2.3.4")

    def test_resolve_with_negative_index_does_not_raise(self):
        resolver = ForwardedAddressResolver()
        assert resolver.resolve("1.2.3.4, 5.6.7.8", index=-3).address == IPv4Address("5.6.7.8")

    def test_resolve_or_raise_success(self):
        resolver = ForwardedAddressResolver()
        assert resolver.resolve_or_raise("10.1.2.3") == IPv4Address("10.1.2.3")

    def test_resolve_or_raise_no_header(self, captured_warnings):
        """Test strict resolution raises NoForwardedHeaderError silently"""
        resolver = ForwardedAddressResolver()

        with pytest.raises(NoForwardedHeaderError) as exc_info:
            resolver.resolve_or_raise("")

        assert exc_info.value.reason == ParseFailure.NO_HEADER
        assert exc_info.value.header_name == "X-Forwarded-For"
        assert captured_warnings == []

    def test_resolve_or_raise_invalid(self, captured_warnings):
        """Test strict resolution raises and still logs once"""
        resolver = ForwardedAddressResolver()

        with pytest.raises(InvalidForwardedHeaderError) as exc_info:
            resolver.resolve_or_raise("not-an-ip")

        assert exc_info.value.reason == ParseFailure.INVALID_FORMAT
        assert exc_info.value.header_value == "not-an-ip"
        assert str(exc_info.value) == "X-Forwarded-For header does not store a valid IP address (not-an-ip)"
        assert len(captured_warnings) == 1

    def test_repr(self):
        resolver = ForwardedAddressResolver(config=ResolverConfig(header_ip_index=2))
        assert "X-Forwarded-For" in repr(resolver)
        assert "IndexSelection(2)" in repr(resolver)
