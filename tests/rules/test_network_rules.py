"""
Tests for IP, e-mail and URL rules.

DNS-dependent rules are tested with the resolver patched out so the suite
never touches the network.
"""

import socket

import pytest
from email_validator import EmailNotValidError

from valicomb.rules import network
from valicomb.rules.network import email, email_dns, ip, ipv4, ipv6, url, url_active


class TestIp:
    """Tests for ip, ipv4 and ipv6."""

    def test_ipv4(self):
        """Test IPv4 addresses."""
        assert ip("f", "192.168.0.1", (), {}) is True
        assert ipv4("f", "192.168.0.1", (), {}) is True
        assert ipv6("f", "192.168.0.1", (), {}) is False

    def test_ipv6(self):
        """Test IPv6 addresses."""
        assert ip("f", "::1", (), {}) is True
        assert ipv6("f", "2001:db8::ff00:42:8329", (), {}) is True
        assert ipv4("f", "::1", (), {}) is False

    @pytest.mark.parametrize("value", ["256.1.1.1", "1.2.3", "abc", 1234, None])
    def test_invalid(self, value):
        """Test malformed addresses and non-strings."""
        assert ip("f", value, (), {}) is False


class TestEmail:
    """Tests for the email rule."""

    @pytest.mark.parametrize("value", ["someone@example.com", "first.last+tag@mail.example.org"])
    def test_valid(self, value):
        """Test ordinary addresses."""
        assert email("f", value, (), {}) is True

    @pytest.mark.parametrize(
        "value",
        [
            "plainaddress",
            "a@b@example.com",
            "john..doe@example.com",
            ".john@example.com",
            "john.@example.com",
            "<script>@example.com",
            "john\x00@example.com",
            "x" * 65 + "@example.com",
            42,
        ],
    )
    def test_invalid(self, value):
        """Test malformed, unsafe and over-long addresses."""
        assert email("f", value, (), {}) is False


class TestEmailDns:
    """Tests for the email_dns rule."""

    def test_deliverable(self, monkeypatch):
        """Test a domain accepted by the deliverability check."""
        calls = []

        def fake_validate(value, check_deliverability):
            calls.append(check_deliverability)

        monkeypatch.setattr(network, "validate_email", fake_validate)
        assert email_dns("f", "someone@example.com", (), {}) is True
        assert calls == [True]

    def test_undeliverable(self, monkeypatch):
        """Test a domain rejected by the deliverability check."""

        def fake_validate(value, check_deliverability):
            raise EmailNotValidError("no MX record")

        monkeypatch.setattr(network, "validate_email", fake_validate)
        assert email_dns("f", "someone@example.com", (), {}) is False

    def test_syntax_checked_first(self, monkeypatch):
        """Test unsafe addresses fail before any lookup."""

        def fail_validate(value, check_deliverability):
            raise AssertionError("lookup should not happen")

        monkeypatch.setattr(network, "validate_email", fail_validate)
        assert email_dns("f", "john..doe@example.com", (), {}) is False


class TestUrl:
    """Tests for url and url_active."""

    @pytest.mark.parametrize(
        "value",
        ["http://example.com", "https://example.com/path?q=1#top", "ftp://files.example.com:21/a.txt"],
    )
    def test_valid(self, value):
        """Test allowed schemes with a host."""
        assert url("f", value, (), {}) is True

    @pytest.mark.parametrize(
        "value",
        [
            "example.com",
            "mailto:someone@example.com",
            "javascript:alert(1)",
            "http://",
            "http://exa mple.com",
            "http://example.com:99999",
            None,
        ],
    )
    def test_invalid(self, value):
        """Test missing scheme, other schemes, missing host and bad ports."""
        assert url("f", value, (), {}) is False

    def test_active(self, monkeypatch):
        """Test a resolvable host."""
        hosts = []

        def fake_getaddrinfo(host, port):
            hosts.append(host)
            return [(socket.AF_INET, socket.SOCK_STREAM, 6, "", ("93.184.216.34", 0))]

        monkeypatch.setattr(network.socket, "getaddrinfo", fake_getaddrinfo)
        assert url_active("f", "https://Example.com/page", (), {}) is True
        assert hosts == ["example.com"]

    def test_inactive(self, monkeypatch):
        """Test an unresolvable host."""

        def fake_getaddrinfo(host, port):
            raise socket.gaierror("Name or service not known")

        monkeypatch.setattr(network.socket, "getaddrinfo", fake_getaddrinfo)
        assert url_active("f", "https://no-such-host.invalid", (), {}) is False

    def test_active_requires_url(self):
        """Test non-URLs fail without a lookup."""
        assert url_active("f", "example.com", (), {}) is False
