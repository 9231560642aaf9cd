"""
Network address rules: IP addresses, e-mail addresses and URLs.

E-mail syntax is checked with ``email-validator``; on top of that, addresses
carrying quote, bracket or control characters are refused even where the
RFC would allow them, because such values are almost always injection
attempts rather than real mailboxes.
"""

import ipaddress
import re
import socket
from typing import Any
from urllib.parse import urlsplit

from email_validator import EmailNotValidError, validate_email

from valicomb.rules.base import builtin_rule

URL_PREFIXES = ("http://", "https://", "ftp://")

MAX_EMAIL_LENGTH = 254
MAX_LOCAL_LENGTH = 64
MAX_DOMAIN_LENGTH = 255

UNSAFE_EMAIL_CHARS = re.compile(r"[<>\"'()\[\]\\]")
CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
WHITESPACE = re.compile(r"\s")


def _ip_version(value: Any) -> int | None:
    if not isinstance(value, str):
        return None
    try:
        return ipaddress.ip_address(value).version
    except ValueError:
        return None


@builtin_rule("ip")
def ip(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    return _ip_version(value) is not None


@builtin_rule("ipv4")
def ipv4(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    return _ip_version(value) == 4


@builtin_rule("ipv6")
def ipv6(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    return _ip_version(value) == 6


def _passes_extra_email_checks(value: str) -> bool:
    if len(value) > MAX_EMAIL_LENGTH:
        return False
    if UNSAFE_EMAIL_CHARS.search(value) or CONTROL_CHARS.search(value):
        return False
    if value.count("@") < 1:
        return False
    local, domain = value.rsplit("@", 1)
    if len(local) > MAX_LOCAL_LENGTH or len(domain) > MAX_DOMAIN_LENGTH:
        return False
    if ".." in local:
        return False
    return not local.startswith(".") and not local.endswith(".")


def _check_email(value: Any, check_deliverability: bool) -> bool:
    if not isinstance(value, str) or not _passes_extra_email_checks(value):
        return False
    try:
        validate_email(value, check_deliverability=check_deliverability)
    except EmailNotValidError:
        return False
    return True


@builtin_rule("email")
def email(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    """Check e-mail address syntax without any network access."""
    return _check_email(value, check_deliverability=False)


@builtin_rule("email_dns")
def email_dns(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    """Check e-mail syntax and that the domain can receive mail (DNS lookup)."""
    return _check_email(value, check_deliverability=True)


def _url_host(value: Any) -> str | None:
    """Return the lower-cased host of an http, https or ftp URL, or None."""
    if not isinstance(value, str) or not value.startswith(URL_PREFIXES):
        return None
    if WHITESPACE.search(value) or CONTROL_CHARS.search(value):
        return None
    try:
        parts = urlsplit(value)
        # Accessing port validates it
        parts.port
    except ValueError:
        return None
    return parts.hostname or None


@builtin_rule("url")
def url(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    return _url_host(value) is not None


@builtin_rule("url_active")
def url_active(field: str, value: Any, params: tuple[Any, ...], fields: Any) -> bool:
    """Require a URL whose host resolves in DNS."""
    host = _url_host(value)
    if host is None:
        return False
    try:
        return bool(socket.getaddrinfo(host, None))
    except (socket.gaierror, UnicodeError):
        return False
