"""
Needle and haystack encoding.

Multi-pattern substring search has no notion of anchors or URL fields, so
rules and query URLs are flattened into one string each, with marker
characters in front of the scheme, host and path:

    \\x01http\\x02.www.example.com\\x03/page/

Hosts always start at a "." and paths always end with a "/", so a needle
such as ``.example.com\\x03/`` can only occur in a haystack at a label
boundary of the host, never inside ``notexample.com`` or
``example.com.co``.
"""

from __future__ import annotations

from enum import Enum, auto

from .constants import (
    BEGIN_OF_HOST,
    BEGIN_OF_PATH,
    BEGIN_OF_SCHEME,
    HOST_DELIMITER,
    PATH_DELIMITER,
)
from .url import split_url


class Anchor(Enum):
    """How a literal rule is anchored in the URL."""

    DOMAIN_SUFFIX = auto()  # .example.com
    DOMAIN = auto()  # ||example.com
    URL = auto()  # |http://example.com
    SUBSTRING = auto()  # example.com


def append_host(parts: list[str], host: str) -> None:
    if not host.startswith(HOST_DELIMITER):
        parts.append(HOST_DELIMITER)
    parts.append(host)


def append_path(parts: list[str], path: str) -> None:
    parts.append(path)
    if not path.endswith(PATH_DELIMITER):
        parts.append(PATH_DELIMITER)


def append_host_path(parts: list[str], text: str) -> None:
    """Append ``host[/path]`` text, defaulting to the root path."""
    host, sep, path = text.partition(PATH_DELIMITER)
    append_host(parts, host)
    parts.append(BEGIN_OF_PATH)
    append_path(parts, sep + path)


def append_url(parts: list[str], url: str, full: bool) -> None:
    """Append the encoded scheme, host and path of a URL.

    Args:
        parts: Buffer to append to.
        url: Absolute URL.
        full: Always emit the path field. When False, a bare root path is
            left out unless the URL is written with a trailing "/", so that
            ``|http://example.com`` also matches ``http://example.com.co``.

    Raises:
        GfwListUrlError: If the URL cannot be decomposed.
    """
    fields = split_url(url)
    parts.append(BEGIN_OF_SCHEME)
    parts.append(fields.scheme)
    parts.append(BEGIN_OF_HOST)
    append_host(parts, fields.host)
    if full or fields.path != PATH_DELIMITER or url.endswith(PATH_DELIMITER):
        parts.append(BEGIN_OF_PATH)
        append_path(parts, fields.path)


def encode_url(url: str) -> str:
    """Encode a query URL into the haystack searched by the matcher."""
    parts: list[str] = []
    append_url(parts, url, full=True)
    return "".join(parts)


def encode_literal(anchor: Anchor, body: str) -> str:
    """Encode a literal rule (anchor prefix already stripped) into a needle."""
    parts: list[str] = []
    if anchor is Anchor.URL:
        append_url(parts, body, full=False)
    elif anchor is Anchor.SUBSTRING:
        parts.append(BEGIN_OF_HOST)
        append_host_path(parts, body)
    else:
        append_host_path(parts, body)
    return "".join(parts)
