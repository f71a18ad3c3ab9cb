"""
URL decomposition into scheme, host and path.

Wraps urllib.parse with the stricter checks the encoder relies on: a URL
must carry a scheme and a host, and no decomposed field may contain the
control characters used as field markers. For special schemes (http, ws,
ftp, ...) the parts of WHATWG URL parsing that change the host or path are
applied as well: backslashes separate path segments, the "//" after the
scheme is optional, hosts are percent-decoded and "." / ".." segments are
resolved.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import quote, unquote, urlsplit

from .constants import PATH_DELIMITER, SPECIAL_SCHEMES
from .exceptions import GfwListUrlError

_C0_CONTROL_OR_SPACE = "".join(chr(c) for c in range(0x21))
_TAB_OR_NEWLINE = str.maketrans("", "", "\t\r\n")

_SCHEME_RE = re.compile(r"([A-Za-z][A-Za-z0-9+.\-]*):(.*)", re.DOTALL)

# "file:" URLs keep their slashes; "file:///path" has no host
_AUTHORITY_SCHEMES = SPECIAL_SCHEMES - {"file"}

# Characters that are kept as-is in a path; everything else is percent-encoded
_PATH_SAFE = "/%:@!$&'()*+,;=[]|^\\"

_FORBIDDEN_HOST_CHARS = frozenset(_C0_CONTROL_OR_SPACE + "#/:<>?@[\\]^|%\x7f")

_SINGLE_DOT_SEGMENTS = frozenset({".", "%2e"})
_DOUBLE_DOT_SEGMENTS = frozenset({"..", ".%2e", "%2e.", "%2e%2e"})


@dataclass(frozen=True)
class UrlParts:
    """Decomposed URL fields."""

    scheme: str
    host: str
    path: str


def _normalize_special(url: str) -> str:
    """Rewrite a special-scheme URL into a form urlsplit reads correctly."""
    match = _SCHEME_RE.fullmatch(url)
    if match is None:
        return url

    scheme, rest = match.groups()
    if scheme.lower() not in _AUTHORITY_SCHEMES:
        return url

    # Query and fragment keep their backslashes
    cut = min((i for i in (rest.find("?"), rest.find("#")) if i != -1), default=len(rest))
    head = rest[:cut].replace("\\", PATH_DELIMITER).lstrip(PATH_DELIMITER)
    return f"{scheme}://{head}{rest[cut:]}"


def remove_dot_segments(path: str) -> str:
    """Resolve "." and ".." segments of an absolute path.

    ``%2e`` counts as a dot. A trailing dot segment leaves a trailing "/",
    so ``/a/b/..`` becomes ``/a/``.
    """
    if not path.startswith(PATH_DELIMITER):
        return path

    segments = path[1:].split(PATH_DELIMITER)
    output: list[str] = []
    for i, segment in enumerate(segments):
        is_last = i == len(segments) - 1
        lowered = segment.lower()
        if lowered in _DOUBLE_DOT_SEGMENTS:
            if output:
                output.pop()
            if is_last:
                output.append("")
        elif lowered in _SINGLE_DOT_SEGMENTS:
            if is_last:
                output.append("")
        else:
            output.append(segment)

    return PATH_DELIMITER + PATH_DELIMITER.join(output)


def _normalize_host(url: str, hostname: str, bracketed: bool, special: bool) -> str:
    if bracketed:
        # urlsplit drops the brackets of an IPv6 literal
        return f"[{hostname}]"

    if special:
        hostname = unquote(hostname).lower()

    if any(c in _FORBIDDEN_HOST_CHARS for c in hostname):
        raise GfwListUrlError(url, "forbidden character in host")

    if not hostname.isascii():
        try:
            hostname = hostname.encode("idna").decode("ascii")
        except UnicodeError as e:
            raise GfwListUrlError(url, f"invalid international domain name: {e}") from e

    return hostname


def split_url(url: str) -> UrlParts:
    """Split a URL into scheme, host and path.

    Args:
        url: Absolute URL such as ``https://example.com/page``.

    Returns:
        UrlParts with a lowercased scheme and host. The port, query and
        fragment are dropped.

    Raises:
        GfwListUrlError: If the URL has no scheme or host, or is malformed.
    """
    cleaned = url.strip(_C0_CONTROL_OR_SPACE).translate(_TAB_OR_NEWLINE)
    cleaned = _normalize_special(cleaned)

    try:
        parsed = urlsplit(cleaned)
        hostname = parsed.hostname
        # Accessing .port validates it
        parsed.port
    except ValueError as e:
        raise GfwListUrlError(url, str(e)) from e

    if not parsed.scheme:
        raise GfwListUrlError(url, "relative URL without a scheme")
    if not hostname:
        raise GfwListUrlError(url, "empty host")

    special = parsed.scheme in SPECIAL_SCHEMES
    bracketed = parsed.netloc.rpartition("@")[2].startswith("[")
    host = _normalize_host(url, hostname, bracketed, special)

    path = quote(remove_dot_segments(parsed.path), safe=_PATH_SAFE)
    if not path and special:
        path = PATH_DELIMITER

    return UrlParts(scheme=parsed.scheme, host=host, path=path)
