"""
Error types raised while building or querying a rule set.
"""

from __future__ import annotations

from enum import Enum


class SyntaxErrorKind(Enum):
    """What was wrong with a rejected rule line."""

    RULE = "rule"  # malformed anchor or delimiter
    REGEX = "regex"  # regex body failed to compile
    URL = "url"  # |-anchored rule is not a URL with a host


class GfwListError(Exception):
    """Base class for all gfwlist errors."""


class GfwListUrlError(GfwListError, ValueError):
    """A string could not be decomposed into scheme, host and path."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Invalid URL {url!r}: {reason}")
        self.url = url
        self.reason = reason


class GfwListSyntaxError(GfwListError, ValueError):
    """A rule line could not be compiled."""

    def __init__(self, rule: str, kind: SyntaxErrorKind) -> None:
        super().__init__(f"Invalid rule syntax ({kind.value}): {rule}")
        self.rule = rule
        self.kind = kind


class GfwListBuildError(GfwListError, RuntimeError):
    """The pattern matching engine rejected the compiled needles."""
