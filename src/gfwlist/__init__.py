"""
A gfwlist rule parser and URL matcher.

Compiles Adblock/AutoProxy style rule lists into Aho-Corasick automatons
and classifies URLs as blocked, allowed by an exception, or unmatched.
"""

from .config import ParserConfig
from .exceptions import (
    GfwListBuildError,
    GfwListError,
    GfwListSyntaxError,
    GfwListUrlError,
    SyntaxErrorKind,
)
from .matcher import GfwList, MatchResult, Verdict

__version__ = "0.2.0"

__all__ = [
    "GfwList",
    "GfwListBuildError",
    "GfwListError",
    "GfwListSyntaxError",
    "GfwListUrlError",
    "MatchResult",
    "ParserConfig",
    "SyntaxErrorKind",
    "Verdict",
]
