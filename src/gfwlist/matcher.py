"""
Compiled rule set and URL matching.

Literal rules are encoded into needles (see encoder) and loaded into two
Aho-Corasick automatons, one for block rules and one for exception rules.
A query is checked in a fixed order:

1. Regex rules, in source order, against the raw URL
2. Exception needles against the encoded URL (any hit allows)
3. Block needles against the encoded URL (a hit blocks)
4. Otherwise the URL is left to the default policy
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum

import ahocorasick

from .config import DEFAULT_CONFIG, ParserConfig
from .encoder import encode_url
from .exceptions import GfwListBuildError
from .parser import LiteralRule, parse_rule_list

logger = logging.getLogger(__name__)


class Verdict(Enum):
    """Outcome of classifying a URL."""

    BLOCK = "block"
    ALLOW = "allow"  # an exception rule matched
    DEFAULT = "default"  # no rule matched


@dataclass(frozen=True)
class MatchResult:
    """Result of URL matching."""

    verdict: Verdict
    rule: str | None = None

    @property
    def blocked(self) -> bool:
        return self.verdict is Verdict.BLOCK


_ALLOW = MatchResult(verdict=Verdict.ALLOW)
_DEFAULT = MatchResult(verdict=Verdict.DEFAULT)


def _build_automaton(rules: list[LiteralRule]) -> ahocorasick.Automaton | None:
    """Build an automaton mapping each needle to its rule index."""
    if not rules:
        return None

    automaton = ahocorasick.Automaton()
    try:
        for index, rule in enumerate(rules):
            # A duplicate needle keeps the later index; both rules are equivalent
            automaton.add_word(rule.needle, index)
        automaton.make_automaton()
    except (TypeError, ValueError) as e:
        raise GfwListBuildError(f"Failed to build pattern matcher: {e}") from e

    return automaton


class GfwList:
    """Compiled, immutable set of gfwlist rules.

    Instances are safe to query from several threads at once; queries
    never modify any state.
    """

    def __init__(self, rules_text: str, config: ParserConfig | None = None) -> None:
        """Compile a rule list.

        Args:
            rules_text: The rule list, one rule per line.
            config: Parser options. Defaults to ParserConfig().

        Raises:
            GfwListSyntaxError: If any line is not a valid rule.
            GfwListBuildError: If the pattern matcher cannot be built.
        """
        parsed = parse_rule_list(rules_text, config or DEFAULT_CONFIG)

        self._block_automaton = _build_automaton(parsed.block_rules)
        self._exception_automaton = _build_automaton(parsed.exception_rules)

        # Indexed in parallel with the block automaton's values
        self._block_rules: tuple[str, ...] = tuple(r.raw for r in parsed.block_rules)
        self._exception_count = len(parsed.exception_rules)
        self._regex_rules: tuple[tuple[re.Pattern[str], str], ...] = tuple(
            (r.pattern, r.raw) for r in parsed.regex_rules
        )

        logger.debug(
            "Built rule set: %d block, %d exception, %d regex",
            len(self._block_rules),
            self._exception_count,
            len(self._regex_rules),
        )

    def classify(self, url: str) -> MatchResult:
        """Classify a URL as blocked, explicitly allowed, or unmatched.

        Raises:
            GfwListUrlError: If the URL is not a valid URL with a host and
                no regex rule matched it first.
        """
        for pattern, raw in self._regex_rules:
            if pattern.search(url):
                return MatchResult(verdict=Verdict.BLOCK, rule=raw)

        haystack = encode_url(url)

        if self._exception_automaton is not None:
            if next(self._exception_automaton.iter(haystack), None) is not None:
                return _ALLOW

        if self._block_automaton is not None:
            hit = next(self._block_automaton.iter(haystack), None)
            if hit is not None:
                _end, index = hit
                return MatchResult(verdict=Verdict.BLOCK, rule=self._block_rules[index])

        return _DEFAULT

    def test(self, url: str) -> str | None:
        """Return the block rule matching a URL, or None if it is not blocked.

        Raises:
            GfwListUrlError: If the URL is invalid or cannot be parsed.
        """
        return self.classify(url).rule

    def is_blocked(self, url: str) -> bool:
        return self.classify(url).blocked

    def rule_count(self) -> int:
        return len(self._block_rules) + self._exception_count + len(self._regex_rules)

    def is_empty(self) -> bool:
        return self.rule_count() == 0

    def __len__(self) -> int:
        return self.rule_count()

    def __repr__(self) -> str:
        return f"GfwList(rules_count={self.rule_count()})"

    __str__ = __repr__
