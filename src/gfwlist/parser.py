"""
Rule list parser for gfwlist / AutoProxy filter syntax.

Each line is one of:

    ! comment                   ignored, as are blank lines
    /regex/                     regular expression, matched on the raw URL
    @@<literal>                 exception (allow) rule
    .example.com[/path]         domain suffix
    ||example.com[/path]        domain anchor
    |http://example.com/path    full URL anchor
    example.com[/path]          substring at a host boundary
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from .config import DEFAULT_CONFIG, ParserConfig
from .constants import (
    COMMENT_PREFIX,
    DOMAIN_ANCHOR_PREFIX,
    DOMAIN_SUFFIX_PREFIX,
    EXCEPTION_MARKER,
    EXCEPTION_PREFIX,
    REGEX_DELIMITER,
    URL_ANCHOR_PREFIX,
)
from .encoder import Anchor, encode_literal
from .exceptions import GfwListSyntaxError, GfwListUrlError, SyntaxErrorKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegexRule:
    """Parsed /regex/ rule."""

    raw: str
    pattern: re.Pattern[str]


@dataclass(frozen=True)
class LiteralRule:
    """Parsed literal rule with its encoded needle."""

    raw: str
    anchor: Anchor
    body: str  # rule text with "@@" and anchor prefix stripped
    is_exception: bool
    needle: str


Rule = RegexRule | LiteralRule


@dataclass
class ParsedRules:
    """Rules of a list, split by kind, each in source order."""

    regex_rules: list[RegexRule] = field(default_factory=list)
    block_rules: list[LiteralRule] = field(default_factory=list)
    exception_rules: list[LiteralRule] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.regex_rules) + len(self.block_rules) + len(self.exception_rules)


def classify_literal(text: str) -> tuple[Anchor, str]:
    """Split a literal rule into its anchor kind and the remaining body."""
    if text.startswith(DOMAIN_SUFFIX_PREFIX):
        return Anchor.DOMAIN_SUFFIX, text[len(DOMAIN_SUFFIX_PREFIX) :]
    if text.startswith(DOMAIN_ANCHOR_PREFIX):
        return Anchor.DOMAIN, text[len(DOMAIN_ANCHOR_PREFIX) :]
    if text.startswith(URL_ANCHOR_PREFIX):
        return Anchor.URL, text[len(URL_ANCHOR_PREFIX) :]
    return Anchor.SUBSTRING, text


def _parse_regex_rule(line: str, config: ParserConfig) -> RegexRule:
    if len(line) < 2 or not line.endswith(REGEX_DELIMITER):
        raise GfwListSyntaxError(line, SyntaxErrorKind.RULE)

    flags = re.IGNORECASE if config.regex_ignore_case else 0
    try:
        pattern = re.compile(line[1:-1], flags)
    except re.error as e:
        raise GfwListSyntaxError(line, SyntaxErrorKind.REGEX) from e

    return RegexRule(raw=line, pattern=pattern)


def _parse_literal_rule(line: str, text: str, is_exception: bool) -> LiteralRule:
    anchor, body = classify_literal(text)
    try:
        needle = encode_literal(anchor, body)
    except GfwListUrlError as e:
        raise GfwListSyntaxError(line, SyntaxErrorKind.URL) from e

    return LiteralRule(
        raw=line,
        anchor=anchor,
        body=body,
        is_exception=is_exception,
        needle=needle,
    )


def parse_rule(line: str, config: ParserConfig = DEFAULT_CONFIG) -> Rule | None:
    """Parse a single rule line.

    Returns:
        The parsed rule, or None for blank lines and comments.

    Raises:
        GfwListSyntaxError: If the line is not a valid rule.
    """
    if not line or line.startswith(COMMENT_PREFIX):
        return None

    if line.startswith(REGEX_DELIMITER):
        return _parse_regex_rule(line, config)

    if line.startswith(EXCEPTION_PREFIX):
        text = line[len(EXCEPTION_PREFIX) :]
        if not text:
            raise GfwListSyntaxError(line, SyntaxErrorKind.RULE)
        return _parse_literal_rule(line, text, is_exception=True)

    if line.startswith(EXCEPTION_MARKER):
        if config.strict_exception_marker:
            raise GfwListSyntaxError(line, SyntaxErrorKind.RULE)
        logger.debug("Treating bare '@' rule as a block literal: %s", line)

    return _parse_literal_rule(line, line, is_exception=False)


def parse_rule_list(content: str, config: ParserConfig = DEFAULT_CONFIG) -> ParsedRules:
    """Parse a whole rule list.

    The first invalid line aborts parsing; no partial result is returned.

    Raises:
        GfwListSyntaxError: For the first line that is not a valid rule.
    """
    result = ParsedRules()

    # Only "\n" and "\r\n" end a line; other Unicode breaks stay in the rule
    for line in content.split("\n"):
        line = line.removesuffix("\r")
        rule = parse_rule(line, config)
        if rule is None:
            continue
        if isinstance(rule, RegexRule):
            result.regex_rules.append(rule)
        elif rule.is_exception:
            result.exception_rules.append(rule)
        else:
            result.block_rules.append(rule)

    logger.debug(
        "Parsed rules: %d block, %d exception, %d regex",
        len(result.block_rules),
        len(result.exception_rules),
        len(result.regex_rules),
    )

    return result
