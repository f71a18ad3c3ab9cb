"""
Parser configuration for gfwlist.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class ParserConfig:
    """Options that change how rule lines are compiled."""

    # Reject a line starting with a single "@". When False the line is
    # compiled as an ordinary block literal.
    strict_exception_marker: bool = True

    # Compile /regex/ rules with re.IGNORECASE
    regex_ignore_case: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ParserConfig:
        """Create config from a dictionary, ignoring unknown keys."""
        return cls(
            strict_exception_marker=bool(data.get("strict_exception_marker", True)),
            regex_ignore_case=bool(data.get("regex_ignore_case", False)),
        )

    @classmethod
    def load(cls, path: Path) -> ParserConfig:
        """Load configuration from a JSON file."""
        if not path.exists():
            return cls()

        with open(path) as f:
            data = json.load(f)

        return cls.from_dict(data)

    def to_dict(self) -> dict[str, Any]:
        return {
            "strict_exception_marker": self.strict_exception_marker,
            "regex_ignore_case": self.regex_ignore_case,
        }


DEFAULT_CONFIG = ParserConfig()
