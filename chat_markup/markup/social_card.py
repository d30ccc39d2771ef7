"""
Social-card detection and lenient field scanning.

A social card is a loosely JSON-shaped block emitted in social mode:

    {
      "Virtual Timeline Time": "Day 2, 09:14",
      "Language": "Morning!",
      "Specific Actions": "waves from the doorway",
      ...
    }

Models routinely emit raw newlines inside values, trailing commas and unquoted
keys, so the block is scanned line by line instead of being handed to a JSON
parser. Nested braces are not supported.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Pattern, Tuple

__all__ = [
    "ANCHOR_PHRASES",
    "FIELD_TIME",
    "FIELD_LANGUAGE",
    "FIELD_SPECIFIC_ACTIONS",
    "FIELD_FACIAL_EXPRESSIONS",
    "FIELD_PSYCHOLOGICAL_STATE",
    "FIELD_NON_SPECIFIC_ACTIONS",
    "CARD_FIELDS",
    "SocialCard",
    "is_social_card",
    "parse_card_fields",
]

FIELD_TIME = "Virtual Timeline Time"
FIELD_LANGUAGE = "Language"
FIELD_SPECIFIC_ACTIONS = "Specific Actions"
FIELD_FACIAL_EXPRESSIONS = "Facial Expressions"
FIELD_PSYCHOLOGICAL_STATE = "Psychological State"
FIELD_NON_SPECIFIC_ACTIONS = "Non-specific Actions"

CARD_FIELDS: Tuple[str, ...] = (
    FIELD_TIME,
    FIELD_LANGUAGE,
    FIELD_SPECIFIC_ACTIONS,
    FIELD_FACIAL_EXPRESSIONS,
    FIELD_PSYCHOLOGICAL_STATE,
    FIELD_NON_SPECIFIC_ACTIONS,
)

# Any one of these marks a brace block as a social card.
ANCHOR_PHRASES: Tuple[str, ...] = (
    FIELD_TIME,
    FIELD_PSYCHOLOGICAL_STATE,
    FIELD_SPECIFIC_ACTIONS,
    FIELD_LANGUAGE,
)

_QUOTES = ('"', "'")

_QUOTED_PAIR = r'"[^"\n]*"\s*:\s*"[^"\n]*"'

# A whole line holding two or more double-quoted "key": "value" pairs.
_MULTI_PAIR_LINE_RE: Pattern[str] = re.compile(
    r"\s*" + _QUOTED_PAIR + r"(?:\s*,\s*" + _QUOTED_PAIR + r")+\s*,?\s*"
)
_PAIR_SEPARATOR_RE: Pattern[str] = re.compile(r'(?<=")\s*,\s*(?=")')


def is_social_card(block: str) -> bool:
    """Substring check for the anchor phrases; case-sensitive."""
    return any(anchor in block for anchor in ANCHOR_PHRASES)


def _strip_quote_pair(value: str) -> str:
    if len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]:
        return value[1:-1]
    return value


def parse_card_fields(block: str) -> Dict[str, str]:
    """
    Scan ``block`` (outer braces included) for ``key: value`` lines.

    The key is everything before the first colon, the value everything after it.
    Later duplicates overwrite earlier values. Lines without a colon are ignored.
    A line that is nothing but double-quoted pairs is split into one entry per pair.
    """
    inner = block[1:-1] if block.startswith("{") and block.endswith("}") else block
    fields: Dict[str, str] = {}
    for line in inner.split("\n"):
        if _MULTI_PAIR_LINE_RE.fullmatch(line):
            for entry in _PAIR_SEPARATOR_RE.split(line):
                _scan_entry(entry, fields)
        else:
            _scan_entry(line, fields)
    return fields


def _scan_entry(entry: str, fields: Dict[str, str]) -> None:
    key, sep, value = entry.partition(":")
    if not sep:
        return
    key = _strip_quote_pair(key.strip())
    value = value.strip()
    if value.endswith(","):
        value = value[:-1]
    fields[key] = _strip_quote_pair(value)


@dataclass(frozen=True, slots=True)
class SocialCard:
    """Read-only view over the fields of a social-card segment."""

    fields: Mapping[str, str] = field(default_factory=dict)

    def get(self, name: str) -> Optional[str]:
        value = self.fields.get(name)
        return value if value else None

    @property
    def time(self) -> Optional[str]:
        return self.get(FIELD_TIME)

    @property
    def language(self) -> Optional[str]:
        return self.get(FIELD_LANGUAGE)

    @property
    def specific_actions(self) -> Optional[str]:
        return self.get(FIELD_SPECIFIC_ACTIONS)

    @property
    def facial_expressions(self) -> Optional[str]:
        return self.get(FIELD_FACIAL_EXPRESSIONS)

    @property
    def psychological_state(self) -> Optional[str]:
        return self.get(FIELD_PSYCHOLOGICAL_STATE)

    @property
    def non_specific_actions(self) -> Optional[str]:
        return self.get(FIELD_NON_SPECIFIC_ACTIONS)

    @property
    def extras(self) -> Dict[str, str]:
        """Fields outside the known vocabulary, in source order."""
        return {k: v for k, v in self.fields.items() if k not in CARD_FIELDS}
