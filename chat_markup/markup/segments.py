"""Typed segments produced by the message-content tokenizer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict

__all__ = ["SegmentKind", "Segment"]


class SegmentKind(str, Enum):
    PLAIN_TEXT = "text"
    CODE_FENCE = "code"
    THOUGHT = "thought"
    WHISPER = "whisper"
    ACTION = "action"
    LOGIC_THOUGHT = "logic_thought"
    LOGIC_RESULT = "logic_result"
    SOCIAL_CARD = "social_card"


# Delimiters stripped by the tokenizer, re-added by ``Segment.raw``.
_WRAPPERS: Dict[SegmentKind, tuple[str, str]] = {
    SegmentKind.THOUGHT: ("[", "]"),
    SegmentKind.WHISPER: ("{", "}"),
    SegmentKind.ACTION: ("//", "//"),
    SegmentKind.LOGIC_THOUGHT: ("[[THOUGHT]]", "[[/THOUGHT]]"),
    SegmentKind.LOGIC_RESULT: ("[[RESULT]]", "[[/RESULT]]"),
}


@dataclass(frozen=True, slots=True)
class Segment:
    """
    One classified, ordered unit of a tokenized message.

    Fields:
    - kind: SegmentKind
    - text: literal payload with wrapping delimiters stripped ("" for social cards)
    - fields: social-card key/value pairs in source order (empty for other kinds)
    """
    kind: SegmentKind
    text: str = ""
    fields: Dict[str, str] = field(default_factory=dict, compare=True, hash=False)

    @classmethod
    def plain(cls, text: str) -> "Segment":
        return cls(SegmentKind.PLAIN_TEXT, text)

    @classmethod
    def social_card(cls, fields: Dict[str, str]) -> "Segment":
        return cls(SegmentKind.SOCIAL_CARD, "", dict(fields))

    @property
    def is_logic(self) -> bool:
        return self.kind in (SegmentKind.LOGIC_THOUGHT, SegmentKind.LOGIC_RESULT)

    def raw(self) -> str:
        """Return the text with the delimiters the tokenizer stripped put back."""
        wrapper = _WRAPPERS.get(self.kind)
        if wrapper is None:
            return self.text
        opening, closing = wrapper
        return f"{opening}{self.text}{closing}"

    def to_dict(self) -> Dict[str, object]:
        data: Dict[str, object] = {"kind": self.kind.value, "text": self.text}
        if self.kind is SegmentKind.SOCIAL_CARD:
            data["fields"] = dict(self.fields)
        return data
