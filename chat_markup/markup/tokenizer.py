"""
Reading Guide
--------------
Purpose:
- Classify one raw chat message into an ordered list of typed `Segment`s.
- Model output mixes several informal sub-languages in one blob: code fences,
  logic-mode `[[THOUGHT]]`/`[[RESULT]]` pairs, social cards, `[thought]` asides,
  `{whisper}` asides and `//action//` asides.

Flow (earlier stages win; their output is never re-examined):
  1. `split_code_fences`        -> CODE_FENCE spans, verbatim
  2. `tokenize_logic_span`      -> LOGIC_THOUGHT / LOGIC_RESULT / PLAIN_TEXT
  3. `tokenize_social_span`     -> SOCIAL_CARD, or WHISPER for other brace blocks
  4. `tokenize_inline_markers`  -> THOUGHT / WHISPER / ACTION / PLAIN_TEXT

Design notes:
- Every stage is a pure function over an immutable string with explicit cursor
  positions; there is no shared iterator state between calls.
- Nothing here raises on odd input. Unbalanced or truncated markup degrades to
  PLAIN_TEXT so it is displayed literally.
- Brace matching is shortest-match; nested braces are not understood.
"""

from __future__ import annotations

import re
from typing import Iterator, List, Optional, Pattern, Tuple

from ..core.logging_utils import get_logger
from .segments import Segment, SegmentKind
from .social_card import is_social_card, parse_card_fields

__all__ = [
    "tokenize",
    "split_code_fences",
    "tokenize_logic_span",
    "tokenize_social_span",
    "tokenize_inline_markers",
]

logger = get_logger("markup.tokenizer")

_CODE_FENCE_RE: Pattern[str] = re.compile(r"```.*?```", flags=re.DOTALL)

_LOGIC_MARKERS: Tuple[str, ...] = ("[[THOUGHT]]", "[[RESULT]]")
_LOGIC_PAIR_RE: Pattern[str] = re.compile(
    r"\[\[THOUGHT\]\](?P<thought>.*?)\[\[/THOUGHT\]\]|\[\[RESULT\]\](?P<result>.*?)\[\[/RESULT\]\]",
    flags=re.DOTALL,
)

_BRACE_BLOCK_RE: Pattern[str] = re.compile(r"\{.*?\}", flags=re.DOTALL)

# Alternation order is the tie-break at a given position: url, bracket, brace, slash.
# A URL run stops at brackets and braces so glued asides are still scanned.
_INLINE_RE: Pattern[str] = re.compile(
    r"(?P<url>[A-Za-z][A-Za-z0-9+.\-]*://[^\s\[\]{}]+)"
    r"|(?P<thought>\[.*?\])"
    r"|(?P<whisper>\{.*?\})"
    r"|(?P<action>//.*?//)",
    flags=re.DOTALL,
)


def split_code_fences(text: str) -> Iterator[Tuple[bool, str]]:
    """Yield ``(is_fence, span)`` pairs in source order; empty spans are skipped."""
    cursor = 0
    for match in _CODE_FENCE_RE.finditer(text):
        if match.start() > cursor:
            yield False, text[cursor:match.start()]
        yield True, match.group(0)
        cursor = match.end()
    if cursor < len(text):
        yield False, text[cursor:]


def tokenize_logic_span(span: str) -> Optional[List[Segment]]:
    """
    Return the logic-mode segments for ``span``, or ``None`` when the span holds no
    logic marker and should continue to the social-card stage.

    A span holding a marker is always consumed here; without a complete pair it
    comes back as a single PLAIN_TEXT segment.
    """
    if not any(marker in span for marker in _LOGIC_MARKERS):
        return None

    segments: List[Segment] = []
    cursor = 0
    for match in _LOGIC_PAIR_RE.finditer(span):
        _append_unless_blank(segments, span[cursor:match.start()])
        if match.group("thought") is not None:
            segments.append(Segment(SegmentKind.LOGIC_THOUGHT, match.group("thought").strip()))
        else:
            segments.append(Segment(SegmentKind.LOGIC_RESULT, match.group("result").strip()))
        cursor = match.end()
    _append_unless_blank(segments, span[cursor:])
    return segments


def _append_unless_blank(segments: List[Segment], text: str) -> None:
    if text.strip():
        segments.append(Segment.plain(text))


def tokenize_social_span(span: str) -> List[Segment]:
    """Pull social cards and other brace blocks out of ``span``; the rest goes inline."""
    segments: List[Segment] = []
    cursor = 0
    for match in _BRACE_BLOCK_RE.finditer(span):
        if match.start() > cursor:
            segments.extend(tokenize_inline_markers(span[cursor:match.start()]))
        block = match.group(0)
        if is_social_card(block):
            segments.append(Segment.social_card(parse_card_fields(block)))
        else:
            segments.append(Segment(SegmentKind.WHISPER, block[1:-1]))
        cursor = match.end()
    if cursor < len(span):
        segments.extend(tokenize_inline_markers(span[cursor:]))
    return segments


def tokenize_inline_markers(span: str) -> List[Segment]:
    """
    Scan for the leftmost ``[...]``, ``{...}`` or ``//...//`` run.

    URLs are consumed as plain text so their ``//`` never opens an action, and an
    action run containing ``http`` stays plain text. Neighbouring plain pieces are
    merged into one segment.
    """
    segments: List[Segment] = []
    pending: List[str] = []
    cursor = 0

    def flush() -> None:
        if pending:
            segments.append(Segment.plain("".join(pending)))
            pending.clear()

    for match in _INLINE_RE.finditer(span):
        if match.start() > cursor:
            pending.append(span[cursor:match.start()])
        cursor = match.end()
        run = match.group(0)
        kind = match.lastgroup
        if kind == "thought":
            flush()
            segments.append(Segment(SegmentKind.THOUGHT, run[1:-1]))
        elif kind == "whisper":
            flush()
            segments.append(Segment(SegmentKind.WHISPER, run[1:-1]))
        elif kind == "action" and "http" not in run:
            flush()
            segments.append(Segment(SegmentKind.ACTION, run[2:-2]))
        else:
            pending.append(run)
    if cursor < len(span):
        pending.append(span[cursor:])
    flush()
    return segments


def tokenize(text: str) -> List[Segment]:
    """
    Classify a raw message into ordered segments.

    Total over ``str``: malformed markup becomes PLAIN_TEXT rather than an error.
    Empty input yields an empty list.
    """
    if not isinstance(text, str):
        raise TypeError(f"tokenize() expects str, got {type(text).__name__}")

    segments: List[Segment] = []
    for is_fence, span in split_code_fences(text):
        if is_fence:
            segments.append(Segment(SegmentKind.CODE_FENCE, span))
            continue
        logic = tokenize_logic_span(span)
        if logic is not None:
            segments.extend(logic)
            continue
        segments.extend(tokenize_social_span(span))

    logger.debug("Tokenized %d chars into %d segments", len(text), len(segments))
    return segments
