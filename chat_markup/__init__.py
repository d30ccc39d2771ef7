"""
chat_markup: tokenizer and display helpers for multi-participant model transcripts.

Raw model output mixes code fences, logic-mode thought/result pairs, social cards
and bracket/brace/slash asides in one string. `tokenize` turns that string into
ordered, typed segments; everything else here composes it for display.
"""

from .markup.segments import Segment, SegmentKind
from .markup.social_card import CARD_FIELDS, SocialCard, parse_card_fields
from .markup.symbols import normalize_symbols
from .markup.tokenizer import tokenize
from .markup.visibility import filter_history_for_viewer
from .config import MarkupConfig
from .core.logging_utils import configure_from
from .core.messages import ChatMessage
from .core.presenter import CollapseState, DisplayBlock, MessagePresenter
from .core.segment_cache import SegmentCache
from .core.transcript import export_json, export_text

__all__ = [
    "Segment",
    "SegmentKind",
    "SocialCard",
    "CARD_FIELDS",
    "parse_card_fields",
    "normalize_symbols",
    "tokenize",
    "filter_history_for_viewer",
    "MarkupConfig",
    "configure_from",
    "ChatMessage",
    "CollapseState",
    "DisplayBlock",
    "MessagePresenter",
    "SegmentCache",
    "export_json",
    "export_text",
]
