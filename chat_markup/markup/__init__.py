"""Message-content tokenizer, social-card scanning and symbol normalization."""

from .segments import Segment, SegmentKind
from .symbols import normalize_symbols
from .tokenizer import tokenize

__all__ = ["Segment", "SegmentKind", "normalize_symbols", "tokenize"]
