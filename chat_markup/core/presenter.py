"""Turn chat messages into display blocks, keeping tokenizer concerns out of the UI."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Set, Tuple

from ..config import MarkupConfig
from ..markup.segments import Segment, SegmentKind
from ..markup.social_card import FIELD_TIME, SocialCard
from ..markup.symbols import normalize_symbols
from ..markup.visibility import AllianceLookup, filter_history_for_viewer
from .logging_utils import get_logger, timed
from .messages import SYSTEM_ID, USER_ID, ChatMessage
from .segment_cache import SegmentCache

logger = get_logger("presenter")


@dataclass(slots=True)
class DisplayBlock:
    """Lightweight description of how to present one segment."""

    index: int
    kind: SegmentKind
    body: str
    markdown: bool = True
    normalized: bool = False
    collapsible: bool = False
    collapsed: bool = False
    card: Optional[SocialCard] = None


class CollapseState:
    """
    Per-segment expand/collapse toggles for chain-of-thought blocks.

    Keyed by ``(message id, segment index)``; the index is stable because a message's
    segments are rebuilt identically from the same content.
    """

    def __init__(self, *, expanded_by_default: bool = False) -> None:
        self._default = expanded_by_default
        self._flipped: Set[Tuple[str, int]] = set()
        self._lock = threading.Lock()

    def is_expanded(self, message_id: str, index: int) -> bool:
        with self._lock:
            flipped = (message_id, index) in self._flipped
        return self._default != flipped

    def toggle(self, message_id: str, index: int) -> bool:
        """Flip the block and return its new expanded state."""
        key = (message_id, index)
        with self._lock:
            if key in self._flipped:
                self._flipped.discard(key)
            else:
                self._flipped.add(key)
        return self.is_expanded(message_id, index)

    def forget(self, message_id: str) -> None:
        with self._lock:
            self._flipped = {key for key in self._flipped if key[0] != message_id}


class MessagePresenter:
    """Formatting helpers that compose the tokenizer, symbol normalizer and cache."""

    def __init__(
        self,
        config: Optional[MarkupConfig] = None,
        *,
        cache: Optional[SegmentCache] = None,
        collapse_state: Optional[CollapseState] = None,
    ) -> None:
        self.config = config or MarkupConfig()
        self.cache = cache or SegmentCache(
            max_entries=self.config.cache_size,
            ttl_seconds=self.config.cache_ttl_seconds,
        )
        self.collapse_state = collapse_state or CollapseState(
            expanded_by_default=self.config.expand_thoughts
        )

    def present(self, message: ChatMessage) -> List[DisplayBlock]:
        if message.is_error:
            # Errors are shown literally, never parsed as markup.
            return [DisplayBlock(0, SegmentKind.PLAIN_TEXT, message.content, markdown=False)]
        if message.is_system:
            return [DisplayBlock(0, SegmentKind.PLAIN_TEXT, message.content)]

        blocks: List[DisplayBlock] = []
        for index, segment in enumerate(self.cache.get_segments(message.content)):
            block = self._block_for(message.id, index, segment)
            if block is not None:
                blocks.append(block)
        return blocks

    def present_all(self, messages: Iterable[ChatMessage]) -> Dict[str, List[DisplayBlock]]:
        messages = list(messages)
        with timed(logger, "present-transcript", extra={"messages": len(messages)}):
            return {message.id: self.present(message) for message in messages}

    def history_for(
        self,
        messages: Iterable[ChatMessage],
        viewer_id: str,
        *,
        alliance_of: Optional[AllianceLookup] = None,
    ) -> List[ChatMessage]:
        """History as another participant should receive it, using the configured mask label."""
        return filter_history_for_viewer(
            messages,
            viewer_id,
            alliance_of=alliance_of,
            hidden_label=self.config.hidden_state_label,
        )

    def _block_for(self, message_id: str, index: int, segment: Segment) -> Optional[DisplayBlock]:
        kind = segment.kind
        if kind is SegmentKind.PLAIN_TEXT:
            if not segment.text.strip():
                return None
            return DisplayBlock(index, kind, segment.text)
        if kind is SegmentKind.CODE_FENCE:
            return DisplayBlock(index, kind, segment.text, markdown=False)
        if kind is SegmentKind.ACTION:
            return DisplayBlock(index, kind, segment.text, markdown=False)
        if kind is SegmentKind.LOGIC_THOUGHT:
            expanded = self.collapse_state.is_expanded(message_id, index)
            return DisplayBlock(
                index,
                kind,
                normalize_symbols(segment.text),
                normalized=True,
                collapsible=True,
                collapsed=not expanded,
            )
        if kind is SegmentKind.LOGIC_RESULT:
            return DisplayBlock(index, kind, normalize_symbols(segment.text), normalized=True)
        if kind is SegmentKind.SOCIAL_CARD:
            fields = dict(segment.fields)
            if not fields.get(FIELD_TIME):
                fields[FIELD_TIME] = self.config.unknown_time_label
            return DisplayBlock(index, kind, "", markdown=False, card=SocialCard(fields))
        # THOUGHT and WHISPER
        return DisplayBlock(index, kind, segment.text)


__all__ = [
    "USER_ID",
    "SYSTEM_ID",
    "ChatMessage",
    "DisplayBlock",
    "CollapseState",
    "MessagePresenter",
]
