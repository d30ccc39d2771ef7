from __future__ import annotations

import threading
import time
from collections import OrderedDict
from typing import Callable, Dict, List, Optional, Tuple

from ..markup.segments import Segment
from ..markup.tokenizer import tokenize
from .logging_utils import get_logger

logger = get_logger("segment_cache")

TokenizerFn = Callable[[str], List[Segment]]


class SegmentCache:
    """
    In-memory memo of tokenized messages keyed on the raw content string.
    Re-rendering an unchanged message returns the stored segments instead of
    tokenizing again. Nothing is persisted.
    """

    def __init__(
        self,
        *,
        max_entries: int = 512,
        ttl_seconds: Optional[float] = None,
        tokenizer: TokenizerFn = tokenize,
    ) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._max_entries = max_entries
        self._ttl = ttl_seconds
        self._tokenizer = tokenizer
        self._entries: "OrderedDict[str, Tuple[Tuple[Segment, ...], float]]" = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    # ----------------------
    # Lookup
    # ----------------------

    def get_segments(self, content: str) -> List[Segment]:
        now = time.monotonic()
        with self._lock:
            entry = self._entries.get(content)
            if entry is not None:
                segments, expire = entry
                if expire >= now:
                    self._entries.move_to_end(content)
                    self._hits += 1
                    return list(segments)
                del self._entries[content]
            self._misses += 1

        # Tokenize outside the lock; concurrent misses may both store the same result.
        segments = tuple(self._tokenizer(content))
        expire = now + self._ttl if self._ttl else float("inf")
        with self._lock:
            self._entries[content] = (segments, expire)
            self._entries.move_to_end(content)
            while len(self._entries) > self._max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Evicted cached segments for %d-char message", len(evicted))
        return list(segments)

    # ----------------------
    # Maintenance
    # ----------------------

    def invalidate(self, content: str) -> None:
        with self._lock:
            self._entries.pop(content, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {"hits": self._hits, "misses": self._misses, "size": len(self._entries)}

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
