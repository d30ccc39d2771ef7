import pytest

from chat_markup.core import segment_cache as segment_cache_module
from chat_markup.core.segment_cache import SegmentCache
from chat_markup.markup.segments import Segment, SegmentKind
from chat_markup.markup.tokenizer import tokenize


class CountingTokenizer:
    def __init__(self):
        self.calls = []

    def __call__(self, text):
        self.calls.append(text)
        return tokenize(text)


def test_repeat_lookups_tokenize_once():
    tokenizer = CountingTokenizer()
    cache = SegmentCache(tokenizer=tokenizer)

    first = cache.get_segments("[hm] hi")
    second = cache.get_segments("[hm] hi")

    assert first == second == [Segment(SegmentKind.THOUGHT, "hm"), Segment.plain(" hi")]
    assert tokenizer.calls == ["[hm] hi"]
    assert cache.stats() == {"hits": 1, "misses": 1, "size": 1}


def test_returned_lists_are_copies():
    cache = SegmentCache()
    cache.get_segments("hello").append(Segment.plain("junk"))
    assert cache.get_segments("hello") == [Segment.plain("hello")]


def test_least_recently_used_entry_is_evicted():
    tokenizer = CountingTokenizer()
    cache = SegmentCache(max_entries=2, tokenizer=tokenizer)

    cache.get_segments("a")
    cache.get_segments("b")
    cache.get_segments("a")
    cache.get_segments("c")
    cache.get_segments("a")
    cache.get_segments("b")

    assert tokenizer.calls == ["a", "b", "c", "b"]
    assert len(cache) == 2


def test_entries_expire_after_ttl(monkeypatch):
    clock = {"now": 100.0}
    monkeypatch.setattr(segment_cache_module.time, "monotonic", lambda: clock["now"])
    tokenizer = CountingTokenizer()
    cache = SegmentCache(ttl_seconds=5, tokenizer=tokenizer)

    cache.get_segments("x")
    clock["now"] = 104.0
    cache.get_segments("x")
    clock["now"] = 106.0
    cache.get_segments("x")

    assert tokenizer.calls == ["x", "x"]


def test_invalidate_and_clear():
    tokenizer = CountingTokenizer()
    cache = SegmentCache(tokenizer=tokenizer)

    cache.get_segments("x")
    cache.invalidate("x")
    cache.get_segments("x")
    cache.clear()

    assert tokenizer.calls == ["x", "x"]
    assert cache.stats() == {"hits": 0, "misses": 0, "size": 0}


def test_rejects_non_positive_size():
    with pytest.raises(ValueError):
        SegmentCache(max_entries=0)
