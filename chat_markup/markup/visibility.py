"""
Per-viewer history rewriting.

Before one participant's history is handed to another participant, logic-mode
thoughts from other senders are removed and, unless both belong to the same
alliance, social-card psychological states are masked.
"""

from __future__ import annotations

import re
from typing import Callable, Iterable, List, Optional, Pattern

from ..core.messages import USER_ID, ChatMessage
from .social_card import FIELD_PSYCHOLOGICAL_STATE

__all__ = [
    "AllianceLookup",
    "HIDDEN_STATE_LABEL",
    "strip_logic_thoughts",
    "mask_psychological_state",
    "filter_history_for_viewer",
]

HIDDEN_STATE_LABEL = "[Hidden Logic/Thought]"

AllianceLookup = Callable[[str], Optional[str]]

_LOGIC_THOUGHT_RE: Pattern[str] = re.compile(r"\[\[THOUGHT\]\].*?\[\[/THOUGHT\]\]", flags=re.DOTALL)
_PSYCH_STATE_RE: Pattern[str] = re.compile(
    r'("' + re.escape(FIELD_PSYCHOLOGICAL_STATE) + r'"\s*:\s*")((?:[^"\\]|\\.)*)(")'
)


def strip_logic_thoughts(content: str) -> str:
    return _LOGIC_THOUGHT_RE.sub("", content)


def mask_psychological_state(content: str, label: str = HIDDEN_STATE_LABEL) -> str:
    """Replace quoted "Psychological State" values, keeping the key and quotes."""
    return _PSYCH_STATE_RE.sub(lambda m: f"{m.group(1)}{label}{m.group(3)}", content)


def _same_alliance(viewer_id: str, sender_id: str, alliance_of: AllianceLookup) -> bool:
    viewer_alliance = alliance_of(viewer_id)
    sender_alliance = alliance_of(sender_id)
    return bool(viewer_alliance) and viewer_alliance == sender_alliance


def filter_history_for_viewer(
    messages: Iterable[ChatMessage],
    viewer_id: str,
    *,
    alliance_of: Optional[AllianceLookup] = None,
    hidden_label: str = HIDDEN_STATE_LABEL,
) -> List[ChatMessage]:
    """
    Return the history as ``viewer_id`` should see it.

    User messages and the viewer's own messages pass through untouched. Messages
    whose content ends up blank are dropped.
    """
    lookup: AllianceLookup = alliance_of or (lambda _participant_id: None)
    visible: List[ChatMessage] = []
    for message in messages:
        if message.sender_id in (USER_ID, viewer_id):
            visible.append(message)
            continue
        content = strip_logic_thoughts(message.content)
        if not _same_alliance(viewer_id, message.sender_id, lookup):
            content = mask_psychological_state(content, hidden_label)
        content = content.strip()
        if not content:
            continue
        visible.append(message.with_content(content))
    return visible
