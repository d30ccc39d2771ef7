"""Plain-text and JSON export of selected chat messages."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Iterable, Mapping, Optional

from .messages import USER_ID, ChatMessage

USER_LABEL = "Me"
UNKNOWN_SENDER_LABEL = "AI"


def _sender_label(sender_id: str, names: Mapping[str, str]) -> str:
    if sender_id == USER_ID:
        return USER_LABEL
    return names.get(sender_id) or UNKNOWN_SENDER_LABEL


def export_text(
    messages: Iterable[ChatMessage],
    *,
    names: Optional[Mapping[str, str]] = None,
    tz=None,
) -> str:
    """
    Render ``[HH:MM:SS] Name: content`` lines separated by blank lines.

    ``names`` maps participant ids to display names (nickname first, then name).
    Content is exported raw, markup included.
    """
    names = names or {}
    lines = []
    for message in messages:
        stamp = datetime.fromtimestamp(message.timestamp / 1000, tz=tz).strftime("%H:%M:%S")
        lines.append(f"[{stamp}] {_sender_label(message.sender_id, names)}: {message.content}")
    return "\n\n".join(lines)


def export_json(messages: Iterable[ChatMessage]) -> str:
    return json.dumps([message.to_dict() for message in messages], indent=2, ensure_ascii=False)


__all__ = ["export_text", "export_json", "USER_LABEL", "UNKNOWN_SENDER_LABEL"]
