"""Chat message record shared by the presenter, history filter and exporter."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping

USER_ID = "user"
SYSTEM_ID = "SYSTEM"


@dataclass(frozen=True, slots=True)
class ChatMessage:
    id: str
    sender_id: str
    content: str  # raw content with [], {}, // and logic/social markup
    is_error: bool = False
    timestamp: float = 0.0  # epoch milliseconds

    @property
    def is_user(self) -> bool:
        return self.sender_id == USER_ID

    @property
    def is_system(self) -> bool:
        return self.sender_id == SYSTEM_ID

    def with_content(self, content: str) -> "ChatMessage":
        return replace(self, content=content)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "senderId": self.sender_id,
            "content": self.content,
            "timestamp": self.timestamp,
            "isError": self.is_error,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ChatMessage":
        return cls(
            id=str(data["id"]),
            sender_id=str(data.get("senderId", "")),
            content=str(data.get("content", "")),
            is_error=bool(data.get("isError", False)),
            timestamp=float(data.get("timestamp", 0.0) or 0.0),
        )


__all__ = ["USER_ID", "SYSTEM_ID", "ChatMessage"]
