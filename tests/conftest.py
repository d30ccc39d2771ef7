from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from chat_markup.config import MarkupConfig  # noqa: E402
from chat_markup.core.messages import ChatMessage  # noqa: E402

_ENV_KEYS = (
    "CHAT_MARKUP_CACHE_SIZE",
    "CHAT_MARKUP_CACHE_TTL",
    "CHAT_MARKUP_EXPAND_THOUGHTS",
    "CHAT_MARKUP_UNKNOWN_TIME",
    "CHAT_MARKUP_HIDDEN_STATE",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture()
def sample_config() -> MarkupConfig:
    return MarkupConfig(cache_size=8, unknown_time_label="Sometime")


@pytest.fixture()
def social_card_text() -> str:
    return (
        "{\n"
        '  "Virtual Timeline Time": "Day 2, 09:14",\n'
        '  "Language": "Morning, everyone!",\n'
        '  "Specific Actions": "waves from the doorway",\n'
        '  "Facial Expressions": "bright smile",\n'
        '  "Psychological State": "nervous about the vote",\n'
        '  "Non-specific Actions": "heads to the kitchen"\n'
        "}"
    )


@pytest.fixture()
def transcript() -> list:
    return [
        ChatMessage(id="1", sender_id="user", content="Who took the last cookie?", timestamp=0.0),
        ChatMessage(
            id="2",
            sender_id="gemini",
            content="[[THOUGHT]]They suspect me.[[/THOUGHT]][[RESULT]]Not me![[/RESULT]]",
            timestamp=60_000.0,
        ),
        ChatMessage(
            id="3",
            sender_id="gpt",
            content='{"Language": "It was the cat.", "Psychological State": "guilty"}',
            timestamp=120_000.0,
        ),
    ]
