"""Environment-backed configuration helpers for chat_markup consumers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Sequence, Tuple

from dotenv import load_dotenv

from .core.logging_utils import get_logger

logger = get_logger("config")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_ENV_PATHS: Sequence[Path] = (
    PROJECT_ROOT / ".env",
    PROJECT_ROOT / "config" / ".env",
)

_TRUTHY = {"1", "true", "yes", "on"}


def load_env_files(paths: Optional[Iterable[str | Path]] = None) -> Tuple[Path, ...]:
    """
    Load one or more .env files into os.environ without overriding existing keys.
    Returns the files that were processed.
    """
    processed: list[Path] = []
    for raw in paths or DEFAULT_ENV_PATHS:
        path = Path(raw).expanduser()
        if not path.is_file():
            continue
        load_dotenv(dotenv_path=path, override=False)
        processed.append(path)
    return tuple(processed)


def _env_int(name: str, default: Optional[int], *, minimum: int = 0) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", name, raw)
        return default
    if value < minimum:
        logger.warning("Ignoring %s=%r: must be >= %d", name, raw, minimum)
        return default
    return value


def _env_float(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a number", name, raw)
        return default
    if value <= 0:
        logger.warning("Ignoring %s=%r: must be positive", name, raw)
        return default
    return value


@dataclass(slots=True)
class MarkupConfig:
    cache_size: int = 512
    cache_ttl_seconds: Optional[float] = None
    # Chain-of-thought blocks start collapsed unless this is set.
    expand_thoughts: bool = False
    unknown_time_label: str = "Unknown Time"
    hidden_state_label: str = "[Hidden Logic/Thought]"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, *, env_files: Optional[Iterable[str | Path]] = None) -> "MarkupConfig":
        load_env_files(env_files)
        defaults = cls()

        return cls(
            cache_size=_env_int("CHAT_MARKUP_CACHE_SIZE", defaults.cache_size, minimum=1) or defaults.cache_size,
            cache_ttl_seconds=_env_float("CHAT_MARKUP_CACHE_TTL", defaults.cache_ttl_seconds),
            expand_thoughts=os.getenv("CHAT_MARKUP_EXPAND_THOUGHTS", "false").strip().lower() in _TRUTHY,
            unknown_time_label=os.getenv("CHAT_MARKUP_UNKNOWN_TIME", "").strip() or defaults.unknown_time_label,
            hidden_state_label=os.getenv("CHAT_MARKUP_HIDDEN_STATE", "").strip() or defaults.hidden_state_label,
            log_level=os.getenv("LOG_LEVEL", defaults.log_level).strip().upper() or defaults.log_level,
        )


__all__ = ["MarkupConfig", "load_env_files"]
