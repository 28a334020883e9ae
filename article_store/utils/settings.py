from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from ..errors import ConfigError

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE_VALUES


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(slots=True)
class StoreSettings:
    archive_withdrawn: bool = field(default_factory=lambda: _env_flag("ARTICLE_ARCHIVE_WITHDRAWN"))
    key_stride: int = field(default_factory=lambda: _env_int("ARTICLE_KEY_STRIDE", 10))
    reading_wpm: int = field(default_factory=lambda: _env_int("ARTICLE_READING_WPM", 200))
    content_root_str: str = field(default_factory=lambda: os.getenv("ARTICLE_CONTENT_ROOT", "articles"))

    def __post_init__(self) -> None:
        for name in ("key_stride", "reading_wpm"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ConfigError(f"{name} must be a positive integer, got {value!r}")

    @property
    def content_root(self) -> Path:
        return Path(self.content_root_str)
