from __future__ import annotations

from pathlib import Path
from typing import Any


class ArticleError(Exception):
    """Base class for every error raised while building or reading an article."""


class ValidationError(ArticleError, ValueError):
    """Raised when a metadata field is missing, empty or malformed."""

    def __init__(self, field: str, message: str = "is required") -> None:
        self.field = field
        super().__init__(f"{field}: {message}")


class InvalidKeyError(ArticleError, ValueError):
    """Raised for page keys that are not non-negative integers."""

    def __init__(self, key: Any, message: str = "page key must be a non-negative integer") -> None:
        self.key = key
        super().__init__(f"{message} (got {key!r})")


class DuplicateKeyError(ArticleError, ValueError):
    """Raised when a page key is already used in a store."""

    def __init__(self, key: int) -> None:
        self.key = key
        super().__init__(f"page key {key} is already used")


class InvalidFragmentError(ArticleError, ValueError):
    """Raised when a content fragment is empty or not text."""

    def __init__(self, key: Any, message: str = "fragment must be non-empty text") -> None:
        self.key = key
        super().__init__(f"page {key}: {message}")


class NotFoundError(ArticleError, LookupError):
    """Raised when a lookup by key or slug misses."""

    def __init__(self, key: Any, what: str = "page") -> None:
        self.key = key
        super().__init__(f"{what} {key!r} not found")


class StoreSealedError(ArticleError, RuntimeError):
    """Raised when a sealed page store is asked to change."""


class ConfigError(ArticleError, ValueError):
    """Raised when a setting from the environment is invalid."""


class LoadError(ArticleError):
    """Raised when an authored source file is missing or structurally invalid."""

    def __init__(self, path: Path | str, message: str) -> None:
        self.path = Path(path)
        super().__init__(f"{self.path}: {message}")
