from __future__ import annotations

from typing import Any, Mapping, Union

from ..models.metadata import FIELD_ORDER, OPTIONAL_FIELDS, ArticleMetadata
from ..utils.logging import get_logger

logger = get_logger("article_store.store.registry")

_ACCESSORS = frozenset(FIELD_ORDER + OPTIONAL_FIELDS)


class MetadataRegistry:
    """Holds the single validated metadata record of an article.

    Field accessors (``registry.slug``, ``registry.main_title``, ...) read the
    held record. Corrections go through :meth:`replace`, which validates a
    whole new record before swapping it in, so readers never observe a
    partially updated record.
    """

    __slots__ = ("_record",)

    def __init__(self, record: ArticleMetadata) -> None:
        if not isinstance(record, ArticleMetadata):
            raise TypeError(f"expected ArticleMetadata, got {type(record).__name__}")
        self._record = record

    @classmethod
    def create(cls, fields: Mapping[str, Any]) -> "MetadataRegistry":
        return cls(ArticleMetadata.create(fields))

    @property
    def record(self) -> ArticleMetadata:
        return self._record

    def replace(self, new: Union[ArticleMetadata, Mapping[str, Any]]) -> ArticleMetadata:
        """Swap in a complete new record and return the previous one."""
        record = new if isinstance(new, ArticleMetadata) else ArticleMetadata.create(new)
        previous, self._record = self._record, record
        logger.info("Replaced metadata for '%s'", record.slug)
        return previous

    def __getattr__(self, name: str) -> Any:
        if name in _ACCESSORS:
            return getattr(self._record, name)
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    def __setattr__(self, name: str, value: Any) -> None:
        if name != "_record":
            raise AttributeError(f"metadata field '{name}' is read-only; use replace()")
        object.__setattr__(self, name, value)

    def __repr__(self) -> str:
        return f"MetadataRegistry(slug={self._record.slug!r})"
