"""In-memory article state: the metadata registry and the sparse page store."""

from .page_store import KEY_STRIDE, OrderedFragments, PageStore
from .registry import MetadataRegistry

__all__ = ["KEY_STRIDE", "OrderedFragments", "PageStore", "MetadataRegistry"]
