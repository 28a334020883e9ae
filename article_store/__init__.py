"""Top-level package for the article content store.

Holds the validated metadata record and the sparse, integer-keyed page store
that back every article of the static site, plus the loaders that build them
from authored sources and the helpers a renderer reads them through.
"""

from .errors import (
    ArticleError,
    ConfigError,
    DuplicateKeyError,
    InvalidFragmentError,
    InvalidKeyError,
    LoadError,
    NotFoundError,
    StoreSealedError,
    ValidationError,
)
from .models import ArticleMetadata, LoadedArticle
from .store import KEY_STRIDE, MetadataRegistry, OrderedFragments, PageStore

__all__ = [
    "ArticleError",
    "ConfigError",
    "DuplicateKeyError",
    "InvalidFragmentError",
    "InvalidKeyError",
    "LoadError",
    "NotFoundError",
    "StoreSealedError",
    "ValidationError",
    "ArticleMetadata",
    "LoadedArticle",
    "KEY_STRIDE",
    "MetadataRegistry",
    "OrderedFragments",
    "PageStore",
]
