"""Typed models used across the application."""

from .metadata import ArticleMetadata, FIELD_ORDER, OPTIONAL_FIELDS
from .article import LoadedArticle

__all__ = ["ArticleMetadata", "FIELD_ORDER", "OPTIONAL_FIELDS", "LoadedArticle"]
