"""Loaders that build articles from authored sources (YAML or legacy PHP)."""

from .yaml_loader import ARTICLE_FILENAME, build_article, load_yaml_article
from .php_import import (
    INFOS_FILENAME,
    PAGES_FILENAME,
    PhpEntry,
    legacy_metadata,
    load_php_article,
    parse_php_array,
)

__all__ = [
    "ARTICLE_FILENAME",
    "build_article",
    "load_yaml_article",
    "INFOS_FILENAME",
    "PAGES_FILENAME",
    "PhpEntry",
    "legacy_metadata",
    "load_php_article",
    "parse_php_array",
]
