from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from ..errors import LoadError
from ..models import LoadedArticle
from ..store import MetadataRegistry, PageStore
from ..store.page_store import PageInput
from ..utils.logging import get_logger
from ..utils.settings import StoreSettings

logger = get_logger("article_store.loaders.yaml")

ARTICLE_FILENAME = "article.yaml"


def _section(data: Mapping[str, Any], name: str, path: Path) -> Mapping[Any, Any]:
    value = data.get(name)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise LoadError(path, f"'{name}' must be a mapping, got {type(value).__name__}")
    return value


def build_article(
    metadata: Mapping[str, Any],
    pages: PageInput,
    withdrawn: Optional[PageInput] = None,
    *,
    settings: Optional[StoreSettings] = None,
    source: Optional[Path] = None,
) -> LoadedArticle:
    """Validate raw authored input and return a registry and a sealed store."""
    settings = settings or StoreSettings()
    registry = MetadataRegistry.create(metadata)
    store = PageStore.build(
        pages,
        withdrawn=withdrawn,
        archive_withdrawn=settings.archive_withdrawn,
    )
    logger.info(
        "Loaded '%s': %d page(s), %d withdrawn",
        registry.slug,
        store.size(),
        len(store.withdrawn_keys()),
    )
    return LoadedArticle(metadata=registry, pages=store, source=source)


def load_yaml_article(path: Path | str, *, settings: Optional[StoreSettings] = None) -> LoadedArticle:
    """Load ``article.yaml`` (or the file at ``path``) into a ``LoadedArticle``.

    YAML structure:
      - Top-level mapping
      - Key ``metadata``: flat mapping of record fields (required)
      - Key ``pages``: mapping of integer page key to fragment text
      - Key ``withdrawn``: same shape as ``pages``; keys stay reserved

    Unknown top-level keys are ignored for forward compatibility. Entries an
    author comments out in YAML are simply absent.
    """
    article_path = Path(path)
    if article_path.is_dir():
        article_path = article_path / ARTICLE_FILENAME
    if not article_path.exists():
        raise LoadError(article_path, "article file not found")

    logger.debug("Reading %s", article_path)
    try:
        with article_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise LoadError(article_path, f"invalid YAML: {exc}") from exc

    if not isinstance(data, Mapping):
        raise LoadError(article_path, "top level must be a mapping")
    if "metadata" not in data:
        raise LoadError(article_path, "missing 'metadata' section")

    return build_article(
        _section(data, "metadata", article_path),
        _section(data, "pages", article_path),
        _section(data, "withdrawn", article_path),
        settings=settings,
        source=article_path.parent,
    )
