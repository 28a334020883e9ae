from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterator, List, Mapping, Optional

from .errors import LoadError, NotFoundError
from .loaders import (
    ARTICLE_FILENAME,
    INFOS_FILENAME,
    PAGES_FILENAME,
    load_php_article,
    load_yaml_article,
)
from .models import LoadedArticle
from .utils.logging import get_logger
from .utils.settings import StoreSettings

logger = get_logger("article_store.catalog")


def is_article_dir(path: Path) -> bool:
    return (path / ARTICLE_FILENAME).is_file() or (path / PAGES_FILENAME).is_file()


def load_article(directory: Path | str, *, settings: Optional[StoreSettings] = None) -> LoadedArticle:
    """Load one article directory, preferring ``article.yaml`` over legacy PHP files."""
    directory = Path(directory)
    if (directory / ARTICLE_FILENAME).is_file():
        return load_yaml_article(directory, settings=settings)
    if (directory / INFOS_FILENAME).is_file() or (directory / PAGES_FILENAME).is_file():
        return load_php_article(directory, settings=settings)
    raise LoadError(directory, "no article source found")


def discover_article_dirs(root: Path | str) -> List[Path]:
    root = Path(root)
    if not root.is_dir():
        raise LoadError(root, "content root is not a directory")
    found = {p.parent for p in root.rglob(ARTICLE_FILENAME)}
    found.update(p.parent for p in root.rglob(PAGES_FILENAME))
    return sorted(found)


class ArticleCatalog:
    """All articles below a content root, indexed by slug.

    ``reload()`` loads every article into a fresh mapping and only then swaps
    it in, so readers keep a consistent snapshot when a reload fails part way.
    """

    def __init__(self, root: Path | str | None = None, *, settings: Optional[StoreSettings] = None) -> None:
        self.settings = settings or StoreSettings()
        self.root = Path(root) if root is not None else self.settings.content_root
        self._articles: Mapping[str, LoadedArticle] = {}

    def _load_all(self) -> Dict[str, LoadedArticle]:
        articles: Dict[str, LoadedArticle] = {}
        for directory in discover_article_dirs(self.root):
            article = load_article(directory, settings=self.settings)
            previous = articles.get(article.slug)
            if previous is not None:
                raise LoadError(
                    directory,
                    f"slug '{article.slug}' already used by {previous.source}",
                )
            articles[article.slug] = article
        return articles

    def reload(self) -> "ArticleCatalog":
        articles = self._load_all()
        self._articles = articles
        logger.info("Catalog loaded: %d article(s) from %s", len(articles), self.root)
        return self

    def get(self, slug: str) -> LoadedArticle:
        try:
            return self._articles[slug]
        except KeyError:
            raise NotFoundError(slug, what="article") from None

    def snapshot(self) -> Mapping[str, LoadedArticle]:
        return self._articles

    def slugs(self) -> List[str]:
        return sorted(self._articles)

    def __len__(self) -> int:
        return len(self._articles)

    def __iter__(self) -> Iterator[LoadedArticle]:
        articles = self._articles
        for slug in sorted(articles):
            yield articles[slug]
