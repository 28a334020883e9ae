"""Command line entrypoint for the article store.

Loads one article directory or a whole content root, validates every
metadata record and page store, and reports what was found:
1) load settings (.env aware)
2) build the articles
3) log a summary, or print JSON manifests with --json
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional, Sequence

from dotenv import load_dotenv

from .catalog import ArticleCatalog, is_article_dir, load_article
from .errors import ArticleError
from .models import LoadedArticle
from .output import manifest_json
from .utils.logging import configure_logging, get_logger
from .utils.settings import StoreSettings


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Validate article sources and summarize their page stores"
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Article directory or content root (default: $ARTICLE_CONTENT_ROOT)",
    )
    parser.add_argument(
        "--archive-withdrawn",
        action="store_true",
        help="Keep the text of withdrawn pages so it can be looked up by key",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print a JSON manifest of the loaded articles to stdout",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity",
    )
    return parser.parse_args(argv)


def _load(path: Path, settings: StoreSettings) -> List[LoadedArticle]:
    if is_article_dir(path):
        return [load_article(path, settings=settings)]
    return list(ArticleCatalog(path, settings=settings).reload())


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_dotenv(override=False)
    args = parse_args(argv)
    configure_logging(level=args.log_level)
    logger = get_logger("article_store.cli")

    try:
        settings = StoreSettings()
        if args.archive_withdrawn:
            settings.archive_withdrawn = True
        path = Path(args.path) if args.path else settings.content_root
        logger.info("Loading articles from %s", path)
        articles = _load(path, settings)
    except ArticleError as exc:
        logger.error("Failed to load articles: %s", exc)
        return 1

    for article in articles:
        logger.info(
            "%s: %d page(s), %d withdrawn, next free key %d",
            article.slug,
            article.pages.size(),
            len(article.pages.withdrawn_keys()),
            article.pages.next_key(settings.key_stride),
        )
    logger.info("Validated %d article(s)", len(articles))

    if args.json:
        print(manifest_json(articles, settings=settings))
    return 0


if __name__ == "__main__":  # pragma: no cover - script entrypoint
    raise SystemExit(main())
