from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional

from ..models import LoadedArticle
from ..utils.settings import StoreSettings
from .preview import build_preview
from .text import word_count


def article_manifest(article: LoadedArticle, *, settings: Optional[StoreSettings] = None) -> Dict[str, Any]:
    """Summarize an article for build tooling.

    Page keys are listed in render order; withdrawn keys are listed so
    tooling can tell a reserved key from a free one.
    """
    settings = settings or StoreSettings()
    pages = article.pages
    return {
        "slug": article.slug,
        "source": str(article.source) if article.source else None,
        "metadata": article.metadata.record.as_dict(),
        "preview": build_preview(article.metadata, pages, wpm=settings.reading_wpm).as_dict(),
        "page_keys": list(pages.keys()),
        "withdrawn_keys": list(pages.withdrawn_keys()),
        "next_key": pages.next_key(settings.key_stride),
        "word_count": word_count(pages.ordered_fragments()),
    }


def manifest_json(articles: Iterable[LoadedArticle], *, settings: Optional[StoreSettings] = None) -> str:
    payload = {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "articles": [article_manifest(a, settings=settings) for a in articles],
    }
    return json.dumps(payload, ensure_ascii=False, indent=2)
