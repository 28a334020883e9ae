from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from ..store import MetadataRegistry, PageStore
from .text import word_count

DEFAULT_READING_WPM = 200


@dataclass(frozen=True, slots=True)
class SocialPreview:
    """Fields a renderer needs for the page header and link previews."""

    slug: str
    title: str
    subtitle: str
    description: str
    image: str
    image_width: int
    image_height: int
    image_alt: str
    thumbnail: str
    published_on: str
    reading_minutes: int

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def reading_minutes(pages: PageStore, *, wpm: int = DEFAULT_READING_WPM) -> int:
    """Estimated reading time of the active pages, rounded up.

    Returns 0 for an article without pages and at least 1 otherwise.
    """
    if pages.size() == 0:
        return 0
    words = word_count(pages.ordered_fragments())
    return max(1, math.ceil(words / max(wpm, 1)))


def build_preview(
    metadata: MetadataRegistry,
    pages: PageStore,
    *,
    wpm: Optional[int] = None,
) -> SocialPreview:
    return SocialPreview(
        slug=metadata.slug,
        title=metadata.main_title,
        subtitle=metadata.sub_title,
        description=metadata.synopsis,
        image=metadata.hero_image,
        image_width=metadata.hero_image_width,
        image_height=metadata.hero_image_height,
        # the caption doubles as alt text; fall back to the subtitle
        image_alt=metadata.hero_image_caption or metadata.sub_title,
        thumbnail=metadata.thumbnail,
        published_on=metadata.published_on.isoformat(),
        reading_minutes=reading_minutes(pages, wpm=wpm or DEFAULT_READING_WPM),
    )
