from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..store import MetadataRegistry, PageStore


@dataclass(frozen=True, slots=True)
class LoadedArticle:
    """A metadata registry and a sealed page store built from one source."""

    metadata: "MetadataRegistry"
    pages: "PageStore"
    source: Optional[Path] = None

    @property
    def slug(self) -> str:
        return self.metadata.slug
