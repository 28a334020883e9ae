"""Read-side helpers for the rendering layer: previews, manifests, text stats."""

from .manifest import article_manifest, manifest_json
from .preview import SocialPreview, build_preview, reading_minutes
from .text import clean_html_to_text, word_count

__all__ = [
    "article_manifest",
    "manifest_json",
    "SocialPreview",
    "build_preview",
    "reading_minutes",
    "clean_html_to_text",
    "word_count",
]
