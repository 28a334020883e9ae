from __future__ import annotations

import html
import re
import unicodedata
from typing import Iterable

from bs4 import BeautifulSoup

_whitespace_re = re.compile(r"\s+")
_word_re = re.compile(r"\w+(?:['’-]\w+)*")


def clean_html_to_text(raw_html: str | None) -> str:
    """Clean fragment markup to normalized plain text.

    - Strip tags (custom inline tags included)
    - Unescape HTML entities
    - Unicode normalize (NFKC)
    - Collapse whitespace
    """
    if not raw_html:
        return ""

    soup = BeautifulSoup(raw_html, "html.parser")
    text = soup.get_text(" ")
    text = html.unescape(text)
    text = unicodedata.normalize("NFKC", text)
    text = _whitespace_re.sub(" ", text)
    return text.strip()


def word_count(fragments: Iterable[str]) -> int:
    return sum(len(_word_re.findall(clean_html_to_text(f))) for f in fragments)
