"""Import articles written for the original PHP site.

Each legacy article directory holds two files that assign a PHP array
literal to a global variable:

* ``article-infos.php``: ``$ARTICLE_INFOS = array("SEO_URL" => "...", ...);``
* ``page-content.php``: ``$PAGES = array(1 => "...", 10 => "...", ...);``

Authors withdrew pages by commenting entries out with ``/* ... */`` or
``//``. The importer keeps those entries as withdrawn pages so their keys
stay reserved. Only the subset of PHP needed for such literals is
understood: integer and quoted keys, quoted or integer values, ``=>`` and
``,``. Anything else raises ``LoadError``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from ..errors import LoadError
from ..models import LoadedArticle
from ..utils.logging import get_logger
from ..utils.settings import StoreSettings
from .yaml_loader import build_article

logger = get_logger("article_store.loaders.php")

INFOS_FILENAME = "article-infos.php"
PAGES_FILENAME = "page-content.php"

LEGACY_METADATA_KEYS = {
    "SEO_URL": "slug",
    "MAIN_TITLE": "main_title",
    "SUB_TITLE": "sub_title",
    "SYNOPSIS": "synopsis",
    "SMALL_PICTURE_FILENAME": "thumbnail",
    "MAIN_PICTURE_FILENAME": "hero_image",
    "MAIN_PICTURE_WIDTH": "hero_image_width",
    "MAIN_PICTURE_HEIGHT": "hero_image_height",
    "MAIN_PICTURE_SUBTITLE": "hero_image_caption",
    "FIRST_PUBLICATION": "published_on",
}

_TOKEN_RE = re.compile(
    r"""
      (?P<block>/\*.*?\*/)
    | (?P<line>(?://|\#)[^\n]*)
    | (?P<dq>"(?:[^"\\]|\\.)*")
    | (?P<sq>'(?:[^'\\]|\\.)*')
    | (?P<int>-?\d+)
    | (?P<arrow>=>)
    | (?P<comma>,)
    | (?P<close>\))
    | (?P<ws>\s+)
    """,
    re.S | re.X,
)
_ASSIGN_RE = re.compile(r"\$(?P<name>\w+)\s*=\s*array\s*\(", re.I)
_CANONICAL_INT_RE = re.compile(r"^(?:0|-?[1-9]\d*)$")
_DQ_ESCAPE_RE = re.compile(r"\\(?:([ntrvef\\$\"])|x([0-9A-Fa-f]{1,2})|([0-7]{1,3}))")
_SQ_ESCAPE_RE = re.compile(r"\\([\\'])")
_DQ_SIMPLE = {"n": "\n", "t": "\t", "r": "\r", "v": "\v", "e": "\x1b", "f": "\f", "\\": "\\", "$": "$", '"': '"'}

Scalar = Union[int, str]
Token = Tuple[str, str, int]


@dataclass(slots=True)
class PhpEntry:
    key: Scalar
    value: Scalar
    withdrawn: bool = False


def _unescape_dq(body: str) -> str:
    def repl(m: re.Match) -> str:
        simple, hexa, octal = m.groups()
        if simple:
            return _DQ_SIMPLE[simple]
        if hexa:
            return chr(int(hexa, 16))
        return chr(int(octal, 8) & 0xFF)

    return _DQ_ESCAPE_RE.sub(repl, body)


def _scalar(kind: str, text: str) -> Scalar:
    if kind == "int":
        return int(text)
    if kind == "dq":
        return _unescape_dq(text[1:-1])
    return _SQ_ESCAPE_RE.sub(r"\1", text[1:-1])


def _as_key(value: Scalar) -> Scalar:
    # PHP stores decimal string keys as integers
    if isinstance(value, str) and _CANONICAL_INT_RE.match(value):
        return int(value)
    return value


def _tokenize(text: str, pos: int, path: Path, *, until_close: bool) -> Tuple[List[Token], int]:
    tokens: List[Token] = []
    while pos < len(text):
        m = _TOKEN_RE.match(text, pos)
        if m is None:
            line = text.count("\n", 0, pos) + 1
            raise LoadError(path, f"unexpected {text[pos]!r} at line {line}")
        kind = m.lastgroup
        pos = m.end()
        if kind == "ws":
            continue
        if kind == "close":
            if until_close:
                return tokens, pos
            raise LoadError(path, "unexpected ')' inside comment")
        tokens.append((kind, m.group(), m.start()))
    if until_close:
        raise LoadError(path, "array literal is not closed")
    return tokens, pos


def _comment_body(kind: str, text: str) -> str:
    if kind == "block":
        return text[2:-2]
    return text[1:] if text.startswith("#") else text[2:]


def _parse_entries(tokens: List[Token], path: Path, *, withdrawn: bool) -> List[PhpEntry]:
    entries: List[PhpEntry] = []
    comments: List[Token] = []
    values: List[Token] = []
    for token in tokens:
        (comments if token[0] in ("block", "line") else values).append(token)

    i = 0
    while i < len(values):
        window = values[i : i + 3]
        kinds = [t[0] for t in window]
        if len(window) < 3 or kinds[1] != "arrow" or kinds[0] not in ("int", "dq", "sq") or kinds[2] not in ("int", "dq", "sq"):
            raise LoadError(path, f"expected 'key => value' near {values[i][1][:40]!r}")
        key = _as_key(_scalar(kinds[0], window[0][1]))
        value = _scalar(kinds[2], window[2][1])
        entries.append(PhpEntry(key=key, value=value, withdrawn=withdrawn))
        i += 3
        if i < len(values):
            if values[i][0] != "comma":
                raise LoadError(path, f"expected ',' after entry {key!r}")
            i += 1

    for kind, text, _ in comments:
        body = _comment_body(kind, text)
        try:
            inner, _ = _tokenize(body, 0, path, until_close=False)
            entries.extend(_parse_entries(inner, path, withdrawn=True))
        except LoadError as exc:
            logger.debug("Skipping comment that holds no entries in %s: %s", path, exc)
    return entries


def parse_php_array(text: str, *, variable: Optional[str] = None, path: Path | str = "<string>") -> List[PhpEntry]:
    """Parse the first ``$name = array(...)`` assignment in ``text``.

    Entries found inside comments are returned with ``withdrawn=True``.
    """
    path = Path(path)
    for m in _ASSIGN_RE.finditer(text):
        if variable is None or m.group("name") == variable:
            break
    else:
        target = f"${variable}" if variable else "an array assignment"
        raise LoadError(path, f"{target} not found")

    tokens, _ = _tokenize(text, m.end(), path, until_close=True)
    return _parse_entries(tokens, path, withdrawn=False)


def legacy_metadata(entries: List[PhpEntry], path: Path | str = "<string>") -> Dict[str, Scalar]:
    """Translate ``$ARTICLE_INFOS`` entries to metadata record fields."""
    fields: Dict[str, Scalar] = {}
    for entry in entries:
        if entry.withdrawn:
            continue
        name = LEGACY_METADATA_KEYS.get(str(entry.key))
        if name is None:
            logger.debug("Ignoring legacy metadata key '%s' in %s", entry.key, path)
            continue
        fields[name] = entry.value
    return fields


def _read(path: Path) -> str:
    if not path.exists():
        raise LoadError(path, "file not found")
    return path.read_text(encoding="utf-8")


def load_php_article(directory: Path | str, *, settings: Optional[StoreSettings] = None) -> LoadedArticle:
    """Build a ``LoadedArticle`` from a legacy PHP article directory."""
    directory = Path(directory)
    infos_path = directory / INFOS_FILENAME
    pages_path = directory / PAGES_FILENAME

    metadata = legacy_metadata(
        parse_php_array(_read(infos_path), variable="ARTICLE_INFOS", path=infos_path),
        infos_path,
    )
    entries = parse_php_array(_read(pages_path), variable="PAGES", path=pages_path)
    active = [(e.key, e.value) for e in entries if not e.withdrawn]
    withdrawn = [(e.key, e.value) for e in entries if e.withdrawn]
    logger.debug("Parsed %s: %d active, %d withdrawn entries", pages_path, len(active), len(withdrawn))

    return build_article(metadata, active, withdrawn, settings=settings, source=directory)
