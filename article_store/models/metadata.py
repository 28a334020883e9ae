from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional

from ..errors import ValidationError
from ..utils.logging import get_logger

logger = get_logger("article_store.models.metadata")

# Order in which required fields are checked; the first failure is reported.
FIELD_ORDER = (
    "slug",
    "main_title",
    "sub_title",
    "synopsis",
    "thumbnail",
    "hero_image",
    "hero_image_width",
    "hero_image_height",
    "published_on",
)
OPTIONAL_FIELDS = ("hero_image_caption",)

_TEXT_FIELDS = {"main_title", "sub_title", "synopsis", "thumbnail", "hero_image"}
_DIMENSION_FIELDS = {"hero_image_width", "hero_image_height"}

# camelCase names used by authoring tools
FIELD_ALIASES = {
    "mainTitle": "main_title",
    "subTitle": "sub_title",
    "heroImage": "hero_image",
    "heroImageWidth": "hero_image_width",
    "heroImageHeight": "hero_image_height",
    "heroImageCaption": "hero_image_caption",
    "publishedOn": "published_on",
}

# RFC 3986 unreserved characters, starting with an alphanumeric
_SLUG_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._~-]*$")
_DIGITS_RE = re.compile(r"^\s*\d+\s*$")
_DATE_FORMATS = ("%Y-%m-%d", "%d %b %Y", "%d %B %Y")


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _check_text(name: str, value: Any) -> str:
    if _is_blank(value):
        raise ValidationError(name)
    if not isinstance(value, str):
        raise ValidationError(name, f"must be a string, got {type(value).__name__}")
    return value


def _check_slug(value: Any) -> str:
    slug = _check_text("slug", value)
    if not _SLUG_RE.match(slug):
        raise ValidationError("slug", f"'{slug}' is not URL-safe")
    return slug


def _check_dimension(name: str, value: Any) -> int:
    if _is_blank(value):
        raise ValidationError(name)
    if isinstance(value, bool):
        raise ValidationError(name, "must be a positive integer")
    if isinstance(value, int):
        number = value
    elif isinstance(value, str) and _DIGITS_RE.match(value):
        number = int(value)
    else:
        raise ValidationError(name, f"must be a positive integer, got {value!r}")
    if number <= 0:
        raise ValidationError(name, f"must be a positive integer, got {number}")
    return number


def _check_date(value: Any) -> date:
    if _is_blank(value):
        raise ValidationError("published_on")
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        for fmt in _DATE_FORMATS:
            try:
                return datetime.strptime(text, fmt).date()
            except ValueError:
                continue
    raise ValidationError("published_on", f"not a calendar date: {value!r}")


def _check_caption(value: Any) -> Optional[str]:
    if _is_blank(value):
        return None
    if not isinstance(value, str):
        raise ValidationError("hero_image_caption", "must be a string when provided")
    return value


def _check_field(name: str, value: Any) -> Any:
    if name == "slug":
        return _check_slug(value)
    if name in _TEXT_FIELDS:
        return _check_text(name, value)
    if name in _DIMENSION_FIELDS:
        return _check_dimension(name, value)
    return _check_date(value)


def canonical_fields(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Map alias keys to field names, dropping keys no record field uses."""
    known = set(FIELD_ORDER) | set(OPTIONAL_FIELDS)
    out: Dict[str, Any] = {}
    for key, value in fields.items():
        name = FIELD_ALIASES.get(key, key)
        if name in known:
            out[name] = value
        else:
            logger.debug("Ignoring unknown metadata key '%s'", key)
    return out


@dataclass(frozen=True, slots=True)
class ArticleMetadata:
    """Article-level facts shown in page headers and social previews.

    Validation runs on construction, so an instance is either complete and
    valid or never exists. Width and height given as digit strings are stored
    as ``int``; date strings are stored as ``datetime.date``.
    """

    slug: str
    main_title: str
    sub_title: str
    synopsis: str
    thumbnail: str
    hero_image: str
    hero_image_width: int
    hero_image_height: int
    published_on: date
    hero_image_caption: Optional[str] = None

    def __post_init__(self) -> None:
        for name in FIELD_ORDER:
            object.__setattr__(self, name, _check_field(name, getattr(self, name)))
        object.__setattr__(self, "hero_image_caption", _check_caption(self.hero_image_caption))

    @classmethod
    def create(cls, fields: Mapping[str, Any]) -> "ArticleMetadata":
        """Build a record from a flat key/value mapping.

        Keys may use the snake_case field names or their camelCase aliases.
        Raises ``ValidationError`` naming the first failing field in
        ``FIELD_ORDER``.
        """
        if not isinstance(fields, Mapping):
            raise ValidationError("metadata", f"expected a mapping, got {type(fields).__name__}")
        data = canonical_fields(fields)
        return cls(**{name: data.get(name) for name in FIELD_ORDER + OPTIONAL_FIELDS})

    def as_dict(self) -> Dict[str, Any]:
        payload = {name: getattr(self, name) for name in FIELD_ORDER + OPTIONAL_FIELDS}
        payload["published_on"] = self.published_on.isoformat()
        return payload
