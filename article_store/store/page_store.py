from __future__ import annotations

import bisect
from collections.abc import Sequence
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union, overload

from ..errors import (
    DuplicateKeyError,
    InvalidFragmentError,
    InvalidKeyError,
    NotFoundError,
    StoreSealedError,
)
from ..utils.logging import get_logger

logger = get_logger("article_store.store.pages")

# Authors number pages in steps of KEY_STRIDE so later pages fit in between.
KEY_STRIDE = 10

PageInput = Union[Mapping[int, str], Iterable[Tuple[int, str]]]


def _check_key(key: object) -> int:
    if isinstance(key, bool) or not isinstance(key, int) or key < 0:
        raise InvalidKeyError(key)
    return key


def _check_fragment(key: int, fragment: object) -> str:
    if not isinstance(fragment, str):
        raise InvalidFragmentError(key, f"fragment must be text, got {type(fragment).__name__}")
    if not fragment.strip():
        raise InvalidFragmentError(key)
    return fragment


class OrderedFragments(Sequence):
    """Fragments of a store in ascending key order.

    Keys and their fragments are captured when the view is created, so later
    changes to an open store do not affect it. Iterating twice yields the
    same fragments.
    """

    __slots__ = ("_keys", "_fragments")

    def __init__(self, keys: Iterable[int], fragments: Mapping[int, str]) -> None:
        self._keys = tuple(keys)
        self._fragments = {key: fragments[key] for key in self._keys}

    @overload
    def __getitem__(self, index: int) -> str: ...

    @overload
    def __getitem__(self, index: slice) -> "OrderedFragments": ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return OrderedFragments(self._keys[index], self._fragments)
        return self._fragments[self._keys[index]]

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[str]:
        for key in self._keys:
            yield self._fragments[key]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Sequence) and not isinstance(other, (str, bytes)):
            return list(self) == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"OrderedFragments(keys={list(self._keys)!r})"

    @property
    def keys(self) -> Tuple[int, ...]:
        return self._keys

    def items(self) -> Iterator[Tuple[int, str]]:
        for key in self._keys:
            yield key, self._fragments[key]


class PageStore:
    """Sparse, integer-keyed collection of an article's content fragments.

    Only the numeric value of a key decides where a fragment is rendered, so
    a page inserted at 11 lands between 10 and 12 without touching either.
    Keys are never renumbered. Withdrawn keys stay reserved; their text is
    kept for :meth:`get_archived` only when ``archive_withdrawn`` is set.

    A store is mutable until :meth:`seal` is called and read-only afterwards.
    """

    def __init__(
        self,
        pages: Optional[PageInput] = None,
        *,
        withdrawn: Optional[PageInput] = None,
        archive_withdrawn: bool = False,
    ) -> None:
        self.archive_withdrawn = archive_withdrawn
        self._fragments: Dict[int, str] = {}
        self._keys: List[int] = []
        self._withdrawn: Dict[int, Optional[str]] = {}
        self._sealed = False

        for key, fragment in _pairs(pages):
            self.insert(key, fragment)
        for key, fragment in _pairs(withdrawn):
            self.insert(key, fragment, withdrawn=True)

    @classmethod
    def build(cls, pages: Optional[PageInput] = None, **kwargs) -> "PageStore":
        """Construct a store and seal it in one step."""
        return cls(pages, **kwargs).seal()

    # ---------------- Construction -----------------
    def _ensure_open(self) -> None:
        if self._sealed:
            raise StoreSealedError("page store is sealed; build a new store to change its content")

    def insert(self, key: int, fragment: str, *, withdrawn: bool = False) -> None:
        """Add ``fragment`` at ``key``.

        With ``withdrawn=True`` the key is reserved but the fragment stays out
        of the ordered view.
        """
        self._ensure_open()
        key = _check_key(key)
        if key in self._fragments or key in self._withdrawn:
            raise DuplicateKeyError(key)
        fragment = _check_fragment(key, fragment)

        if withdrawn:
            self._withdrawn[key] = fragment if self.archive_withdrawn else None
            logger.debug("Reserved withdrawn page %d", key)
            return
        self._fragments[key] = fragment
        bisect.insort(self._keys, key)

    def withdraw(self, key: int) -> None:
        """Take an active fragment out of the ordered view without freeing its key."""
        self._ensure_open()
        if key not in self:
            raise NotFoundError(key)
        fragment = self._fragments.pop(key)
        del self._keys[bisect.bisect_left(self._keys, key)]
        self._withdrawn[key] = fragment if self.archive_withdrawn else None
        logger.debug("Withdrew page %d", key)

    def seal(self) -> "PageStore":
        self._sealed = True
        return self

    @property
    def sealed(self) -> bool:
        return self._sealed

    # ---------------- Queries -----------------
    def ordered_fragments(self) -> OrderedFragments:
        return OrderedFragments(self._keys, self._fragments)

    def ordered_items(self) -> Iterator[Tuple[int, str]]:
        return self.ordered_fragments().items()

    def keys(self) -> Tuple[int, ...]:
        return tuple(self._keys)

    def withdrawn_keys(self) -> Tuple[int, ...]:
        return tuple(sorted(self._withdrawn))

    def get(self, key: int) -> str:
        if isinstance(key, bool):
            raise NotFoundError(key)
        try:
            return self._fragments[key]
        except (KeyError, TypeError):
            raise NotFoundError(key) from None

    def get_archived(self, key: int) -> str:
        """Return the text of a withdrawn page when archiving is enabled."""
        valid = isinstance(key, int) and not isinstance(key, bool)
        text = self._withdrawn.get(key) if valid else None
        if text is None:
            raise NotFoundError(key, what="archived page")
        return text

    def is_withdrawn(self, key: int) -> bool:
        return not isinstance(key, bool) and key in self._withdrawn

    def size(self) -> int:
        return len(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, key: object) -> bool:
        return not isinstance(key, bool) and key in self._fragments

    def __iter__(self) -> Iterator[int]:
        return iter(tuple(self._keys))

    def __repr__(self) -> str:
        state = "sealed" if self._sealed else "open"
        return f"PageStore(size={len(self._keys)}, withdrawn={len(self._withdrawn)}, {state})"

    # ---------------- Key slack -----------------
    def _used(self) -> List[int]:
        return sorted(set(self._keys) | set(self._withdrawn))

    def next_key(self, stride: int = KEY_STRIDE) -> int:
        """First multiple of ``stride`` above every used key (0 when empty)."""
        if isinstance(stride, bool) or not isinstance(stride, int) or stride < 1:
            raise InvalidKeyError(stride, "key stride must be a positive integer")
        used = self._used()
        if not used:
            return 0
        return (used[-1] // stride + 1) * stride

    def free_key_between(self, lower: int, upper: int) -> int:
        """Free key strictly between ``lower`` and ``upper``, nearest the midpoint."""
        lower, upper = _check_key(lower), _check_key(upper)
        used = set(self._used())
        total = lower + upper
        middle = total // 2
        for offset in range(max(upper - lower, 0)):
            for key in (middle - offset, middle + offset + total % 2):
                if lower < key < upper and key not in used:
                    return key
        raise InvalidKeyError((lower, upper), "no free page key in interval")


def _pairs(pages: Optional[PageInput]) -> Iterable[Tuple[int, str]]:
    if pages is None:
        return ()
    if isinstance(pages, Mapping):
        return pages.items()
    return pages
