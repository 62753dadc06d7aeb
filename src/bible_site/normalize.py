"""
Normalize the different book JSON layouts into a single Book model.

Recognized layouts, checked in this order:

    chapter-list   {"chapters": [{"chapter": 1, "verses": [...] or {...}}, ...]}
    chapter-map    {"chapters": {"1": [...] or {...}, ...}}
    nested-lists   [["verse 1", "verse 2"], ["verse 1", ...], ...]

A verse is either a scalar (its text, numbered by position) or an object
carrying its number in "verse"/"num"/"v" and its text in "text"/"t".
"""

from collections.abc import Mapping
from itertools import count
from typing import Any, Callable, Iterable, Optional, TypeVar

from .errors import MalformedBookData
from .models import Book, Chapter


CHAPTER_LIST = "chapter-list"
CHAPTER_MAP = "chapter-map"
NESTED_LISTS = "nested-lists"

VERSE_NUMBER_KEYS = ("verse", "num", "v")
VERSE_TEXT_KEYS = ("text", "t")

V = TypeVar("V")


# =============================================================================
# Field coercion
# =============================================================================

def _first_present(entry: Mapping, keys: tuple[str, ...]) -> Any:
    for key in keys:
        value = entry.get(key)
        if value is not None:
            return value
    return None


def _as_number(value: Any) -> Optional[int]:
    """A positive chapter or verse number, or None if `value` is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        number = value
    elif isinstance(value, float) and value.is_integer():
        number = int(value)
    elif isinstance(value, str) and value.strip().isdecimal():
        number = int(value.strip())
    else:
        return None
    return number if number > 0 else None


def _place(entries: Iterable[tuple[Optional[int], int, V]]) -> dict[int, V]:
    """
    Key values by number from (number, 1-based position, value) triples.

    Numbered entries are placed first; a later duplicate number replaces an
    earlier one. Unnumbered entries then take their position, or the lowest
    free number when that position is already used.
    """
    placed: dict[int, V] = {}
    unnumbered = []
    for number, position, value in entries:
        if number is None:
            unnumbered.append((position, value))
        else:
            placed[number] = value
    for position, value in unnumbered:
        if position in placed:
            position = next(n for n in count(1) if n not in placed)
        placed[position] = value
    return placed


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Mapping):
        return _as_text(_first_present(value, VERSE_TEXT_KEYS))
    return str(value)


def _verses(payload: Any) -> dict[str, str]:
    """Verse texts keyed by canonical decimal verse number."""
    if isinstance(payload, list):
        entries = (
            (
                _as_number(_first_present(entry, VERSE_NUMBER_KEYS)) if isinstance(entry, Mapping) else None,
                position,
                _as_text(entry),
            )
            for position, entry in enumerate(payload, start=1)
        )
    elif isinstance(payload, Mapping):
        entries = (
            (_as_number(key), position, _as_text(entry))
            for position, (key, entry) in enumerate(payload.items(), start=1)
        )
    else:
        return {}
    return {str(number): text for number, text in _place(entries).items()}


# =============================================================================
# Layout readers
# =============================================================================

def _read_chapter_list(raw: Mapping) -> dict[int, Chapter]:
    entries = []
    for position, entry in enumerate(raw["chapters"], start=1):
        if isinstance(entry, Mapping):
            entries.append((_as_number(entry.get("chapter")), position, Chapter(_verses(entry.get("verses")))))
        else:
            entries.append((None, position, Chapter(_verses(entry))))
    return _place(entries)


def _read_chapter_map(raw: Mapping) -> dict[int, Chapter]:
    return _place(
        (_as_number(key), position, Chapter(_verses(payload)))
        for position, (key, payload) in enumerate(raw["chapters"].items(), start=1)
    )


def _read_nested_lists(raw: list) -> dict[int, Chapter]:
    return {
        position: Chapter(_verses(payload))
        for position, payload in enumerate(raw, start=1)
    }


READERS: dict[str, Callable[[Any], dict[int, Chapter]]] = {
    CHAPTER_LIST: _read_chapter_list,
    CHAPTER_MAP: _read_chapter_map,
    NESTED_LISTS: _read_nested_lists,
}


# =============================================================================
# Public API
# =============================================================================

def detect_shape(raw: Any) -> Optional[str]:
    """Name of the layout `raw` is in, or None if it matches none of them."""
    if isinstance(raw, Mapping):
        chapters = raw.get("chapters")
        if isinstance(chapters, list):
            return CHAPTER_LIST
        if isinstance(chapters, Mapping):
            return CHAPTER_MAP
    if isinstance(raw, list) and raw and isinstance(raw[0], list):
        return NESTED_LISTS
    return None


def normalize_book(name: str, raw: Any) -> Book:
    """
    Build a Book from one book's raw JSON.

    Args:
        name: Canonical display name (e.g. 'Song of Solomon')
        raw: Parsed JSON in any recognized layout; it is not modified

    Returns:
        The normalized Book

    Raises:
        MalformedBookData: if `raw` is in none of the recognized layouts
    """
    shape = detect_shape(raw)
    if shape is None:
        raise MalformedBookData(name)
    return Book(name=name, chapters=READERS[shape](raw))
