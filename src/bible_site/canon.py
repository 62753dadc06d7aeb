"""Canonical book order and the identifiers derived from book names."""

import re
from dataclasses import dataclass
from typing import Iterable

from .errors import SlugCollision


# =============================================================================
# Constants
# =============================================================================

OLD_TESTAMENT = (
    "Genesis", "Exodus", "Leviticus", "Numbers", "Deuteronomy",
    "Joshua", "Judges", "Ruth", "1 Samuel", "2 Samuel",
    "1 Kings", "2 Kings", "1 Chronicles", "2 Chronicles",
    "Ezra", "Nehemiah", "Esther", "Job", "Psalms", "Proverbs",
    "Ecclesiastes", "Song of Solomon", "Isaiah", "Jeremiah", "Lamentations",
    "Ezekiel", "Daniel", "Hosea", "Joel", "Amos", "Obadiah",
    "Jonah", "Micah", "Nahum", "Habakkuk", "Zephaniah",
    "Haggai", "Zechariah", "Malachi",
)

NEW_TESTAMENT = (
    "Matthew", "Mark", "Luke", "John", "Acts",
    "Romans", "1 Corinthians", "2 Corinthians", "Galatians",
    "Ephesians", "Philippians", "Colossians",
    "1 Thessalonians", "2 Thessalonians",
    "1 Timothy", "2 Timothy", "Titus", "Philemon",
    "Hebrews", "James", "1 Peter", "2 Peter",
    "1 John", "2 John", "3 John", "Jude", "Revelation",
)

BOOK_FILE_EXTENSION = ".json"

_NOT_SLUG_CHARS = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")
_NOT_ALNUM = re.compile(r"[^0-9A-Za-z]")


# =============================================================================
# Identifiers
# =============================================================================

def slugify(name: str) -> str:
    """Lowercase, drop punctuation, join words with hyphens ('Song of Solomon' -> 'song-of-solomon')."""
    cleaned = _NOT_SLUG_CHARS.sub("", str(name).strip().lower())
    return _WHITESPACE.sub("-", cleaned)


def file_from_name(name: str) -> str:
    """Source filename for a book, e.g. 'Song of Solomon' -> 'SongofSolomon.json'."""
    return _NOT_ALNUM.sub("", str(name)) + BOOK_FILE_EXTENSION


# =============================================================================
# Canon table
# =============================================================================

@dataclass(frozen=True)
class Canon:
    """A versioned, ordered table of testaments and their book names."""

    version: str
    testaments: tuple[tuple[str, tuple[str, ...]], ...]

    @property
    def books(self) -> tuple[str, ...]:
        """Every book name in reading order."""
        return tuple(name for _, names in self.testaments for name in names)

    def __len__(self) -> int:
        return len(self.books)

    def __contains__(self, name) -> bool:
        return name in self.books

    def position(self, name: str) -> int:
        return self.books.index(name)

    def slug_table(self) -> dict[str, str]:
        """Map each name to its slug, raising SlugCollision if two names share one."""
        table: dict[str, str] = {}
        seen: dict[str, str] = {}
        for name in self.books:
            slug = slugify(name)
            if slug in seen and seen[slug] != name:
                raise SlugCollision(slug, (seen[slug], name))
            seen[slug] = name
            table[name] = slug
        return table

    def restricted_to(self, names: Iterable[str]) -> "Canon":
        """A sub-canon keeping only the given names, in this canon's order."""
        keep = set(names)
        return Canon(
            version=f"{self.version}+subset",
            testaments=tuple(
                (testament, tuple(n for n in book_names if n in keep))
                for testament, book_names in self.testaments
            ),
        )


KJV_CANON = Canon(
    version="protestant-66/1",
    testaments=(
        ("Old Testament", OLD_TESTAMENT),
        ("New Testament", NEW_TESTAMENT),
    ),
)
