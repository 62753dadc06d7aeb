"""Data models for the site build."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from .canon import slugify


@dataclass
class Chapter:
    """Verse texts of one chapter, keyed by the verse number as a decimal string."""

    verses: dict[str, str] = field(default_factory=dict)

    @property
    def verse_count(self) -> int:
        return len(self.verses)

    def text(self, verse: int) -> str:
        """Text of a verse, or an empty string when the slot has no entry."""
        return self.verses.get(str(verse), "")


@dataclass
class Book:
    """A normalized book: display name plus a sparse map of chapters."""

    name: str
    chapters: dict[int, Chapter] = field(default_factory=dict)

    @property
    def slug(self) -> str:
        return slugify(self.name)

    def chapter_numbers(self) -> list[int]:
        """Chapter numbers in ascending numeric order."""
        return sorted(self.chapters)

    @property
    def verse_count(self) -> int:
        return sum(ch.verse_count for ch in self.chapters.values())


@dataclass(frozen=True)
class NavLink:
    """Address of a verse page, used for prev/next links."""

    book_slug: str
    chapter: int
    verse: int

    @property
    def path(self) -> str:
        return verse_path(self.book_slug, self.chapter, self.verse)


@dataclass(frozen=True)
class VerseReference:
    """One position in the flattened, canonically ordered verse sequence."""

    book_name: str
    book_slug: str
    chapter: int
    verse: int
    text: str

    def link(self) -> NavLink:
        return NavLink(self.book_slug, self.chapter, self.verse)

    @property
    def path(self) -> str:
        return verse_path(self.book_slug, self.chapter, self.verse)


@dataclass(frozen=True)
class VersePage:
    """Everything the renderer needs for one verse page."""

    book_name: str
    book_slug: str
    chapter: int
    verse: int
    text: str
    total_verses: int
    prev: Optional[NavLink] = None
    next: Optional[NavLink] = None

    @property
    def path(self) -> str:
        return verse_path(self.book_slug, self.chapter, self.verse)


@dataclass(frozen=True)
class HubPage:
    """An index page: a book listing chapters, or a chapter listing verses."""

    book_name: str
    book_slug: str
    chapter: Optional[int] = None
    children: tuple[int, ...] = ()

    @property
    def child_count(self) -> int:
        return len(self.children)

    @property
    def path(self) -> str:
        if self.chapter is None:
            return book_path(self.book_slug)
        return chapter_path(self.book_slug, self.chapter)


@dataclass(frozen=True)
class SitemapEntry:
    """A single URL with its last-modified time."""

    location: str
    last_modified: datetime
    kind: str = "verse"  # "root", "book", "chapter", "verse" or "sitemap"


@dataclass
class SitemapSet:
    """URL entries partitioned per book, plus the main set and the index."""

    main: list[SitemapEntry] = field(default_factory=list)
    books: dict[str, list[SitemapEntry]] = field(default_factory=dict)
    index: list[SitemapEntry] = field(default_factory=list)

    @property
    def url_count(self) -> int:
        return len(self.main) + sum(len(entries) for entries in self.books.values())



# =============================================================================
# URL paths
# =============================================================================

def book_path(book_slug: str) -> str:
    return f"/{book_slug}/"


def chapter_path(book_slug: str, chapter: int) -> str:
    return f"/{book_slug}/{chapter}/"


def verse_path(book_slug: str, chapter: int, verse: int) -> str:
    return f"/{book_slug}/{chapter}/{verse}/"
