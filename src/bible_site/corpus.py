"""
Load every canonical book, flatten the corpus into one ordered verse
sequence, and derive pages and navigation from that sequence.

Navigation is index arithmetic over the flattened tuple: the verse after
the last verse of Malachi is simply the next element, Matthew 1:1.
"""

import logging
from typing import Iterable, Iterator, Optional

from .canon import Canon, KJV_CANON, file_from_name
from .config import INDEX_FILE
from .errors import MissingCanonicalBook
from .models import Book, HubPage, NavLink, VersePage, VerseReference
from .normalize import normalize_book

logger = logging.getLogger(__name__)


# =============================================================================
# Assembly
# =============================================================================

def assemble(
    book_index: Iterable[str],
    provider,
    canon: Canon = KJV_CANON,
    strict: bool = False,
) -> dict[str, Book]:
    """
    Load and normalize every canonical book listed in the index.

    Args:
        book_index: Book names the source says it has
        provider: Object with fetch_book_blob(filename)
        canon: Book order to load in
        strict: Raise MissingCanonicalBook instead of warning

    Returns:
        Books keyed by slug, in canonical order
    """
    slugs = canon.slug_table()
    available = set(book_index)
    books: dict[str, Book] = {}

    for name in canon.books:
        if name not in available:
            if strict:
                raise MissingCanonicalBook(name, INDEX_FILE)
            logger.warning("%s missing from book index; skipping", name)
            continue
        raw = provider.fetch_book_blob(file_from_name(name))
        books[slugs[name]] = normalize_book(name, raw)
        logger.debug("Loaded %s (%d chapters)", name, len(books[slugs[name]].chapters))

    logger.info("Loaded %d of %d canonical books", len(books), len(canon))
    return books


# =============================================================================
# Flattening
# =============================================================================

def iter_books(corpus: dict[str, Book], canon: Canon = KJV_CANON) -> Iterator[tuple[str, Book]]:
    """(slug, book) pairs in canonical order, skipping books not in the corpus."""
    slugs = canon.slug_table()
    for name in canon.books:
        book = corpus.get(slugs[name])
        if book is not None:
            yield slugs[name], book


def flatten(corpus: dict[str, Book], canon: Canon = KJV_CANON) -> tuple[VerseReference, ...]:
    """Every verse slot of the corpus in canonical book, chapter, verse order."""
    refs = []
    for slug, book in iter_books(corpus, canon):
        for chapter_number in book.chapter_numbers():
            chapter = book.chapters[chapter_number]
            for verse in range(1, chapter.verse_count + 1):
                refs.append(VerseReference(
                    book_name=book.name,
                    book_slug=slug,
                    chapter=chapter_number,
                    verse=verse,
                    text=chapter.text(verse),
                ))
    return tuple(refs)


# =============================================================================
# Navigation and pages
# =============================================================================

def neighbours(
    refs: tuple[VerseReference, ...], index: int
) -> tuple[Optional[NavLink], Optional[NavLink]]:
    """(prev, next) links for refs[index]; None at either end of the sequence."""
    if not 0 <= index < len(refs):
        raise IndexError(f"verse index {index} out of range for {len(refs)} verses")
    prev = refs[index - 1].link() if index > 0 else None
    next_ = refs[index + 1].link() if index < len(refs) - 1 else None
    return prev, next_


def verse_pages(corpus: dict[str, Book], refs: tuple[VerseReference, ...]) -> Iterator[VersePage]:
    """One VersePage per flattened reference, with navigation filled in."""
    for i, ref in enumerate(refs):
        prev, next_ = neighbours(refs, i)
        yield VersePage(
            book_name=ref.book_name,
            book_slug=ref.book_slug,
            chapter=ref.chapter,
            verse=ref.verse,
            text=ref.text,
            total_verses=corpus[ref.book_slug].chapters[ref.chapter].verse_count,
            prev=prev,
            next=next_,
        )


def hub_pages(corpus: dict[str, Book], canon: Canon = KJV_CANON) -> Iterator[HubPage]:
    """A hub per book (listing chapters) followed by a hub per chapter (listing verses)."""
    for slug, book in iter_books(corpus, canon):
        chapter_numbers = book.chapter_numbers()
        yield HubPage(book.name, slug, None, tuple(chapter_numbers))
        for number in chapter_numbers:
            count = book.chapters[number].verse_count
            yield HubPage(book.name, slug, number, tuple(range(1, count + 1)))
