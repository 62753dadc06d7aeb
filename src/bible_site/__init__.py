"""
Bible Site - Builds a verse-per-page static site, with book and chapter hubs
and per-book sitemaps, from per-book scripture JSON files.
"""

from .canon import Canon, KJV_CANON, OLD_TESTAMENT, NEW_TESTAMENT, slugify, file_from_name
from .corpus import assemble, flatten, neighbours, verse_pages, hub_pages
from .errors import (
    BibleSiteError,
    SourceUnavailable,
    MalformedBookData,
    MalformedIndex,
    MissingCanonicalBook,
    SlugCollision,
)
from .models import Book, Chapter, VerseReference, NavLink, VersePage, HubPage, SitemapEntry, SitemapSet
from .normalize import normalize_book, detect_shape
from .sitemap import group

__all__ = [
    "Canon",
    "KJV_CANON",
    "OLD_TESTAMENT",
    "NEW_TESTAMENT",
    "slugify",
    "file_from_name",
    "assemble",
    "flatten",
    "neighbours",
    "verse_pages",
    "hub_pages",
    "group",
    "normalize_book",
    "detect_shape",
    "Book",
    "Chapter",
    "VerseReference",
    "NavLink",
    "VersePage",
    "HubPage",
    "SitemapEntry",
    "SitemapSet",
    "BibleSiteError",
    "SourceUnavailable",
    "MalformedBookData",
    "MalformedIndex",
    "MissingCanonicalBook",
    "SlugCollision",
]

__version__ = "0.1.0"
