"""
Group every site URL into per-book sitemaps and serialize them.

    sitemap.xml              index: sitemap-main.xml + one sitemap per book
    sitemap-main.xml         the home page
    sitemap-{slug}.xml       /{slug}/, /{slug}/{chapter}/, /{slug}/{chapter}/{verse}/
"""

import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from typing import Iterable

from .canon import Canon, KJV_CANON
from .corpus import iter_books
from .models import (
    Book,
    SitemapEntry,
    SitemapSet,
    VerseReference,
    book_path,
    chapter_path,
)

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
INDEX_SITEMAP = "sitemap.xml"
MAIN_SITEMAP = "sitemap-main.xml"

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'


def book_sitemap_name(slug: str) -> str:
    return f"sitemap-{slug}.xml"


def group(
    corpus: dict[str, Book],
    refs: tuple[VerseReference, ...],
    build_timestamp: datetime,
    site: str,
    canon: Canon = KJV_CANON,
) -> SitemapSet:
    """
    Partition the site's URLs per book and build the sitemap index.

    Each book gets its hub, one hub per chapter, and one URL per verse
    reference. Every entry is stamped with `build_timestamp`. Books follow
    `canon` order; corpus books outside `canon` come after, in corpus order.
    """
    site = site.rstrip("/")
    sitemaps = SitemapSet(main=[SitemapEntry(f"{site}/", build_timestamp, "root")])

    in_canon = dict(iter_books(corpus, canon))
    others = {slug: book for slug, book in corpus.items() if slug not in in_canon}
    for slug, book in {**in_canon, **others}.items():
        entries = [SitemapEntry(site + book_path(slug), build_timestamp, "book")]
        entries.extend(
            SitemapEntry(site + chapter_path(slug, number), build_timestamp, "chapter")
            for number in book.chapter_numbers()
        )
        sitemaps.books[slug] = entries

    for ref in refs:
        sitemaps.books.setdefault(ref.book_slug, []).append(
            SitemapEntry(site + ref.path, build_timestamp, "verse")
        )

    sitemaps.index.append(SitemapEntry(f"{site}/{MAIN_SITEMAP}", build_timestamp, "sitemap"))
    sitemaps.index.extend(
        SitemapEntry(f"{site}/{book_sitemap_name(slug)}", build_timestamp, "sitemap")
        for slug, entries in sitemaps.books.items()
        if entries
    )
    return sitemaps


# =============================================================================
# XML serialization
# =============================================================================

def format_lastmod(dt: datetime) -> str:
    """W3C datetime in UTC; naive datetimes are taken to be UTC already."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _document(root_tag: str, child_tag: str, entries: Iterable[SitemapEntry]) -> str:
    root = ET.Element(root_tag, xmlns=SITEMAP_NS)
    for entry in entries:
        child = ET.SubElement(root, child_tag)
        ET.SubElement(child, "loc").text = entry.location
        ET.SubElement(child, "lastmod").text = format_lastmod(entry.last_modified)
    ET.indent(root)
    return XML_DECLARATION + ET.tostring(root, encoding="unicode") + "\n"


def sitemap_xml(entries: Iterable[SitemapEntry]) -> str:
    return _document("urlset", "url", entries)


def sitemap_index_xml(entries: Iterable[SitemapEntry]) -> str:
    return _document("sitemapindex", "sitemap", entries)


def sitemap_files(sitemaps: SitemapSet) -> dict[str, str]:
    """Filename -> XML for the index, the main sitemap and every book sitemap."""
    files = {
        INDEX_SITEMAP: sitemap_index_xml(sitemaps.index),
        MAIN_SITEMAP: sitemap_xml(sitemaps.main),
    }
    for slug, entries in sitemaps.books.items():
        if entries:
            files[book_sitemap_name(slug)] = sitemap_xml(entries)
    return files


def robots_txt(site: str) -> str:
    return f"User-agent: *\nAllow: /\nSitemap: {site.rstrip('/')}/{INDEX_SITEMAP}\n"
