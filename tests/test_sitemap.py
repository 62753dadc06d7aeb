"""Tests for grouping URLs into per-book sitemaps and serializing them."""

import xml.etree.ElementTree as ET
from datetime import datetime, timedelta, timezone

from bible_site.canon import KJV_CANON
from bible_site.corpus import assemble, flatten
from bible_site.models import Book, Chapter
from bible_site.sitemap import (
    INDEX_SITEMAP,
    MAIN_SITEMAP,
    SITEMAP_NS,
    format_lastmod,
    group,
    robots_txt,
    sitemap_files,
    sitemap_index_xml,
    sitemap_xml,
)

from conftest import GENESIS_RAW, FakeSource

SITE = "https://example.org"
BUILT = datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
NS = {"sm": SITEMAP_NS}


def test_group_genesis_scenario(genesis_source, genesis_canon):
    corpus = assemble(genesis_source.list_canonical_names(), genesis_source, genesis_canon)
    sitemaps = group(corpus, flatten(corpus, genesis_canon), BUILT, SITE + "/", genesis_canon)

    locations = [e.location for e in sitemaps.books["genesis"]]
    assert sorted(locations) == sorted([
        f"{SITE}/genesis/",
        f"{SITE}/genesis/1/",
        f"{SITE}/genesis/1/1/",
        f"{SITE}/genesis/1/2/",
    ])
    assert [e.location for e in sitemaps.main] == [f"{SITE}/"]
    assert [e.location for e in sitemaps.index] == [
        f"{SITE}/{MAIN_SITEMAP}",
        f"{SITE}/sitemap-genesis.xml",
    ]


def test_group_with_canon_that_lacks_the_refs_books(genesis_source):
    """Refs flattened under one canon still group under a narrower one."""
    corpus = assemble(genesis_source.list_canonical_names(), genesis_source, KJV_CANON)
    refs = flatten(corpus, KJV_CANON)
    sitemaps = group(corpus, refs, BUILT, SITE, KJV_CANON.restricted_to(["Exodus"]))

    kinds = [e.kind for e in sitemaps.books["genesis"]]
    assert kinds == ["book", "chapter", "verse", "verse"]
    assert sitemaps.index[-1].location == f"{SITE}/sitemap-genesis.xml"


def test_group_orders_canon_books_before_others():
    corpus = {
        "tobit": Book("Tobit", {1: Chapter({"1": "t"})}),
        "genesis": Book("Genesis", {1: Chapter({"1": "g"})}),
    }
    sitemaps = group(corpus, (), BUILT, SITE, KJV_CANON)
    assert list(sitemaps.books) == ["genesis", "tobit"]


def test_group_shares_build_timestamp(small_corpus):
    sitemaps = group(small_corpus, flatten(small_corpus), BUILT, SITE)
    stamps = {e.last_modified for e in sitemaps.main + sitemaps.index}
    stamps |= {e.last_modified for entries in sitemaps.books.values() for e in entries}
    assert stamps == {BUILT}


def test_group_hub_and_leaf_counts(small_corpus):
    sitemaps = group(small_corpus, flatten(small_corpus), BUILT, SITE)
    for slug, book in small_corpus.items():
        entries = sitemaps.books[slug]
        kinds = [e.kind for e in entries]
        assert kinds.count("book") == 1
        assert kinds.count("chapter") == len(book.chapters)
        assert kinds.count("verse") == book.verse_count
        for entry in entries:
            if entry.kind == "chapter":
                assert entry.location.startswith(f"{SITE}/{slug}/")
    assert len(sitemaps.index) == 1 + len(small_corpus)
    assert sitemaps.url_count == 1 + 8 + 4 + 3


def test_group_book_with_empty_chapter():
    corpus = {"ruth": Book("Ruth", {1: Chapter({})})}
    sitemaps = group(corpus, flatten(corpus), BUILT, SITE)
    assert [e.location for e in sitemaps.books["ruth"]] == [f"{SITE}/ruth/", f"{SITE}/ruth/1/"]


def test_missing_book_has_no_entries():
    source = FakeSource({"Genesis": GENESIS_RAW}, index=["Genesis"])
    corpus = assemble(source.list_canonical_names(), source)
    sitemaps = group(corpus, flatten(corpus), BUILT, SITE)
    assert list(sitemaps.books) == ["genesis"]
    assert not any("exodus" in e.location for e in sitemaps.index)


def test_sitemap_xml_lists_every_url(small_corpus):
    sitemaps = group(small_corpus, flatten(small_corpus), BUILT, SITE)
    root = ET.fromstring(sitemap_xml(sitemaps.books["genesis"]))
    assert root.tag == f"{{{SITEMAP_NS}}}urlset"
    locs = [el.text for el in root.findall("sm:url/sm:loc", NS)]
    assert len(locs) == 1 + 2 + 5
    assert f"{SITE}/genesis/2/2/" in locs
    assert {el.text for el in root.findall("sm:url/sm:lastmod", NS)} == {"2025-01-02T03:04:05Z"}


def test_sitemap_index_xml(small_corpus):
    sitemaps = group(small_corpus, flatten(small_corpus), BUILT, SITE)
    root = ET.fromstring(sitemap_index_xml(sitemaps.index))
    assert root.tag == f"{{{SITEMAP_NS}}}sitemapindex"
    assert [el.text for el in root.findall("sm:sitemap/sm:loc", NS)] == [
        f"{SITE}/sitemap-main.xml",
        f"{SITE}/sitemap-genesis.xml",
        f"{SITE}/sitemap-exodus.xml",
        f"{SITE}/sitemap-matthew.xml",
    ]


def test_sitemap_files(small_corpus):
    files = sitemap_files(group(small_corpus, flatten(small_corpus), BUILT, SITE))
    assert set(files) == {
        INDEX_SITEMAP,
        MAIN_SITEMAP,
        "sitemap-genesis.xml",
        "sitemap-exodus.xml",
        "sitemap-matthew.xml",
    }
    assert files[INDEX_SITEMAP].startswith('<?xml version="1.0" encoding="UTF-8"?>')


def test_format_lastmod_converts_to_utc():
    plus_two = timezone(timedelta(hours=2))
    assert format_lastmod(datetime(2025, 1, 2, 5, 4, 5, tzinfo=plus_two)) == "2025-01-02T03:04:05Z"
    assert format_lastmod(datetime(2025, 1, 2, 3, 4, 5)) == "2025-01-02T03:04:05Z"


def test_robots_txt_points_at_index():
    assert robots_txt(SITE + "/") == f"User-agent: *\nAllow: /\nSitemap: {SITE}/sitemap.xml\n"
