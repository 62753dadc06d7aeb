"""Tests for the canon table and the name-derived identifiers."""

import pytest

from bible_site.canon import (
    Canon,
    KJV_CANON,
    NEW_TESTAMENT,
    OLD_TESTAMENT,
    file_from_name,
    slugify,
)
from bible_site.errors import SlugCollision


def test_canon_sizes():
    """39 Old Testament books, then 27 New Testament books."""
    assert len(OLD_TESTAMENT) == 39
    assert len(NEW_TESTAMENT) == 27
    assert len(KJV_CANON) == 66
    assert KJV_CANON.books[0] == "Genesis"
    assert KJV_CANON.books[38] == "Malachi"
    assert KJV_CANON.books[39] == "Matthew"
    assert KJV_CANON.books[-1] == "Revelation"


@pytest.mark.parametrize("name, slug", [
    ("Genesis", "genesis"),
    ("Song of Solomon", "song-of-solomon"),
    ("1 Samuel", "1-samuel"),
    ("3 John", "3-john"),
    ("  Song   of\tSolomon ", "song-of-solomon"),
    ("St. John's", "st-johns"),
])
def test_slugify(name, slug):
    """Lowercase, punctuation dropped, whitespace runs become one hyphen."""
    assert slugify(name) == slug


def test_slugify_is_pure():
    for name in KJV_CANON.books:
        assert slugify(name) == slugify(name)


def test_canonical_slugs_are_distinct():
    table = KJV_CANON.slug_table()
    assert len(table) == 66
    assert len(set(table.values())) == 66


def test_slug_collision_detected():
    canon = Canon("test", (("Only", ("1 John", "1 John!")),))
    with pytest.raises(SlugCollision) as excinfo:
        canon.slug_table()
    assert excinfo.value.slug == "1-john"
    assert excinfo.value.names == ("1 John", "1 John!")


@pytest.mark.parametrize("name, filename", [
    ("Genesis", "Genesis.json"),
    ("Song of Solomon", "SongofSolomon.json"),
    ("1 John", "1John.json"),
])
def test_file_from_name(name, filename):
    assert file_from_name(name) == filename


def test_restricted_to_keeps_canonical_order():
    sub = KJV_CANON.restricted_to(["Matthew", "Genesis", "Tobit"])
    assert sub.books == ("Genesis", "Matthew")
    assert "Tobit" not in sub
    assert sub.position("Matthew") == 1
