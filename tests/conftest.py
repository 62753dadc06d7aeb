"""Shared fixtures: in-memory sources, fake HTTP sessions and small corpora."""

import json
from pathlib import Path

import pytest
import requests

from bible_site.canon import KJV_CANON, file_from_name
from bible_site.errors import SourceUnavailable
from bible_site.models import Book, Chapter


GENESIS_RAW = {"chapters": {"1": {"1": "In the beginning...", "2": "And the earth..."}}}


class FakeSource:
    """Provider backed by a dict of book name -> raw JSON."""

    def __init__(self, books: dict, index=None):
        self.blobs = {file_from_name(name): raw for name, raw in books.items()}
        self.index = set(books) if index is None else set(index)
        self.requested: list[str] = []

    def list_canonical_names(self) -> set[str]:
        return set(self.index)

    def fetch_book_blob(self, filename: str):
        self.requested.append(filename)
        if filename not in self.blobs:
            raise SourceUnavailable(filename, [f"memory: no {filename}"])
        return self.blobs[filename]


class FakeResponse:
    def __init__(self, status_code: int = 200, text: str = "", content: bytes = None):
        self.status_code = status_code
        self.content = text.encode("utf-8") if content is None else content
        # requests falls back to ISO-8859-1 for text/* without a charset
        self.text = self.content.decode("latin-1")

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class FakeSession:
    """Stands in for requests.Session; unknown URLs answer 404."""

    def __init__(self, routes: dict):
        self.routes = routes
        self.calls: list[tuple[str, object]] = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        answer = self.routes.get(url, FakeResponse(404, "Not Found"))
        if isinstance(answer, Exception):
            raise answer
        return answer


def make_book(name: str, *verse_counts: int) -> Book:
    """Book whose chapters 1..n hold the given number of verses."""
    return Book(
        name=name,
        chapters={
            number: Chapter({str(v): f"{name} {number}:{v}" for v in range(1, count + 1)})
            for number, count in enumerate(verse_counts, start=1)
        },
    )


def write_corpus(data_dir: Path, books: dict, index=None) -> Path:
    """Write Books.json plus one file per book, the way the mirrors lay them out."""
    data_dir.mkdir(parents=True, exist_ok=True)
    names = list(books) if index is None else list(index)
    (data_dir / "Books.json").write_text(json.dumps(names), encoding="utf-8")
    for name, raw in books.items():
        (data_dir / file_from_name(name)).write_text(json.dumps(raw), encoding="utf-8")
    return data_dir


@pytest.fixture
def genesis_source():
    return FakeSource({"Genesis": GENESIS_RAW})


@pytest.fixture
def genesis_canon():
    return KJV_CANON.restricted_to(["Genesis"])


@pytest.fixture
def small_corpus():
    """Genesis (2 chapters), Exodus (1 chapter) and Matthew (1 chapter), keyed by slug."""
    return {
        "genesis": make_book("Genesis", 3, 2),
        "exodus": make_book("Exodus", 2),
        "matthew": make_book("Matthew", 1),
    }
