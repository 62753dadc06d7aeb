"""Tests for downloading the corpus from mirrors."""

import json
import logging

from bible_site.canon import KJV_CANON
from bible_site.fetch import fetch_corpus

from conftest import GENESIS_RAW, FakeResponse, FakeSession, write_corpus

M1 = "https://m1.test/"
M2 = "https://m2.test/"
CANON = KJV_CANON.restricted_to(["Genesis", "Exodus"])


def test_fetch_tries_mirrors_and_reports_failures(tmp_path, caplog):
    session = FakeSession({
        M1 + "Books.json": FakeResponse(200, '["Genesis"]'),
        M1 + "Genesis.json": FakeResponse(200, " "),
        M2 + "Genesis.json": FakeResponse(200, json.dumps(GENESIS_RAW)),
    })
    seen = []
    out = tmp_path / "data"

    with caplog.at_level(logging.WARNING):
        report = fetch_corpus(out, mirrors=[M1, M2], canon=CANON, session=session,
                              callback=lambda name, error: seen.append((name, error is None)))

    assert report.ok == ["Genesis"]
    assert list(report.failed) == ["Exodus"]
    assert seen == [("Genesis", True), ("Exodus", False)]
    # the mirrors' index lacks Exodus, so the canonical list is written instead
    assert json.loads((out / "Books.json").read_text(encoding="utf-8")) == ["Genesis", "Exodus"]
    assert json.loads((out / "Genesis.json").read_text(encoding="utf-8")) == GENESIS_RAW
    assert not (out / "Exodus.json").exists()
    assert "Expected 2 book files; found 1" in caplog.text


def test_fetch_keeps_complete_remote_index(tmp_path):
    session = FakeSession({
        M1 + "Books.json": FakeResponse(200, '["Exodus", "Genesis", "Tobit"]'),
        M1 + "Genesis.json": FakeResponse(200, "[[\"g\"]]"),
        M1 + "Exodus.json": FakeResponse(200, "[[\"e\"]]"),
    })
    report = fetch_corpus(tmp_path / "data", mirrors=[M1], canon=CANON, session=session)
    assert report.ok == ["Exodus", "Genesis"]
    assert list(report.failed) == ["Tobit"]


def test_fetch_replaces_existing_directory(tmp_path):
    out = tmp_path / "data"
    out.mkdir()
    (out / "Stale.json").write_text("[]", encoding="utf-8")
    session = FakeSession({M1 + "Genesis.json": FakeResponse(200, "[[\"g\"]]")})
    report = fetch_corpus(out, mirrors=[M1], canon=CANON, session=session)
    assert report.replaced
    assert not (out / "Stale.json").exists()
    assert (out / "Books.json").is_file()
    assert (out / "Genesis.json").read_text(encoding="utf-8") == "[[\"g\"]]"
    assert [p.name for p in tmp_path.iterdir()] == ["data"]


def test_fetch_keeps_existing_corpus_when_mirrors_are_down(tmp_path, caplog):
    """Nothing downloads: the local corpus survives and no staging dir is left."""
    out = write_corpus(tmp_path / "data", {"Genesis": GENESIS_RAW})
    before = sorted(p.name for p in out.iterdir())

    with caplog.at_level(logging.WARNING):
        report = fetch_corpus(out, mirrors=[M1], canon=CANON, session=FakeSession({}))

    assert not report.replaced
    assert report.ok == []
    assert sorted(p.name for p in out.iterdir()) == before
    assert json.loads((out / "Genesis.json").read_text(encoding="utf-8")) == GENESIS_RAW
    assert [p.name for p in tmp_path.iterdir()] == ["data"]
    assert "keeping" in caplog.text


def test_fetch_into_missing_directory(tmp_path):
    out = tmp_path / "nested" / "data"
    session = FakeSession({M1 + "Genesis.json": FakeResponse(200, "[[\"g\"]]")})
    fetch_corpus(out, mirrors=[M1], canon=CANON, session=session)
    assert (out / "Genesis.json").is_file()
