"""Download the book JSON files from the mirrors into a local data directory."""

import json
import logging
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, Sequence

import requests

from .canon import Canon, KJV_CANON, file_from_name
from .config import DEFAULT_MIRRORS, INDEX_FILE
from .errors import SourceUnavailable
from .source import RemoteSource, make_session

logger = logging.getLogger(__name__)


@dataclass
class FetchReport:
    out_dir: Path
    ok: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)
    replaced: bool = False


def _first_text(remotes: Sequence[RemoteSource], filename: str) -> str:
    """Body of `filename` from the first mirror that returns a non-empty file."""
    attempts = []
    for remote in remotes:
        try:
            text = remote.fetch_text(filename)
        except SourceUnavailable as e:
            attempts.extend(e.attempts)
            continue
        if len(text.strip()) < 2:
            attempts.append(f"{remote.url_for(filename)}: empty file")
            continue
        return text
    raise SourceUnavailable(filename, attempts)


def _book_names(remotes: Sequence[RemoteSource], canon: Canon) -> list[str]:
    """The mirrors' index if it lists every canonical book, otherwise the canon itself."""
    try:
        remote_index = json.loads(_first_text(remotes, INDEX_FILE))
    except (SourceUnavailable, json.JSONDecodeError) as e:
        logger.warning("Could not load %s from mirrors (%s); using the canonical list", INDEX_FILE, e)
        return list(canon.books)
    if isinstance(remote_index, list) and all(name in remote_index for name in canon.books):
        return [name for name in remote_index if isinstance(name, str)]
    logger.warning("%s from mirrors is incomplete; using the canonical list", INDEX_FILE)
    return list(canon.books)


def fetch_corpus(
    out_dir,
    mirrors: Sequence[str] = DEFAULT_MIRRORS,
    canon: Canon = KJV_CANON,
    session: Optional[requests.Session] = None,
    callback: Optional[Callable[[str, Optional[str]], None]] = None,
) -> FetchReport:
    """
    Replace `out_dir` with a fresh copy of the index and every book file.

    Files are downloaded into a staging directory next to `out_dir`, which
    is swapped in only if at least one book arrived. Otherwise the existing
    `out_dir` is left untouched.

    Args:
        out_dir: Target directory
        mirrors: Base URLs, tried in order for each file
        canon: Canonical names, used when the mirrors' index is incomplete
        session: HTTP session to share between mirrors
        callback: Called with (book name, error or None) after each book

    Returns:
        FetchReport listing downloaded and failed books
    """
    out_dir = Path(out_dir)
    out_dir.parent.mkdir(parents=True, exist_ok=True)
    staging = Path(tempfile.mkdtemp(dir=out_dir.parent, prefix=f".{out_dir.name}-"))

    session = session or make_session()
    remotes = [RemoteSource(base, session=session) for base in mirrors]
    report = FetchReport(out_dir=out_dir)

    try:
        names = _book_names(remotes, canon)
        (staging / INDEX_FILE).write_text(json.dumps(names, indent=2), encoding="utf-8")

        for name in names:
            filename = file_from_name(name)
            try:
                text = _first_text(remotes, filename)
            except SourceUnavailable as e:
                report.failed[name] = str(e)
                if callback:
                    callback(name, str(e))
                continue
            (staging / filename).write_text(text, encoding="utf-8")
            report.ok.append(name)
            if callback:
                callback(name, None)

        if report.ok:
            shutil.rmtree(out_dir, ignore_errors=True)
            staging.rename(out_dir)
            report.replaced = True
    finally:
        shutil.rmtree(staging, ignore_errors=True)

    if not report.replaced:
        logger.warning("No book files downloaded; keeping %s as it was", out_dir)
        return report

    book_files = [p for p in out_dir.glob("*.json") if p.name != INDEX_FILE]
    if len(book_files) != len(canon):
        logger.warning("Expected %d book files; found %d", len(canon), len(book_files))

    return report
