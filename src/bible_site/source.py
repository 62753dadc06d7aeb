"""
Raw book sources: a local data directory, remote mirrors, and an ordered
chain of both that falls through to the next source on failure.

Every source exposes the same two calls:

    list_canonical_names() -> set[str]     parsed from Books.json
    fetch_book_blob(filename) -> JSON      e.g. 'SongofSolomon.json'
"""

import json
import logging
import time
from pathlib import Path
from typing import Any, Optional, Sequence

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import DEFAULT_MIRRORS, FETCH_PAUSE, INDEX_FILE, REQUEST_TIMEOUT
from .errors import MalformedIndex, SourceUnavailable

logger = logging.getLogger(__name__)

USER_AGENT = "bible-site/0.1 (+https://kjv.the-holy-bible.online)"


def make_session(retries: int = 2) -> requests.Session:
    """Session with keep-alive and a small retry budget for transient errors."""
    session = requests.Session()
    session.headers.update({
        "User-Agent": USER_AGENT,
        "Accept": "application/json, text/plain, */*",
        "Cache-Control": "no-store",
    })
    adapter = HTTPAdapter(
        max_retries=Retry(total=retries, backoff_factor=0.1, status_forcelist=[429, 500, 502, 503, 504])
    )
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


def parse_index(data: Any, filename: str = INDEX_FILE) -> set[str]:
    """Book names from a parsed index file (a JSON array of strings)."""
    if not isinstance(data, list) or not all(isinstance(name, str) for name in data):
        raise MalformedIndex(filename)
    return set(data)


class _Source:
    """Shared index handling; subclasses implement fetch_book_blob."""

    label = "source"

    def fetch_book_blob(self, filename: str) -> Any:
        raise NotImplementedError

    def list_canonical_names(self) -> set[str]:
        return parse_index(self.fetch_book_blob(INDEX_FILE))

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.label}>"


# =============================================================================
# Local directory
# =============================================================================

class LocalSource(_Source):
    """Reads JSON files from a directory such as ./Bible-kjv-master."""

    def __init__(self, data_dir):
        self.data_dir = Path(data_dir)
        self.label = str(self.data_dir)

    def fetch_book_blob(self, filename: str) -> Any:
        path = self.data_dir / filename
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
            raise SourceUnavailable(filename, [f"{path}: {e}"]) from e


# =============================================================================
# Remote mirror
# =============================================================================

class RemoteSource(_Source):
    """Fetches JSON files relative to one mirror base URL."""

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = REQUEST_TIMEOUT,
    ):
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.session = session or make_session()
        self.timeout = timeout
        self.label = self.base_url

    def url_for(self, filename: str) -> str:
        return self.base_url + filename

    def fetch_text(self, filename: str) -> str:
        url = self.url_for(filename)
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise SourceUnavailable(filename, [f"{url}: {e}"]) from e
        # mirrors serve UTF-8 but rarely send a charset
        try:
            return response.content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SourceUnavailable(filename, [f"{url}: not UTF-8 ({e})"]) from e

    def fetch_book_blob(self, filename: str) -> Any:
        text = self.fetch_text(filename)
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise SourceUnavailable(filename, [f"{self.url_for(filename)}: invalid JSON ({e})"]) from e


# =============================================================================
# Ordered fallback chain
# =============================================================================

class MirroredSource(_Source):
    """Tries each source in order, pausing between failures."""

    def __init__(self, sources: Sequence[_Source], pause: float = FETCH_PAUSE, sleep=time.sleep):
        if not sources:
            raise ValueError("MirroredSource needs at least one source")
        self.sources = list(sources)
        self.pause = pause
        self._sleep = sleep
        self.label = f"{len(self.sources)} sources"

    def fetch_book_blob(self, filename: str) -> Any:
        attempts = []
        for position, source in enumerate(self.sources):
            if position:
                self._sleep(self.pause)
            try:
                return source.fetch_book_blob(filename)
            except SourceUnavailable as e:
                logger.debug("%s unavailable from %r: %s", filename, source, e)
                attempts.extend(e.attempts or [str(e)])
        raise SourceUnavailable(filename, attempts)


def default_source(
    data_dir=None,
    mirrors: Sequence[str] = DEFAULT_MIRRORS,
    session: Optional[requests.Session] = None,
    pause: float = FETCH_PAUSE,
) -> MirroredSource:
    """Local directory first (when it exists), then every mirror in order."""
    sources: list[_Source] = []
    if data_dir is not None and Path(data_dir).is_dir():
        sources.append(LocalSource(data_dir))
    else:
        logger.info("No local data directory at %s; using remote mirrors", data_dir)
    if mirrors:
        session = session or make_session()
        sources.extend(RemoteSource(base, session=session) for base in mirrors)
    if not sources:
        raise SourceUnavailable(INDEX_FILE, [f"no data directory at {data_dir} and no mirrors configured"])
    return MirroredSource(sources, pause=pause)
