"""Exceptions raised while building the site."""

from typing import Optional


class BibleSiteError(Exception):
    """Base class for every build failure."""


class SourceUnavailable(BibleSiteError):
    """Every configured source failed to deliver a file."""

    def __init__(self, filename: str, attempts: Optional[list[str]] = None):
        self.filename = filename
        self.attempts = attempts or []
        detail = f" ({'; '.join(self.attempts)})" if self.attempts else ""
        super().__init__(f"Unable to load {filename}{detail}")


class MalformedBookData(BibleSiteError):
    """A book's JSON matches none of the recognized shapes."""

    def __init__(self, book: str, reason: str = "unrecognized book JSON structure"):
        self.book = book
        self.reason = reason
        super().__init__(f"{book}: {reason}")


class MalformedIndex(BibleSiteError):
    """The book index is not a JSON array of names."""

    def __init__(self, filename: str):
        self.filename = filename
        super().__init__(f"{filename}: expected a JSON array of book names")


class MissingCanonicalBook(BibleSiteError):
    """A canonical book name is absent from the book index."""

    def __init__(self, book: str, index_file: str):
        self.book = book
        super().__init__(f"{book} missing from {index_file}")


class SlugCollision(BibleSiteError):
    """Two distinct canonical names produce the same slug."""

    def __init__(self, slug: str, names: tuple[str, str]):
        self.slug = slug
        self.names = names
        super().__init__(f"{names[0]!r} and {names[1]!r} both map to slug {slug!r}")
