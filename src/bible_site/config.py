"""Build settings: defaults, overridable from the environment or the command line."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .canon import Canon, KJV_CANON


# =============================================================================
# Defaults
# =============================================================================

DEFAULT_SITE = "https://kjv.the-holy-bible.online"
DEFAULT_CNAME = "kjv.the-holy-bible.online"
DEFAULT_DATA_DIR = "Bible-kjv-master"
DEFAULT_OUT_DIR = "dist"
INDEX_FILE = "Books.json"

DEFAULT_MIRRORS = (
    "https://cdn.jsdelivr.net/gh/Living-Word-Bibles/the-holy-bible-kjv@main/Bible-kjv-master/",
    "https://raw.githubusercontent.com/Living-Word-Bibles/the-holy-bible-kjv/main/Bible-kjv-master/",
    "https://cdn.jsdelivr.net/gh/aruljohn/Bible-kjv@master/",
    "https://raw.githubusercontent.com/aruljohn/Bible-kjv/master/",
    "https://cdn.jsdelivr.net/gh/aruljohn/Bible-kjv-1611@master/",
    "https://raw.githubusercontent.com/aruljohn/Bible-kjv-1611/master/",
)

FETCH_PAUSE = 0.05  # seconds between mirror attempts
REQUEST_TIMEOUT = 30


def _env(name: str, default: str) -> str:
    value = os.environ.get(name)
    if value in (None, ""):
        return default
    return value


@dataclass
class BuildConfig:
    """Where to read the corpus from, where to write the site, and its public URL."""

    site: str = DEFAULT_SITE
    cname: str = DEFAULT_CNAME
    data_dir: Path = Path(DEFAULT_DATA_DIR)
    out_dir: Path = Path(DEFAULT_OUT_DIR)
    mirrors: tuple[str, ...] = DEFAULT_MIRRORS
    canon: Canon = KJV_CANON
    strict: bool = False
    title: str = "The Holy Bible"
    subtitle: str = "King James Version"

    def __post_init__(self):
        self.site = self.site.rstrip("/")
        self.data_dir = Path(self.data_dir)
        self.out_dir = Path(self.out_dir)

    @classmethod
    def from_env(cls, **overrides: Optional[object]) -> "BuildConfig":
        """Read SITE, CNAME, DATA_DIR and OUT_DIR; non-None overrides win."""
        settings = {
            "site": _env("SITE", DEFAULT_SITE),
            "cname": _env("CNAME", DEFAULT_CNAME),
            "data_dir": Path(_env("DATA_DIR", DEFAULT_DATA_DIR)),
            "out_dir": Path(_env("OUT_DIR", DEFAULT_OUT_DIR)),
        }
        settings.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**settings)
