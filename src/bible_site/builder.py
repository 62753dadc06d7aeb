"""
Site builder: loads the corpus, then writes every page, the static files
and the sitemaps into the output directory.

Output layout:
  {out}/index.html, 404.html, robots.txt, CNAME, .nojekyll
  {out}/assets/styles.css
  {out}/{book-slug}/index.html                     book hub
  {out}/{book-slug}/{ch}/index.html                chapter hub
  {out}/{book-slug}/{ch}/{verse}/index.html        verse page
  {out}/sitemap.xml, sitemap-main.xml, sitemap-{book-slug}.xml
"""

import logging
import shutil
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from .config import BuildConfig
from .corpus import assemble, flatten, hub_pages, iter_books, verse_pages
from .render import STYLESHEET, STYLESHEET_PATH, render_home, render_hub, render_not_found, render_verse
from .sitemap import group, robots_txt, sitemap_files
from .source import default_source

logger = logging.getLogger(__name__)


@dataclass
class BuildReport:
    """What a finished build produced."""

    out_dir: Path
    books: int = 0
    verses: int = 0
    hubs: int = 0
    urls: int = 0
    missing: list[str] = field(default_factory=list)


def page_file(out_dir: Path, url_path: str) -> Path:
    """'/genesis/1/1/' -> {out_dir}/genesis/1/1/index.html"""
    relative = url_path.strip("/")
    directory = out_dir / relative if relative else out_dir
    return directory / "index.html"


def write_page(out_dir: Path, url_path: str, content: str) -> Path:
    path = page_file(out_dir, url_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def _write(out_dir: Path, relative: str, content: str):
    path = out_dir / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def clean_out(out_dir: Path):
    shutil.rmtree(out_dir, ignore_errors=True)
    out_dir.mkdir(parents=True, exist_ok=True)


def build_site(config: BuildConfig, source=None, now: Optional[datetime] = None) -> BuildReport:
    """
    Build the whole site.

    The corpus is loaded completely before the output directory is touched,
    so a failed load leaves any previous build in place.

    Args:
        config: Build settings
        source: Raw source provider (defaults to local data dir + mirrors)
        now: Build timestamp used for every sitemap entry (defaults to now, UTC)

    Returns:
        BuildReport with page counts
    """
    started = now or datetime.now(timezone.utc)
    source = source or default_source(config.data_dir, config.mirrors)
    out_dir = config.out_dir
    labels = {"heading": config.title, "subheading": config.subtitle}

    names = source.list_canonical_names()
    corpus = assemble(names, source, config.canon, strict=config.strict)
    refs = flatten(corpus, config.canon)
    logger.info("Loaded %d books; generating %d verse pages", len(corpus), len(refs))

    report = BuildReport(
        out_dir=out_dir,
        books=len(corpus),
        missing=[name for name in config.canon.books if name not in names],
    )

    clean_out(out_dir)

    for page in verse_pages(corpus, refs):
        write_page(out_dir, page.path, render_verse(page, config.site, **labels))
        report.verses += 1

    for hub in hub_pages(corpus, config.canon):
        write_page(out_dir, hub.path, render_hub(hub, config.site, **labels))
        report.hubs += 1

    books = [book for _, book in iter_books(corpus, config.canon)]
    start = refs[0].link() if refs else None
    write_page(out_dir, "/", render_home(books, config.site, start=start, **labels))
    _write(out_dir, "404.html", render_not_found(**labels))
    _write(out_dir, STYLESHEET_PATH.lstrip("/"), STYLESHEET)
    _write(out_dir, "CNAME", config.cname)
    _write(out_dir, ".nojekyll", "")
    _write(out_dir, "robots.txt", robots_txt(config.site))

    sitemaps = group(corpus, refs, started, config.site, config.canon)
    for filename, xml in sitemap_files(sitemaps).items():
        _write(out_dir, filename, xml)
    report.urls = sitemaps.url_count

    logger.info("Build complete: %d verse pages, %d hubs, %d URLs in %s",
                report.verses, report.hubs, report.urls, out_dir)
    return report
