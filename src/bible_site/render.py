"""HTML templates for verse pages, hub pages, the home page and the 404 page."""

from html import escape
from typing import Optional

from .models import Book, HubPage, NavLink, VersePage, chapter_path, verse_path

STYLESHEET_PATH = "/assets/styles.css"

STYLESHEET = """
:root{--maxw:880px;--ink:#111;--muted:#666;--line:#eee}
*{box-sizing:border-box}
body{margin:0;background:#fafafa;color:var(--ink);font-family:Garamond,"Times New Roman",serif}
a{color:inherit}
.container,.site-head,.site-foot{max-width:var(--maxw);margin:1rem auto;padding:1rem 1.2rem;background:#fff;border:1px solid #ddd;border-radius:16px}
.verse p{font-size:1.2rem;line-height:1.75}
.vnum{color:var(--muted);margin-right:.25rem}
.pager{display:flex;justify-content:space-between;border-top:1px solid var(--line);margin-top:1rem;padding-top:.6rem}
.meta,.site-foot{color:var(--muted)}
.booklist,.children{columns:2;gap:1.5rem}
@media (max-width:720px){.booklist,.children{columns:1}}
""".lstrip()


def _shell(
    *,
    title: str,
    body: str,
    canonical: Optional[str] = None,
    head_extra: str = "",
    heading: str = "The Holy Bible",
    subheading: str = "King James Version",
) -> str:
    canonical_link = f'<link rel="canonical" href="{escape(canonical)}">\n' if canonical else ""
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width,initial-scale=1">
<title>{escape(title)}</title>
{canonical_link}{head_extra}<link rel="stylesheet" href="{STYLESHEET_PATH}">
<meta name="robots" content="index,follow">
</head>
<body>
<header class="site-head">
  <a class="brand" href="/">{escape(heading)}</a>
  <span class="brand-h2">{escape(subheading)}</span>
</header>
<main class="container">
{body}
</main>
<footer class="site-foot">{escape(heading)} ({escape(subheading)}), verse by verse</footer>
</body>
</html>
"""


def _pager(prev: Optional[NavLink], next_: Optional[NavLink]) -> str:
    prev_html = f'<a class="btn" rel="prev" href="{prev.path}">◀ Prev</a>' if prev else "<span></span>"
    next_html = f'<a class="btn" rel="next" href="{next_.path}">Next ▶</a>' if next_ else "<span></span>"
    return f'<nav class="pager">\n  {prev_html}\n  {next_html}\n</nav>'


def render_verse(page: VersePage, site: str, **labels) -> str:
    label = f"{page.book_name} {page.chapter}:{page.verse}"
    head = ""
    if page.prev:
        head += f'<link rel="prev" href="{page.prev.path}">\n'
    if page.next:
        head += f'<link rel="next" href="{page.next.path}">\n'
    body = f"""<h1 class="ref">{escape(label)}</h1>
<article class="verse">
  <p><span class="vnum">{page.verse}</span> {escape(page.text)}</p>
</article>
{_pager(page.prev, page.next)}
<aside class="meta">
  <a href="{chapter_path(page.book_slug, page.chapter)}">{escape(page.book_name)} {page.chapter}</a>
  • Verse {page.verse} of {page.total_verses}
</aside>"""
    return _shell(
        title=f"{labels.get('heading', 'The Holy Bible')}: {label}",
        body=body,
        canonical=site.rstrip("/") + page.path,
        head_extra=head,
        **labels,
    )


def render_hub(hub: HubPage, site: str, **labels) -> str:
    if hub.chapter is None:
        label = hub.book_name
        links = [(f"Chapter {n}", chapter_path(hub.book_slug, n)) for n in hub.children]
        noun = "chapter" if hub.child_count == 1 else "chapters"
        up = '<a href="/">All books</a>'
    else:
        label = f"{hub.book_name} {hub.chapter}"
        links = [(f"Verse {n}", verse_path(hub.book_slug, hub.chapter, n)) for n in hub.children]
        noun = "verse" if hub.child_count == 1 else "verses"
        up = f'<a href="/{hub.book_slug}/">{escape(hub.book_name)}</a>'
    items = "".join(f'<li><a href="{href}">{escape(text)}</a></li>' for text, href in links)
    body = f"""<h1 class="ref">{escape(label)}</h1>
<p class="meta">{up} • {hub.child_count} {noun}</p>
<ul class="children">{items}</ul>"""
    return _shell(
        title=f"{labels.get('heading', 'The Holy Bible')}: {label}",
        body=body,
        canonical=site.rstrip("/") + hub.path,
        **labels,
    )


def render_home(books: list[Book], site: str, start: Optional[NavLink] = None, **labels) -> str:
    items = "".join(
        f'<li><a href="/{book.slug}/">{escape(book.name)}</a></li>' for book in books
    )
    start_html = f'<p><a class="btn" href="{start.path}">Start reading</a></p>\n' if start else ""
    body = f"""<p>One verse per page.</p>
{start_html}<ul class="booklist">{items}</ul>"""
    return _shell(
        title=f"{labels.get('heading', 'The Holy Bible')}: Verse by Verse",
        body=body,
        canonical=site.rstrip("/") + "/",
        **labels,
    )


def render_not_found(**labels) -> str:
    return _shell(
        title="Not Found",
        body='<h1>404: Not Found</h1>\n<p>Try the <a href="/">list of books</a>.</p>',
        **labels,
    )
