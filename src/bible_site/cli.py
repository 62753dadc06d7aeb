#!/usr/bin/env python3
"""
CLI for Bible Site - builds the verse-per-page static site.

Usage:
    bible-site build                          # Build ./dist from ./Bible-kjv-master (or mirrors)
    bible-site build --site https://example.org --out public
    bible-site build --strict                 # Fail if a canonical book is missing
    bible-site fetch                          # Download the corpus into ./Bible-kjv-master
"""

import argparse
import logging
import time
from typing import Optional

from .builder import build_site
from .config import BuildConfig, DEFAULT_MIRRORS
from .errors import BibleSiteError
from .fetch import fetch_corpus

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


# =============================================================================
# Commands
# =============================================================================

def run_build(args) -> int:
    config = BuildConfig.from_env(
        site=args.site,
        cname=args.cname,
        data_dir=args.data_dir,
        out_dir=args.out,
        strict=args.strict or None,
        mirrors=() if args.offline else None,
    )

    print("📖 Bible Site Builder")
    print("=" * 60)
    print(f"Site:   {config.site}")
    print(f"Data:   {config.data_dir}/")
    print(f"Output: {config.out_dir}/")
    print("=" * 60)

    start_time = time.time()
    report = build_site(config)
    elapsed = time.time() - start_time

    print("=" * 60)
    print("✅ Build complete!")
    print(f"   Books: {report.books:,}")
    if report.missing:
        print(f"   Missing from index: {', '.join(report.missing)}")
    print(f"   Verse pages: {report.verses:,}")
    print(f"   Hub pages: {report.hubs:,}")
    print(f"   Sitemap URLs: {report.urls:,}")
    print(f"   Time: {time.strftime('%H:%M:%S', time.gmtime(elapsed))}")
    print(f"   Output: {report.out_dir}/")
    print("=" * 60)
    return 0


def run_fetch(args) -> int:
    config = BuildConfig.from_env(data_dir=args.data_dir)

    print("📥 Fetching corpus")
    print("=" * 60)

    def progress(name: str, error: Optional[str]):
        if error:
            print(f"✗ {name}: {error}")
        else:
            print(f"✓ {name}")

    report = fetch_corpus(config.data_dir, mirrors=args.mirror or DEFAULT_MIRRORS, callback=progress)

    print("=" * 60)
    if not report.replaced:
        print(f"⚠️  Nothing downloaded; {report.out_dir}/ left unchanged")
    print(f"Done. ok={len(report.ok)} failed={len(report.failed)} out={report.out_dir}/")
    return 1 if report.failed else 0


# =============================================================================
# CLI Entry Point
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bible-site",
        description="Build a verse-per-page static Bible site from per-book JSON files."
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show debug logging (individual mirror failures)"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    build = subparsers.add_parser("build", help="Build the static site")
    build.add_argument("--site", type=str, help="Public site URL (env: SITE)")
    build.add_argument("--cname", type=str, help="Domain written to CNAME (env: CNAME)")
    build.add_argument("--data-dir", "-d", type=str, help="Local data directory (env: DATA_DIR)")
    build.add_argument("--out", "-o", type=str, help="Output directory (env: OUT_DIR)")
    build.add_argument(
        "--strict",
        action="store_true",
        help="Fail instead of warning when a canonical book is missing from the index"
    )
    build.add_argument(
        "--offline",
        action="store_true",
        help="Only read the local data directory, never the remote mirrors"
    )
    build.set_defaults(func=run_build)

    fetch = subparsers.add_parser("fetch", help="Download the corpus into the data directory")
    fetch.add_argument("--data-dir", "-d", type=str, help="Target directory (env: DATA_DIR)")
    fetch.add_argument(
        "--mirror", "-m",
        action="append",
        help="Mirror base URL; repeat to try several in order (default: built-in list)"
    )
    fetch.set_defaults(func=run_fetch)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=LOG_FORMAT,
    )

    try:
        return args.func(args)
    except BibleSiteError as e:
        print(f"\n❌ Build failed: {e}")
        return 1


if __name__ == "__main__":
    exit(main())
