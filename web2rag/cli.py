"""
web2rag Command Line
====================

Extract a single page or crawl a site into RAG-ready Markdown.

Usage:
    # One page to stdout
    web2rag extract https://example.com/docs/intro

    # Local file, chunk text, relative links resolved
    web2rag extract page.html --base-url https://example.com/docs/ --chunks

    # Crawl below a URL into a ZIP archive
    web2rag crawl https://example.com/docs/ --max-pages 50 --format chunks
"""

import argparse
import asyncio
import signal
import sys
import time
from pathlib import Path
from typing import List, Optional
from urllib.parse import urlparse

from . import __version__
from .config import AppConfig, get_logger, level_for_verbosity, setup_logging
from .core.exceptions import Web2RagError
from .crawler import HtmlFetcher, SiteCrawler, fetch_html
from .export import EXPORT_FORMATS, write_archive, write_chunks_file, write_markdown_file
from .extraction import PageExtractor, format_chunks_text

logger = get_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with extract and crawl subcommands."""
    config = AppConfig()

    parser = argparse.ArgumentParser(
        prog="web2rag",
        description="Convert web pages into clean Markdown and RAG chunks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  web2rag extract https://example.com/docs/intro          # Markdown to stdout
  web2rag extract page.html --chunks                      # Chunk text from a local file
  web2rag extract URL --output-dir out/                   # Write extracted_data.md + rag_chunks.txt
  web2rag crawl https://example.com/docs/ --max-pages 50  # ZIP of Markdown files
        """
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # Shared network/logging options
    common = argparse.ArgumentParser(add_help=False)
    net_group = common.add_argument_group("Network Options")
    net_group.add_argument("--use-proxies", action="store_true", default=config.fetch.use_proxies,
                           help="Fall back to public CORS proxies when a direct request fails")
    net_group.add_argument("--timeout", type=float, default=config.fetch.timeout,
                           help=f"Request timeout in seconds (default: {config.fetch.timeout})")
    common.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    # extract
    extract = subparsers.add_parser(
        "extract", parents=[common],
        help="Extract Markdown from one page",
        description="Extract Markdown from an http(s) URL or a local HTML file",
    )
    extract.add_argument("source", metavar="SOURCE", help="http(s) URL or path to an HTML file")
    out_group = extract.add_argument_group("Output")
    out_group.add_argument("--base-url", type=str, default=None,
                           help="URL used to resolve relative links (default: SOURCE when it is a URL)")
    out_group.add_argument("--output-dir", type=str, default=None,
                           help=f"Write {config.export.markdown_file_name} and "
                                f"{config.export.chunks_file_name} here instead of stdout")
    out_group.add_argument("--chunks", action="store_true",
                           help="Print chunk text instead of Markdown")

    # crawl
    crawl = subparsers.add_parser(
        "crawl", parents=[common],
        help="Crawl a site section into a ZIP archive",
        description="Breadth-first crawl of pages below URL, exported as a ZIP archive",
    )
    crawl.add_argument("url", metavar="URL", help="Start URL; only pages below its path are crawled")
    crawl_group = crawl.add_argument_group("Crawl Options")
    crawl_group.add_argument("--max-pages", type=int, default=config.crawl.max_pages,
                             help=f"Maximum pages to visit (default: {config.crawl.max_pages})")
    crawl_group.add_argument("--delay", type=float, default=config.crawl.delay,
                             help=f"Seconds to wait between pages (default: {config.crawl.delay})")
    export_group = crawl.add_argument_group("Export Options")
    export_group.add_argument("--format", dest="fmt", choices=sorted(EXPORT_FORMATS), default="markdown",
                              help="Archive content: rendered Markdown or chunk text (default: markdown)")
    export_group.add_argument("--output", type=str, default=config.export.archive_file_name,
                              help=f"Archive path (default: {config.export.archive_file_name})")

    return parser


def is_url(source: str) -> bool:
    """Check if a source argument is an http(s) URL rather than a file path."""
    return urlparse(source).scheme.lower() in ("http", "https")


def run_extract(args, config: AppConfig) -> int:
    """Run the extract command."""
    if is_url(args.source):
        logger.info(f"Fetching {args.source}")
        html = asyncio.run(fetch_html(args.source, config.fetch))
        base_url = args.base_url or args.source
    else:
        path = Path(args.source)
        if not path.is_file():
            logger.error(f"File not found: {path}")
            return 1
        html = path.read_text(encoding="utf-8", errors="ignore")
        base_url = args.base_url

    page = PageExtractor(config.extraction).extract(html, url=base_url)
    logger.info(f"Extracted {page.char_count} chars in {len(page.chunks)} chunks")

    if args.output_dir:
        output_dir = Path(args.output_dir)
        write_markdown_file(page.markdown, output_dir / config.export.markdown_file_name)
        write_chunks_file(page.chunks, output_dir / config.export.chunks_file_name)
    elif args.chunks:
        print(format_chunks_text(page.chunks))
    else:
        print(page.markdown)
    return 0


def _install_stop_handler(crawler: SiteCrawler) -> bool:
    """Stop the crawl gracefully on Ctrl+C where the event loop supports it."""
    try:
        asyncio.get_running_loop().add_signal_handler(signal.SIGINT, crawler.stop)
    except (NotImplementedError, RuntimeError, ValueError):
        return False
    return True


def _log_progress(processed: int, total: int, result) -> None:
    logger.debug(f"[{processed}/{total}] {result.status.value}: {result.url}")


async def crawl_to_archive(args, config: AppConfig) -> int:
    """Crawl from args.url and write the archive; returns the number of files."""
    logger.info("=" * 60)
    logger.info(f"Crawling {args.url}")
    logger.info(f"Max pages: {config.crawl.max_pages}")
    logger.info(f"Delay: {config.crawl.delay}s")
    logger.info(f"Output: {args.output} ({args.fmt})")
    logger.info("=" * 60)

    start_time = time.time()
    async with HtmlFetcher(config.fetch) as fetcher:
        crawler = SiteCrawler(
            fetcher,
            config.crawl,
            extractor=PageExtractor(config.extraction),
            on_progress=_log_progress,
        )
        handler_installed = _install_stop_handler(crawler)
        try:
            results = await crawler.crawl(args.url)
        finally:
            if handler_installed:
                asyncio.get_running_loop().remove_signal_handler(signal.SIGINT)

    done = sum(1 for r in results if r.ok)
    logger.info(f"Crawl complete: {done} done, {len(results) - done} errors in {time.time() - start_time:.1f}s")
    for result in results:
        if not result.ok:
            logger.info(f"  - {result.url}: {result.error}")

    return write_archive(results, args.url, args.output, args.fmt, config.export.max_file_name_length)


def run_crawl(args, config: AppConfig) -> int:
    """Run the crawl command."""
    count = asyncio.run(crawl_to_archive(args, config))
    logger.info(f"Archive written: {args.output} ({count} files)")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 1

    setup_logging(level=level_for_verbosity(args.verbose))
    config = AppConfig.from_args(args)

    try:
        if args.command == "extract":
            return run_extract(args, config)
        return run_crawl(args, config)
    except (Web2RagError, ValueError) as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
