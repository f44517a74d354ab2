"""
Command line entry point for one-off screenshot crawls.

Usage:
    screenshot-scraper 76561198000000000
    screenshot-scraper 76561198000000000 --quality medium --output shots.json
    screenshot-scraper 76561198000000000 --probe --verbose
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from .config import RateLimitConfig, RetryConfig, ScraperConfig
from .logger import setup_logging
from .models import CrawlResult
from .scraper_controller import ScraperController, apply_quality_to_records
from .utils import QUALITY_CHOICES, is_numeric_id


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='screenshot-scraper',
        description='Fetch every public screenshot of a Steam profile',
    )
    parser.add_argument('steam_id', help='Numeric Steam account id')
    parser.add_argument('--quality', choices=QUALITY_CHOICES,
                        help='Rewrite image URLs for this quality (default: maximum)')
    parser.add_argument('--batch-size', type=int, default=3,
                        help='Detail pages fetched concurrently (default: 3)')
    parser.add_argument('--batch-delay', type=float, default=2.0,
                        help='Seconds between batches (default: 2)')
    parser.add_argument('--delay', type=float, default=1.0,
                        help='Minimum seconds between listing pages (default: 1)')
    parser.add_argument('--retries', type=int, default=3,
                        help='Attempts per page (default: 3)')
    parser.add_argument('--empty-pages', type=int, default=2,
                        help='Consecutive pages without new links before leaving a view (default: 2)')
    parser.add_argument('--probe', action='store_true',
                        help='Probe the discovered id range for missed screenshots')
    parser.add_argument('--output', '-o', type=Path,
                        help='Write JSON here instead of stdout')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Debug logging')
    return parser


def config_from_args(args: argparse.Namespace) -> ScraperConfig:
    return ScraperConfig(
        rate_limit=RateLimitConfig(min_delay=args.delay, initial_delay=args.delay),
        retry=RetryConfig(max_retries=args.retries),
        batch_size=args.batch_size,
        batch_delay=args.batch_delay,
        empty_page_threshold=args.empty_pages,
        probe_id_range=args.probe,
    )


async def run_crawl(steam_id: str, config: ScraperConfig) -> CrawlResult:
    controller = ScraperController(config)
    try:
        return await controller.crawl(steam_id)
    finally:
        await controller.close()


def print_summary(result: CrawlResult):
    out = sys.stderr
    print("\n" + "=" * 60, file=out)
    print("CRAWL COMPLETE", file=out)
    print("=" * 60, file=out)
    print(f"Steam ID:    {result.steam_id}", file=out)
    print(f"Status:      {result.status}", file=out)
    print(f"Duration:    {result.duration_seconds / 60:.1f} minutes", file=out)
    print(f"Discovered:  {result.links_discovered}", file=out)
    print(f"Extracted:   {len(result.records)}", file=out)
    for reason, count in sorted(result.skipped.items()):
        print(f"Skipped:     {count} ({reason})", file=out)


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    if not is_numeric_id(args.steam_id):
        print(f"Invalid Steam ID: {args.steam_id}", file=sys.stderr)
        return 2

    try:
        config = config_from_args(args)
    except ValueError as e:
        print(f"Invalid option: {e}", file=sys.stderr)
        return 2

    try:
        result = asyncio.run(run_crawl(args.steam_id, config))
    except KeyboardInterrupt:
        print("\nStopped.", file=sys.stderr)
        return 130

    records = apply_quality_to_records(result.records, args.quality)
    payload = json.dumps([r.to_dict() for r in records], indent=2)
    if args.output:
        args.output.write_text(payload + "\n", encoding="utf-8")
    else:
        print(payload)

    print_summary(result)
    return 0 if result.success else 1


if __name__ == '__main__':
    sys.exit(main())
