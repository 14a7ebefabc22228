#!/usr/bin/env python3
"""
CLI for the marketplace crawler.

Usage:
    # Crawl a marketplace into the catalog
    market-crawler crawl shopee
    market-crawler crawl amazon
    market-crawler crawl ebay

    # Check datastore credentials and product counts
    market-crawler check
    market-crawler check --platform shopee

Settings come from the environment (or a .env file): SUPABASE_URL,
SUPABASE_SERVICE_ROLE_KEY, MAX_PRODUCTS, HEADLESS, CRAWL_MODE,
SEARCH_KEYWORD, CATEGORY, SCREENSHOT_DIR, LOG_LEVEL.
"""

import asyncio
import sys

from .config import load_settings
from .errors import ConfigError
from .marketplaces import MARKETPLACES
from .runner import EXIT_CONFIG, EXIT_OK, check_connection, run_crawl


def cmd_crawl(args) -> int:
    """Crawl one marketplace."""
    if len(args) < 1:
        print(f"Usage: market-crawler crawl <{'|'.join(MARKETPLACES)}>")
        return EXIT_CONFIG

    try:
        settings = load_settings()
    except ConfigError as e:
        print(f"Configuration error: {e}")
        return EXIT_CONFIG

    outcome = asyncio.run(run_crawl(settings, args[0]))
    return outcome.exit_code


def cmd_check(args) -> int:
    """Verify the datastore connection."""
    platform = None
    if args:
        if args[0] == '--platform':
            if len(args) < 2:
                print("Usage: market-crawler check [--platform <name>]")
                return EXIT_CONFIG
            platform = args[1]
        else:
            platform = args[0]

    if platform and platform not in MARKETPLACES:
        print(f"Unknown platform: {platform}")
        return EXIT_CONFIG

    try:
        settings = load_settings()
    except ConfigError as e:
        print(f"Configuration error: {e}")
        return EXIT_CONFIG

    return check_connection(settings, platform)


def cmd_help(args=None) -> int:
    """Print help."""
    print(__doc__)
    return EXIT_OK


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else list(argv)
    if not argv:
        return cmd_help()

    command = argv[0]
    args = argv[1:]

    commands = {
        "crawl": cmd_crawl,
        "check": cmd_check,
        "help": cmd_help,
    }

    if command in commands:
        return commands[command](args)

    print(f"Unknown command: {command}")
    cmd_help()
    return EXIT_CONFIG


def entry():
    sys.exit(main())


if __name__ == "__main__":
    entry()
