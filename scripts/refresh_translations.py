#!/usr/bin/env python3
"""Refresh, inspect or clear the local translation cache.

Usage:
    python scripts/refresh_translations.py            # fetch if older than 24h
    python scripts/refresh_translations.py --force    # fetch now
    python scripts/refresh_translations.py --clear    # forget cached strings
    python scripts/refresh_translations.py --show vn  # print resolved strings
"""

import argparse
import logging
import sys
import os

# Add parent directory to path to import app modules
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from physicshub.constants import parse_language
from physicshub.language import build_translation_context


def refresh(context, force: bool) -> bool:
    """Run one freshness check and report what happened."""
    success, error = context.controller.ensure_fresh(force_refresh=force)

    if success:
        bundle = context.store.get_bundle()
        print(f"✅ Translations up to date (last_fetch_time={bundle.last_fetch_timestamp})")
        return True

    if error is None:
        print("❌ Fetched translations could not be saved")
    else:
        print(f"❌ Fetch failed [{error.code}]: {error}")
    print("   Cached and default strings stay in use.")
    return False


def show(context, language_code: str) -> bool:
    try:
        language = parse_language(language_code)
    except ValueError as e:
        print(f"❌ {e}")
        return False

    cached = context.store.get_cached(language)
    resolved = context.resolver.resolve(language)

    print(f"\n📋 {language.display_name} strings:")
    for key in resolved:
        source = 'cache' if cached[key] else 'default'
        print(f"   {key:<18} {resolved[key]!r:<40} ({source})")
    return True


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--force', action='store_true', help='fetch even if the cache is fresh')
    group.add_argument('--clear', action='store_true', help='clear cached translations')
    group.add_argument('--show', metavar='LANG', help='print resolved strings for en or vn')
    parser.add_argument('-v', '--verbose', action='store_true')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    context = build_translation_context()
    try:
        if args.clear:
            if not context.controller.clear_cache():
                print("❌ Translation cache could not be cleared")
                return 1
            print("🗑️  Translation cache cleared")
            return 0
        if args.show:
            return 0 if show(context, args.show) else 1
        return 0 if refresh(context, args.force) else 1
    finally:
        context.close()


if __name__ == '__main__':
    sys.exit(main())
