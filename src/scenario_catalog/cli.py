#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
# src/scenario_catalog/cli.py
"""
Command-line access to a catalog: search, category search, tags, stats.
"""
import argparse
import json
import logging
import logging.config
import sys
from typing import Any, List, Optional

from scenario_catalog.config import Settings
from scenario_catalog.errors import CatalogError, InvalidFilterError
from scenario_catalog.service import CatalogService

logger = logging.getLogger(__name__)


def setup_logging(level: str):
    level = (level or "INFO").upper()
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"}
        },
        "handlers": {
            "stderr": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "console",
                "stream": "ext://sys.stderr",
            }
        },
        "root": {"level": level, "handlers": ["stderr"]},
    })


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="scenario-catalog", description="Query a scenario catalog")
    parser.add_argument("--catalog", help="Catalog file (.yaml/.yml/.json); default: CATALOG_PATH or bundled sample")
    parser.add_argument("--log-level", help="Logging level (default: LOG_LEVEL or INFO)")
    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    search_parser = subparsers.add_parser("search", help="Search scenarios")
    search_parser.add_argument("query", nargs="?", default="", help="Substring of scenario or category title")
    search_parser.add_argument("--difficulty")
    search_parser.add_argument("--philosophy")
    search_parser.add_argument("--complexity")
    search_parser.add_argument("--category", help="Category id")
    search_parser.add_argument("--tag", action="append", default=[], help="Required tag (repeatable, all must match)")

    cat_parser = subparsers.add_parser("categories", help="Search categories")
    cat_parser.add_argument("query", nargs="?", default="")
    cat_parser.add_argument("--difficulty")
    cat_parser.add_argument("--philosophy")
    cat_parser.add_argument("--tag", action="append", default=[])
    cat_parser.add_argument("--time-commitment", help="e.g. short, medium, long")

    tags_parser = subparsers.add_parser("tags", help="Popular tags")
    tags_parser.add_argument("--limit", type=int, default=None, help="Number of tags to show")

    subparsers.add_parser("stats", help="Catalog statistics")

    show_parser = subparsers.add_parser("show", help="Show one scenario or category by id")
    show_parser.add_argument("record_id")
    return parser


def _emit(payload: Any):
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    try:
        cfg = Settings.from_overrides(catalog_path=args.catalog, log_level=args.log_level)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    setup_logging(cfg.log_level)

    service = CatalogService(cfg)
    try:
        snap = service.reload_from_path()

        if args.command == "search":
            filters = {
                "difficulty": args.difficulty,
                "philosophy": args.philosophy,
                "complexity": args.complexity,
                "category": args.category,
                "tags": args.tag,
            }
            _emit([s.to_raw() for s in snap.search(args.query, filters)])
        elif args.command == "categories":
            filters = {
                "difficulty": args.difficulty,
                "philosophy": args.philosophy,
                "tags": args.tag,
                "time_commitment": args.time_commitment,
            }
            _emit([c.to_raw() for c in snap.search_categories(args.query, filters)])
        elif args.command == "tags":
            _emit([{"tag": t.tag, "count": t.count} for t in snap.get_popular_tags(args.limit)])
        elif args.command == "stats":
            _emit(snap.compute_stats().to_dict())
        elif args.command == "show":
            rec = snap.get_scenario(args.record_id) or snap.get_category(args.record_id)
            if rec is None:
                print(f"No scenario or category with id '{args.record_id}'", file=sys.stderr)
                return 1
            _emit(rec.to_raw())
    except InvalidFilterError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    except (CatalogError, ValueError, OSError) as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
