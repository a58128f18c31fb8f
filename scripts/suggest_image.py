#!/usr/bin/env python3
"""CLI runner for the category image resolver.

Usage:
  python scripts/suggest_image.py suggest motivation --count 3
  python scripts/suggest_image.py stats

Exit codes: 0 ok, 1 nothing found, 2 configuration error, 3 provider error.
"""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Ensure project root is on sys.path so 'app' is importable when running this file directly
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.application.use_cases.suggest_image import SuggestCategoryImageUseCase
from app.core.exceptions import ConfigurationError, ProviderError, ValidationError
from app.core.logging_config import configure_logging
from app.infrastructure.adapters.bundles.images import build_image_resolver

logger = logging.getLogger("scripts.suggest_image")


async def suggest(use_case: SuggestCategoryImageUseCase, category: str, count: int) -> int:
    found = []
    for _ in range(count):
        recommendation = await use_case.execute(category)
        if recommendation is None:
            break
        found.append(recommendation.model_dump())

    print(json.dumps({"category": category, "images": found}, indent=2))
    print(json.dumps(use_case.stats().model_dump()), file=sys.stderr)
    return 0 if found else 1


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Suggest unused Pixabay images for affirmation categories",
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    sub = parser.add_subparsers(dest="command", required=True)

    p_suggest = sub.add_parser("suggest", help="Resolve images for a category")
    p_suggest.add_argument("category", help="Category name, e.g. 'motivation'")
    p_suggest.add_argument(
        "--count",
        type=int,
        default=1,
        help="Number of distinct images to resolve in this run",
    )
    sub.add_parser("stats", help="Print duplicate-tracking statistics")

    args = parser.parse_args(argv)
    configure_logging(level=args.log_level)

    use_case = SuggestCategoryImageUseCase(build_image_resolver())

    if args.command == "stats":
        # Registry lives in-process, so a fresh run always starts empty
        print(json.dumps(use_case.stats().model_dump()))
        return 0

    try:
        return asyncio.run(suggest(use_case, args.category, max(1, args.count)))
    except ConfigurationError as e:
        logger.error("Configuration error (%s): %s", e.config_key, e.message)
        return 2
    except ProviderError as e:
        logger.error("Image provider error: %s", e.message)
        return 3
    except ValidationError as e:
        logger.error("Invalid input: %s", e.message)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
