"""
CLI entrypoint printing assembled dotenv text.

Examples:
    sitenv app
    sitenv app false
    sitenv site

The output can be sourced by bash or read by any dotenv parser.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .config import settings
from .loader import EnvironmentLoader, InvocationMode, MissingEnvironmentError
from .project import ProjectEnvironmentResolver

logger = logging.getLogger(__name__)

FALSE_VALUES = {"false", "0", ""}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sitenv", description="Print layered dotenv variables.")
    parser.add_argument("scope", choices=["app", "site"], help="Load app variables or site-specific variables.")
    parser.add_argument(
        "prefer_existing",
        nargs="?",
        default=None,
        help="With 'app', pass 'false' to skip a pre-existing .env file.",
    )
    return parser


def _prefer_existing(value: Optional[str]) -> bool:
    if value is None:
        return True
    return value.strip().lower() not in FALSE_VALUES


def _log_level(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.WARNING


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=_log_level(settings.log_level), stream=sys.stderr)
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.scope == "site" and args.prefer_existing is not None:
        parser.error("site takes no further arguments")

    resolver = ProjectEnvironmentResolver(mode=InvocationMode.CLI)
    loader = EnvironmentLoader(resolver)
    try:
        if args.scope == "app":
            output = loader.get_app_environment_variables(_prefer_existing(args.prefer_existing))
        else:
            output = loader.get_site_environment_variables()
    except MissingEnvironmentError as exc:
        print(exc, file=sys.stderr)
        return 1

    sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
