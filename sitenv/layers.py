"""Resolution of layered dotenv files.

Dotenv files are found by progressively extending a filename stem, e.g. for
``app--server--hoster.prod`` the files

- ``app.env``
- ``app--server.env``
- ``app--server--hoster.env``
- ``app--server--hoster--prod.env``

are read in exactly that order. Usually ``--`` separates the segments, but
points are supported too so environment or server names can be grouped nicely,
e.g. ``hoster.prod``.
"""
from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

SEPARATOR = "--"
SUFFIX = ".env"


def normalize_stem(stem: str) -> str:
    """Treat points as segment separators."""

    return stem.replace(".", SEPARATOR)


def stem_prefixes(stem: str) -> list[str]:
    """Return every prefix of the stem's segments, shortest first."""

    parts = normalize_stem(stem).split(SEPARATOR)
    return [SEPARATOR.join(parts[: index + 1]) for index in range(len(parts))]


def candidate_files(stem: str, directory: Path) -> list[Path]:
    return [directory / f"{prefix}{SUFFIX}" for prefix in stem_prefixes(stem)]


def read_layers(stem: str, directory: Path) -> dict[Path, str]:
    """Read the content of all existing dotenv files for the given stem.

    The result is keyed by resolved file path and ordered from the most general
    to the most specific file. Missing files are skipped.
    """

    layers: dict[Path, str] = {}
    for path in candidate_files(stem, Path(directory)):
        if not path.is_file():
            logger.debug("Skipping missing dotenv layer %s", path)
            continue
        logger.debug("Reading dotenv layer %s", path)
        layers[path.resolve()] = path.read_text(encoding="utf-8")
    return layers
