"""Env file parsing via python-dotenv.

Only parses; copying values into the process environment is the
session's job so that already-set variables keep their value.
"""

from __future__ import annotations

import logging
from pathlib import Path

from dotenv import dotenv_values

logger = logging.getLogger(__name__)


def parse_dotenv(path: Path) -> dict[str, str]:
    """Return the ``KEY=value`` pairs of the env file at *path*.

    Keys declared without a value (a bare ``KEY`` line) are dropped.
    Values are taken as written; ``${VAR}`` inside a value is not
    interpolated, so it reaches the process environment unchanged.
    """
    parsed = dotenv_values(path, encoding="utf-8", interpolate=False)
    values = {key: value for key, value in parsed.items() if value is not None}
    logger.debug("Parsed env file", extra={"path": str(path), "variables": len(values)})
    return values


__all__ = ["parse_dotenv"]
