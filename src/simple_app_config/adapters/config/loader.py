"""Production configuration pass over the local disk and ``os.environ``.

Contents:
    * :data:`configure` - cached configuration pass, rerun with ``force=True``.
    * :func:`get` - dotted-key lookup on the cached pass.

System Role:
    Binds :class:`ConfigurationCache` to :class:`LocalFileSystem`,
    :class:`OsEnvironment` and the python-dotenv parser. Arguments default
    to ``sys.argv[1:]`` and the project root to the working directory.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from ...application.session import ConfigurationCache
from ..env import OsEnvironment, parse_dotenv
from ..filesystem import LocalFileSystem


def _default_argv() -> list[str]:
    return sys.argv[1:]


configure = ConfigurationCache(
    filesystem=LocalFileSystem(),
    environment=OsEnvironment(),
    parse_dotenv=parse_dotenv,
    default_argv=_default_argv,
    default_root=Path.cwd,
)
"""Run the configuration pass once per process and return it.

Call ``configure(force=True)`` to rerun it, for example after the
environment changed. Explicit ``argv`` or ``project_root`` values that
differ from the cached pass also trigger a rerun.

Example:
    >>> cfg = configure(argv=[], project_root=Path("."))  # doctest: +SKIP
    >>> cfg.get("server.port")  # doctest: +SKIP
    8080
"""

_MISSING: Any = object()


def get(key: str, default: Any = _MISSING) -> Any:
    """Return the value at the dotted *key* of the current configuration.

    Runs the configuration pass first when none has run yet.

    Raises:
        UndefinedConfigValueError: If *key* is missing and no *default* was given.
    """
    configuration = configure()
    if default is _MISSING:
        return configuration.get(key)
    return configuration.get(key, default)


__all__ = ["configure", "get"]
