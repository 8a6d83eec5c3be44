"""lib_log_rich wiring for the CLI.

The library modules only log through ``logging.getLogger(__name__)``; the
CLI attaches those records to lib_log_rich with :func:`init_logging`.
"""

from __future__ import annotations

from .setup import init_logging

__all__ = ["init_logging"]
