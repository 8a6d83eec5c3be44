"""Values shared by the ``simple-app-config`` command modules.

Contents:
    * :data:`CLICK_CONTEXT_SETTINGS` - Help flags accepted by every command.
    * :data:`TRACEBACK_SUMMARY_LIMIT` / :data:`TRACEBACK_VERBOSE_LIMIT` -
      Traceback length limits handed to lib_cli_exit_tools.
    * :data:`SOURCE_LABEL_WIDTH` / :data:`UNRESOLVED_MARKER` - Layout of the
      human ``sources`` report.
"""

from __future__ import annotations

from typing import Final

#: ``-h`` works wherever ``--help`` does.
CLICK_CONTEXT_SETTINGS: Final[dict[str, list[str]]] = {"help_option_names": ["-h", "--help"]}

#: Characters printed for an unexpected error without ``--traceback``.
TRACEBACK_SUMMARY_LIMIT: Final[int] = 500

#: Characters printed for an unexpected error with ``--traceback``.
TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

#: Column where resolved paths start in the ``sources`` report.
SOURCE_LABEL_WIDTH: Final[int] = 21

#: Printed in place of a file no candidate resolved to.
UNRESOLVED_MARKER: Final[str] = "(none)"

__all__ = [
    "CLICK_CONTEXT_SETTINGS",
    "SOURCE_LABEL_WIDTH",
    "TRACEBACK_SUMMARY_LIMIT",
    "TRACEBACK_VERBOSE_LIMIT",
    "UNRESOLVED_MARKER",
]
