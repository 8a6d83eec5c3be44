"""CLI command implementations.

Contents:
    * :func:`cli_info` from :mod:`.info` - package metadata
    * :func:`cli_show` from :mod:`.show` - merged configuration tree
    * :func:`cli_get` from :mod:`.get` - one configuration value
    * :func:`cli_sources` from :mod:`.sources` - resolved files and candidates
    * :func:`cli_convert` from :mod:`.convert` - typed conversion of a literal
    * :func:`cli_expand` from :mod:`.expand` - expansion of a leaf string
"""

from __future__ import annotations

from .convert import cli_convert
from .expand import cli_expand
from .get import cli_get
from .info import cli_info
from .show import cli_show
from .sources import cli_sources

__all__ = [
    "cli_convert",
    "cli_expand",
    "cli_get",
    "cli_info",
    "cli_show",
    "cli_sources",
]
