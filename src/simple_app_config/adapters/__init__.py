"""Adapters layer - infrastructure and framework integrations.

Contains adapter implementations that connect the configuration engine to
the disk, the process environment, and the command-line tool's frameworks.

Contents:
    * :mod:`.env` - ``os.environ`` accessor and python-dotenv parser
    * :mod:`.filesystem` - Local file system reader
    * :mod:`.config` - Production configuration pass, tool settings, display
    * :mod:`.logging` - Logging setup with lib_log_rich
    * :mod:`.memory` - In-memory adapters for tests
    * :mod:`.cli` - Click CLI framework integration
"""

from __future__ import annotations

__all__: list[str] = []
