"""Logging initialiser for in-memory services.

Tests that run passes in memory keep lib_log_rich uninitialised, so
library records go nowhere except to pytest's capture.
"""

from __future__ import annotations

from lib_layered_config import Config


def init_logging_in_memory(config: Config) -> None:
    """Accept the tool settings and start nothing."""


__all__ = ["init_logging_in_memory"]
