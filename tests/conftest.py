"""Shared pytest fixtures for engine, adapter and CLI tests.

Centralizes test infrastructure:
- In-memory file system and environment fixtures stand in for disk and ``os.environ``
- Services factories wire those fixtures into the CLI
- Fixtures use descriptive names that read as plain English
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from dataclasses import fields
from pathlib import Path
from typing import TYPE_CHECKING, Any

import lib_cli_exit_tools
import orjson
import pytest
from click.testing import CliRunner

from simple_app_config.adapters.memory import (
    IN_MEMORY_ROOT,
    InMemoryConfigure,
    InMemoryEnvironment,
    InMemoryFileSystem,
)

if TYPE_CHECKING:
    from simple_app_config.composition import AppServices

ANSI_ESCAPE_PATTERN = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")
CONFIG_FIELDS: tuple[str, ...] = tuple(field.name for field in fields(type(lib_cli_exit_tools.config)))

#: The project root every in-memory test runs against.
PROJECT_ROOT: Path = IN_MEMORY_ROOT


def _remove_ansi_codes(text: str) -> str:
    """Return *text* stripped of ANSI escape sequences."""
    return ANSI_ESCAPE_PATTERN.sub("", text)


def _snapshot_cli_config() -> dict[str, object]:
    """Capture every attribute from ``lib_cli_exit_tools.config``."""
    return {name: getattr(lib_cli_exit_tools.config, name) for name in CONFIG_FIELDS}


def _restore_cli_config(snapshot: dict[str, object]) -> None:
    """Reapply a configuration snapshot captured by ``_snapshot_cli_config``."""
    for name, value in snapshot.items():
        setattr(lib_cli_exit_tools.config, name, value)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a fresh CliRunner per test.

    Use ``result.stdout`` for clean output (e.g. JSON parsing) so log lines
    on stderr do not contaminate it.
    """
    return CliRunner()


@pytest.fixture
def strip_ansi() -> Callable[[str], str]:
    """Return a helper that strips ANSI escape sequences from a string."""

    def _strip(value: str) -> str:
        return _remove_ansi_codes(value)

    return _strip


@pytest.fixture
def managed_traceback_state() -> Iterator[None]:
    """Reset traceback flags to a known baseline and restore them after the test."""
    lib_cli_exit_tools.reset_config()
    lib_cli_exit_tools.config.traceback = False
    lib_cli_exit_tools.config.traceback_force_color = False
    snapshot = _snapshot_cli_config()
    try:
        yield
    finally:
        _restore_cli_config(snapshot)


@pytest.fixture
def memory_fs() -> InMemoryFileSystem:
    """An empty in-memory file system rooted at :data:`PROJECT_ROOT`.

    Example:
        def test_default(memory_fs: InMemoryFileSystem) -> None:
            memory_fs.write("/app/config/default.json", '{"x": 1}')
    """
    return InMemoryFileSystem(directories=[PROJECT_ROOT])


@pytest.fixture
def memory_env() -> InMemoryEnvironment:
    """An empty in-memory process environment."""
    return InMemoryEnvironment()


@pytest.fixture
def write_json(memory_fs: InMemoryFileSystem) -> Callable[[str, Any], Path]:
    """Return a helper writing a JSON document below :data:`PROJECT_ROOT`.

    Example:
        def test_doc(write_json: Callable[[str, Any], Path]) -> None:
            write_json("config/default.json", {"x": "default"})
    """

    def _write(relative: str, payload: Any) -> Path:
        path = PROJECT_ROOT / relative
        memory_fs.write(path, orjson.dumps(payload).decode("utf-8"))
        return path

    return _write


@pytest.fixture
def configure_in_memory(memory_fs: InMemoryFileSystem, memory_env: InMemoryEnvironment) -> InMemoryConfigure:
    """A cached configuration pass over :func:`memory_fs` and :func:`memory_env`."""
    return InMemoryConfigure(memory_fs, memory_env)


@pytest.fixture
def production_factory() -> Callable[[], AppServices]:
    """Provide the production services factory for tests that need real adapters."""
    from simple_app_config.composition import build_production

    return build_production


@pytest.fixture
def memory_factory(configure_in_memory: InMemoryConfigure) -> Callable[[], AppServices]:
    """Services factory running passes in memory but rendering with the production display.

    Only the I/O boundary (disk and ``os.environ``) is replaced; display and
    logging go through lib_layered_config and lib_log_rich as in production.
    """
    from simple_app_config.composition import AppServices, build_production

    prod = build_production()
    services = AppServices(
        configure=configure_in_memory,
        inspect_sources=configure_in_memory.inspect,
        get_settings=prod.get_settings,
        display_config=prod.display_config,
        init_logging=prod.init_logging,
    )
    return lambda: services


@pytest.fixture
def testing_factory() -> Callable[[], AppServices]:
    """Provide the fully in-memory services factory."""
    from simple_app_config.composition import build_testing

    return build_testing


@pytest.fixture
def clear_settings_cache() -> Iterator[None]:
    """Clear the cached tool settings before each test.

    Only clears before, not after, so a test that monkeypatches
    ``get_settings`` does not break teardown.

    Example:
        def test_reload(clear_settings_cache: None) -> None:
            settings = get_settings()
    """
    from simple_app_config.adapters.config import settings as settings_mod

    settings_mod.get_settings.cache_clear()
    yield
