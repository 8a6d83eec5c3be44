"""Port behavioral contract tests for the in-memory and production adapters.

Static type conformance is enforced by pyright through the
``TYPE_CHECKING`` assertions in the adapter packages; these tests check
that both sides of each port behave alike.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from lib_layered_config import Config

from simple_app_config.adapters.env import OsEnvironment, parse_dotenv
from simple_app_config.adapters.filesystem import LocalFileSystem
from simple_app_config.adapters.memory import (
    InMemoryEnvironment,
    InMemoryFileSystem,
    dotenv_parser_for,
    get_settings_in_memory,
    init_logging_in_memory,
)
from simple_app_config.application.ports import FileSystem, ParseDotenv, ProcessEnvironment
from simple_app_config.composition import build_production, build_testing

ENV_TEXT = (
    "PLAIN=value\nQUOTED='{\"a\": 1}'\nexport EXPORTED=yes\n# comment\nBARE\n"
    'PASSWORD="pa${ss}word"\nHOME_DIR=${HOME}/app\n'
)

# ======================== file system ========================


@pytest.fixture(params=["memory", "local"])
def filesystem_with_file(request: pytest.FixtureRequest, tmp_path: Path) -> tuple[FileSystem, Path]:
    """A file system holding ``<root>/config/default.json``."""
    if request.param == "memory":
        root = Path("/app")
        return InMemoryFileSystem({root / "config" / "default.json": "{}"}), root
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "default.json").write_text("{}", encoding="utf-8")
    return LocalFileSystem(), tmp_path


@pytest.mark.os_agnostic
def test_file_system_reports_files_and_directories(filesystem_with_file: tuple[FileSystem, Path]) -> None:
    """Files exist and are not directories; their parents are directories."""
    fs, root = filesystem_with_file

    assert fs.exists(root / "config" / "default.json")
    assert not fs.is_dir(root / "config" / "default.json")
    assert fs.is_dir(root / "config")
    assert not fs.exists(root / "config" / "missing.json")
    assert fs.read_text(root / "config" / "default.json") == "{}"


@pytest.mark.os_agnostic
def test_file_system_resolve_collapses_parent_segments(filesystem_with_file: tuple[FileSystem, Path]) -> None:
    """resolve removes ``..`` segments."""
    fs, root = filesystem_with_file

    assert fs.resolve(root / "config" / ".." / "config") == fs.resolve(root / "config")


@pytest.mark.os_agnostic
def test_in_memory_file_system_refuses_to_read_directories() -> None:
    """Reading a directory or a missing file raises like the real disk."""
    fs = InMemoryFileSystem({"/app/config/default.json": "{}"})

    with pytest.raises(IsADirectoryError):
        fs.read_text(Path("/app/config"))
    with pytest.raises(FileNotFoundError):
        fs.read_text(Path("/app/nope.json"))


# ======================== process environment ========================


@pytest.fixture(params=["memory", "os"])
def process_environment(request: pytest.FixtureRequest, monkeypatch: pytest.MonkeyPatch) -> ProcessEnvironment:
    if request.param == "memory":
        return InMemoryEnvironment()
    monkeypatch.delenv("SIMPLE_APP_CONFIG_PORT_TEST", raising=False)
    return OsEnvironment()


@pytest.mark.os_agnostic
def test_process_environment_set_get_delete(process_environment: ProcessEnvironment) -> None:
    """Both adapters write, read and delete variables."""
    process_environment.set("SIMPLE_APP_CONFIG_PORT_TEST", "1")
    assert process_environment.get("SIMPLE_APP_CONFIG_PORT_TEST") == "1"
    assert process_environment.get_all()["SIMPLE_APP_CONFIG_PORT_TEST"] == "1"

    process_environment.delete("SIMPLE_APP_CONFIG_PORT_TEST")
    assert process_environment.get("SIMPLE_APP_CONFIG_PORT_TEST") is None
    process_environment.delete("SIMPLE_APP_CONFIG_PORT_TEST")


# ======================== env file parser ========================


@pytest.fixture(params=["memory", "local"])
def parser_and_path(request: pytest.FixtureRequest, tmp_path: Path) -> tuple[ParseDotenv, Path]:
    if request.param == "memory":
        path = Path("/app/.env.development")
        return dotenv_parser_for(InMemoryFileSystem({path: ENV_TEXT})), path
    path = tmp_path / ".env.development"
    path.write_text(ENV_TEXT, encoding="utf-8")
    return parse_dotenv, path


@pytest.mark.os_agnostic
def test_env_file_parsers_agree(parser_and_path: tuple[ParseDotenv, Path]) -> None:
    """Quotes are removed, ``export`` is accepted, bare keys and comments are dropped."""
    parse, path = parser_and_path

    assert parse(path) == {
        "PLAIN": "value",
        "QUOTED": '{"a": 1}',
        "EXPORTED": "yes",
        "PASSWORD": "pa${ss}word",
        "HOME_DIR": "${HOME}/app",
    }


@pytest.mark.os_agnostic
def test_env_file_parsers_keep_references_as_written(parser_and_path: tuple[ParseDotenv, Path]) -> None:
    """``${NAME}`` inside an env file value is not interpolated, defined or not."""
    parse, path = parser_and_path

    values = parse(path)

    assert values["PASSWORD"] == "pa${ss}word"
    assert values["HOME_DIR"] == "${HOME}/app"


# ======================== services ========================


@pytest.mark.os_agnostic
def test_get_settings_in_memory_returns_empty_config() -> None:
    """The in-memory settings loader has no sections."""
    config = get_settings_in_memory(profile="anything")

    assert isinstance(config, Config)
    assert config.as_dict() == {}


@pytest.mark.os_agnostic
def test_init_logging_in_memory_is_a_no_op() -> None:
    """The in-memory logging initialiser accepts any settings."""
    assert init_logging_in_memory(Config({}, {})) is None


@pytest.mark.os_agnostic
def test_build_testing_runs_passes_in_memory() -> None:
    """The testing container resolves against an empty in-memory root."""
    services = build_testing()

    configuration = services.configure()

    assert configuration.sources.project_root == Path("/app")
    assert set(services.inspect_sources()) == {"env_file", "config_file", "default_config_file"}


@pytest.mark.os_agnostic
def test_build_production_wires_the_module_level_pass() -> None:
    """The production container shares the package-level configure."""
    from simple_app_config import configure

    assert build_production().configure is configure
