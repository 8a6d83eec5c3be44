"""Configuration pass stories: layering, env files, lookups, and pass caching."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from pydantic import ValidationError

from simple_app_config.adapters.memory import InMemoryConfigure, InMemoryEnvironment, InMemoryFileSystem
from simple_app_config.adapters.memory.environment import dotenv_parser_for
from simple_app_config.application.session import (
    Configuration,
    ResolvedSources,
    ResolverSettings,
    build_configuration,
    load_env_file,
)
from simple_app_config.domain.errors import (
    ConfigFileError,
    TypeConversionError,
    UndefinedConfigValueError,
    UndefinedEnvVarError,
)
from simple_app_config.domain.nodes import MappingNode, ScalarNode

WriteJson = Callable[[str, Any], Path]


# ======================== layering ========================


@pytest.mark.os_agnostic
def test_pass_without_any_files_yields_an_empty_configuration(configure_in_memory: InMemoryConfigure) -> None:
    """No documents means an empty tree in the default environment."""
    configuration = configure_in_memory()

    assert configuration.as_dict() == {}
    assert configuration.environment == "development"
    assert configuration.sources.config_file is None


@pytest.mark.os_agnostic
def test_environment_document_wins_over_default(
    write_json: WriteJson,
    configure_in_memory: InMemoryConfigure,
) -> None:
    """Default "x" and environment "y" under the same key resolve to "y"."""
    write_json("config/default.json", {"x": "default", "only_default": 1})
    write_json("config/development.json", {"x": "env"})

    configuration = configure_in_memory()

    assert configuration.get("x") == "env"
    assert configuration.get("only_default") == 1


@pytest.mark.os_agnostic
def test_identical_values_on_both_layers_resolve_to_that_value(
    write_json: WriteJson,
    configure_in_memory: InMemoryConfigure,
) -> None:
    """Default "x" and environment "x" resolve to "x"."""
    write_json("config/default.json", {"x": "x"})
    write_json("config/development.json", {"x": "x"})

    assert configure_in_memory().get("x") == "x"


@pytest.mark.os_agnostic
def test_nested_sections_merge_key_by_key(write_json: WriteJson, configure_in_memory: InMemoryConfigure) -> None:
    """A partial section in the environment document keeps the default's other keys."""
    write_json("config/default.json", {"db": {"host": "localhost", "port": 5432}})
    write_json("config/production.json", {"db": {"host": "db.prod"}})

    configuration = configure_in_memory(argv=["--env=production"])

    assert configuration.get("db") == {"host": "db.prod", "port": 5432}


@pytest.mark.os_agnostic
def test_cli_environment_beats_node_env(
    write_json: WriteJson,
    memory_env: InMemoryEnvironment,
    configure_in_memory: InMemoryConfigure,
) -> None:
    """``--env=production`` with NODE_ENV=development loads the production document."""
    memory_env.set("NODE_ENV", "development")
    write_json("config/development.json", {"name": "dev"})
    write_json("config/production.json", {"name": "prod"})

    configuration = configure_in_memory(argv=["--env=production"])

    assert configuration.environment == "production"
    assert configuration.get("name") == "prod"


@pytest.mark.os_agnostic
def test_unregistered_environment_still_loads_the_default_document(
    write_json: WriteJson,
    configure_in_memory: InMemoryConfigure,
) -> None:
    """An unknown environment only skips derived environment files."""
    write_json("config/default.json", {"x": 1})
    write_json("config/qa.json", {"x": 2})

    configuration = configure_in_memory(argv=["--env=qa"])

    assert configuration.environment == "qa"
    assert configuration.get("x") == 1


@pytest.mark.os_agnostic
def test_custom_environment_names_enable_derived_files(
    write_json: WriteJson,
    configure_in_memory: InMemoryConfigure,
) -> None:
    """Registering a name with ``--env-names`` makes its document eligible."""
    write_json("config/qa.json", {"x": 2})

    assert configure_in_memory(argv=["--env=qa", "--env-names=qa"]).get("x") == 2


# ======================== env file ========================


@pytest.mark.os_agnostic
def test_env_file_values_feed_document_expansion(
    memory_fs: InMemoryFileSystem,
    write_json: WriteJson,
    configure_in_memory: InMemoryConfigure,
) -> None:
    """MAP from the env file converts to a map and expands to text in a template."""
    memory_fs.write("/app/.env.development", 'MAP=\'{"cat":"test","bat":"test"}\'\n')
    write_json("config/development.json", {"typed": "$MAP::map:string:string", "text": "prefix ${MAP}"})

    configuration = configure_in_memory()

    assert configuration.get("typed") == {"cat": "test", "bat": "test"}
    assert configuration.get("text") == 'prefix {"cat":"test","bat":"test"}'
    assert configuration.sources.env_file == Path("/app/.env.development")


@pytest.mark.os_agnostic
def test_env_file_never_overrides_existing_variables(
    memory_fs: InMemoryFileSystem,
    memory_env: InMemoryEnvironment,
    write_json: WriteJson,
    configure_in_memory: InMemoryConfigure,
) -> None:
    """Variables already in the process environment keep their value."""
    memory_env.set("HOST", "from-process")
    memory_fs.write("/app/.env.development", "HOST=from-file\nPORT=81\n")
    write_json("config/default.json", {"host": "$HOST", "port": "$PORT::number"})

    configuration = configure_in_memory()

    assert configuration.get("host") == "from-process"
    assert configuration.get("port") == 81
    assert memory_env.variables["PORT"] == "81"


@pytest.mark.os_agnostic
def test_env_file_can_redirect_the_config_path(
    memory_fs: InMemoryFileSystem,
    write_json: WriteJson,
    configure_in_memory: InMemoryConfigure,
) -> None:
    """CONFIG_PATH set in the env file is honoured by document resolution."""
    memory_fs.write("/app/.env.development", "CONFIG_PATH=elsewhere/app.json\n")
    write_json("elsewhere/app.json", {"x": "redirected"})

    assert configure_in_memory().get("x") == "redirected"


@pytest.mark.os_agnostic
def test_boolean_false_word_converts(
    memory_env: InMemoryEnvironment,
    write_json: WriteJson,
    configure_in_memory: InMemoryConfigure,
) -> None:
    """``$BOOLEAN::boolean`` with BOOLEAN=FALSE yields False."""
    memory_env.set("BOOLEAN", "FALSE")
    write_json("config/default.json", {"flag": "$BOOLEAN::boolean"})

    assert configure_in_memory().get("flag") is False


@pytest.mark.os_agnostic
def test_load_env_file_counts_added_variables(memory_fs: InMemoryFileSystem) -> None:
    """Only variables that were not already set are counted."""
    memory_fs.write("/app/.env", "A=1\nB=2\n")
    environment = InMemoryEnvironment({"A": "0"})

    added = load_env_file(Path("/app/.env"), dotenv_parser_for(memory_fs), environment)

    assert added == 1
    assert environment.variables == {"A": "0", "B": "2"}


# ======================== lookups ========================


@pytest.mark.os_agnostic
def test_escaped_dot_and_nested_key_are_different_values(
    write_json: WriteJson,
    configure_in_memory: InMemoryConfigure,
) -> None:
    """``a\\.b`` and ``a.b`` address different nodes."""
    write_json("config/default.json", {"a.b": "flat", "a": {"b": "nested"}})

    configuration = configure_in_memory()

    assert configuration.get("a\\.b") == "flat"
    assert configuration.get("a.b") == "nested"


@pytest.mark.os_agnostic
def test_missing_key_raises_undefined_config_value(configure_in_memory: InMemoryConfigure) -> None:
    """``get("missing.key")`` raises unless a default is given."""
    configuration = configure_in_memory()

    with pytest.raises(UndefinedConfigValueError, match="missing.key"):
        configuration.get("missing.key")
    assert configuration.get("missing.key", "fallback") == "fallback"
    assert configuration.get("missing.key", None) is None


@pytest.mark.os_agnostic
def test_configuration_behaves_like_a_read_only_mapping(
    write_json: WriteJson,
    configure_in_memory: InMemoryConfigure,
) -> None:
    """Membership, item access and iteration follow the tree."""
    write_json("config/default.json", {"a": {"b": 1}, "c": 2})

    configuration = configure_in_memory()

    assert "a.b" in configuration
    assert "a.x" not in configuration
    assert configuration["c"] == 2
    assert sorted(configuration) == ["a", "c"]
    assert configuration.has("a")


@pytest.mark.os_agnostic
def test_lookup_sees_env_file_variables(memory_fs: InMemoryFileSystem, configure_in_memory: InMemoryConfigure) -> None:
    """The configuration's lookup reflects the environment of its pass."""
    memory_fs.write("/app/.env.development", "TOKEN=abc\n")

    configuration = configure_in_memory()

    assert configuration.lookup("TOKEN") == "abc"
    assert configuration.lookup("NOPE") is None


@pytest.mark.os_agnostic
def test_configuration_without_store_has_no_variables() -> None:
    """A hand-built configuration answers every lookup with None."""
    configuration = Configuration(ResolvedSources("development", ("development",), Path("/app")))

    assert configuration.lookup("PATH") is None
    assert configuration.as_dict() == {}


@pytest.mark.os_agnostic
def test_returned_containers_do_not_alias_the_tree() -> None:
    """Mutating a value handed out by get leaves the configuration unchanged."""
    tree = MappingNode(
        {"limits": ScalarNode({"cpu": 1}), "flags": ScalarNode({True}), "hosts": ScalarNode(["a"])}
    )
    configuration = Configuration(ResolvedSources("development", ("development",), Path("/app")), tree)

    configuration.get("limits")["cpu"] = 99
    configuration.get("flags").add(False)
    configuration.as_dict()["hosts"].append("b")

    assert configuration.get("limits") == {"cpu": 1}
    assert configuration.get("flags") == {True}
    assert configuration.get("hosts") == ["a"]


# ======================== failures ========================


@pytest.mark.os_agnostic
def test_undefined_variable_aborts_the_pass(write_json: WriteJson, configure_in_memory: InMemoryConfigure) -> None:
    """A document referencing an undefined variable fails the whole pass."""
    write_json("config/default.json", {"host": "$DB_HOST"})

    with pytest.raises(UndefinedEnvVarError, match="DB_HOST"):
        configure_in_memory()


@pytest.mark.os_agnostic
def test_conversion_failure_aborts_the_pass(
    memory_env: InMemoryEnvironment,
    write_json: WriteJson,
    configure_in_memory: InMemoryConfigure,
) -> None:
    """A value that cannot be converted fails the whole pass."""
    memory_env.set("PORT", "eighty")
    write_json("config/default.json", {"port": "$PORT::number"})

    with pytest.raises(TypeConversionError):
        configure_in_memory()


@pytest.mark.os_agnostic
def test_non_object_document_aborts_the_pass(
    memory_fs: InMemoryFileSystem,
    configure_in_memory: InMemoryConfigure,
) -> None:
    """A document whose root is an array is a configuration file error."""
    memory_fs.write("/app/config/default.json", "[1, 2]")

    with pytest.raises(ConfigFileError):
        configure_in_memory()


# ======================== caching ========================


@pytest.mark.os_agnostic
def test_repeated_calls_reuse_the_cached_pass(
    write_json: WriteJson,
    configure_in_memory: InMemoryConfigure,
) -> None:
    """Without force, a later call returns the same configuration even after files change."""
    write_json("config/default.json", {"x": 1})
    first = configure_in_memory()
    write_json("config/default.json", {"x": 2})

    assert configure_in_memory() is first
    assert configure_in_memory().get("x") == 1


@pytest.mark.os_agnostic
def test_force_runs_a_new_pass(write_json: WriteJson, configure_in_memory: InMemoryConfigure) -> None:
    """``force=True`` rebuilds from the current files."""
    write_json("config/default.json", {"x": 1})
    first = configure_in_memory()
    write_json("config/default.json", {"x": 2})

    second = configure_in_memory(force=True)

    assert second is not first
    assert second.get("x") == 2
    assert first.get("x") == 1


@pytest.mark.os_agnostic
def test_different_arguments_run_a_new_pass(configure_in_memory: InMemoryConfigure) -> None:
    """Explicit arguments that differ from the cached pass are honoured."""
    configure_in_memory(argv=["--env=testing"])

    assert configure_in_memory(argv=["--env=staging"]).environment == "staging"
    assert configure_in_memory().environment == "staging"


@pytest.mark.os_agnostic
def test_cache_clear_forgets_the_pass(configure_in_memory: InMemoryConfigure) -> None:
    """After cache_clear the next call builds a new configuration."""
    first = configure_in_memory()
    configure_in_memory.cache_clear()

    assert configure_in_memory() is not first


@pytest.mark.os_agnostic
def test_inspect_reports_candidates_of_the_cached_pass(
    write_json: WriteJson,
    configure_in_memory: InMemoryConfigure,
) -> None:
    """inspect runs a pass when needed and reports every source."""
    write_json("config/default.json", {"x": 1})

    report = configure_in_memory.inspect(argv=["--env=production"])

    assert set(report) == {"env_file", "config_file", "default_config_file"}
    assert report["default_config_file"][0].valid
    assert configure_in_memory().environment == "production"


# ======================== settings ========================


@pytest.mark.os_agnostic
def test_resolver_settings_lower_case_environment_defaults() -> None:
    """Default environment names are normalised to lower case."""
    settings = ResolverSettings(
        project_root=Path("/app"),
        default_environments=("Dev", "PROD"),
        default_environment="Dev",
    )

    assert settings.default_environments == ("dev", "prod")
    assert settings.default_environment == "dev"


@pytest.mark.os_agnostic
def test_resolver_settings_are_frozen() -> None:
    """Settings of a pass cannot change after validation."""
    settings = ResolverSettings(project_root=Path("/app"))

    with pytest.raises(ValidationError):
        settings.argv = ("--env=x",)  # type: ignore[misc]


@pytest.mark.os_agnostic
def test_default_environment_setting_selects_documents(memory_fs: InMemoryFileSystem, write_json: WriteJson) -> None:
    """A custom default environment is used when neither flag nor NODE_ENV is set."""
    write_json("config/staging.json", {"x": "staging"})

    configuration = build_configuration(
        ResolverSettings(project_root=Path("/app"), default_environment="staging"),
        filesystem=memory_fs,
        environment=InMemoryEnvironment(),
        parse_dotenv=dotenv_parser_for(memory_fs),
    )

    assert configuration.environment == "staging"
    assert configuration.get("x") == "staging"
