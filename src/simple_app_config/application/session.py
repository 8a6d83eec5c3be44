"""Configuration session: one complete pass over the layered sources.

A pass runs in a fixed order:

1. resolve the recognised environment names and the active environment,
2. locate the env file and load it into the process environment,
3. snapshot the process environment into an :class:`EnvironmentStore`,
4. load the environment-specific document,
5. merge the shared default document underneath it.

The result is an immutable :class:`Configuration`. Running a new pass
builds a new value; nothing is mutated in place.

Contents:
    * :class:`ResolverSettings` - validated inputs of a pass.
    * :class:`ResolvedSources` - what the pass resolved.
    * :class:`Configuration` - merged tree plus dotted-key lookup.
    * :func:`build_configuration` - run a pass against the given ports.
    * :class:`ConfigurationCache` - reuse one pass until forced.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from ..domain.enums import DEFAULT_ENVIRONMENT, DEFAULT_ENVIRONMENTS
from ..domain.errors import UndefinedConfigValueError
from ..domain.keys import resolve_node
from ..domain.merge import merge_defaults
from ..domain.nodes import ConfigNode, MappingNode, to_python
from .documents import DocumentLoader
from .env_store import EnvironmentStore
from .ports import FileSystem, ParseDotenv, ProcessEnvironment
from .resolver import SourceResolver, Verdict

logger = logging.getLogger(__name__)

_MISSING: Any = object()


class ResolverSettings(BaseModel):
    """Validated inputs for one configuration pass.

    Example:
        >>> settings = ResolverSettings(argv=["--env=prod"], project_root="/srv/app")
        >>> settings.argv
        ('--env=prod',)
        >>> settings.default_environment
        'development'
    """

    model_config = ConfigDict(frozen=True)

    argv: tuple[str, ...] = ()
    project_root: Path
    default_environments: tuple[str, ...] = DEFAULT_ENVIRONMENTS
    default_environment: str = DEFAULT_ENVIRONMENT

    @field_validator("default_environment")
    @classmethod
    def _lower_environment(cls, value: str) -> str:
        return value.lower()

    @field_validator("default_environments")
    @classmethod
    def _lower_environments(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(name.lower() for name in value)


@dataclass(frozen=True, slots=True)
class ResolvedSources:
    """Environment and files selected by a pass; paths are None when nothing valid was found."""

    environment: str
    environment_names: tuple[str, ...]
    project_root: Path
    env_file: Path | None = None
    config_file: Path | None = None
    default_config_file: Path | None = None


@dataclass(frozen=True, slots=True)
class Configuration:
    """Result of a configuration pass.

    Attributes:
        sources: What the pass resolved.
        tree: Merged configuration tree.
        env: Environment store snapshot taken during the pass.

    Example:
        >>> from simple_app_config.domain.nodes import ScalarNode
        >>> sources = ResolvedSources("development", ("development",), Path("/app"))
        >>> cfg = Configuration(sources, MappingNode({"a.b": ScalarNode(1), "a": MappingNode({"b": ScalarNode(2)})}))
        >>> cfg.get("a\\\\.b"), cfg.get("a.b")
        (1, 2)
        >>> cfg.get("missing.key", None) is None
        True
    """

    sources: ResolvedSources
    tree: MappingNode = field(default_factory=MappingNode)
    env: EnvironmentStore | None = None

    @property
    def environment(self) -> str:
        return self.sources.environment

    def get_node(self, key: str) -> ConfigNode:
        """Return the node addressed by the dotted *key*.

        Raises:
            UndefinedConfigValueError: If any segment of *key* is missing.
        """
        return resolve_node(self.tree, key)

    def get(self, key: str, default: Any = _MISSING) -> Any:
        """Return the value addressed by the dotted *key* as plain Python data.

        Dots inside a key segment are written ``\\.``. Mappings are returned
        as dicts and sequences as lists.

        Raises:
            UndefinedConfigValueError: If *key* is missing and no *default* was given.
        """
        try:
            return to_python(self.get_node(key))
        except UndefinedConfigValueError:
            if default is _MISSING:
                raise
            return default

    def has(self, key: str) -> bool:
        try:
            self.get_node(key)
        except UndefinedConfigValueError:
            return False
        return True

    def as_dict(self) -> dict[str, Any]:
        return to_python(self.tree)

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    def __iter__(self) -> Iterator[str]:
        return self.tree.keys()

    def lookup(self, name: str) -> str | None:
        """Return environment variable *name* as this pass saw it."""
        return self.env.get(name) if self.env is not None else None


def _make_resolver(settings: ResolverSettings, filesystem: FileSystem, environment: ProcessEnvironment) -> SourceResolver:
    return SourceResolver(
        argv=settings.argv,
        environment=environment,
        filesystem=filesystem,
        project_root=settings.project_root,
        default_environments=settings.default_environments,
    )


def load_env_file(path: Path, parse_dotenv: ParseDotenv, environment: ProcessEnvironment) -> int:
    """Copy variables from the env file at *path* into the process environment.

    Variables that are already set keep their value.

    Returns:
        Number of variables added.
    """
    added = 0
    for key, value in parse_dotenv(path).items():
        if environment.get(key) is None:
            environment.set(key, value)
            added += 1
    logger.info("Loaded env file", extra={"path": str(path), "added": added})
    return added


def build_configuration(
    settings: ResolverSettings,
    *,
    filesystem: FileSystem,
    environment: ProcessEnvironment,
    parse_dotenv: ParseDotenv,
) -> Configuration:
    """Run one configuration pass and return its immutable result.

    Raises:
        UndefinedEnvVarError: If a document references an undefined variable.
        UnsupportedTypeError: If a document requests an unknown type.
        TypeConversionError: If a variable cannot be converted.
        ConfigFileError: If a resolved document is not a JSON object.
    """
    resolver = _make_resolver(settings, filesystem, environment)
    names = resolver.resolve_environment_names()
    active = resolver.resolve_environment() or settings.default_environment

    env_file = resolver.resolve_env_file_path(active, names)
    if env_file is not None:
        load_env_file(env_file, parse_dotenv, environment)

    store = EnvironmentStore(environment)
    store.refresh()
    loader = DocumentLoader(filesystem, store.get)

    tree = MappingNode()
    config_file = resolver.resolve_config_file_path(active, names)
    if config_file is not None:
        tree = loader.load(config_file)

    default_file = resolver.resolve_default_config_path()
    if default_file is not None:
        tree = merge_defaults(tree, loader.load(default_file))

    sources = ResolvedSources(
        environment=active,
        environment_names=names,
        project_root=resolver.project_root,
        env_file=env_file,
        config_file=config_file,
        default_config_file=default_file,
    )
    logger.info(
        "Configuration resolved",
        extra={
            "environment": active,
            "config_file": str(config_file) if config_file else None,
            "default_config_file": str(default_file) if default_file else None,
        },
    )
    return Configuration(sources=sources, tree=tree, env=store)


def inspect_sources(
    settings: ResolverSettings,
    *,
    filesystem: FileSystem,
    environment: ProcessEnvironment,
) -> dict[str, list[Verdict]]:
    """Return every candidate of every source with its verdict.

    Reads the process environment as it is now; run it after a pass so
    variables from the env file are taken into account.
    """
    resolver = _make_resolver(settings, filesystem, environment)
    names = resolver.resolve_environment_names()
    active = resolver.resolve_environment() or settings.default_environment
    return resolver.inspect(active, names)


class ConfigurationCache:
    """Run a configuration pass once and reuse the result.

    A later call reruns the pass only when ``force=True`` is given or when
    explicit *argv* / *project_root* differ from the cached pass. Calls
    without arguments return the cached pass if there is one.

    Args:
        filesystem: File access for the resolver and loader.
        environment: Process environment the pass reads and extends.
        parse_dotenv: Env file parser.
        default_argv: Supplies arguments when a call passes none.
        default_root: Supplies the project root when a call passes none.
    """

    def __init__(
        self,
        *,
        filesystem: FileSystem,
        environment: ProcessEnvironment,
        parse_dotenv: ParseDotenv,
        default_argv: Callable[[], Sequence[str]],
        default_root: Callable[[], Path],
    ) -> None:
        self.filesystem = filesystem
        self.environment = environment
        self._parse_dotenv = parse_dotenv
        self._default_argv = default_argv
        self._default_root = default_root
        self._cached: Configuration | None = None
        self._cached_settings: ResolverSettings | None = None

    def __call__(
        self,
        *,
        force: bool = False,
        argv: Sequence[str] | None = None,
        project_root: Path | None = None,
    ) -> Configuration:
        cached = self._cached
        if not force and cached is not None and self._matches(argv, project_root):
            return cached
        settings = ResolverSettings(
            argv=tuple(self._default_argv() if argv is None else argv),
            project_root=self._default_root() if project_root is None else Path(project_root),
        )
        configuration = build_configuration(
            settings,
            filesystem=self.filesystem,
            environment=self.environment,
            parse_dotenv=self._parse_dotenv,
        )
        self._cached, self._cached_settings = configuration, settings
        return configuration

    def _matches(self, argv: Sequence[str] | None, project_root: Path | None) -> bool:
        settings = self._cached_settings
        if settings is None:
            return False
        if argv is not None and tuple(argv) != settings.argv:
            return False
        return project_root is None or Path(project_root) == settings.project_root

    def cache_clear(self) -> None:
        """Forget the cached pass; the next call runs a new one."""
        self._cached = None
        self._cached_settings = None

    def inspect(
        self,
        *,
        argv: Sequence[str] | None = None,
        project_root: Path | None = None,
    ) -> dict[str, list[Verdict]]:
        """Run (or reuse) a pass, then report the verdict of every candidate."""
        self(argv=argv, project_root=project_root)
        settings = self._cached_settings
        if settings is None:
            raise RuntimeError("configuration pass did not record its settings")
        return inspect_sources(settings, filesystem=self.filesystem, environment=self.environment)


__all__ = [
    "Configuration",
    "ConfigurationCache",
    "ResolvedSources",
    "ResolverSettings",
    "build_configuration",
    "inspect_sources",
    "load_env_file",
]
