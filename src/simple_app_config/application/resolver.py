"""Source resolution for the environment name, env file, and configuration documents.

Every source is resolved through the same precedence chain:

1. a command-line argument (``--flag=value``),
2. a process environment variable,
3. a path derived from the environment name.

A tier that is specified but invalid does not stop resolution; the next
tier is tried. Paths whose canonical form lies outside the project root
are invalid whether or not they exist.

Contents:
    * :class:`SourceSetting` - a CLI flag paired with its environment variable.
    * :class:`Candidate` - a path proposed by one tier.
    * :class:`SourceResolver` - computes candidates and picks the first valid one.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from ..domain.enums import DEFAULT_ENVIRONMENTS, FileType, SourceKind
from .ports import FileSystem, ProcessEnvironment

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SourceSetting:
    """A command-line flag and the environment variable that mirrors it."""

    flag: str
    variable: str


ENV: Final = SourceSetting("--env", "NODE_ENV")
ENV_NAMES: Final = SourceSetting("--env-names", "ENV_NAMES")
ENV_DIR: Final = SourceSetting("--env-dir", "ENV_DIR")
ENV_PATH: Final = SourceSetting("--env-path", "ENV_PATH")
CONFIG_DIR: Final = SourceSetting("--config-dir", "CONFIG_DIR")
CONFIG_PATH: Final = SourceSetting("--config-path", "CONFIG_PATH")

SOURCE_SETTINGS: Final[tuple[SourceSetting, ...]] = (ENV, ENV_NAMES, ENV_DIR, ENV_PATH, CONFIG_DIR, CONFIG_PATH)

DEFAULT_CONFIG_DIR: Final[str] = "config"
DEFAULT_DOCUMENT_STEM: Final[str] = "default"
SUPPORTED_EXTENSIONS: Final[frozenset[str]] = frozenset(file_type.value for file_type in FileType)


def read_cli_argument(argv: Sequence[str], flag: str) -> str | None:
    """Return the value of the first ``flag=value`` argument, or None.

    Examples:
        >>> read_cli_argument(["run", "--env=Production"], "--env")
        'Production'
        >>> read_cli_argument(["--env-path=a=b"], "--env-path")
        'a=b'
        >>> read_cli_argument(["--env-names=x"], "--env") is None
        True
    """
    prefix = f"{flag}="
    for arg in argv:
        if arg.startswith(prefix):
            return arg[len(prefix) :]
    return None


@dataclass(frozen=True, slots=True)
class Candidate:
    """A path proposed by one precedence tier."""

    kind: SourceKind
    path: Path

    @property
    def rank(self) -> int:
        return self.kind.rank


@dataclass(frozen=True, slots=True)
class Verdict:
    """Outcome of checking one candidate; ``reason`` is None when valid."""

    candidate: Candidate
    reason: str | None = None

    @property
    def valid(self) -> bool:
        return self.reason is None


class SourceResolver:
    """Resolve the environment and locate the files of one configuration pass.

    Args:
        argv: Command-line arguments to scan for ``--flag=value`` settings.
        environment: Process environment read for the mirror variables.
        filesystem: File access used for validity checks.
        project_root: Directory that every resolved path must stay inside.
            Relative paths are taken relative to it.
        default_environments: Registry used when no custom names are given.
    """

    def __init__(
        self,
        *,
        argv: Sequence[str],
        environment: ProcessEnvironment,
        filesystem: FileSystem,
        project_root: Path,
        default_environments: Sequence[str] = DEFAULT_ENVIRONMENTS,
    ) -> None:
        self._argv = tuple(argv)
        self._environment = environment
        self._filesystem = filesystem
        self._root = filesystem.resolve(project_root)
        self._default_environments = tuple(name.lower() for name in default_environments)

    @property
    def project_root(self) -> Path:
        return self._root

    def setting(self, source: SourceSetting) -> tuple[SourceKind, str] | None:
        """Return the highest-priority non-empty value of *source* and where it came from."""
        value = read_cli_argument(self._argv, source.flag)
        if value:
            return SourceKind.CLI_ARGUMENT, value
        value = self._environment.get(source.variable)
        if value:
            return SourceKind.ENVIRONMENT_VARIABLE, value
        return None

    def _setting_value(self, source: SourceSetting) -> str | None:
        found = self.setting(source)
        return found[1] if found else None

    def resolve_environment_names(self) -> tuple[str, ...]:
        """Return the registry of recognised environment names, lower-cased.

        ``--env-names=a,b`` wins over ``ENV_NAMES``; both fall back to the
        default registry. Blank entries are dropped.
        """
        raw = self._setting_value(ENV_NAMES)
        if raw:
            names = tuple(dict.fromkeys(name.strip().lower() for name in raw.split(",") if name.strip()))
            if names:
                return names
        return self._default_environments

    def resolve_environment(self) -> str | None:
        """Return the environment from ``--env`` or ``NODE_ENV``, lower-cased, or None."""
        raw = self._setting_value(ENV)
        return raw.strip().lower() if raw and raw.strip() else None

    def _absolute(self, raw: str | Path, base: Path | None = None) -> Path:
        path = Path(raw).expanduser()
        if not path.is_absolute():
            path = (base or self._root) / path
        return self._filesystem.resolve(path)

    def _directory(self, source: SourceSetting, default: Path) -> Path:
        raw = self._setting_value(source)
        return self._absolute(raw) if raw else default

    def _explicit_candidates(self, source: SourceSetting) -> list[Candidate]:
        candidates: list[Candidate] = []
        cli_value = read_cli_argument(self._argv, source.flag)
        if cli_value:
            candidates.append(Candidate(SourceKind.CLI_ARGUMENT, self._absolute(cli_value)))
        env_value = self._environment.get(source.variable)
        if env_value:
            candidates.append(Candidate(SourceKind.ENVIRONMENT_VARIABLE, self._absolute(env_value)))
        return candidates

    def env_file_candidates(self, environment: str, names: Sequence[str]) -> list[Candidate]:
        """Candidates for the env file, highest priority first."""
        candidates = self._explicit_candidates(ENV_PATH)
        if environment in names:
            env_dir = self._directory(ENV_DIR, self._root)
            candidates.append(Candidate(SourceKind.ENVIRONMENT_DEFAULT, self._absolute(f".env.{environment}", env_dir)))
        return candidates

    def config_dir(self) -> Path:
        return self._directory(CONFIG_DIR, self._absolute(DEFAULT_CONFIG_DIR))

    def config_file_candidates(self, environment: str, names: Sequence[str]) -> list[Candidate]:
        """Candidates for the environment-specific document, one derived path per extension."""
        candidates = self._explicit_candidates(CONFIG_PATH)
        if environment in names:
            config_dir = self.config_dir()
            candidates.extend(
                Candidate(SourceKind.ENVIRONMENT_DEFAULT, self._absolute(f"{environment}{extension}", config_dir))
                for extension in sorted(SUPPORTED_EXTENSIONS)
            )
        return candidates

    def default_config_candidates(self) -> list[Candidate]:
        """Candidates for the shared default document; it has no explicit override."""
        config_dir = self.config_dir()
        return [
            Candidate(SourceKind.ENVIRONMENT_DEFAULT, self._absolute(f"{DEFAULT_DOCUMENT_STEM}{extension}", config_dir))
            for extension in sorted(SUPPORTED_EXTENSIONS)
        ]

    def _inside_root(self, path: Path) -> bool:
        return path == self._root or path.is_relative_to(self._root)

    def check_env_file(self, candidate: Candidate) -> Verdict:
        """An env file is valid when it is inside the root, exists, and is not a directory."""
        path = candidate.path
        if not self._inside_root(path):
            return Verdict(candidate, "outside project root")
        if not self._filesystem.exists(path):
            return Verdict(candidate, "does not exist")
        if self._filesystem.is_dir(path):
            return Verdict(candidate, "is a directory")
        return Verdict(candidate)

    def check_document(self, candidate: Candidate) -> Verdict:
        """A document is additionally valid only with a supported extension and non-blank content."""
        verdict = self.check_env_file(candidate)
        if not verdict.valid:
            return verdict
        path = candidate.path
        if path.suffix not in SUPPORTED_EXTENSIONS:
            return Verdict(candidate, f"unsupported extension {path.suffix or '(none)'}")
        if not self._filesystem.read_text(path).strip():
            return Verdict(candidate, "is empty")
        return verdict

    def _first_valid(self, candidates: Sequence[Candidate], *, document: bool) -> Path | None:
        for candidate in candidates:
            verdict = self.check_document(candidate) if document else self.check_env_file(candidate)
            if verdict.valid:
                return candidate.path
            logger.debug(
                "Skipping configuration source",
                extra={"path": str(candidate.path), "source": candidate.kind.value, "reason": verdict.reason},
            )
        return None

    def inspect(self, environment: str, names: Sequence[str]) -> dict[str, list[Verdict]]:
        """Check every candidate of every source, in precedence order."""
        return {
            "env_file": [self.check_env_file(candidate) for candidate in self.env_file_candidates(environment, names)],
            "config_file": [
                self.check_document(candidate) for candidate in self.config_file_candidates(environment, names)
            ],
            "default_config_file": [self.check_document(candidate) for candidate in self.default_config_candidates()],
        }

    def resolve_env_file_path(self, environment: str, names: Sequence[str]) -> Path | None:
        return self._first_valid(self.env_file_candidates(environment, names), document=False)

    def resolve_config_file_path(self, environment: str, names: Sequence[str]) -> Path | None:
        return self._first_valid(self.config_file_candidates(environment, names), document=True)

    def resolve_default_config_path(self) -> Path | None:
        return self._first_valid(self.default_config_candidates(), document=True)


__all__ = [
    "CONFIG_DIR",
    "CONFIG_PATH",
    "Candidate",
    "ENV",
    "ENV_DIR",
    "ENV_NAMES",
    "ENV_PATH",
    "SOURCE_SETTINGS",
    "SourceResolver",
    "SourceSetting",
    "Verdict",
    "read_cli_argument",
]
