"""Application layer - configuration passes and port definitions.

Orchestrates domain logic against the file system and process environment
ports: source resolution, env file loading, document loading, and the
merged :class:`Configuration` result.

Contents:
    * :mod:`.ports` - Protocol definitions for adapter implementations
    * :mod:`.resolver` - Precedence-chain source resolution
    * :mod:`.env_store` - Cached view of the process environment
    * :mod:`.documents` - JSON document loading and expansion
    * :mod:`.session` - One configuration pass end to end
"""

from __future__ import annotations

from .documents import DocumentLoader, build_node
from .env_store import EnvironmentStore
from .ports import (
    Configure,
    DisplayConfig,
    FileSystem,
    GetSettings,
    InitLogging,
    InspectSources,
    ParseDotenv,
    ProcessEnvironment,
)
from .resolver import Candidate, SourceResolver, Verdict
from .session import (
    Configuration,
    ConfigurationCache,
    ResolvedSources,
    ResolverSettings,
    build_configuration,
    inspect_sources,
)

__all__ = [
    # Ports
    "Configure",
    "DisplayConfig",
    "FileSystem",
    "GetSettings",
    "InitLogging",
    "InspectSources",
    "ParseDotenv",
    "ProcessEnvironment",
    # Use cases
    "Candidate",
    "Configuration",
    "ConfigurationCache",
    "DocumentLoader",
    "EnvironmentStore",
    "ResolvedSources",
    "ResolverSettings",
    "SourceResolver",
    "Verdict",
    "build_configuration",
    "inspect_sources",
    "build_node",
]
