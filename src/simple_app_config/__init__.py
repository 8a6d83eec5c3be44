"""Public package surface for layered configuration with typed expansion.

Routes imports through the architectural layers:
- Composition exports: the production :func:`configure` pass and :func:`get`
- Application exports: :class:`Configuration` and :class:`EnvironmentStore`
- Domain exports: errors, type tokens, converter and expansion entry points
- Metadata: Package information

Library modules log through ``logging.getLogger("simple_app_config")``
children; a :class:`logging.NullHandler` keeps them silent until the
application configures logging.
"""

from __future__ import annotations

import logging

# Metadata
from .__init__conf__ import print_info

# Composition exports (wired adapters)
from .adapters.config.loader import configure, get

# Application exports
from .application.env_store import EnvironmentStore
from .application.session import Configuration, ResolvedSources

# Domain exports
from .domain.converter import convert
from .domain.enums import DataType
from .domain.errors import (
    ConfigFileError,
    ErrorKind,
    SimpleAppConfigError,
    TypeConversionError,
    UndefinedConfigValueError,
    UndefinedEnvVarError,
    UnsupportedTypeError,
)
from .domain.expansion import expand

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ConfigFileError",
    "Configuration",
    "DataType",
    "EnvironmentStore",
    "ErrorKind",
    "ResolvedSources",
    "SimpleAppConfigError",
    "TypeConversionError",
    "UndefinedConfigValueError",
    "UndefinedEnvVarError",
    "UnsupportedTypeError",
    "configure",
    "convert",
    "expand",
    "get",
    "print_info",
]
