"""lib_log_rich initialisation for the command-line tool.

The library modules log through plain ``logging.getLogger(__name__)``
loggers below ``simple_app_config`` and never configure handlers. The CLI
calls :func:`init_logging` once to start the lib_log_rich runtime and
bridge those loggers into it.

Contents:
    * :class:`LoggingConfigModel` - the ``[lib_log_rich]`` settings section.
    * :func:`init_logging` - idempotent runtime initialisation.
"""

from __future__ import annotations

from typing import Any

import lib_log_rich.config
import lib_log_rich.runtime
from lib_layered_config import Config
from pydantic import BaseModel, ConfigDict

from ... import __init__conf__


class LoggingConfigModel(BaseModel):
    """``[lib_log_rich]`` settings; unknown keys pass through to ``RuntimeConfig``.

    Example:
        >>> LoggingConfigModel().environment
        'prod'
        >>> LoggingConfigModel(console_level="DEBUG").model_dump()["console_level"]
        'DEBUG'
    """

    service: str | None = None
    environment: str = "prod"

    model_config = ConfigDict(extra="allow")


def build_runtime_config(config: Config) -> lib_log_rich.runtime.RuntimeConfig:
    """Map the ``[lib_log_rich]`` section onto a lib_log_rich ``RuntimeConfig``.

    The service name defaults to the package name.
    """
    section: Any = config.get("lib_log_rich", default={})
    parsed = LoggingConfigModel.model_validate(dict(section) if section else {})
    passthrough = parsed.model_dump(exclude={"service", "environment"}, exclude_none=True)
    return lib_log_rich.runtime.RuntimeConfig(
        service=parsed.service or __init__conf__.name,
        environment=parsed.environment,
        **passthrough,
    )


def init_logging(config: Config) -> None:
    """Start lib_log_rich once and attach standard logging to it.

    Later calls return immediately. ``LOG_*`` variables from ``.env`` files
    are honoured by lib_log_rich.

    Example:
        >>> init_logging(Config({"lib_log_rich": {"environment": "test"}}, {}))  # doctest: +SKIP
    """
    if lib_log_rich.runtime.is_initialised():
        return
    lib_log_rich.config.enable_dotenv()
    lib_log_rich.runtime.init(build_runtime_config(config))
    lib_log_rich.runtime.attach_std_logging()


__all__ = [
    "LoggingConfigModel",
    "build_runtime_config",
    "init_logging",
]
