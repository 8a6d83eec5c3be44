"""The command-line tool's own layered settings.

The settings only cover the tool itself (logging for now); the
configuration the tool resolves for an application comes from
:mod:`.loader`. They are read with lib_layered_config from the bundled
``defaultconfig.toml`` and the usual app, host, user, dotenv and
environment layers, optionally below a named profile.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Protocol, cast

from lib_layered_config import (
    DEFAULT_MAX_PROFILE_LENGTH,
    Config,
    read_config,
    validate_profile_name,
)

from ... import __init__conf__


class SettingsLoaderProtocol(Protocol):
    """Settings loader with a ``cache_clear`` method."""

    def __call__(self, *, profile: str | None = None, start_dir: str | None = None) -> Config: ...
    def cache_clear(self) -> None: ...


def validate_profile(profile: str, max_length: int | None = None) -> None:
    """Reject profile names that are empty, too long, or could escape the config directory.

    Raises:
        ValueError: If the profile name is invalid.

    Examples:
        >>> validate_profile("staging-v2")

        >>> validate_profile("../etc/passwd")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ValueError: profile contains invalid characters: ../etc/passwd
    """
    validate_profile_name(profile, max_length=max_length if max_length is not None else DEFAULT_MAX_PROFILE_LENGTH)


@lru_cache(maxsize=1)
def get_default_settings_path() -> Path:
    """Return the bundled ``defaultconfig.toml``.

    Example:
        >>> get_default_settings_path().name
        'defaultconfig.toml'
    """
    return Path(__file__).parent / "defaultconfig.toml"


@lru_cache(maxsize=4)
def _get_settings_impl(*, profile: str | None = None, start_dir: str | None = None) -> Config:
    return read_config(
        vendor=__init__conf__.LAYEREDCONF_VENDOR,
        app=__init__conf__.LAYEREDCONF_APP,
        slug=__init__conf__.LAYEREDCONF_SLUG,
        profile=profile,
        default_file=get_default_settings_path(),
        start_dir=start_dir,
    )


def _get_settings(*, profile: str | None = None, start_dir: str | None = None) -> Config:
    """Load the tool settings once per ``(profile, start_dir)``.

    Args:
        profile: Optional profile name; inserts ``profile/<name>/`` into
            every settings path.
        start_dir: Directory that seeds ``.env`` discovery; defaults to the
            working directory.

    Raises:
        ValueError: If *profile* is not a valid profile name.
    """
    if profile is not None:
        validate_profile(profile)
    return _get_settings_impl(profile=profile, start_dir=start_dir)


_get_settings.cache_clear = _get_settings_impl.cache_clear  # type: ignore[attr-defined]
get_settings: SettingsLoaderProtocol = cast(SettingsLoaderProtocol, _get_settings)


__all__ = [
    "get_default_settings_path",
    "get_settings",
    "validate_profile",
]
