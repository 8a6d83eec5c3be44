"""Static package metadata surfaced to CLI commands and documentation.

Contents:
    * module-level constants describing the distribution.
    * ``LAYEREDCONF_*`` identifiers used by lib_layered_config to locate the
      command-line tool's own settings files.
    * :func:`print_info` - renders the metadata block for the ``info`` command.

Keep ``version`` in sync with ``pyproject.toml``.
"""

from __future__ import annotations

name = "simple_app_config"
title = "Layered application configuration with typed environment expansion"
version = "1.0.0"
shell_command = "simple-app-config"

#: Vendor directory used on macOS and Windows.
LAYEREDCONF_VENDOR: str = "simple-app-config"
#: Application directory used on macOS and Windows.
LAYEREDCONF_APP: str = "simple-app-config"
#: Directory name used on Linux (``~/.config/<slug>``).
LAYEREDCONF_SLUG: str = "simple-app-config"


def print_info() -> None:
    """Print the summarised metadata block used by the ``info`` command.

    Example:
        >>> print_info()  # doctest: +ELLIPSIS
        Info for simple_app_config:
        <BLANKLINE>
            name          = simple_app_config
        ...
    """
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    print("\n".join(lines))


__all__ = [
    "LAYEREDCONF_APP",
    "LAYEREDCONF_SLUG",
    "LAYEREDCONF_VENDOR",
    "name",
    "print_info",
    "shell_command",
    "title",
    "version",
]
