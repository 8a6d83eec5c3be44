"""POSIX-conventional exit codes for CLI error paths.

Provides a single :class:`ExitCode` enum so every ``SystemExit`` raised by a
CLI command carries a meaningful integer instead of a bare ``1``, plus the
mapping from configuration errors to those codes.

Signal codes (130, 141, 143) are informational constants only; the
application never raises ``SystemExit`` with these values.
``lib_cli_exit_tools`` handles signal-to-exit-code translation.

Contents:
    * :class:`ExitCode` - IntEnum of all exit codes used by this application.
    * :func:`exit_code_for` - Exit code for a configuration error.
"""

from __future__ import annotations

from enum import IntEnum

from ...domain.errors import ErrorKind, SimpleAppConfigError


class ExitCode(IntEnum):
    """POSIX-conventional exit codes for CLI error paths.

    Values follow sysexits.h and errno conventions where applicable:

    * 0-1: generic success / failure
    * 2-13: errno-derived codes (ENOENT, EACCES)
    * 22: EINVAL
    * 78: EX_CONFIG (sysexits.h)
    * 128+N: signal N (informational only)

    Example:
        >>> ExitCode.SUCCESS
        <ExitCode.SUCCESS: 0>
        >>> int(ExitCode.CONFIG_ERROR)
        78
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    FILE_NOT_FOUND = 2
    PERMISSION_DENIED = 13
    INVALID_ARGUMENT = 22
    CONFIG_ERROR = 78
    SIGNAL_INT = 130
    BROKEN_PIPE = 141
    SIGNAL_TERM = 143


_EXIT_CODES: dict[ErrorKind, ExitCode] = {
    ErrorKind.UNDEFINED_ENV_VAR: ExitCode.CONFIG_ERROR,
    ErrorKind.CONFIG_FILE: ExitCode.CONFIG_ERROR,
    ErrorKind.UNSUPPORTED_TYPE: ExitCode.INVALID_ARGUMENT,
    ErrorKind.TYPE_CONVERSION: ExitCode.INVALID_ARGUMENT,
    ErrorKind.UNDEFINED_CONFIG_VALUE: ExitCode.INVALID_ARGUMENT,
}


def exit_code_for(exc: SimpleAppConfigError, *, during_pass: bool = False) -> ExitCode:
    """Return the exit code for *exc*.

    Any error raised while the configuration pass runs means the
    configuration itself is broken, so it maps to ``CONFIG_ERROR``.

    Examples:
        >>> from simple_app_config.domain.errors import UndefinedConfigValueError, UnsupportedTypeError
        >>> exit_code_for(UndefinedConfigValueError("a.b"))
        <ExitCode.INVALID_ARGUMENT: 22>
        >>> exit_code_for(UnsupportedTypeError("tuple"), during_pass=True)
        <ExitCode.CONFIG_ERROR: 78>
    """
    if during_pass:
        return ExitCode.CONFIG_ERROR
    return _EXIT_CODES.get(exc.kind, ExitCode.GENERAL_ERROR)


__all__ = ["ExitCode", "exit_code_for"]
