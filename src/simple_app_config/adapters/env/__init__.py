"""Process environment adapters.

Contents:
    * :mod:`.process` - ``os.environ`` accessor
    * :mod:`.envfile` - Env file parsing via python-dotenv
"""

from __future__ import annotations

from .envfile import parse_dotenv
from .process import OsEnvironment

__all__ = ["OsEnvironment", "parse_dotenv"]
