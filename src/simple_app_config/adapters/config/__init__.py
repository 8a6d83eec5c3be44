"""Configuration adapter - production configuration pass, tool settings, display.

Contents:
    * :mod:`.loader` - Cached configuration pass over disk and ``os.environ``
    * :mod:`.settings` - The tool's own settings via lib_layered_config
    * :mod:`.display` - Human/JSON rendering via lib_layered_config
    * :mod:`.overrides` - CLI ``--set`` override parsing and application
"""

from __future__ import annotations

from .display import display_config
from .loader import configure, get
from .overrides import apply_overrides
from .settings import get_default_settings_path, get_settings

__all__ = [
    "apply_overrides",
    "configure",
    "display_config",
    "get",
    "get_default_settings_path",
    "get_settings",
]
