"""``simple-app-config`` console script.

The script needs production wiring (disk, ``os.environ``, lib_log_rich),
which only the composition layer may assemble, so the adapters' ``main``
receives :func:`build_production` from here.
"""

from __future__ import annotations

from .adapters.cli.main import main as cli_main
from .composition import build_production


def main() -> int:
    """Run the CLI against the real file system and environment and return its exit code."""
    return cli_main(services_factory=build_production)


__all__ = ["main"]
