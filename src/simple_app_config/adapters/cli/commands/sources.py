"""``sources`` command: explain which files a configuration pass picked and why."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import lib_log_rich.runtime
import orjson
import rich_click as click

from ....application.resolver import Verdict
from ....application.session import Configuration
from ....domain.enums import OutputFormat
from ..constants import CLICK_CONTEXT_SETTINGS, SOURCE_LABEL_WIDTH, UNRESOLVED_MARKER
from ..context import get_cli_context
from ._shared import FORMAT_OPTION, engine_options, run_configuration

logger = logging.getLogger(__name__)

_LABELS = {
    "env_file": "env file",
    "config_file": "config file",
    "default_config_file": "default config file",
}


def _report(configuration: Configuration, verdicts: dict[str, list[Verdict]]) -> dict[str, Any]:
    sources = configuration.sources
    chosen = {
        "env_file": sources.env_file,
        "config_file": sources.config_file,
        "default_config_file": sources.default_config_file,
    }
    return {
        "environment": sources.environment,
        "environment_names": list(sources.environment_names),
        "project_root": str(sources.project_root),
        **{name: str(path) if path else None for name, path in chosen.items()},
        "candidates": {
            name: [
                {
                    "path": str(verdict.candidate.path),
                    "source": verdict.candidate.kind.value,
                    "valid": verdict.valid,
                    "reason": verdict.reason,
                }
                for verdict in entries
            ]
            for name, entries in verdicts.items()
        },
    }


def _echo_human(report: dict[str, Any]) -> None:
    heading = {
        "environment:": report["environment"],
        "environment names:": ", ".join(report["environment_names"]),
        "project root:": report["project_root"],
    }
    for label, value in heading.items():
        click.echo(f"{label.ljust(SOURCE_LABEL_WIDTH)}{value}")
    for name, label in _LABELS.items():
        click.echo(f"{(label + ':').ljust(SOURCE_LABEL_WIDTH)}{report[name] or UNRESOLVED_MARKER}")
        for entry in report["candidates"][name]:
            status = "ok" if entry["valid"] else entry["reason"]
            click.echo(f"    [{entry['source']}] {entry['path']} ({status})")


@click.command("sources", context_settings=CLICK_CONTEXT_SETTINGS)
@FORMAT_OPTION
@engine_options
@click.pass_context
def cli_sources(
    ctx: click.Context,
    output_format: str,
    engine_argv: tuple[str, ...],
    project_root: Path | None,
) -> None:
    """List the resolved environment and files, and every candidate with its verdict."""
    cli_ctx = get_cli_context(ctx)
    fmt = OutputFormat(output_format.lower())

    with lib_log_rich.runtime.bind(job_id="cli-sources", extra={"command": "sources"}):
        configuration = run_configuration(cli_ctx, engine_argv, project_root)
        verdicts = cli_ctx.services.inspect_sources(argv=engine_argv, project_root=project_root)
        logger.info("Listing configuration sources", extra={"environment": configuration.environment})
        report = _report(configuration, verdicts)
        if fmt is OutputFormat.JSON:
            click.echo(orjson.dumps(report, option=orjson.OPT_INDENT_2).decode("utf-8"))
        else:
            _echo_human(report)


__all__ = ["cli_sources"]
