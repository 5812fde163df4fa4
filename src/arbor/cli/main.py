# src/arbor/cli/main.py

"""
The ``arbor`` command group.
"""

from importlib.metadata import PackageNotFoundError, version

import click
import structlog

from arbor.cli.run_cmds import reporters_cli, run_cli
from arbor.cli.utils import LoggingSettings, logging_options, setup_logging_from_context
from arbor.telemetry import StructLogger

try:
    __version__ = version("arbor")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

log: StructLogger = structlog.get_logger("cli.main")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, "-V", "--version", package_name="arbor")
@logging_options
@click.pass_context
def cli(
    ctx: click.Context,
    log_level: str | None,
    log_file: str | None,
    json_logs: bool | None,
):
    """
    Arbor: nested describe/it test harness.

    Loads spec files, runs their contexts and specs in declaration order and
    reports the outcome. Exit status is 0 when every spec passed, 1 on
    failures, 2 when the run could not start.

    Option precedence: CLI options > Environment Variables > Config File > Defaults.
    """
    ctx.ensure_object(dict)
    ctx.obj["logging"] = LoggingSettings().refine(log_level, log_file, json_logs)
    settings = setup_logging_from_context(ctx)
    log.debug("arbor CLI group initialized", log_level=settings.level, log_file=settings.log_file)


cli.add_command(run_cli)
cli.add_command(reporters_cli)

if __name__ == "__main__":
    cli()

# 🖥️⚙️
