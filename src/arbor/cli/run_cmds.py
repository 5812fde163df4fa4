# src/arbor/cli/run_cmds.py

from pathlib import Path

import click
import structlog

from arbor.cli.utils import logging_options, setup_logging_from_context
from arbor.config import FORMATTER_NAMES, REPORTER_NAMES, load_config
from arbor.exceptions import ArborUsageError, ConfigurationError, SpecLoadError
from arbor.harness import execute
from arbor.loader import load_spec_files
from arbor.policy import RunPolicy
from arbor.telemetry import StructLogger

log: StructLogger = structlog.get_logger("cli.run")

EXIT_USAGE_ERROR = 2


@click.command(name="run")
@click.argument(
    "spec_files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True, path_type=Path),
)
@click.option(
    "-r",
    "--reporter",
    type=click.Choice(REPORTER_NAMES, case_sensitive=False),
    default=None,
    envvar="ARBOR_REPORTER",
    show_envvar=True,
    help="How to render the run [default: info].",
)
@click.option(
    "--formatter",
    type=click.Choice(FORMATTER_NAMES, case_sensitive=False),
    default=None,
    envvar="ARBOR_FORMATTER",
    show_envvar=True,
    help="Failure location format [default: posix].",
)
@click.option("--no-color", is_flag=True, default=False, envvar="ARBOR_NO_COLOR", help="Disable colored output.")
@click.option(
    "--skip",
    multiple=True,
    help="Skip specs whose description, or an enclosing context's, contains TEXT. Repeatable.",
)
@click.option(
    "--only",
    multiple=True,
    help="Run only specs whose description, or an enclosing context's, contains TEXT. Repeatable.",
)
@click.option(
    "--break-on-failure",
    is_flag=True,
    default=False,
    envvar="ARBOR_BREAK_ON_FAILURE",
    help="Skip every remaining spec after the first failure.",
)
@click.option("--dry-run", is_flag=True, default=False, help="Report every spec as skipped without running anything.")
@click.option(
    "-c",
    "--config-path",
    type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True, path_type=Path),
    default=None,
    envvar="ARBOR_CONF",
    show_envvar=True,
    help="TOML file with a [run] table of default options.",
)
@logging_options
@click.pass_context
def run_cli(
    ctx: click.Context,
    spec_files: tuple[Path, ...],
    reporter: str | None,
    formatter: str | None,
    no_color: bool,
    skip: tuple[str, ...],
    only: tuple[str, ...],
    break_on_failure: bool,
    dry_run: bool,
    config_path: Path | None,
    **kwargs,
):
    """Run the specs declared in SPEC_FILES."""
    setup_logging_from_context(
        ctx,
        level=kwargs.get("log_level"),
        log_file=kwargs.get("log_file"),
        json_logs=kwargs.get("json_logs"),
    )
    log.info("Executing 'run' command", spec_files=[str(p) for p in spec_files])

    overrides = {
        "reporter": reporter.lower() if reporter else None,
        "formatter": formatter.lower() if formatter else None,
        "color": False if no_color else None,
        "skip": skip,
        "only": only,
        "break_on_failure": True if break_on_failure else None,
        "dry_run": True if dry_run else None,
    }

    try:
        options = load_config(config_path, overrides)
        tree = load_spec_files(spec_files)
        result = execute(options, tree)
    except (ConfigurationError, SpecLoadError) as e:
        log.error("Run could not start", error=str(e))
        click.echo(f"Error: {e}", err=True)
        ctx.exit(EXIT_USAGE_ERROR)
    except ArborUsageError as e:
        log.critical("Run aborted by a harness usage error", error=str(e), exc_info=True)
        click.echo(f"Error: {e}", err=True)
        ctx.exit(EXIT_USAGE_ERROR)

    status = RunPolicy.final_status(result)
    log.info("'run' command finished.", status=status.value)
    ctx.exit(status.exit_code)


@click.command(name="reporters")
def reporters_cli():
    """List the available reporters."""
    for name in REPORTER_NAMES:
        click.echo(name)

# 🔼⚙️
