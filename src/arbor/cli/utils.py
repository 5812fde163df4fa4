# src/arbor/cli/utils.py

import logging

import click
import structlog
from attrs import define, evolve

from arbor.telemetry import setup_logging

log = structlog.get_logger("cli.utils")

ENV_PREFIX = "ARBOR"
LOG_LEVEL_CHOICES = click.Choice(list(logging.getLevelNamesMapping()), case_sensitive=False)


@define(frozen=True, slots=True)
class LoggingSettings:
    """Logging choices gathered from the group and the subcommand."""

    level: str = "WARNING"
    log_file: str | None = None
    json_logs: bool = False

    def refine(
        self,
        level: str | None = None,
        log_file: str | None = None,
        json_logs: bool | None = None,
    ) -> "LoggingSettings":
        """Subcommand values win over group values; None keeps the group value."""
        return evolve(
            self,
            level=level or self.level,
            log_file=log_file or self.log_file,
            json_logs=self.json_logs if json_logs is None else json_logs,
        )

    @property
    def numeric_level(self) -> int:
        return logging.getLevelNamesMapping().get(self.level.upper(), logging.WARNING)


def logging_options(f):
    """Adds --log-level, --log-file and --json-logs to a command."""
    f = click.option(
        "-l",
        "--log-level",
        type=LOG_LEVEL_CHOICES,
        default=None,
        envvar=f"{ENV_PREFIX}_LOG_LEVEL",
        help="Level for the harness's own log messages (they go to stderr).",
    )(f)
    f = click.option(
        "--log-file",
        type=click.Path(dir_okay=False, writable=True, resolve_path=True),
        default=None,
        envvar=f"{ENV_PREFIX}_LOG_FILE",
        help="Also write harness logs to this file, as JSON.",
    )(f)
    f = click.option(
        "--json-logs",
        is_flag=True,
        default=None,
        envvar=f"{ENV_PREFIX}_JSON_LOGS",
        help="Render stderr logs as JSON.",
    )(f)
    return f


def setup_logging_from_context(
    ctx: click.Context,
    level: str | None = None,
    log_file: str | None = None,
    json_logs: bool | None = None,
) -> LoggingSettings:
    """
    Configures logging from the group's settings in ``ctx.obj``, refined by
    the subcommand's own options, and returns the settings used.
    """
    base = (ctx.obj or {}).get("logging") or LoggingSettings()
    settings = base.refine(level, log_file, json_logs)
    setup_logging(
        level=settings.numeric_level,
        json_logs=settings.json_logs,
        log_file=settings.log_file,
    )
    log.debug(
        "CLI logging configured",
        level=settings.level,
        file=settings.log_file or "console",
        json=settings.json_logs,
    )
    return settings

# ⚙️🛠️
