# src/arbor/telemetry/logger/base.py

import logging
import sys

import structlog
from structlog.typing import FilteringBoundLogger

from arbor.telemetry.logger.processors import (
    add_emoji_processor,
    level_name,
    remove_extra_keys_processor,
)

BASE_LOGGER_NAME = "arbor"

SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
    add_emoji_processor,
    remove_extra_keys_processor,
    structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
]


def _harness_log_formatter(json_logs: bool) -> logging.Formatter:
    """Formatter for the stderr stream; the run report itself goes to stdout."""
    if json_logs:
        renderer = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    return structlog.stdlib.ProcessorFormatter(processor=renderer)


def _detach_handlers(root_logger: logging.Logger) -> None:
    """A CLI invocation may configure logging more than once per process."""
    for handler in list(root_logger.handlers):
        handler.close()
        root_logger.removeHandler(handler)


def _attach_log_file(root_logger: logging.Logger, log_file: str, level: int) -> bool:
    try:
        handler = logging.FileHandler(log_file, encoding="utf-8")
    except OSError:
        return False
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=structlog.processors.JSONRenderer(sort_keys=True))
    )
    handler.setLevel(level)
    root_logger.addHandler(handler)
    return True


def setup_logging(
    level: int = logging.WARNING,
    json_logs: bool = False,
    log_file: str | None = None,
    file_only: bool = False,
) -> None:
    """
    Routes the harness's own structlog events through stdlib logging.

    Args:
        level: Threshold for every handler.
        json_logs: Render stderr events as JSON instead of console lines.
        log_file: Also write JSON events to this file.
        file_only: Skip the stderr handler (requires ``log_file`` to see anything).
    """
    structlog.configure(
        processors=SHARED_PROCESSORS,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    _detach_handlers(root_logger)
    root_logger.setLevel(level)

    slog = structlog.get_logger(BASE_LOGGER_NAME)

    if not file_only:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setFormatter(_harness_log_formatter(json_logs))
        root_logger.addHandler(stderr_handler)

    if log_file:
        if _attach_log_file(root_logger, log_file, level):
            slog.info("Harness log file opened", log_file=log_file)
        else:
            slog.error("Could not open harness log file", log_file=log_file, exc_info=True)

    slog.debug(
        "Harness logging configured",
        log_level=level_name(level),
        json_logs=json_logs,
        stderr=not file_only,
        log_file=log_file or "None",
    )


StructLogger = FilteringBoundLogger

# 🔼⚙️
