# src/arbor/reporters/factory.py

"""
Factory for creating reporter instances by name.
"""

from typing import TextIO

import structlog

from arbor.exceptions import ConfigurationError
from arbor.formatters import FailureFormatter
from arbor.reporters.base import ProgressReporter, make_console
from arbor.reporters.dots import DotsReporter
from arbor.reporters.info import InfoReporter
from arbor.reporters.singleline import SingleLineReporter
from arbor.reporters.spec import SpecReporter
from arbor.reporters.xunit import XunitReporter

log = structlog.get_logger("reporters.factory")

REPORTER_MAP: dict[str, type[ProgressReporter]] = {
    "info": InfoReporter,
    "spec": SpecReporter,
    "dots": DotsReporter,
    "singleline": SingleLineReporter,
    "xunit": XunitReporter,
}


def get_reporter(
    name: str,
    formatter: FailureFormatter | None = None,
    stream: TextIO | None = None,
    color: bool = True,
) -> ProgressReporter:
    """
    Factory function to get an instance of a reporter.
    """
    reporter_class = REPORTER_MAP.get(name.lower())
    if not reporter_class:
        log.error("Unsupported reporter specified", reporter=name)
        raise ConfigurationError(
            f"Unsupported reporter: '{name}'. Available reporters: {list(REPORTER_MAP.keys())}"
        )

    log.debug("Instantiating reporter", reporter=name, color=color)
    return reporter_class(formatter=formatter, console=make_console(stream, color=color))

# 🔼⚙️
