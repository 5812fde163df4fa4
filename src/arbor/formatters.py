# src/arbor/formatters.py

"""
Failure formatters turn a FailureDetail into a single location-prefixed line
that editors and IDEs can jump to.
"""

from typing import Protocol, runtime_checkable

import structlog

from arbor.exceptions import ConfigurationError
from arbor.protocols import FailureDetail

log = structlog.get_logger("formatters")


@runtime_checkable
class FailureFormatter(Protocol):
    def format(self, detail: FailureDetail) -> str: ...


class PosixFailureFormatter:
    """``file:line: message``, as understood by most compilers and editors."""

    def format(self, detail: FailureDetail) -> str:
        if detail.filename is None:
            return detail.message
        if detail.line is None:
            return f"{detail.filename}: {detail.message}"
        return f"{detail.filename}:{detail.line}: {detail.message}"


class VisualStudioFailureFormatter:
    """``file(line): message``, the Visual Studio error list format."""

    def format(self, detail: FailureDetail) -> str:
        if detail.filename is None:
            return detail.message
        if detail.line is None:
            return f"{detail.filename}: {detail.message}"
        return f"{detail.filename}({detail.line}): {detail.message}"


FORMATTER_MAP = {
    "posix": PosixFailureFormatter,
    "vs": VisualStudioFailureFormatter,
}


def get_failure_formatter(name: str) -> FailureFormatter:
    formatter_class = FORMATTER_MAP.get(name.lower())
    if not formatter_class:
        log.error("Unsupported failure formatter specified", formatter=name)
        raise ConfigurationError(
            f"Unsupported failure formatter: '{name}'. "
            f"Available formatters: {list(FORMATTER_MAP.keys())}"
        )
    return formatter_class()

# 🔼⚙️
