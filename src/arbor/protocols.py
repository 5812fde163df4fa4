# src/arbor/protocols.py

"""
Defines the listener protocol and the data structures carried by its events.
"""

import traceback
from enum import Enum, auto
from typing import Protocol, runtime_checkable

from attrs import define

DEFAULT_FAILURE_MESSAGE = "assertion failed"


class Outcome(Enum):
    """Terminal classification of a single spec execution."""

    SUCCEEDED = auto()
    FAILED = auto()
    SKIPPED = auto()
    ERRORED = auto()


@define(frozen=True, slots=True)
class FailureDetail:
    """
    What went wrong in a spec or hook, and where.
    """

    message: str
    filename: str | None = None
    line: int | None = None

    @classmethod
    def from_exception(cls, exc: BaseException) -> "FailureDetail":
        """
        Builds a detail from a raised exception.

        The location is the innermost traceback frame. A bare ``assert`` has
        no message, so the source text of the failing line is used instead.
        """
        frames = traceback.extract_tb(exc.__traceback__) if exc.__traceback__ else []
        last = frames[-1] if frames else None
        message = str(exc)
        if not message:
            message = (last.line if last and last.line else "") or DEFAULT_FAILURE_MESSAGE
        if not isinstance(exc, AssertionError):
            message = f"{type(exc).__name__}: {message}"
        return cls(
            message=message,
            filename=last.filename if last else None,
            line=last.lineno if last else None,
        )


@define(frozen=True, slots=True)
class TestRunError:
    """A failure outside a spec body, attributed to a context."""

    __test__ = False

    context: str
    detail: FailureDetail

    @property
    def message(self) -> str:
        return self.detail.message


@runtime_checkable
class Listener(Protocol):
    """
    Protocol for a consumer of the run's lifecycle events.

    Events are delivered synchronously, in traversal order. For every spec
    exactly one of ``it_skip`` or ``it_starting`` is sent, and an
    ``it_starting`` is always followed by one of ``it_succeeded``,
    ``it_failed`` or ``it_unknown_error``.
    """

    def context_starting(self, desc: str) -> None: ...

    def context_ended(self, desc: str) -> None: ...

    def it_starting(self, desc: str) -> None: ...

    def it_succeeded(self, desc: str) -> None: ...

    def it_failed(self, desc: str, detail: FailureDetail) -> None: ...

    def it_unknown_error(self, desc: str) -> None: ...

    def it_skip(self, desc: str) -> None: ...

    def test_run_error(self, context_desc: str, error: TestRunError) -> None: ...

    def test_run_complete(self) -> None:
        """Sent exactly once, after the whole tree has been traversed."""
        ...

# 🔼⚙️
