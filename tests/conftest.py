import io
import logging

import pytest
import structlog

from arbor.protocols import FailureDetail, TestRunError
from arbor.reporters.base import make_console
from arbor.tree import ContextTree


@pytest.fixture(autouse=True, scope="session")
def quiet_structlog():
    """Keep the harness's own debug logging out of captured output."""
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL))
    yield
    structlog.reset_defaults()


class RecordingListener:
    """Listener that records every event it receives, in order."""

    def __init__(self):
        self.events: list[tuple] = []

    def context_starting(self, desc: str) -> None:
        self.events.append(("context_starting", desc))

    def context_ended(self, desc: str) -> None:
        self.events.append(("context_ended", desc))

    def it_starting(self, desc: str) -> None:
        self.events.append(("it_starting", desc))

    def it_succeeded(self, desc: str) -> None:
        self.events.append(("it_succeeded", desc))

    def it_failed(self, desc: str, detail: FailureDetail) -> None:
        self.events.append(("it_failed", desc, detail))

    def it_unknown_error(self, desc: str) -> None:
        self.events.append(("it_unknown_error", desc))

    def it_skip(self, desc: str) -> None:
        self.events.append(("it_skip", desc))

    def test_run_error(self, context_desc: str, error: TestRunError) -> None:
        self.events.append(("test_run_error", context_desc, error))

    def test_run_complete(self) -> None:
        self.events.append(("test_run_complete",))

    @property
    def names(self) -> list[str]:
        return [event[0] for event in self.events]


@pytest.fixture
def tree() -> ContextTree:
    return ContextTree()


@pytest.fixture
def recorder() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def plain_console(output: io.StringIO):
    """A colorless console writing into ``output``."""
    return make_console(output, color=False)


@pytest.fixture
def recorder_factory():
    return RecordingListener
