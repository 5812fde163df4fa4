#
# src/arbor/__init__.py
#
"""
Arbor: a behavior-driven test harness.

Declare nested contexts and specs with the grammar, then run them::

    from arbor import describe, it, run

    with describe("arithmetic"):
        @it("adds")
        def _():
            assert 1 + 1 == 2

    raise SystemExit(run())
"""

from .config import RunOptions, load_config
from .exceptions import (
    ArborError,
    ArborUsageError,
    ConfigurationError,
    ExecutionStackError,
    ExecutionStateError,
    RegistrationError,
    SpecLoadError,
)
from .grammar import (
    after_all,
    after_each,
    before_all,
    before_each,
    default_tree,
    describe,
    describe_skip,
    it,
    it_skip,
    reset,
    use_tree,
)
from .harness import execute, run
from .policy import OptionsRunPolicy, RunPolicy, RunStatus
from .protocols import FailureDetail, Listener, Outcome, TestRunError
from .results import RunResult
from .runner import Runner
from .stack import ExecutionStack, Frame
from .tree import Context, ContextTree, HookKind, Spec

__all__ = [
    "ArborError",
    "ArborUsageError",
    "ConfigurationError",
    "Context",
    "ContextTree",
    "ExecutionStack",
    "ExecutionStackError",
    "ExecutionStateError",
    "FailureDetail",
    "Frame",
    "HookKind",
    "Listener",
    "OptionsRunPolicy",
    "Outcome",
    "RegistrationError",
    "RunOptions",
    "RunPolicy",
    "RunResult",
    "RunStatus",
    "Runner",
    "Spec",
    "SpecLoadError",
    "TestRunError",
    "after_all",
    "after_each",
    "before_all",
    "before_each",
    "default_tree",
    "describe",
    "describe_skip",
    "execute",
    "it",
    "it_skip",
    "load_config",
    "reset",
    "run",
    "use_tree",
]

# 🔼⚙️
