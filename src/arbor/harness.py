# src/arbor/harness.py

"""
Wires options, reporter, policy and runner together for one run.
"""

from collections.abc import Iterable
from typing import TextIO

import structlog

from arbor.config.models import RunOptions
from arbor.formatters import get_failure_formatter
from arbor.grammar import default_tree
from arbor.policy import OptionsRunPolicy, RunStatus
from arbor.protocols import Listener
from arbor.reporters import get_reporter
from arbor.results import RunResult
from arbor.runner import Runner
from arbor.telemetry import StructLogger
from arbor.tree import ContextTree

log: StructLogger = structlog.get_logger("harness")


def execute(
    options: RunOptions | None = None,
    tree: ContextTree | None = None,
    extra_listeners: Iterable[Listener] = (),
    stream: TextIO | None = None,
) -> RunResult:
    """
    Runs ``tree`` (the grammar's default tree if omitted) with the reporter
    selected by ``options``.

    Args:
        options: Run options; defaults to ``RunOptions()``.
        tree: The tree to run.
        extra_listeners: Listeners attached after the reporter.
        stream: Where the reporter writes; stdout if omitted.

    Returns:
        The finalized RunResult.
    """
    options = options or RunOptions()
    tree = tree if tree is not None else default_tree()
    reporter = get_reporter(
        options.reporter,
        formatter=get_failure_formatter(options.formatter),
        stream=stream,
        color=options.color,
    )
    policy = OptionsRunPolicy(options)
    runner = Runner(tree, [reporter, *extra_listeners], policy)
    result = runner.run()
    log.debug("Run finished", status=policy.final_status(result).value)
    return result


def run(options: RunOptions | None = None, tree: ContextTree | None = None) -> int:
    """Runs the tree and returns the process exit code (0 on success, 1 otherwise)."""
    result = execute(options, tree)
    return OptionsRunPolicy.final_status(result).exit_code


__all__ = ["RunStatus", "execute", "run"]

# 🔼⚙️
