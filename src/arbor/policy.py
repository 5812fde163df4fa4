# src/arbor/policy.py

"""
Run policies decide which nodes run and whether a finished run passed.
"""

from enum import Enum

import structlog

from arbor.config.models import RunOptions
from arbor.results import RunResult
from arbor.telemetry import StructLogger
from arbor.tree import Context, Spec

log: StructLogger = structlog.get_logger("policy")


class RunStatus(Enum):
    SUCCESS = "success"
    FAILURE = "failure"

    @property
    def exit_code(self) -> int:
        return 0 if self is RunStatus.SUCCESS else 1


class RunPolicy:
    """
    The base policy: only explicit skip flags matter.

    A node is skipped when it, or any context above it, was registered with
    ``skip=True``.
    """

    def should_skip(self, node: Context | Spec) -> bool:
        if node.skip:
            return True
        return any(ctx.skip for ctx in node.ancestors())

    def selects(self, spec: Spec, result: RunResult) -> bool:
        """Criteria beyond the skip flags. Subclasses narrow this."""
        return True

    def should_run_spec(self, spec: Spec, result: RunResult) -> bool:
        return not self.should_skip(spec) and self.selects(spec, result)

    def should_run_context(self, context: Context, result: RunResult) -> bool:
        """A context runs its hooks only when one of its specs will run."""
        if self.should_skip(context):
            return False
        return self._has_runnable_spec(context, result)

    def _has_runnable_spec(self, context: Context, result: RunResult) -> bool:
        # Ancestors are known to be unflagged here; flagged children are pruned.
        for child in context.children:
            if child.skip:
                continue
            if isinstance(child, Spec):
                if self.selects(child, result):
                    return True
            elif self._has_runnable_spec(child, result):
                return True
        return False

    @staticmethod
    def final_status(result: RunResult) -> RunStatus:
        """Skipped specs never fail a run."""
        if result.specs_failed > 0 or result.test_run_errors:
            return RunStatus.FAILURE
        return RunStatus.SUCCESS


class OptionsRunPolicy(RunPolicy):
    """
    Adds the command line filters on top of the skip flags.

    ``skip`` patterns exclude a spec when any of them is a substring of the
    spec's description or of an enclosing context's description. ``only``
    patterns, when present, keep just the specs matched the same way.
    """

    def __init__(self, options: RunOptions):
        self.options = options
        self._log = log.bind(
            skip=list(options.skip),
            only=list(options.only),
            dry_run=options.dry_run,
            break_on_failure=options.break_on_failure,
        )
        self._log.debug("Run policy initialized")

    @staticmethod
    def _matches(patterns: tuple[str, ...], spec: Spec) -> bool:
        names = [ctx.description for ctx in spec.ancestors() if not ctx.is_root]
        names.append(spec.description)
        return any(pattern in name for pattern in patterns for name in names)

    def selects(self, spec: Spec, result: RunResult) -> bool:
        if self.options.dry_run:
            return False
        if self.options.break_on_failure and result.specs_failed > 0:
            return False
        if self.options.skip and self._matches(self.options.skip, spec):
            return False
        if self.options.only:
            return self._matches(self.options.only, spec)
        return True

# 🔼⚙️
