# src/arbor/runner.py

"""
Depth-first execution of a context tree.

The runner walks contexts in registration order, runs hooks around specs,
classifies each spec's outcome and forwards lifecycle events to every
attached listener.
"""

from collections.abc import Callable, Iterable

import structlog

from arbor.exceptions import ArborUsageError
from arbor.grammar import declarations_closed
from arbor.policy import RunPolicy
from arbor.protocols import FailureDetail, Listener, Outcome, TestRunError
from arbor.results import RunResult
from arbor.stack import ExecutionStack
from arbor.telemetry import StructLogger
from arbor.tree import Context, ContextTree, HookKind, Spec

log: StructLogger = structlog.get_logger("runner")


class ListenerGroup:
    """
    Fans every event out to a list of listeners.

    A listener that raises is logged and skipped for that event; the others
    still receive it, in the same order.
    """

    def __init__(self, listeners: Iterable[Listener]):
        self.listeners = list(listeners)

    def emit(self, event: str, *args: object) -> None:
        for listener in self.listeners:
            try:
                getattr(listener, event)(*args)
            except ArborUsageError:
                raise
            except Exception:
                log.exception(
                    "Listener failed while handling event",
                    listener=type(listener).__name__,
                    listener_event=event,
                )


class Runner:
    """Drives one full traversal of a context tree."""

    def __init__(
        self,
        tree: ContextTree,
        listeners: Iterable[Listener] = (),
        policy: RunPolicy | None = None,
    ):
        self.tree = tree
        self.listeners = ListenerGroup(listeners)
        self.policy = policy or RunPolicy()
        self.stack = ExecutionStack()
        self.result = RunResult()

    def run(self) -> RunResult:
        """
        Runs every spec in the tree once.

        Returns:
            The finalized RunResult.

        Raises:
            ArborUsageError: On a fatal misuse of the harness, such as
                registering new specs from inside a running spec.
        """
        if self.result.finalized:
            raise ArborUsageError("A Runner can only be run once.")
        self.tree.seal()
        log.info("Test run starting", listeners=len(self.listeners.listeners))

        root = self.tree.root
        with declarations_closed():
            self.stack.push(root.description)
            if self.policy.should_run_context(root, self.result):
                self._run_context_body(root)
            else:
                self._skip_children(root)
            self.stack.pop()

        self.listeners.emit("test_run_complete")
        self.result.finalize()
        log.info(
            "Test run complete",
            specs_run=self.result.specs_run,
            specs_succeeded=self.result.specs_succeeded,
            specs_failed=self.result.specs_failed,
            specs_skipped=self.result.specs_skipped,
            test_run_errors=len(self.result.test_run_errors),
        )
        return self.result

    # --- Contexts ---

    def _visit(self, node: Context | Spec) -> None:
        if isinstance(node, Spec):
            self._run_spec(node)
        else:
            self._run_context(node)

    def _run_context(self, context: Context) -> None:
        self.listeners.emit("context_starting", context.description)
        self.stack.push(context.description)
        if self.policy.should_run_context(context, self.result):
            log.debug("Entering context", context=context.description, depth=self.stack.depth)
            self._run_context_body(context)
        else:
            log.debug("Skipping context", context=context.description)
            self._skip_children(context)
        self.listeners.emit("context_ended", context.description)
        self.stack.pop()

    def _run_context_body(self, context: Context) -> None:
        setup_ok = self._run_setup_hooks(context, HookKind.BEFORE_ALL)
        try:
            if setup_ok:
                for child in context.children:
                    self._visit(child)
            else:
                self._skip_children(context)
        finally:
            self._run_teardown_hooks(context, HookKind.AFTER_ALL)

    def _run_setup_hooks(self, context: Context, kind: HookKind) -> bool:
        """Stops at the first failing hook."""
        for hook in context.hooks_for(kind):
            error = self._call_hook(hook)
            if error is not None:
                self._report_test_run_error(context, kind, error)
                return False
        return True

    def _run_teardown_hooks(self, context: Context, kind: HookKind) -> None:
        """Every hook runs even if an earlier one failed."""
        for hook in context.hooks_for(kind):
            error = self._call_hook(hook)
            if error is not None:
                self._report_test_run_error(context, kind, error)

    def _skip_children(self, context: Context) -> None:
        """Bookkeeping-only visit: nothing runs, every spec is reported skipped."""
        for child in context.children:
            if isinstance(child, Spec):
                self._skip_spec(child)
            else:
                self.listeners.emit("context_starting", child.description)
                self.stack.push(child.description)
                self._skip_children(child)
                self.listeners.emit("context_ended", child.description)
                self.stack.pop()

    # --- Specs ---

    def _skip_spec(self, spec: Spec) -> None:
        self.listeners.emit("it_skip", spec.description)
        self._record(spec, Outcome.SKIPPED)

    def _run_spec(self, spec: Spec) -> None:
        if not self.policy.should_run_spec(spec, self.result):
            self._skip_spec(spec)
            return

        self.listeners.emit("it_starting", spec.description)
        ancestors = spec.ancestors()
        outcome = Outcome.SUCCEEDED
        detail: FailureDetail | None = None
        try:
            for context in ancestors:
                for hook in context.hooks_for(HookKind.BEFORE_EACH):
                    hook()
            spec.body()
        except ArborUsageError:
            raise
        except AssertionError as e:
            outcome = Outcome.FAILED
            detail = FailureDetail.from_exception(e)
        except (Exception, SystemExit) as e:
            outcome = Outcome.ERRORED
            detail = FailureDetail.from_exception(e)
            log.debug("Spec raised an unexpected error", spec=spec.description, exc_info=True)
        finally:
            self._run_after_each(ancestors)

        if outcome is Outcome.SUCCEEDED:
            self.listeners.emit("it_succeeded", spec.description)
        elif outcome is Outcome.FAILED:
            self.listeners.emit("it_failed", spec.description, detail)
        else:
            self.listeners.emit("it_unknown_error", spec.description)
        self._record(spec, outcome, detail)

    def _run_after_each(self, ancestors: list[Context]) -> None:
        """Innermost context first."""
        for context in reversed(ancestors):
            self._run_teardown_hooks(context, HookKind.AFTER_EACH)

    def _record(self, spec: Spec, outcome: Outcome, detail: FailureDetail | None = None) -> None:
        self.stack.record(outcome)
        self.result.record(spec.full_description(), outcome, detail)
        log.debug("Spec finished", spec=spec.description, outcome=outcome.name)

    # --- Hooks ---

    @staticmethod
    def _call_hook(hook: Callable[[], object]) -> Exception | SystemExit | None:
        try:
            hook()
        except ArborUsageError:
            raise
        except (Exception, SystemExit) as e:
            return e
        return None

    def _report_test_run_error(self, context: Context, kind: HookKind, error: BaseException) -> None:
        detail = FailureDetail.from_exception(error)
        run_error = TestRunError(context=context.full_description(), detail=detail)
        log.warning(
            "Hook failed",
            context=run_error.context or "<root>",
            hook=kind.value,
            error=detail.message,
        )
        self.result.add_test_run_error(run_error)
        self.listeners.emit("test_run_error", context.description, run_error)


def run(
    tree: ContextTree,
    listeners: Iterable[Listener] = (),
    policy: RunPolicy | None = None,
) -> RunResult:
    """Convenience wrapper: builds a Runner and runs it."""
    return Runner(tree, listeners, policy).run()

# 🔼⚙️
