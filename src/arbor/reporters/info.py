# src/arbor/reporters/info.py

"""
The info reporter: a nested begin/end view of the run with per-context
totals, followed by a summary of every failure and test run error.
"""

import structlog
from attrs import field, mutable

from arbor.protocols import FailureDetail, TestRunError
from arbor.reporters.base import ProgressReporter

log = structlog.get_logger("reporters.info")


@mutable(slots=True)
class ContextInfo:
    """Per-context counters, merged into the enclosing context when it ends."""

    desc: str
    total: int = field(default=0)
    skipped: int = field(default=0)
    failed: int = field(default=0)
    announced: bool = field(default=False)

    def merge(self, other: "ContextInfo") -> None:
        self.total += other.total
        self.skipped += other.skipped
        self.failed += other.failed


class InfoReporter(ProgressReporter):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.indentation = 0
        self.context_stack: list[ContextInfo] = []
        self.error_lines: list[str] = []

    def _indent(self) -> str:
        return "  " * self.indentation

    def _count(self, skipped: bool = False, failed: bool = False) -> None:
        if not self.context_stack:
            return
        top = self.context_stack[-1]
        top.total += 1
        if skipped:
            top.skipped += 1
        if failed:
            top.failed += 1

    # --- Contexts ---

    def context_starting(self, desc: str) -> None:
        super().context_starting(desc)
        self.context_stack.append(ContextInfo(desc))
        if len(self.context_stack) == 1:
            self._output_context_start(self.context_stack[-1])

    def _output_context_start(self, context: ContextInfo) -> None:
        self.writeln(self._indent(), ("begin ", "blue"), (context.desc, "white"))
        context.announced = True
        self.indentation += 1
        self.flush()

    def context_ended(self, desc: str) -> None:
        super().context_ended(desc)
        top = self.context_stack[-1]
        # Nested contexts are announced lazily by their first started spec, so
        # a subtree that was entirely skipped gets neither begin nor end.
        if top.announced:
            self._output_context_end(top)
        self.context_stack.pop()
        if self.context_stack:
            self.context_stack[-1].merge(top)

    def _output_context_end(self, context: ContextInfo) -> None:
        self.indentation = max(0, self.indentation - 1)
        parts: list[str | tuple[str, str]] = [self._indent(), ("end ", "blue"), context.desc]
        if context.total > 0:
            parts.append((f" {context.total} total", "white"))
        if context.skipped > 0:
            parts.append((f" {context.skipped} skipped", "yellow"))
        if context.failed > 0:
            parts.append((f" {context.failed} failed", "red"))
        self.writeln(*parts)

    # --- Specs ---

    def it_skip(self, desc: str) -> None:
        super().it_skip(desc)
        self._count(skipped=True)

    def it_starting(self, desc: str) -> None:
        for context in self.context_stack:
            if not context.announced:
                self._output_context_start(context)
        super().it_starting(desc)
        self.write(self._indent(), ("[ TEST ]", "yellow"), f" it {desc}")
        self.indentation += 1
        self.flush()

    def _finish_spec(self, label: str, style: str, desc: str) -> None:
        self.indentation -= 1
        self.carriage_return()
        self.writeln(self._indent(), (label, style), f" it {desc}")
        self.flush()

    def it_succeeded(self, desc: str) -> None:
        super().it_succeeded(desc)
        self._count()
        self._finish_spec("[ PASS ]", "green", desc)

    def it_failed(self, desc: str, detail: FailureDetail) -> None:
        super().it_failed(desc, detail)
        self._count(failed=True)
        self._finish_spec("[ FAIL ]", "red", desc)

    def it_unknown_error(self, desc: str) -> None:
        super().it_unknown_error(desc)
        self._count(failed=True)
        self._finish_spec("-ERROR->", "red", desc)

    # --- Run level ---

    def test_run_error(self, context_desc: str, error: TestRunError) -> None:
        super().test_run_error(context_desc, error)
        context = error.context or self.current_context_name()
        self.error_lines.append(f'Failed to run "{context}": error "{error.message}"')

    def test_run_complete(self) -> None:
        super().test_run_complete()
        self.writeln()
        self.summary()
        self.flush()

    def _bullets(self, lines: list[str]) -> None:
        for line in lines:
            self.writeln((" (*) ", "white"), (line, "red"))

    def summary(self) -> None:
        self.writeln((f"Tests run: {self.specs_run}", "white"))
        if self.specs_skipped > 0:
            self.writeln((f"Skipped: {self.specs_skipped}", "yellow"))
        if self.specs_succeeded > 0:
            self.writeln((f"Passed: {self.specs_succeeded}", "green"))
        if self.specs_failed > 0:
            self.writeln((f"Failed: {self.specs_failed}", "red"))
            self._bullets(self.failures)
        if self.error_lines:
            self.writeln((f"Errors: {len(self.error_lines)}", "red"))
            self._bullets(self.error_lines)
        self.writeln()
        log.debug(
            "Summary rendered",
            specs_run=self.specs_run,
            specs_failed=self.specs_failed,
            errors=len(self.error_lines),
        )

# 🔼⚙️
