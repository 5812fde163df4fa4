# src/arbor/reporters/base.py

"""
Shared bookkeeping for reporters.
"""

import sys
from typing import TextIO

from rich.console import Console
from rich.text import Text

from arbor.formatters import FailureFormatter, PosixFailureFormatter
from arbor.protocols import FailureDetail, Listener, TestRunError

UNKNOWN_ERROR_MESSAGE = "Unknown exception"


def make_console(stream: TextIO | None = None, color: bool = True) -> Console:
    """A console that never wraps or highlights; color only when asked for and supported."""
    return Console(
        file=stream if stream is not None else sys.stdout,
        no_color=not color,
        color_system="auto" if color else None,
        highlight=False,
        soft_wrap=True,
        emoji=False,
    )


class ProgressReporter(Listener):
    """
    Counts events and collects failure messages for a final summary.

    Keeps its own stack of context names, independent from the runner's
    execution stack. Subclasses call up to these methods and add rendering.
    """

    def __init__(
        self,
        formatter: FailureFormatter | None = None,
        console: Console | None = None,
    ):
        self.formatter = formatter or PosixFailureFormatter()
        self.console = console or make_console()
        self.specs_run = 0
        self.specs_succeeded = 0
        self.specs_failed = 0
        self.specs_skipped = 0
        self.failures: list[str] = []
        self.test_run_errors: list[str] = []
        self.context_names: list[str] = []

    # --- Rendering helpers ---

    def write(self, *parts: str | tuple[str, str], end: str = "") -> None:
        self.console.print(Text.assemble(*parts), end=end)

    def writeln(self, *parts: str | tuple[str, str]) -> None:
        self.write(*parts, end="\n")

    def carriage_return(self) -> None:
        self.console.file.write("\r")

    def flush(self) -> None:
        self.console.file.flush()

    def current_context_name(self) -> str:
        return " ".join(self.context_names)

    def _qualified(self, desc: str) -> str:
        context = self.current_context_name()
        return f"{context} {desc}" if context else desc

    # --- Listener events ---

    def context_starting(self, desc: str) -> None:
        self.context_names.append(desc)

    def context_ended(self, desc: str) -> None:
        if self.context_names:
            self.context_names.pop()

    def it_starting(self, desc: str) -> None:
        self.specs_run += 1

    def it_succeeded(self, desc: str) -> None:
        self.specs_succeeded += 1

    def it_failed(self, desc: str, detail: FailureDetail) -> None:
        self.specs_failed += 1
        self.failures.append(f"{self._qualified(desc)}:\n{self.formatter.format(detail)}")

    def it_unknown_error(self, desc: str) -> None:
        self.specs_failed += 1
        self.failures.append(f"{self._qualified(desc)}:\n{UNKNOWN_ERROR_MESSAGE}")

    def it_skip(self, desc: str) -> None:
        self.specs_skipped += 1

    def test_run_error(self, context_desc: str, error: TestRunError) -> None:
        context = error.context or self.current_context_name()
        self.test_run_errors.append(f"{context}: {error.message}")

    def test_run_complete(self) -> None:
        pass

    def did_we_pass(self) -> bool:
        return self.specs_failed == 0 and not self.test_run_errors

    def write_run_summary(self) -> None:
        """The closing summary shared by the compact reporters."""
        if self.specs_run == 0 and not self.test_run_errors:
            self.writeln(("Could not find any tests.", "red"))
            return

        if self.did_we_pass():
            self.writeln(("Success!", "green"))

        if self.test_run_errors:
            self.writeln(("There were errors.", "red"))
            for error in self.test_run_errors:
                self.writeln(error)
            self.writeln()

        if self.specs_failed > 0:
            self.writeln(("There were failures!", "red"))
            for failure in self.failures:
                self.writeln(failure)
                self.writeln()

        line = f"Test run complete. {self.specs_run} tests run. {self.specs_succeeded} succeeded."
        if self.specs_skipped > 0:
            line += f" {self.specs_skipped} skipped."
        if self.specs_failed > 0:
            line += f" {self.specs_failed} failed."
        if self.test_run_errors:
            line += f" {len(self.test_run_errors)} test run errors."
        self.writeln((line, "white"))

# 🔼⚙️
