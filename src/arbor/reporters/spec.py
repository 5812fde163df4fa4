# src/arbor/reporters/spec.py

"""
Prints the context tree as it runs, one line per spec with its outcome.
"""

from arbor.protocols import FailureDetail
from arbor.reporters.base import ProgressReporter


class SpecReporter(ProgressReporter):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.indentation = 0

    def _indent(self) -> str:
        return "  " * self.indentation

    def context_starting(self, desc: str) -> None:
        super().context_starting(desc)
        self.writeln(self._indent(), desc)
        self.indentation += 1

    def context_ended(self, desc: str) -> None:
        super().context_ended(desc)
        self.indentation = max(0, self.indentation - 1)

    def it_starting(self, desc: str) -> None:
        super().it_starting(desc)
        self.write(self._indent(), f"{desc} ... ")
        self.flush()

    def it_succeeded(self, desc: str) -> None:
        super().it_succeeded(desc)
        self.writeln(("OK", "green"))

    def it_failed(self, desc: str, detail: FailureDetail) -> None:
        super().it_failed(desc, detail)
        self.writeln(("FAILED", "red"))

    def it_unknown_error(self, desc: str) -> None:
        super().it_unknown_error(desc)
        self.writeln(("ERROR", "red"))

    def it_skip(self, desc: str) -> None:
        super().it_skip(desc)
        self.writeln(self._indent(), f"{desc} ... ", ("SKIPPED", "yellow"))

    def test_run_complete(self) -> None:
        super().test_run_complete()
        self.writeln()
        self.write_run_summary()
        self.flush()

# 🔼⚙️
