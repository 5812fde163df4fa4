# src/arbor/reporters/singleline.py

"""
A single status line rewritten in place as specs finish.
"""

from arbor.protocols import FailureDetail
from arbor.reporters.base import ProgressReporter


class SingleLineReporter(ProgressReporter):
    def _status(self) -> None:
        self.carriage_return()
        parts: list[str | tuple[str, str]] = [f"Executing {self.specs_run} tests."]
        if self.specs_failed > 0:
            parts.append((f" {self.specs_failed} failed.", "red"))
        if self.specs_skipped > 0:
            parts.append((f" {self.specs_skipped} skipped.", "yellow"))
        self.write(*parts)
        self.flush()

    def it_starting(self, desc: str) -> None:
        super().it_starting(desc)
        self._status()

    def it_failed(self, desc: str, detail: FailureDetail) -> None:
        super().it_failed(desc, detail)
        self._status()

    def it_unknown_error(self, desc: str) -> None:
        super().it_unknown_error(desc)
        self._status()

    def it_skip(self, desc: str) -> None:
        super().it_skip(desc)
        self._status()

    def test_run_complete(self) -> None:
        super().test_run_complete()
        self.writeln()
        self.write_run_summary()
        self.flush()

# 🔼⚙️
