# src/arbor/reporters/dots.py

"""
One character per spec: ``.`` passed, ``F`` failed, ``E`` errored.
"""

from arbor.protocols import FailureDetail
from arbor.reporters.base import ProgressReporter


class DotsReporter(ProgressReporter):
    def _mark(self, mark: str, style: str) -> None:
        self.write((mark, style))
        self.flush()

    def it_succeeded(self, desc: str) -> None:
        super().it_succeeded(desc)
        self._mark(".", "green")

    def it_failed(self, desc: str, detail: FailureDetail) -> None:
        super().it_failed(desc, detail)
        self._mark("F", "red")

    def it_unknown_error(self, desc: str) -> None:
        super().it_unknown_error(desc)
        self._mark("E", "red")

    def test_run_complete(self) -> None:
        super().test_run_complete()
        self.writeln()
        self.write_run_summary()
        self.flush()

# 🔼⚙️
