# src/arbor/results.py

"""
Process-wide accumulation of a run's outcomes.
"""

from attrs import field, mutable

from arbor.exceptions import ExecutionStateError
from arbor.protocols import FailureDetail, Outcome, TestRunError


@mutable(slots=True)
class RunResult:
    """
    Aggregate counts for one full traversal.

    Errored specs count as failed. The result only grows while the run is in
    progress and is read-only once ``finalize`` has been called.
    """

    specs_run: int = field(default=0)
    specs_skipped: int = field(default=0)
    specs_succeeded: int = field(default=0)
    specs_failed: int = field(default=0)
    failures: list[tuple[str, FailureDetail | None]] = field(factory=list)
    test_run_errors: list[TestRunError] = field(factory=list)
    _finalized: bool = field(default=False, init=False, repr=False)

    @property
    def finalized(self) -> bool:
        return self._finalized

    def _check_open(self) -> None:
        if self._finalized:
            raise ExecutionStateError("RunResult is finalized and can no longer change.")

    def record(self, description: str, outcome: Outcome, detail: FailureDetail | None = None) -> None:
        self._check_open()
        if outcome is Outcome.SKIPPED:
            self.specs_skipped += 1
            return
        self.specs_run += 1
        if outcome is Outcome.SUCCEEDED:
            self.specs_succeeded += 1
        else:
            self.specs_failed += 1
            self.failures.append((description, detail))

    def add_test_run_error(self, error: TestRunError) -> None:
        self._check_open()
        self.test_run_errors.append(error)

    def finalize(self) -> "RunResult":
        self._check_open()
        self._finalized = True
        return self

# 🔼⚙️
