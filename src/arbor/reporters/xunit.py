# src/arbor/reporters/xunit.py

"""
Writes a JUnit-style XML document once the run is complete.
"""

from xml.sax.saxutils import escape, quoteattr

from attrs import define

from arbor.protocols import FailureDetail
from arbor.reporters.base import UNKNOWN_ERROR_MESSAGE, ProgressReporter

SUITE_NAME = "arbor"


@define(frozen=True, slots=True)
class _Case:
    classname: str
    name: str
    kind: str = "passed"  # passed | failure | error | skipped
    message: str = ""


class XunitReporter(ProgressReporter):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.cases: list[_Case] = []

    def _case(self, desc: str, kind: str = "passed", message: str = "") -> None:
        self.cases.append(_Case(self.current_context_name(), desc, kind, message))

    def it_succeeded(self, desc: str) -> None:
        super().it_succeeded(desc)
        self._case(desc)

    def it_failed(self, desc: str, detail: FailureDetail) -> None:
        super().it_failed(desc, detail)
        self._case(desc, "failure", self.formatter.format(detail))

    def it_unknown_error(self, desc: str) -> None:
        super().it_unknown_error(desc)
        self._case(desc, "error", UNKNOWN_ERROR_MESSAGE)

    def it_skip(self, desc: str) -> None:
        super().it_skip(desc)
        self._case(desc, "skipped")

    def render(self) -> str:
        failures = sum(1 for c in self.cases if c.kind == "failure")
        errors = sum(1 for c in self.cases if c.kind == "error") + len(self.test_run_errors)
        lines = [
            '<?xml version="1.0" encoding="UTF-8"?>',
            f'<testsuite name="{SUITE_NAME}" tests="{len(self.cases)}" '
            f'errors="{errors}" failures="{failures}" skipped="{self.specs_skipped}">',
        ]
        for case in self.cases:
            case_attrs = f"classname={quoteattr(case.classname)} name={quoteattr(case.name)} time=\"0\""
            if case.kind == "passed":
                lines.append(f"  <testcase {case_attrs}/>")
                continue
            lines.append(f"  <testcase {case_attrs}>")
            if case.kind == "skipped":
                lines.append("    <skipped/>")
            else:
                lines.append(f"    <{case.kind} message={quoteattr(case.message)}/>")
            lines.append("  </testcase>")
        if self.test_run_errors:
            errors_text = escape("\n".join(self.test_run_errors))
            lines.append(f"  <system-err>{errors_text}</system-err>")
        lines.append("</testsuite>")
        return "\n".join(lines)

    def test_run_complete(self) -> None:
        super().test_run_complete()
        self.console.file.write(self.render() + "\n")
        self.flush()

# 🔼⚙️
