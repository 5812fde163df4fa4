#
# tests/unit/test_reporters.py
#
"""
Tests for the compact reporters, the XML reporter and the reporter factory.
"""

import io
import xml.etree.ElementTree as ET

import pytest

from arbor.exceptions import ConfigurationError
from arbor.formatters import VisualStudioFailureFormatter
from arbor.protocols import FailureDetail, TestRunError
from arbor.reporters import (
    REPORTER_MAP,
    DotsReporter,
    InfoReporter,
    SingleLineReporter,
    SpecReporter,
    XunitReporter,
    get_reporter,
)


def drive(reporter) -> None:
    """Feeds a small run through a reporter: one pass, one failure, one error, one skip."""
    reporter.context_starting("stack")
    reporter.it_starting("pushes")
    reporter.it_succeeded("pushes")
    reporter.it_starting("pops")
    reporter.it_failed("pops", FailureDetail("was empty", "stack_spec.py", 12))
    reporter.it_starting("peeks")
    reporter.it_unknown_error("peeks")
    reporter.it_skip("resizes")
    reporter.context_ended("stack")
    reporter.test_run_complete()


class TestProgressReporterSummary:
    def test_no_tests(self, plain_console, output: io.StringIO) -> None:
        reporter = DotsReporter(console=plain_console)
        reporter.test_run_complete()
        assert output.getvalue() == "\nCould not find any tests.\n"
        assert reporter.did_we_pass()

    def test_success(self, plain_console, output: io.StringIO) -> None:
        reporter = DotsReporter(console=plain_console)
        reporter.context_starting("ctx")
        reporter.it_starting("a")
        reporter.it_succeeded("a")
        reporter.context_ended("ctx")
        reporter.test_run_complete()
        assert output.getvalue() == (
            ".\n"
            "Success!\n"
            "Test run complete. 1 tests run. 1 succeeded.\n"
        )

    def test_failures_and_counts(self, plain_console, output: io.StringIO) -> None:
        reporter = DotsReporter(console=plain_console)
        drive(reporter)

        text = output.getvalue()
        assert text.startswith(".FE\n")
        assert "There were failures!\n" in text
        assert "stack pops:\nstack_spec.py:12: was empty\n" in text
        assert "stack peeks:\nUnknown exception\n" in text
        assert text.endswith(
            "Test run complete. 3 tests run. 1 succeeded. 1 skipped. 2 failed.\n"
        )
        assert not reporter.did_we_pass()

    def test_run_errors_are_listed(self, plain_console, output: io.StringIO) -> None:
        reporter = DotsReporter(console=plain_console)
        reporter.test_run_error("db", TestRunError("outer db", FailureDetail("boom")))
        reporter.test_run_complete()

        text = output.getvalue()
        assert "There were errors.\nouter db: boom\n" in text
        assert "1 test run errors." in text
        assert not reporter.did_we_pass()

    def test_formatter_is_used_for_failures(self, plain_console) -> None:
        reporter = DotsReporter(formatter=VisualStudioFailureFormatter(), console=plain_console)
        reporter.it_failed("x", FailureDetail("bad", "f.py", 4))
        assert reporter.failures == ["x:\nf.py(4): bad"]


class TestSpecReporter:
    def test_renders_tree_with_outcomes(self, plain_console, output: io.StringIO) -> None:
        reporter = SpecReporter(console=plain_console)
        drive(reporter)

        lines = output.getvalue().splitlines()
        assert lines[:5] == [
            "stack",
            "  pushes ... OK",
            "  pops ... FAILED",
            "  peeks ... ERROR",
            "  resizes ... SKIPPED",
        ]


class TestSingleLineReporter:
    def test_status_line_is_rewritten(self, plain_console, output: io.StringIO) -> None:
        reporter = SingleLineReporter(console=plain_console)
        drive(reporter)

        text = output.getvalue()
        assert "\rExecuting 1 tests." in text
        assert "\rExecuting 2 tests. 1 failed." in text
        assert "\rExecuting 3 tests. 2 failed. 1 skipped." in text
        assert "Test run complete. 3 tests run." in text


class TestXunitReporter:
    def test_document_structure(self, plain_console, output: io.StringIO) -> None:
        reporter = XunitReporter(console=plain_console)
        reporter.test_run_error("db", TestRunError("db", FailureDetail("no connection")))
        drive(reporter)

        suite = ET.fromstring(output.getvalue())
        assert suite.tag == "testsuite"
        assert suite.get("name") == "arbor"
        assert suite.get("tests") == "4"
        assert suite.get("failures") == "1"
        assert suite.get("errors") == "2"
        assert suite.get("skipped") == "1"

        cases = {case.get("name"): case for case in suite.findall("testcase")}
        assert set(cases) == {"pushes", "pops", "peeks", "resizes"}
        assert all(case.get("classname") == "stack" for case in cases.values())
        assert list(cases["pushes"]) == []
        assert cases["pops"].find("failure").get("message") == "stack_spec.py:12: was empty"
        assert cases["peeks"].find("error").get("message") == "Unknown exception"
        assert cases["resizes"].find("skipped") is not None
        assert suite.find("system-err").text == "db: no connection"

    def test_attributes_are_escaped(self, plain_console, output: io.StringIO) -> None:
        reporter = XunitReporter(console=plain_console)
        reporter.context_starting('quotes "and" <tags>')
        reporter.it_starting("a & b")
        reporter.it_failed("a & b", FailureDetail("x < y"))
        reporter.context_ended('quotes "and" <tags>')
        reporter.test_run_complete()

        case = ET.fromstring(output.getvalue()).find("testcase")
        assert case.get("classname") == 'quotes "and" <tags>'
        assert case.get("name") == "a & b"
        assert case.find("failure").get("message") == "x < y"


class TestReporterFactory:
    @pytest.mark.parametrize("name", sorted(REPORTER_MAP))
    def test_known_names(self, name: str) -> None:
        reporter = get_reporter(name, stream=io.StringIO(), color=False)
        assert isinstance(reporter, REPORTER_MAP[name])

    def test_name_is_case_insensitive(self) -> None:
        assert isinstance(get_reporter("INFO", stream=io.StringIO()), InfoReporter)

    def test_stream_and_color_reach_the_console(self) -> None:
        stream = io.StringIO()
        reporter = get_reporter("dots", stream=stream, color=False)
        reporter.it_succeeded("a")
        assert stream.getvalue() == "."
        assert "\x1b[" not in stream.getvalue()

    def test_unknown_name(self) -> None:
        with pytest.raises(ConfigurationError, match="Unsupported reporter: 'fancy'"):
            get_reporter("fancy")
