#
# src/arbor/reporters/__init__.py
#
"""
Reporters: listener implementations that render a run.
"""

from .base import ProgressReporter, make_console
from .dots import DotsReporter
from .factory import REPORTER_MAP, get_reporter
from .info import InfoReporter
from .singleline import SingleLineReporter
from .spec import SpecReporter
from .xunit import XunitReporter

__all__ = [
    "REPORTER_MAP",
    "DotsReporter",
    "InfoReporter",
    "ProgressReporter",
    "SingleLineReporter",
    "SpecReporter",
    "XunitReporter",
    "get_reporter",
    "make_console",
]

# 🔼⚙️
