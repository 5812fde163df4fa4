#
# config/__init__.py
#
"""
Configuration handling sub-package for arbor.

Exports the loading function and the run options model.
"""

from .loader import load_config
from .models import FORMATTER_NAMES, REPORTER_NAMES, RunOptions

__all__ = [
    "FORMATTER_NAMES",
    "REPORTER_NAMES",
    "RunOptions",
    "load_config",
]

# 🔼⚙️
