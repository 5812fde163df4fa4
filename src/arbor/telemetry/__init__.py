#
# src/arbor/telemetry/__init__.py
#
"""
Logging setup for arbor.
"""

from .logger import StructLogger, setup_logging

__all__ = ["StructLogger", "setup_logging"]

# 🔼⚙️
