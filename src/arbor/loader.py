# src/arbor/loader.py

"""
Imports spec files named on the command line into a context tree.

Only the given files are loaded; there is no directory discovery.
"""

import importlib.util
import sys
from collections.abc import Iterable
from pathlib import Path

import structlog

from arbor.exceptions import ArborUsageError, SpecLoadError
from arbor.grammar import use_tree
from arbor.telemetry import StructLogger
from arbor.tree import ContextTree

log: StructLogger = structlog.get_logger("loader")

MODULE_PREFIX = "arbor_specs"


def _module_name(path: Path, index: int) -> str:
    stem = "".join(ch if ch.isalnum() else "_" for ch in path.stem)
    return f"{MODULE_PREFIX}.{stem}_{index}"


def load_spec_file(path: Path, tree: ContextTree, index: int = 0) -> None:
    """Executes one spec file with its declarations directed at ``tree``."""
    path = Path(path)
    file_log = log.bind(path=str(path))
    module_name = _module_name(path, index)
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise SpecLoadError("Not an importable Python file", path=str(path))

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        with use_tree(tree):
            spec.loader.exec_module(module)
    except ArborUsageError:
        sys.modules.pop(module_name, None)
        raise
    except FileNotFoundError as e:
        sys.modules.pop(module_name, None)
        raise SpecLoadError("Spec file not found", path=str(path), details=e) from e
    except Exception as e:
        sys.modules.pop(module_name, None)
        file_log.error("Spec file raised during import", error=str(e))
        raise SpecLoadError(f"Failed to load spec file: {e}", path=str(path), details=e) from e
    file_log.debug("Spec file loaded", module=module_name)


def load_spec_files(paths: Iterable[Path], tree: ContextTree | None = None) -> ContextTree:
    """Loads every file, in order, into ``tree`` (a new tree if omitted)."""
    tree = tree if tree is not None else ContextTree()
    for index, path in enumerate(paths):
        load_spec_file(Path(path), tree, index)
    return tree

# 🔼⚙️
