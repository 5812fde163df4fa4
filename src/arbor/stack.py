# src/arbor/stack.py

"""
The execution stack: one frame per currently open context.

Frames count the specs finished beneath them. When a frame is popped its
counters are merged into its parent, so every frame ends up describing its
whole subtree no matter how deep the nesting goes.
"""

import structlog
from attrs import field, mutable

from arbor.exceptions import ExecutionStackError
from arbor.protocols import Outcome
from arbor.telemetry import StructLogger

log: StructLogger = structlog.get_logger("stack")


@mutable(slots=True)
class Frame:
    """Counters for one open context."""

    description: str
    total: int = field(default=0)
    skipped: int = field(default=0)
    failed: int = field(default=0)

    def merge(self, other: "Frame") -> None:
        self.total += other.total
        self.skipped += other.skipped
        self.failed += other.failed


class ExecutionStack:
    """Strictly last-in-first-out stack of frames."""

    def __init__(self) -> None:
        self._frames: list[Frame] = []

    @property
    def depth(self) -> int:
        return len(self._frames)

    @property
    def top(self) -> Frame:
        if not self._frames:
            raise ExecutionStackError("The execution stack is empty.")
        return self._frames[-1]

    def push(self, description: str) -> Frame:
        frame = Frame(description=description)
        self._frames.append(frame)
        return frame

    def record(self, outcome: Outcome) -> None:
        """Counts one finished spec against the innermost open context."""
        frame = self.top
        frame.total += 1
        if outcome is Outcome.SKIPPED:
            frame.skipped += 1
        elif outcome in (Outcome.FAILED, Outcome.ERRORED):
            frame.failed += 1

    def pop(self) -> Frame:
        """Removes the innermost frame and folds its counters into its parent."""
        if not self._frames:
            raise ExecutionStackError("Cannot pop from an empty execution stack.")
        frame = self._frames.pop()
        if self._frames:
            self._frames[-1].merge(frame)
        log.debug(
            "Frame popped",
            context=frame.description,
            total=frame.total,
            skipped=frame.skipped,
            failed=frame.failed,
            depth=len(self._frames),
        )
        return frame

# 🔼⚙️
