# src/arbor/tree.py

"""
The context tree built during the registration phase.

Contexts own their children (nested contexts and specs) and four ordered hook
lists. Child order is registration order, which is also execution order.
Once a run starts the tree is sealed and any further registration is a fatal
usage error.
"""

from collections.abc import Callable, Iterator
from enum import Enum
from typing import TypeAlias

import structlog
from attrs import define, field, mutable

from arbor.exceptions import RegistrationError
from arbor.telemetry import StructLogger

log: StructLogger = structlog.get_logger("tree")

Body: TypeAlias = Callable[[], object]


class HookKind(Enum):
    """Where a hook runs relative to the specs of its context."""

    BEFORE_EACH = "before_each"
    AFTER_EACH = "after_each"
    BEFORE_ALL = "before_all"
    AFTER_ALL = "after_all"


class _NodeMixin:
    """Ancestry helpers shared by contexts and specs."""

    __slots__ = ()

    def ancestors(self) -> list["Context"]:
        """Returns the enclosing contexts, root-most first."""
        chain: list[Context] = []
        parent = self.parent
        while parent is not None:
            chain.append(parent)
            parent = parent.parent
        chain.reverse()
        return chain

    def full_description(self) -> str:
        """Descriptions from the outermost named context down to this node."""
        names = [ctx.description for ctx in self.ancestors() if not ctx.is_root]
        names.append(self.description)
        return " ".join(names)


@define(frozen=True, slots=True, eq=False)
class Spec(_NodeMixin):
    """A single executable test case."""

    description: str
    body: Body = field(repr=False)
    skip: bool = field(default=False)
    parent: "Context | None" = field(default=None, repr=False)


@mutable(slots=True, eq=False)
class Context(_NodeMixin):
    """A named grouping of specs, nested contexts and hooks."""

    description: str
    skip: bool = field(default=False)
    parent: "Context | None" = field(default=None, repr=False)
    children: list["Context | Spec"] = field(factory=list, repr=False)
    hooks: dict[HookKind, list[Body]] = field(
        factory=lambda: {kind: [] for kind in HookKind}, repr=False
    )

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def hooks_for(self, kind: HookKind) -> list[Body]:
        return self.hooks[kind]

    def specs(self) -> Iterator[Spec]:
        """Yields every descendant spec in pre-order."""
        for child in self.children:
            if isinstance(child, Spec):
                yield child
            else:
                yield from child.specs()


class ContextTree:
    """Owns the root context and enforces registration-before-execution."""

    def __init__(self) -> None:
        self.root = Context(description="")
        self._sealed = False

    @property
    def sealed(self) -> bool:
        return self._sealed

    def seal(self) -> None:
        """Closes the tree for registration. Called once execution begins."""
        if not self._sealed:
            log.debug("Context tree sealed", spec_count=sum(1 for _ in self.root.specs()))
        self._sealed = True

    def _check_open(self, parent: Context, what: str) -> None:
        if self._sealed:
            raise RegistrationError(
                f"Cannot register {what} under '{parent.description or '<root>'}': "
                "the run has already started."
            )
        if not isinstance(parent, Context):
            raise RegistrationError(f"Parent of a {what} must be a Context, got {type(parent).__name__}")
        root = parent
        while root.parent is not None:
            root = root.parent
        if root is not self.root:
            raise RegistrationError(f"Context '{parent.description}' does not belong to this tree.")

    def register_context(self, parent: Context, description: str, skip: bool = False) -> Context:
        self._check_open(parent, "context")
        context = Context(description=description, skip=skip, parent=parent)
        parent.children.append(context)
        log.debug("Registered context", description=description, skip=skip)
        return context

    def register_spec(
        self, parent: Context, description: str, body: Body, skip: bool = False
    ) -> Spec:
        self._check_open(parent, "spec")
        if not callable(body):
            raise RegistrationError(f"Body of spec '{description}' is not callable.")
        spec = Spec(description=description, body=body, skip=skip, parent=parent)
        parent.children.append(spec)
        log.debug("Registered spec", description=description, skip=skip)
        return spec

    def register_hook(self, parent: Context, kind: HookKind, hook: Body) -> None:
        kind = HookKind(kind)
        self._check_open(parent, f"{kind.value} hook")
        if not callable(hook):
            raise RegistrationError(f"{kind.value} hook is not callable.")
        parent.hooks[kind].append(hook)

# 🔼⚙️
