# src/arbor/grammar.py

"""
Declaration grammar over the registration API.

Usage::

    from arbor import describe, it, before_each

    with describe("a stack"):
        items = []

        @before_each
        def clear():
            items.clear()

        @it("starts empty")
        def _():
            assert items == []

Declarations go to the active tree: a process-wide default, or the tree
selected with ``use_tree``.
"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager

from arbor.exceptions import RegistrationError
from arbor.tree import Body, Context, ContextTree, HookKind


class _Registrar:
    """The active tree plus the stack of contexts currently being declared."""

    def __init__(self, tree: ContextTree):
        self.tree = tree
        self.cursor: list[Context] = []

    @property
    def current(self) -> Context:
        return self.cursor[-1] if self.cursor else self.tree.root


_registrar = _Registrar(ContextTree())
_runs_in_progress = 0


@contextmanager
def declarations_closed() -> Iterator[None]:
    """Held by a running Runner; any declaration made meanwhile is refused."""
    global _runs_in_progress
    _runs_in_progress += 1
    try:
        yield
    finally:
        _runs_in_progress -= 1


def _declaring(what: str, description: str) -> _Registrar:
    if _runs_in_progress:
        raise RegistrationError(f"Cannot declare {what} '{description}': a run is in progress.")
    return _registrar


def default_tree() -> ContextTree:
    """The tree that declarations currently go to."""
    return _registrar.tree


def reset() -> ContextTree:
    """Replaces the active tree with a fresh, empty one and returns it."""
    global _registrar
    _registrar = _Registrar(ContextTree())
    return _registrar.tree


@contextmanager
def use_tree(tree: ContextTree) -> Iterator[ContextTree]:
    """Directs declarations made inside the block to ``tree``."""
    global _registrar
    previous = _registrar
    _registrar = _Registrar(tree)
    try:
        yield tree
    finally:
        _registrar = previous


@contextmanager
def describe(description: str, skip: bool = False) -> Iterator[Context]:
    registrar = _declaring("context", description)
    context = registrar.tree.register_context(registrar.current, description, skip=skip)
    registrar.cursor.append(context)
    try:
        yield context
    finally:
        registrar.cursor.pop()


def describe_skip(description: str):
    """A context whose whole subtree is reported as skipped."""
    return describe(description, skip=True)


def it(description: str, body: Body | None = None, skip: bool = False):
    """
    Declares a spec. Use as a decorator, or pass the body directly.
    """
    _declaring("spec", description)

    def _register(fn: Body) -> Body:
        registrar = _declaring("spec", description)
        registrar.tree.register_spec(registrar.current, description, fn, skip=skip)
        return fn

    if body is not None:
        return _register(body)
    return _register


def it_skip(description: str, body: Body | None = None):
    return it(description, body, skip=True)


def _hook(kind: HookKind) -> Callable[[Body], Body]:
    def _register(fn: Body) -> Body:
        registrar = _declaring(f"{kind.value} hook", getattr(fn, "__name__", repr(fn)))
        registrar.tree.register_hook(registrar.current, kind, fn)
        return fn

    _register.__name__ = kind.value
    return _register


before_each = _hook(HookKind.BEFORE_EACH)
after_each = _hook(HookKind.AFTER_EACH)
before_all = _hook(HookKind.BEFORE_ALL)
after_all = _hook(HookKind.AFTER_ALL)

# 🔼⚙️
