#
# tests/unit/test_tree.py
#
"""
Tests for context tree registration.
"""

import pytest

from arbor.exceptions import RegistrationError
from arbor.tree import Context, ContextTree, HookKind, Spec


def noop() -> None:
    pass


class TestRegistration:
    """Registration builds an ordered, strictly owned tree."""

    def test_children_keep_registration_order(self, tree: ContextTree) -> None:
        outer = tree.register_context(tree.root, "outer")
        tree.register_spec(outer, "first", noop)
        inner = tree.register_context(outer, "inner")
        tree.register_spec(outer, "last", noop)

        assert [c.description for c in outer.children] == ["first", "inner", "last"]
        assert isinstance(outer.children[1], Context)
        assert outer.children[1] is inner
        assert inner.parent is outer

    def test_specs_are_listed_in_pre_order(self, tree: ContextTree) -> None:
        a = tree.register_context(tree.root, "a")
        tree.register_spec(a, "a1", noop)
        b = tree.register_context(a, "b")
        tree.register_spec(b, "b1", noop)
        tree.register_spec(a, "a2", noop)
        tree.register_spec(tree.root, "top", noop)

        assert [s.description for s in tree.root.specs()] == ["a1", "b1", "a2", "top"]

    def test_hooks_are_stored_per_kind_in_order(self, tree: ContextTree) -> None:
        ctx = tree.register_context(tree.root, "ctx")
        first, second = (lambda: None), (lambda: None)
        tree.register_hook(ctx, HookKind.BEFORE_EACH, first)
        tree.register_hook(ctx, HookKind.BEFORE_EACH, second)
        tree.register_hook(ctx, "after_all", noop)

        assert ctx.hooks_for(HookKind.BEFORE_EACH) == [first, second]
        assert ctx.hooks_for(HookKind.AFTER_ALL) == [noop]
        assert ctx.hooks_for(HookKind.AFTER_EACH) == []

    def test_skip_flags_are_recorded(self, tree: ContextTree) -> None:
        ctx = tree.register_context(tree.root, "ctx", skip=True)
        spec = tree.register_spec(ctx, "spec", noop, skip=True)
        assert ctx.skip is True
        assert spec.skip is True

    def test_full_description_and_ancestors(self, tree: ContextTree) -> None:
        outer = tree.register_context(tree.root, "a stack")
        inner = tree.register_context(outer, "when empty")
        spec = tree.register_spec(inner, "has no items", noop)

        assert spec.ancestors() == [tree.root, outer, inner]
        assert spec.full_description() == "a stack when empty has no items"
        assert tree.root.is_root
        assert not outer.is_root


class TestRegistrationErrors:
    """Misuse of the registration API is a fatal RegistrationError."""

    def test_registration_after_seal_fails(self, tree: ContextTree) -> None:
        ctx = tree.register_context(tree.root, "ctx")
        tree.seal()

        with pytest.raises(RegistrationError, match="already started"):
            tree.register_spec(ctx, "late", noop)
        with pytest.raises(RegistrationError):
            tree.register_context(ctx, "late")
        with pytest.raises(RegistrationError):
            tree.register_hook(ctx, HookKind.BEFORE_EACH, noop)

    def test_non_callable_body_is_rejected(self, tree: ContextTree) -> None:
        with pytest.raises(RegistrationError, match="not callable"):
            tree.register_spec(tree.root, "broken", "not a function")

    def test_parent_from_another_tree_is_rejected(self, tree: ContextTree) -> None:
        other = ContextTree()
        foreign = other.register_context(other.root, "foreign")
        with pytest.raises(RegistrationError, match="does not belong"):
            tree.register_spec(foreign, "spec", noop)

    def test_spec_cannot_be_a_parent(self, tree: ContextTree) -> None:
        spec = tree.register_spec(tree.root, "leaf", noop)
        assert isinstance(spec, Spec)
        with pytest.raises(RegistrationError):
            tree.register_spec(spec, "child", noop)
