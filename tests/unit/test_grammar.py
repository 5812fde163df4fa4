#
# tests/unit/test_grammar.py
#
"""
Tests for the describe/it declaration grammar.
"""

import pytest

from arbor import grammar
from arbor.exceptions import RegistrationError
from arbor.grammar import (
    after_all,
    after_each,
    before_all,
    before_each,
    describe,
    describe_skip,
    it,
    it_skip,
    use_tree,
)
from arbor.runner import Runner
from arbor.tree import Context, ContextTree, HookKind, Spec


class TestGrammar:
    def test_describe_nests_and_it_registers_under_current_context(self, tree: ContextTree) -> None:
        with use_tree(tree):
            with describe("outer") as outer:
                @it("first")
                def first():
                    pass

                with describe("inner"):
                    it("second", lambda: None)

                it("third", lambda: None)

        assert [c.description for c in tree.root.children] == ["outer"]
        assert [c.description for c in outer.children] == ["first", "inner", "third"]
        assert isinstance(outer.children[1], Context)
        assert isinstance(outer.children[1].children[0], Spec)
        assert callable(first)

    def test_skip_variants(self, tree: ContextTree) -> None:
        with use_tree(tree):
            with describe_skip("skipped") as skipped:
                it("inside", lambda: None)
            it_skip("skipped spec", lambda: None)

        assert skipped.skip is True
        assert tree.root.children[1].skip is True

    def test_hook_decorators(self, tree: ContextTree) -> None:
        with use_tree(tree):
            with describe("ctx") as ctx:
                @before_each
                def setup():
                    pass

                @after_each
                def teardown():
                    pass

                @before_all
                def setup_all():
                    pass

                @after_all
                def teardown_all():
                    pass

        assert ctx.hooks_for(HookKind.BEFORE_EACH) == [setup]
        assert ctx.hooks_for(HookKind.AFTER_EACH) == [teardown]
        assert ctx.hooks_for(HookKind.BEFORE_ALL) == [setup_all]
        assert ctx.hooks_for(HookKind.AFTER_ALL) == [teardown_all]

    def test_use_tree_restores_previous_tree(self, tree: ContextTree) -> None:
        previous = grammar.default_tree()
        with use_tree(tree):
            assert grammar.default_tree() is tree
        assert grammar.default_tree() is previous

    def test_reset_replaces_default_tree(self) -> None:
        first = grammar.reset()
        second = grammar.reset()
        assert first is not second
        assert grammar.default_tree() is second

    def test_cursor_is_restored_when_describe_body_raises(self, tree: ContextTree) -> None:
        with use_tree(tree):
            with pytest.raises(ValueError):
                with describe("broken"):
                    raise ValueError("declaration bug")
            it("top level", lambda: None)

        assert [c.description for c in tree.root.children] == ["broken", "top level"]

    def test_declared_specs_run(self, tree: ContextTree, recorder) -> None:
        log: list[str] = []
        with use_tree(tree):
            with describe("a stack"):
                items: list[int] = []

                @before_each
                def clear():
                    items.clear()
                    log.append("clear")

                @it("starts empty")
                def _():
                    assert items == []
                    log.append("empty")

                @it("grows on push")
                def _():
                    items.append(1)
                    assert len(items) == 1
                    log.append("push")

        result = Runner(tree, [recorder]).run()

        assert log == ["clear", "empty", "clear", "push"]
        assert result.specs_succeeded == 2


class TestDeclarationsDuringRun:
    """Declaring from inside a running spec is refused, whichever tree is active."""

    @pytest.mark.parametrize(
        "declare",
        [
            lambda: it("late spec", lambda: None),
            lambda: it("late decorated")(lambda: None),
            lambda: describe("late context").__enter__(),
            lambda: before_each(lambda: None),
        ],
        ids=["it", "it-decorator", "describe", "hook"],
    )
    def test_declaration_from_spec_body_aborts_run(self, tree: ContextTree, declare) -> None:
        with use_tree(tree):
            it("declares more", declare)

        default_children = len(grammar.default_tree().root.children)
        with pytest.raises(RegistrationError, match="a run is in progress"):
            Runner(tree).run()

        assert len(grammar.default_tree().root.children) == default_children

    def test_declarations_open_again_after_run(self, tree: ContextTree) -> None:
        Runner(tree).run()
        other = ContextTree()
        with use_tree(other):
            it("after the run", lambda: None)
        assert [s.description for s in other.root.specs()] == ["after the run"]
