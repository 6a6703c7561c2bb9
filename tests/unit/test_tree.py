"""Tests for MenuTree construction, resolution and validation."""

import pytest

from menushell.actions import ActionKind
from menushell.errors import (
    DuplicateTokenError,
    FrozenTreeError,
    InvalidTokenError,
    MixedNodeError,
    ReservedTokenError,
    UnknownNodeError,
)
from menushell.tree import ROOT_ID, MenuTree


def noop(state, param):
    return None


async def slow(state, param):
    return "done"


@pytest.fixture
def tree():
    tree = MenuTree("Main")
    tree.add_action(tree.root_id, "Increment", noop, binding="i", alias="inc")
    settings = tree.add_submenu(tree.root_id, "Settings", binding="s", alias="settings")
    tree.add_action(settings, "Reset", noop, binding="r", alias="reset")
    return tree


class TestConstruction:
    """Building a tree with the add_* operations."""

    def test_root_is_node_zero(self, tree):
        assert tree.root_id == ROOT_ID == 0
        assert tree.is_root(ROOT_ID)
        assert tree.node(ROOT_ID).label == "Main"

    def test_ids_are_sequential(self, tree):
        assert len(tree) == 4
        assert [n.id for n in tree.walk()] == [0, 1, 2, 3]

    def test_children_keep_insertion_order(self, tree):
        labels = [c.label for c in tree.children_of(ROOT_ID)]
        assert labels == ["Increment", "Settings"]

    def test_parent_back_reference(self, tree):
        settings = tree.resolve(ROOT_ID, "s")
        reset = tree.resolve(settings, "r")
        assert tree.parent_of(reset) == settings
        assert tree.parent_of(settings) == ROOT_ID
        assert tree.parent_of(ROOT_ID) is None

    def test_action_registered_separately(self, tree):
        inc = tree.resolve(ROOT_ID, "i")
        assert inc in tree.actions
        assert tree.node(inc).has_action
        assert not tree.node(inc).is_submenu
        assert len(tree.actions) == 2

    def test_coroutine_handler_is_deferred(self, tree):
        node_id = tree.add_action(ROOT_ID, "Slow", slow, binding="w")
        assert tree.actions.get(node_id).kind is ActionKind.DEFERRED
        assert tree.children_of(ROOT_ID)[-1].kind is ActionKind.DEFERRED

    def test_explicit_kind_wins(self, tree):
        node_id = tree.add_action(ROOT_ID, "Bg", noop, binding="g", kind=ActionKind.DEFERRED)
        assert tree.actions.get(node_id).is_deferred

    def test_submenu_title_defaults_to_label(self, tree):
        settings = tree.resolve(ROOT_ID, "settings")
        assert tree.node(settings).display_title == "Settings"
        other = tree.add_submenu(ROOT_ID, "Other", binding="o", title="Other Things")
        assert tree.node(other).display_title == "Other Things"

    def test_path_to(self, tree):
        settings = tree.resolve(ROOT_ID, "s")
        reset = tree.resolve(settings, "r")
        assert tree.path_to(reset) == [ROOT_ID, settings, reset]


class TestStructuralErrors:
    """Structural violations fail at construction time."""

    def test_duplicate_binding(self, tree):
        with pytest.raises(DuplicateTokenError) as excinfo:
            tree.add_action(ROOT_ID, "Other", noop, binding="i")
        assert "Duplicate command key 'i' in menu 'Main'" in str(excinfo.value)

    def test_duplicate_alias(self, tree):
        with pytest.raises(DuplicateTokenError):
            tree.add_action(ROOT_ID, "Other", noop, binding="x", alias="inc")

    def test_same_token_allowed_in_different_menus(self, tree):
        settings = tree.resolve(ROOT_ID, "s")
        tree.add_action(settings, "Inc here", noop, binding="i")

    def test_action_node_cannot_get_children(self, tree):
        inc = tree.resolve(ROOT_ID, "i")
        with pytest.raises(MixedNodeError):
            tree.add_action(inc, "Nested", noop, binding="n")

    def test_unknown_parent(self, tree):
        with pytest.raises(UnknownNodeError):
            tree.add_submenu(99, "Nowhere", binding="n")

    def test_binding_must_be_single_character(self, tree):
        with pytest.raises(InvalidTokenError):
            tree.add_action(ROOT_ID, "Bad", noop, binding="xy")

    def test_alias_without_whitespace(self, tree):
        with pytest.raises(InvalidTokenError):
            tree.add_action(ROOT_ID, "Bad", noop, binding="x", alias="two words")

    def test_node_needs_a_token(self, tree):
        with pytest.raises(InvalidTokenError):
            tree.add_action(ROOT_ID, "Bad", noop)

    def test_handler_must_be_callable(self, tree):
        with pytest.raises(TypeError):
            tree.add_action(ROOT_ID, "Bad", "not callable", binding="x")

    def test_frozen_tree_rejects_mutation(self, tree):
        tree.freeze()
        with pytest.raises(FrozenTreeError):
            tree.add_submenu(ROOT_ID, "Late", binding="l")

    def test_reserved_tokens_rejected_by_validate(self, tree):
        tree.add_action(ROOT_ID, "Bye", noop, binding="q")
        with pytest.raises(ReservedTokenError):
            tree.validate(("b", "q", "tab"))

    def test_reserved_alias_rejected(self, tree):
        tree.add_action(ROOT_ID, "Switch", noop, binding="x", alias="tab")
        with pytest.raises(ReservedTokenError):
            tree.validate(("b", "q", "tab"))

    def test_valid_tree_passes(self, tree):
        tree.validate(("b", "q", "tab"))


class TestResolve:
    """Token resolution against the children of one node."""

    def test_binding_and_alias_resolve_to_same_node(self, tree):
        assert tree.resolve(ROOT_ID, "i") == tree.resolve(ROOT_ID, "inc")

    def test_unknown_token(self, tree):
        assert tree.resolve(ROOT_ID, "zzz") is None

    def test_only_direct_children(self, tree):
        assert tree.resolve(ROOT_ID, "reset") is None

    def test_binding_wins_over_alias_by_default(self):
        tree = MenuTree("Main")
        first = tree.add_action(ROOT_ID, "First", noop, binding="x", alias="a")
        second = tree.add_action(ROOT_ID, "Second", noop, binding="a")
        assert tree.resolve(ROOT_ID, "a") == second
        assert tree.resolve(ROOT_ID, "a", precedence="alias") == first
