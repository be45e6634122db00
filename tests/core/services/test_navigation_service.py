import pytest

from elements_inspector.core.models import (
    CopyRequest,
    ExpandRequest,
    SelectionState,
    SelectRequest,
)
from elements_inspector.core.services.flattener import flatten
from elements_inspector.core.services.navigation_service import (
    NavigationIntent,
    find_parent_index,
    navigate,
)
from elements_inspector.core.tree_store import InMemoryTreeStore


def _nav(store, selected, intent, root="A"):
    return navigate(flatten(store, root), store, SelectionState(selected=selected), intent)


class TestMoveNextPrevious:
    def test_move_next_from_b_selects_d(self, sample_store):
        assert _nav(sample_store, "B", NavigationIntent.MOVE_NEXT) == SelectRequest("D")

    def test_move_previous_from_b_selects_a(self, sample_store):
        assert _nav(sample_store, "B", NavigationIntent.MOVE_PREVIOUS) == SelectRequest("A")

    def test_move_previous_on_first_row_is_noop(self, sample_store):
        assert _nav(sample_store, "A", NavigationIntent.MOVE_PREVIOUS) is None

    def test_move_next_on_last_row_is_noop(self, sample_store):
        assert _nav(sample_store, "C", NavigationIntent.MOVE_NEXT) is None

    def test_single_row_projection(self, node_factory):
        store = InMemoryTreeStore([node_factory("A")])

        assert _nav(store, "A", NavigationIntent.MOVE_NEXT) is None
        assert _nav(store, "A", NavigationIntent.MOVE_PREVIOUS) is None


class TestCollapseOrParent:
    def test_expanded_node_requests_collapse(self, sample_store):
        assert _nav(sample_store, "B", NavigationIntent.COLLAPSE_OR_PARENT) == ExpandRequest("B", deep=False)

    def test_leaf_jumps_to_parent(self, sample_store):
        assert _nav(sample_store, "D", NavigationIntent.COLLAPSE_OR_PARENT) == SelectRequest("B")

    def test_collapsed_node_jumps_to_parent_past_siblings_subtrees(self, sample_store):
        # C follows B's subtree; its parent is A, not B
        assert _nav(sample_store, "C", NavigationIntent.COLLAPSE_OR_PARENT) == SelectRequest("A")

    def test_root_without_parent_is_noop(self, sample_store):
        sample_store.set_expanded("A", False)

        assert _nav(sample_store, "A", NavigationIntent.COLLAPSE_OR_PARENT) is None


class TestExpandOrChild:
    def test_expanded_node_selects_first_child(self, sample_store):
        assert _nav(sample_store, "A", NavigationIntent.EXPAND_OR_CHILD) == SelectRequest("B")

    def test_collapsed_node_requests_expand(self, sample_store):
        sample_store.set_expanded("B", False)

        assert _nav(sample_store, "B", NavigationIntent.EXPAND_OR_CHILD) == ExpandRequest("B", deep=False)

    def test_leaf_is_noop(self, sample_store):
        assert _nav(sample_store, "D", NavigationIntent.EXPAND_OR_CHILD) is None


class TestGuards:
    @pytest.mark.parametrize("intent", list(NavigationIntent))
    def test_no_selection_is_noop(self, sample_store, intent):
        assert _nav(sample_store, None, intent) is None

    @pytest.mark.parametrize("intent", list(NavigationIntent))
    def test_selection_hidden_by_collapse_is_noop(self, sample_store, intent):
        sample_store.set_expanded("B", False)

        assert _nav(sample_store, "D", intent) is None

    def test_selection_removed_from_store_is_noop(self, sample_store):
        projection = flatten(sample_store, "A")
        sample_store.remove_node("D")

        request = navigate(projection, sample_store, SelectionState(selected="D"), NavigationIntent.MOVE_PREVIOUS)

        assert request is None

    def test_focus_does_not_drive_navigation(self, sample_store):
        selection = SelectionState(selected=None, focused="B")

        assert navigate(flatten(sample_store, "A"), sample_store, selection, NavigationIntent.MOVE_NEXT) is None


def test_copy_emits_display_name(sample_store):
    assert _nav(sample_store, "D", NavigationIntent.COPY) == CopyRequest("D")


def test_find_parent_index(sample_store):
    projection = flatten(sample_store, "A")

    assert find_parent_index(projection, 2) == 1
    assert find_parent_index(projection, 3) == 0
    assert find_parent_index(projection, 0) is None
    assert find_parent_index(projection, 10) is None
