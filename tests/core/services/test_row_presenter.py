from unittest.mock import Mock

import pytest

from elements_inspector.core.models import SearchResultSet, SelectionState
from elements_inspector.core.services.flattener import flatten
from elements_inspector.core.services.row_presenter import (
    ContextMenuExtension,
    RowPresenter,
    children_count,
    resolve_decoration,
)
from elements_inspector.core.services.search_service import HighlightSpan, search
from elements_inspector.core.tree_store import InMemoryTreeStore


def _rows_by_id(presenter, store, selection=SelectionState(), results=None):
    rows = presenter.present_all(flatten(store, "A"), selection, results)
    return {row.node_id: row for row in rows}


class TestChildrenCount:
    def test_counts_visible_descendants(self, sample_store):
        rows = _rows_by_id(RowPresenter(), sample_store)

        assert rows["A"].children_count == 3
        assert rows["B"].children_count == 1
        assert rows["C"].children_count == 0
        assert rows["D"].children_count == 0

    def test_collapsing_b_shrinks_a(self, sample_store):
        sample_store.set_expanded("B", False)
        rows = _rows_by_id(RowPresenter(), sample_store)

        assert "D" not in rows
        assert rows["A"].children_count == 2
        assert rows["B"].children_count == 0

    def test_out_of_range_index(self, sample_store):
        projection = flatten(sample_store, "A")

        assert children_count(projection, -1) == 0
        assert children_count(projection, len(projection)) == 0


def test_children_count_for_a_counts_b_and_d_only(node_factory):
    # A -> [B], B -> [D]: the connector of A spans B and D
    store = InMemoryTreeStore([
        node_factory("A", children=["B"], expanded=True),
        node_factory("B", children=["D"], expanded=True),
        node_factory("D"),
    ])
    rows = _rows_by_id(RowPresenter(), store)

    assert rows["A"].children_count == 2
    assert rows["B"].children_count == 1

    store.set_expanded("B", False)
    assert _rows_by_id(RowPresenter(), store)["A"].children_count == 1


class TestEvenRows:
    def test_alternating_enabled(self, sample_store):
        rows = RowPresenter().present_all(flatten(sample_store, "A"), SelectionState())

        assert [row.is_even for row in rows] == [True, False, True, False]

    def test_alternating_disabled(self, sample_store):
        rows = RowPresenter(alternate_row_color=False).present_all(flatten(sample_store, "A"), SelectionState())

        assert not any(row.is_even for row in rows)


class TestSearchHighlight:
    def test_match_highlights_name_only(self, sample_store):
        rows = _rows_by_id(RowPresenter(), sample_store, results=search(sample_store, "d", "A"))
        d = rows["D"]

        assert d.is_query_match
        assert d.highlight_text == "d"
        assert d.name_highlight == HighlightSpan("", "D", "")
        assert all(attr.highlight is None for attr in d.attributes)

    def test_non_matching_rows_suppress_highlighting(self, sample_store):
        rows = _rows_by_id(RowPresenter(), sample_store, results=search(sample_store, "d", "A"))

        assert not rows["A"].is_query_match
        assert rows["A"].highlight_text is None
        assert rows["A"].name_highlight is None

    def test_only_id_and_addr_attributes_are_highlighted(self, node_factory):
        store = InMemoryTreeStore([
            node_factory("A", name="Root", attributes=[("id", "xview"), ("class", "view"), ("addr", "view@1")]),
        ])
        results = SearchResultSet(query="view", matches=frozenset({"A"}))
        row = RowPresenter().present(flatten(store, "A"), 0, SelectionState(), results)
        highlights = {attr.name: attr.highlight for attr in row.attributes}

        assert highlights["id"] == HighlightSpan("x", "view", "")
        assert highlights["class"] is None
        assert highlights["addr"] == HighlightSpan("", "view", "@1")

    def test_no_results(self, sample_store):
        row = RowPresenter().present(flatten(sample_store, "A"), 0, SelectionState(), None)

        assert not row.is_query_match
        assert row.highlight_text is None


class TestDecoration:
    @pytest.mark.parametrize("tag, expected", [
        ("litho", "icons/litho-logo.png"),
        ("componentkit", "icons/componentkit-logo.png"),
        ("componentscript", "icons/componentscript-logo.png"),
        ("accessibility", "icons/accessibility.png"),
        ("unknown", None),
        (None, None),
    ])
    def test_fixed_tag_mapping(self, tag, expected):
        assert resolve_decoration(tag) == expected

    def test_tag_resolved_by_default(self, node_factory):
        store = InMemoryTreeStore([node_factory("A", decoration="litho")])
        row = RowPresenter().present(flatten(store, "A"), 0, SelectionState())

        assert row.decoration == "icons/litho-logo.png"

    def test_decorate_row_takes_precedence(self, node_factory):
        store = InMemoryTreeStore([node_factory("A", decoration="litho")])
        presenter = RowPresenter(decorate_row=lambda node: f"custom:{node.name}")

        assert presenter.present(flatten(store, "A"), 0, SelectionState()).decoration == "custom:A"

    def test_custom_resolver(self, node_factory):
        store = InMemoryTreeStore([node_factory("A", decoration="x")])
        presenter = RowPresenter(decoration_resolver=lambda tag: {"x": "x.png"}.get(tag))

        assert presenter.present(flatten(store, "A"), 0, SelectionState()).decoration == "x.png"


class TestContextMenu:
    def test_base_entries(self, sample_store):
        on_copy, on_expand = Mock(), Mock()
        presenter = RowPresenter(on_copy=on_copy, on_expand=on_expand)
        entries = _rows_by_id(presenter, sample_store)["B"].context_menu_entries

        assert entries[0].separator
        assert [e.label for e in entries[1:]] == ["Copy", "Collapse"]

        entries[1].action()
        on_copy.assert_called_once_with("B id=B")
        entries[2].action()
        on_expand.assert_called_once_with("B", False)

    def test_expand_label_for_collapsed_node(self, sample_store):
        rows = _rows_by_id(RowPresenter(), sample_store)

        assert rows["C"].context_menu_entries[2].label == "Expand"

    def test_copy_uses_node_identity_not_id_attribute(self, node_factory):
        on_copy = Mock()
        store = InMemoryTreeStore([node_factory("n3", name="View", attributes={"id": "header"})])
        row = RowPresenter(on_copy=on_copy).present(flatten(store, "n3"), 0, SelectionState())

        row.context_menu_entries[1].action()

        on_copy.assert_called_once_with("View id=n3")

    def test_extensions_are_appended_and_keyed_by_node(self, sample_store):
        clicked = []
        presenter = RowPresenter(context_menu_extensions=[
            ContextMenuExtension(label="Inspect", click=clicked.append),
            ContextMenuExtension(label="Log", click=clicked.append),
        ])
        entries = _rows_by_id(presenter, sample_store)["D"].context_menu_entries

        assert [e.label for e in entries[3:]] == ["Inspect", "Log"]
        entries[3].action()
        entries[4].action()
        assert clicked == ["D", "D"]

    def test_missing_collaborators_are_noops(self, sample_store):
        entries = _rows_by_id(RowPresenter(), sample_store)["A"].context_menu_entries

        entries[1].action()
        entries[2].action()


class TestSelectionFacts:
    def test_selected_and_focused_flags(self, sample_store):
        rows = _rows_by_id(RowPresenter(), sample_store, SelectionState(selected="B", focused="C"))

        assert rows["B"].selected and not rows["B"].focused
        assert rows["C"].focused and not rows["C"].selected
        assert rows["B"].show_connector
        assert not rows["C"].show_connector  # no children
        assert not rows["A"].show_connector

    def test_background_precedence(self, sample_store):
        results = SearchResultSet(query="x", matches=frozenset({"A", "B", "C"}))
        rows = _rows_by_id(RowPresenter(), sample_store, SelectionState(selected="A", focused="B"), results)

        assert rows["A"].background == "selected"
        assert rows["B"].background == "query-match"
        assert rows["C"].background == "query-match"
        assert rows["D"].background == "even"
        assert rows["C"].is_even is False

        plain = _rows_by_id(RowPresenter(), sample_store, SelectionState(focused="B"))
        assert plain["B"].background == "focused"
        assert plain["A"].background == "even"

    def test_level_and_indent(self, sample_store):
        rows = _rows_by_id(RowPresenter(), sample_store)

        assert (rows["D"].level, rows["D"].indent) == (3, 2)
        assert rows["A"].indent == 0
