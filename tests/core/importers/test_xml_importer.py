import pytest

from elements_inspector.core.importers import XmlImportError, XmlTreeImporter
from elements_inspector.core.services.flattener import flatten
from elements_inspector.core.services.search_service import search

SAMPLE = """\
<window id="root" addr="0x1">
  <!-- header comes first -->
  <view id="header" inspector-decoration="litho">
    <text id="title" value="Inbox"/>
  </view>
  <ns:list xmlns:ns="urn:example" ns:id="messages"/>
</window>
"""


def test_ids_follow_document_order():
    imported = XmlTreeImporter().load_string(SAMPLE)
    store = imported.store

    assert imported.root_id == "n1"
    assert [store.get_node(n).name for n in ("n1", "n2", "n3", "n4")] == ["window", "view", "text", "list"]
    assert store.get_node("n1").children == ("n2", "n4")
    assert len(store) == 4


def test_attributes_and_decoration():
    store = XmlTreeImporter().load_string(SAMPLE).store
    view = store.get_node("n2")

    assert view.decoration == "litho"
    assert [(a.name, a.value) for a in view.attributes] == [("id", "header")]
    assert store.get_node("n4").attribute("id") == "messages"
    assert store.get_node("n1").attribute("addr") == "0x1"


@pytest.mark.parametrize("depth, expected_keys", [
    (0, ("n1",)),
    (1, ("n1", "n2", "n4")),
    (2, ("n1", "n2", "n3", "n4")),
])
def test_expand_depth(depth, expected_keys):
    imported = XmlTreeImporter(expand_depth=depth).load_string(SAMPLE)

    assert flatten(imported.store, imported.root_id).keys == expected_keys


def test_imported_tree_is_searchable():
    imported = XmlTreeImporter(expand_depth=0).load_string(SAMPLE)

    assert search(imported.store, "title", imported.root_id).matches == frozenset({"n3"})


def test_load_file(tmp_path):
    path = tmp_path / "doc.xml"
    path.write_text(SAMPLE, encoding="utf-8")

    imported = XmlTreeImporter().load(path)

    assert imported.store.get_node(imported.root_id).name == "window"


def test_missing_file(tmp_path):
    with pytest.raises(XmlImportError) as excinfo:
        XmlTreeImporter().load(tmp_path / "nope.xml")
    assert excinfo.value.file_path == tmp_path / "nope.xml"


def test_malformed_document(tmp_path):
    path = tmp_path / "broken.xml"
    path.write_text("<window><view></window>", encoding="utf-8")

    with pytest.raises(XmlImportError) as excinfo:
        XmlTreeImporter().load(path)
    assert excinfo.value.cause is not None

    with pytest.raises(XmlImportError):
        XmlTreeImporter().load_string("<unclosed>")
