from __future__ import annotations

"""XML document importer.

Builds an :class:`InMemoryTreeStore` from an XML file so any document can be
browsed with the inspector. Each element becomes a node named after its local
tag; comments and processing instructions are skipped.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from lxml import etree as ET

from elements_inspector.core.models import Attribute, Node, NodeId
from elements_inspector.core.tree_store import InMemoryTreeStore

logger = logging.getLogger(__name__)

__all__ = ["XmlImportError", "ImportedTree", "XmlTreeImporter", "DECORATION_ATTRIBUTE"]

DECORATION_ATTRIBUTE = "inspector-decoration"


class XmlImportError(Exception):
    """Exception raised when an XML document cannot be imported."""

    def __init__(self, message: str, file_path: Optional[Path] = None, cause: Optional[Exception] = None):
        self.file_path = file_path
        self.cause = cause
        super().__init__(message)


@dataclass(frozen=True)
class ImportedTree:
    store: InMemoryTreeStore
    root_id: Optional[NodeId]


class XmlTreeImporter:
    """Convert an XML document into a tree store.

    Parameters
    ----------
    expand_depth : int
        Nodes at a level lower than or equal to this value (root = 1) start
        expanded. ``0`` collapses everything.
    """

    def __init__(self, expand_depth: int = 2) -> None:
        self.expand_depth = max(0, int(expand_depth))
        self.logger = logging.getLogger(f"{__name__}.XmlTreeImporter")

    def load(self, file_path: Path) -> ImportedTree:
        file_path = Path(file_path)
        if not file_path.exists():
            raise XmlImportError(f"File not found: {file_path}", file_path=file_path)
        try:
            parser = ET.XMLParser(remove_blank_text=True)
            tree = ET.parse(str(file_path), parser)
        except (ET.XMLSyntaxError, OSError) as exc:
            raise XmlImportError(f"Could not parse {file_path}: {exc}", file_path=file_path, cause=exc) from exc
        imported = self._build(tree.getroot())
        self.logger.info("Imported %d elements from %s", len(imported.store), file_path)
        return imported

    def load_string(self, text: str) -> ImportedTree:
        try:
            root = ET.fromstring(text.encode("utf-8"))
        except ET.XMLSyntaxError as exc:
            raise XmlImportError(f"Could not parse XML: {exc}", cause=exc) from exc
        return self._build(root)

    # ------------------------------------------------------------------
    def _build(self, root: ET._Element) -> ImportedTree:
        # Comments and processing instructions have a non-string tag
        elements = [el for el in root.iter() if isinstance(el.tag, str)]
        ids = {el: f"n{i}" for i, el in enumerate(elements, start=1)}
        levels = {root: 1}

        nodes: List[Node] = []
        for element in elements:
            level = levels[element]
            children = [child for child in element if isinstance(child.tag, str)]
            for child in children:
                levels[child] = level + 1
            child_ids: Tuple[str, ...] = tuple(ids[child] for child in children)
            nodes.append(self._make_node(element, ids[element], child_ids, level))

        return ImportedTree(store=InMemoryTreeStore(nodes), root_id=ids[root])

    def _make_node(self, element: ET._Element, node_id: str, children: Tuple[str, ...], level: int) -> Node:
        attributes = tuple(
            Attribute(name=ET.QName(key).localname, value=str(value))
            for key, value in element.attrib.items()
            if key != DECORATION_ATTRIBUTE
        )
        return Node(
            node_id=node_id,
            name=ET.QName(element).localname,
            attributes=attributes,
            children=children,
            expanded=level <= self.expand_depth,
            decoration=element.get(DECORATION_ATTRIBUTE),
        )
