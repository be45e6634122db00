"""Shared fixtures for the elements inspector tests.

The sample tree is the three-level hierarchy used throughout the suite::

    A (expanded)
    ├── B (expanded)
    │   └── D
    └── C
"""

import logging
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from elements_inspector.core.models import Attribute, Node
from elements_inspector.core.tree_store import InMemoryTreeStore

# Configure test logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


def make_node(node_id, name=None, children=(), expanded=False, attributes=None, decoration=None):
    """Build a Node with attributes given as a dict or list of pairs."""
    pairs = attributes.items() if isinstance(attributes, dict) else (attributes or [])
    return Node(
        node_id=node_id,
        name=name if name is not None else node_id,
        attributes=tuple(Attribute(k, v) for k, v in pairs),
        children=tuple(children),
        expanded=expanded,
        decoration=decoration,
    )


@pytest.fixture
def sample_store():
    """A -> [B, C], B -> [D]; A and B expanded."""
    return InMemoryTreeStore([
        make_node("A", children=["B", "C"], expanded=True, attributes={"id": "root", "addr": "0x1"}),
        make_node("B", children=["D"], expanded=True, attributes={"id": "b-view"}),
        make_node("C", attributes={"id": "c-view", "class": "Dock"}),
        make_node("D", attributes={"id": "leaf", "addr": "0x4"}),
    ])


@pytest.fixture
def node_factory():
    return make_node
