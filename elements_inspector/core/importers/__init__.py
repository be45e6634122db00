"""Importers that populate a tree store from external documents."""

from .xml_importer import ImportedTree, XmlImportError, XmlTreeImporter

__all__ = [
    "ImportedTree",
    "XmlImportError",
    "XmlTreeImporter",
]
