# -*- coding: utf-8 -*-

"""
Main entry point for launching the Elements Inspector application.
"""

import argparse
import logging
import sys
import tkinter as tk
from pathlib import Path

from elements_inspector.app import ElementsInspectorApp
from elements_inspector.config import ConfigManager
from elements_inspector.core.importers import XmlImportError, XmlTreeImporter
from elements_inspector.logging_config import setup_logging

DEMO_DOCUMENT = """\
<window id="root" addr="0x1000">
  <view id="header" addr="0x1010" inspector-decoration="litho">
    <text id="title" addr="0x1020" value="Inbox"/>
    <button id="compose" addr="0x1030" label="Compose" inspector-decoration="accessibility"/>
  </view>
  <list id="messages" addr="0x1100" inspector-decoration="componentkit">
    <row id="msg-1" addr="0x1110"><text id="subject-1" value="Hello"/></row>
    <row id="msg-2" addr="0x1120"><text id="subject-2" value="Quarterly report"/></row>
    <row id="msg-3" addr="0x1130"><text id="subject-3" value="Lunch?"/></row>
  </list>
  <footer id="footer" addr="0x1200" inspector-decoration="componentscript"/>
</window>
"""


def _parse_args(argv):
    parser = argparse.ArgumentParser(description="Browse an XML element tree.")
    parser.add_argument("document", nargs="?", help="XML file to inspect (a demo tree when omitted)")
    parser.add_argument("--expand-depth", type=int, default=None, help="levels expanded on load (root = 1)")
    return parser.parse_args(argv)


def main(argv=None):
    """
    Configure logging, load the document and launch the inspector window.
    """
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    setup_logging()

    settings = ConfigManager().get_inspector_config()
    expand_depth = args.expand_depth if args.expand_depth is not None else int(settings.get("expand_depth", 2))
    importer = XmlTreeImporter(expand_depth=expand_depth)
    try:
        if args.document:
            imported = importer.load(Path(args.document))
        else:
            imported = importer.load_string(DEMO_DOCUMENT)
    except XmlImportError as exc:
        logging.error("Cannot open document: %s", exc)
        return 1

    root = tk.Tk()
    window = settings.get("window") or {}
    root.title(str(window.get("title", "Elements Inspector")))
    window_width, window_height = int(window.get("width", 720)), int(window.get("height", 640))
    pos_x = (root.winfo_screenwidth() // 2) - (window_width // 2)
    pos_y = (root.winfo_screenheight() // 2) - (window_height // 2)
    root.geometry(f"{window_width}x{window_height}+{pos_x}+{pos_y}")

    ElementsInspectorApp(root, imported.store, imported.root_id, settings=settings)
    root.mainloop()
    logging.info("===== Application terminated =====")
    return 0


if __name__ == '__main__':
    sys.exit(main())
