from __future__ import annotations

"""Inspector settings backed by YAML files.

Two sections are known: ``inspector`` (row geometry, alternate row colour,
decoration asset directory, import depth, window) and ``logging`` (a
:func:`logging.config.dictConfig` mapping). Each section starts from the YAML
file shipped inside this package; a file of the same name in the user
directory overrides individual top-level keys.

User directory:

- Windows: ``%LOCALAPPDATA%\\ElementsInspector\\config``
- elsewhere: ``~/.elements_inspector``
- ``ELEMENTS_INSPECTOR_CONFIG_DIR`` wins when set.
"""

import importlib.resources as pkg_resources
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

__all__ = ["ConfigManager", "user_config_dir"]

SECTION_FILES: Dict[str, str] = {
    "inspector": "inspector.yml",
    "logging": "logging.yml",
}


def user_config_dir() -> Path:
    """Directory searched for user overrides."""
    override = os.environ.get("ELEMENTS_INSPECTOR_CONFIG_DIR")
    if override:
        return Path(override)
    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA")
        root = Path(base) if base else Path.home() / "AppData" / "Local"
        return root / "ElementsInspector" / "config"
    return Path.home() / ".elements_inspector"


def _parse_mapping(text: str, source: str) -> Optional[Dict[str, Any]]:
    """Parse ``text`` as a YAML mapping; log and return None otherwise."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        logger.error("Could not parse config %s: %s", source, exc)
        return None
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.error("Ignoring config %s: top level is not a mapping", source)
        return None
    return data


def _load_section(filename: str, override_dir: Path) -> Tuple[Dict[str, Any], str]:
    """Return the merged section and a short status for the startup log line."""
    section: Dict[str, Any] = {}
    try:
        packaged = pkg_resources.files(__package__).joinpath(filename).read_text(encoding="utf-8")
    except OSError:
        logger.error("Packaged config %s is missing", filename)
        status = "missing"
    else:
        defaults = _parse_mapping(packaged, f"package:{filename}")
        status = "default" if defaults is not None else "invalid"
        section.update(defaults or {})

    user_file = override_dir / filename
    if not user_file.is_file():
        return section, status
    try:
        text = user_file.read_text(encoding="utf-8")
    except OSError as exc:
        logger.error("Could not read user config %s: %s", user_file, exc)
        return section, status
    overrides = _parse_mapping(text, str(user_file))
    if overrides is None:
        return section, status
    section.update(overrides)
    return section, f"{status}+user"


class _Singleton(type):
    _instance: Optional["ConfigManager"] = None

    def __call__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__call__(*args, **kwargs)
        return cls._instance


class ConfigManager(metaclass=_Singleton):
    """Process-wide access to the configuration sections.

    The files are read once, on first instantiation. Tests (or a settings
    editor) call :meth:`reset` to force a reload on the next call.
    """

    def __init__(self) -> None:
        self.source_dir = user_config_dir()
        self._sections: Dict[str, Dict[str, Any]] = {}
        summary = []
        for name, filename in SECTION_FILES.items():
            self._sections[name], status = _load_section(filename, self.source_dir)
            summary.append(f"{name}={status}")
        logger.info("Configuration loaded (%s) from %s", ", ".join(summary), self.source_dir)

    @classmethod
    def reset(cls) -> None:
        cls._instance = None

    def section(self, name: str) -> Dict[str, Any]:
        return self._sections.get(name, {})

    def get_inspector_config(self) -> Dict[str, Any]:
        return self.section("inspector")

    def get_logging_config(self) -> Dict[str, Any]:
        return self.section("logging")

    def get(self, key: str, default: Any = None) -> Any:
        """Value of an ``inspector`` key."""
        return self.get_inspector_config().get(key, default)
