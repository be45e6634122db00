from __future__ import annotations

"""Logging set-up for the inspector application.

:func:`setup_logging` is called once by ``run.py`` before any window exists.
The ``logging`` section of :class:`ConfigManager` is applied with
:func:`logging.config.dictConfig`; its ``file`` handler is redirected to
``$ELEMENTS_INSPECTOR_LOG_DIR/app.log`` (``logs/app.log`` by default).

Environment switches:

- ``ELEMENTS_INSPECTOR_DEBUG=1`` turns on DEBUG for ``elements_inspector.core``
- ``ELEMENTS_INSPECTOR_DEBUG_MODULES=a,b`` turns on DEBUG for the named loggers
"""

import copy
import logging
import logging.config
import os
from typing import Any, Dict, List

from elements_inspector.config import ConfigManager

__all__ = ["setup_logging"]

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_TRUTHY = {"1", "true", "yes", "on"}

_FALLBACK_CONFIG: Dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {"plain": {"format": LOG_FORMAT}},
    "handlers": {
        "stderr": {"class": "logging.StreamHandler", "formatter": "plain", "level": "INFO"},
    },
    "root": {"level": "INFO", "handlers": ["stderr"]},
}


def _log_file() -> str:
    log_dir = os.environ.get("ELEMENTS_INSPECTOR_LOG_DIR", "logs")
    os.makedirs(log_dir, exist_ok=True)
    return os.path.join(log_dir, "app.log")


def _configured_dict() -> Dict[str, Any]:
    """Copy of the configured dictConfig mapping, empty when unusable."""
    config = ConfigManager().get_logging_config()
    if not isinstance(config, dict) or not config.get("version"):
        return {}
    config = copy.deepcopy(config)
    file_handler = config.get("handlers", {}).get("file")
    if isinstance(file_handler, dict):
        file_handler["filename"] = _log_file()
    return config


def setup_logging() -> None:
    """Apply the logging configuration, falling back to console-only output."""
    config = _configured_dict()
    applied = False
    if config:
        try:
            logging.config.dictConfig(config)
            applied = True
        except (ValueError, TypeError, AttributeError, ImportError, OSError) as exc:
            # No handler is usable yet
            print(f"Invalid logging configuration: {exc}")

    if applied:
        logging.getLogger(__name__).info("===== Logging configured =====")
    else:
        logging.config.dictConfig(_FALLBACK_CONFIG)
        logging.getLogger(__name__).error("===== Logging configured with console fallback =====")

    for name in _debug_targets():
        _force_debug(name)


def _debug_targets() -> List[str]:
    targets = []
    if os.environ.get("ELEMENTS_INSPECTOR_DEBUG", "").strip().lower() in _TRUTHY:
        targets.append("elements_inspector.core")
    modules = os.environ.get("ELEMENTS_INSPECTOR_DEBUG_MODULES", "")
    targets.extend(name.strip() for name in modules.split(",") if name.strip())
    return targets


def _force_debug(name: str) -> None:
    target = logging.getLogger(name)
    target.setLevel(logging.DEBUG)
    # Root handlers usually filter at INFO; give the logger its own DEBUG output
    if not any(h.level <= logging.DEBUG for h in target.handlers):
        handler = logging.StreamHandler()
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        target.addHandler(handler)
    target.debug("Debug logging forced for '%s'", name)
