"""Configuration files (YAML) and the :class:`ConfigManager` reading them.

Packaged defaults live next to this module and are merged with user
overrides at first access.
"""

from .manager import ConfigManager

__all__ = [
    "ConfigManager",
]
