from __future__ import annotations

"""Decoration asset loading for the Tk front-end.

The core resolves decoration tags to asset references such as
``icons/litho-logo.png``; this cache turns them into Tk images relative to
the configured asset directory. Missing or unreadable files resolve to
``None`` and are logged once.
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from PIL import Image, ImageTk

logger = logging.getLogger(__name__)

__all__ = ["DecorationImageCache"]


class DecorationImageCache:
    """Load and keep decoration images alive for the lifetime of a widget."""

    def __init__(self, asset_dir: Union[str, Path] = "assets", size: Tuple[int, int] = (12, 12)) -> None:
        self.asset_dir = Path(asset_dir)
        self.size = size
        self._images: Dict[str, Optional[ImageTk.PhotoImage]] = {}

    def path_for(self, reference: str) -> Path:
        path = Path(reference)
        if path.is_absolute():
            return path
        return self.asset_dir / path

    def get(self, reference: Optional[object]) -> Optional[ImageTk.PhotoImage]:
        """Return the Tk image for ``reference``; non-string references give None."""
        if not isinstance(reference, str) or not reference:
            return None
        if reference in self._images:
            return self._images[reference]

        photo: Optional[ImageTk.PhotoImage] = None
        path = self.path_for(reference)
        try:
            with Image.open(path) as img:
                img = img.convert("RGBA")
                img.thumbnail(self.size, Image.Resampling.LANCZOS)
                photo = ImageTk.PhotoImage(img)
        except (OSError, ValueError) as exc:
            logger.warning("Decoration image %s unavailable: %s", path, exc)
        self._images[reference] = photo
        return photo

    def clear(self) -> None:
        self._images.clear()
