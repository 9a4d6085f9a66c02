"""Drawing-surface geometry shared by the simulation and the renderer.

The surface keeps two coordinate systems in sync: the *logical* one used by
every particle and drawing command, and the *backing store* expressed in
device pixels.  A single scale transform maps the former onto the latter so
the renderer never has to care about the device-pixel ratio.
"""

from __future__ import annotations

import math
from typing import Optional, Tuple

from PyQt5 import QtCore, QtGui

__all__ = ["MIN_SURFACE_SIZE", "SurfaceManager", "sanitize_ratio"]

MIN_SURFACE_SIZE = 300


def sanitize_ratio(value: object) -> float:
    """Return a usable device-pixel ratio (never below ``1.0``)."""

    try:
        ratio = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 1.0
    if not math.isfinite(ratio):
        return 1.0
    return max(1.0, ratio)


def _sanitize_extent(value: object, minimum: int) -> int:
    try:
        extent = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return minimum
    if not math.isfinite(extent):
        return minimum
    return max(minimum, int(extent))


class SurfaceManager:
    """Logical size, device-pixel ratio and coordinate transform of the canvas."""

    def __init__(self, minimum: int = MIN_SURFACE_SIZE) -> None:
        self.minimum = int(minimum)
        self.width = self.minimum
        self.height = self.minimum
        self.ratio = 1.0
        self._transform = QtGui.QTransform()

    @property
    def area(self) -> int:
        return self.width * self.height

    def resize(self, viewport_width: object, viewport_height: object, ratio: object = 1.0) -> bool:
        """Adopt a new viewport size and ratio.

        Returns ``True`` when the logical size or the ratio changed.  Calling
        it again with the same viewport is a no-op.
        """

        width = _sanitize_extent(viewport_width, self.minimum)
        height = _sanitize_extent(viewport_height, self.minimum)
        dpr = sanitize_ratio(ratio)
        changed = (width, height, dpr) != (self.width, self.height, self.ratio)
        self.width = width
        self.height = height
        self.ratio = dpr
        self._transform = QtGui.QTransform.fromScale(dpr, dpr)
        return changed

    def backing_size(self) -> Tuple[int, int]:
        return int(math.floor(self.width * self.ratio)), int(math.floor(self.height * self.ratio))

    def center(self) -> Tuple[float, float]:
        return self.width * 0.5, self.height * 0.5

    def transform(self) -> QtGui.QTransform:
        return QtGui.QTransform(self._transform)

    def rect(self) -> QtCore.QRectF:
        return QtCore.QRectF(0.0, 0.0, float(self.width), float(self.height))

    def allocate_backing(self, previous: Optional[QtGui.QImage] = None) -> QtGui.QImage:
        """Return a transparent backing image matching the current size.

        ``previous`` is reused when it already has the right pixel size.
        """

        pixel_width, pixel_height = self.backing_size()
        if previous is not None and not previous.isNull():
            if previous.width() == pixel_width and previous.height() == pixel_height:
                return previous
        image = QtGui.QImage(pixel_width, pixel_height, QtGui.QImage.Format_ARGB32_Premultiplied)
        image.fill(QtCore.Qt.transparent)
        return image
