"""Per-particle draw routine and frame composition."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, List

from PyQt5 import QtCore, QtGui

from .particles import Particle
from .surface import SurfaceManager

__all__ = [
    "CORE_COLOR",
    "FLARE_COLOR",
    "GLOW_COLOR",
    "TRAIL_COLOR",
    "RenderItem",
    "paint_frame",
    "particle_items",
]

FLARE_COLOR = QtGui.QColor(227, 179, 65)
CORE_COLOR = QtGui.QColor(234, 242, 255)
GLOW_COLOR = QtGui.QColor(37, 117, 252)
TRAIL_COLOR = QtGui.QColor(4, 6, 12)

FLARE_CHANCE = 0.04
FLARE_SCALE = 1.6
GLOW_SCALE = 3.0
GLOW_ALPHA = 0.08
GLOW_MIN_SIZE = 1.1


@dataclass
class RenderItem:
    """A translucent disc in logical surface coordinates."""

    sx: float
    sy: float
    r: float
    color: QtGui.QColor
    alpha: float
    role: str = "core"


def clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def particle_items(
    particle: Particle,
    rng: random.Random,
    flare_chance: float = FLARE_CHANCE,
) -> List[RenderItem]:
    """Discs for one star, in paint order: flare, core, glow.

    The flare roll happens on every call so highlighted stars flicker.
    """

    alpha = particle.alpha()
    r = particle.size
    items: List[RenderItem] = []
    if particle.highlight and rng.random() < flare_chance:
        items.append(RenderItem(particle.x, particle.y, r * FLARE_SCALE, FLARE_COLOR, alpha, "flare"))
    items.append(RenderItem(particle.x, particle.y, r, CORE_COLOR, alpha, "core"))
    if r > GLOW_MIN_SIZE:
        items.append(RenderItem(particle.x, particle.y, r * GLOW_SCALE, GLOW_COLOR, alpha * GLOW_ALPHA, "glow"))
    return items


def paint_frame(
    painter: QtGui.QPainter,
    surface: SurfaceManager,
    items: Iterable[RenderItem],
    *,
    transparent: bool = True,
    trail_alpha: float = 0.12,
) -> None:
    """Clear the surface, lay the dark veil, then paint ``items`` in order."""

    painter.setTransform(surface.transform())
    rect = surface.rect()
    painter.setRenderHint(QtGui.QPainter.Antialiasing, True)
    painter.setCompositionMode(QtGui.QPainter.CompositionMode_Source)
    if transparent:
        painter.fillRect(rect, QtCore.Qt.transparent)
    else:
        painter.fillRect(rect, QtGui.QColor("black"))
    painter.setCompositionMode(QtGui.QPainter.CompositionMode_SourceOver)

    veil = QtGui.QColor(TRAIL_COLOR)
    veil.setAlphaF(clamp01(trail_alpha))
    painter.fillRect(rect, veil)

    painter.setPen(QtCore.Qt.NoPen)
    for item in items:
        color = QtGui.QColor(item.color)
        color.setAlphaF(clamp01(item.alpha))
        painter.setBrush(color)
        painter.drawEllipse(QtCore.QRectF(item.sx - item.r, item.sy - item.r, item.r * 2, item.r * 2))
