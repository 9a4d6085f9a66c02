"""Last known pointer position and the influence vector derived from it."""

from __future__ import annotations

from typing import NamedTuple, Optional, Tuple

__all__ = ["Influence", "InputTracker", "NO_INFLUENCE"]


class Influence(NamedTuple):
    ax: float
    ay: float


NO_INFLUENCE = Influence(0.0, 0.0)


def _axis(position: float, extent: float) -> float:
    normalized = (position / extent - 0.5) * 2.0
    return max(-1.0, min(1.0, normalized)) * 0.5


class InputTracker:
    """Instantaneous pointer/touch position, ``None`` when no pointer is active."""

    def __init__(self) -> None:
        self.position: Optional[Tuple[float, float]] = None

    @property
    def active(self) -> bool:
        return self.position is not None

    def move(self, x: float, y: float) -> None:
        self.position = (float(x), float(y))

    def leave(self) -> None:
        self.position = None

    def influence(self, width: float, height: float) -> Influence:
        """Pointer offset from the centre, each axis within ``[-0.5, 0.5]``."""

        if self.position is None or width <= 0 or height <= 0:
            return NO_INFLUENCE
        x, y = self.position
        return Influence(_axis(x, width), _axis(y, height))
