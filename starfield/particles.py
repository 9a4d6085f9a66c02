"""Star particles and the adaptive pool holding them."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import List, Tuple

__all__ = [
    "AREA_PER_PARTICLE",
    "MAX_COUNT",
    "MAX_DT",
    "MIN_COUNT",
    "WRAP_MARGIN",
    "Particle",
    "ParticlePool",
    "target_count",
]

AREA_PER_PARTICLE = 15000
MIN_COUNT = 80
MAX_COUNT = 1000

HIGHLIGHT_CHANCE = 0.055
WRAP_MARGIN = 30.0
MAX_DT = 0.05

PARALLAX_PULL = 0.00005
ZOOM_PULL = 0.0004
POINTER_STRENGTH = 30.0
TWINKLE_RATE = 2.0
TAU = math.pi * 2.0


def clamp(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, value))


def target_count(
    area: float,
    per_particle: float = AREA_PER_PARTICLE,
    minimum: int = MIN_COUNT,
    maximum: int = MAX_COUNT,
) -> int:
    """Number of particles for a surface of ``area`` square units.

    Roughly one star per ``per_particle`` units, bounded to
    ``[minimum, maximum]``.
    """

    per_particle = max(1.0, float(per_particle))
    raw = int(math.floor(max(0.0, float(area)) / per_particle))
    return int(clamp(raw, int(minimum), max(int(minimum), int(maximum))))


@dataclass
class Particle:
    """One star. ``depth`` 0 is nearest (largest, brightest, fastest)."""

    x: float = 0.0
    y: float = 0.0
    depth: float = 0.0
    size: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    phase: float = 0.0
    highlight: bool = False

    @classmethod
    def spawn(
        cls,
        rng: random.Random,
        width: float,
        height: float,
        highlight_chance: float = HIGHLIGHT_CHANCE,
    ) -> "Particle":
        particle = cls()
        particle.reset(rng, width, height, highlight_chance)
        return particle

    def reset(
        self,
        rng: random.Random,
        width: float,
        height: float,
        highlight_chance: float = HIGHLIGHT_CHANCE,
    ) -> None:
        self.x = rng.random() * width
        self.y = rng.random() * height
        self.depth = rng.random()
        near = 1.0 - self.depth
        self.size = (0.8 + rng.random() * 1.8) * near * 1.6
        self.highlight = rng.random() < highlight_chance
        # lateral drift grows for near stars, vertical drift stays small
        self.vx = (rng.random() - 0.5) * (0.2 + near * 0.6)
        self.vy = (rng.random() - 0.5) * 0.2
        self.phase = rng.random() * TAU

    def update(
        self,
        dt: float,
        speed_factor: float,
        influence: Tuple[float, float],
        width: float,
        height: float,
        pointer_strength: float = POINTER_STRENGTH,
    ) -> None:
        """Advance the star by ``dt`` seconds on a ``width`` x ``height`` surface."""

        dt = clamp(dt, 0.0, MAX_DT)
        near = 1.0 - self.depth
        center_x = width * 0.5
        center_y = height * 0.5

        pull_x = (self.x - center_x) * PARALLAX_PULL * near
        pull_y = (self.y - center_y) * PARALLAX_PULL * near
        forward = speed_factor * (1.0 + near * 1.5) * dt

        ax, ay = influence
        self.x += self.vx + pull_x + ax * near * pointer_strength * dt
        self.y += self.vy + pull_y + ay * near * pointer_strength * dt

        # zoom: drift towards the centre proportionally to forward travel
        self.x += (center_x - self.x) * ZOOM_PULL * forward
        self.y += (center_y - self.y) * ZOOM_PULL * forward

        self.phase += dt * TWINKLE_RATE

        if self.x < -WRAP_MARGIN:
            self.x = width + WRAP_MARGIN
        if self.x > width + WRAP_MARGIN:
            self.x = -WRAP_MARGIN
        if self.y < -WRAP_MARGIN:
            self.y = height + WRAP_MARGIN
        if self.y > height + WRAP_MARGIN:
            self.y = -WRAP_MARGIN

    def twinkle(self) -> float:
        return 0.6 + 0.4 * math.sin(self.phase)

    def alpha(self) -> float:
        return clamp(0.2 + (1.0 - self.depth) * 0.75, 0.12, 1.0) * self.twinkle()


class ParticlePool:
    """Ordered collection of particles that grows and shrinks at the tail."""

    def __init__(self, rng: random.Random, highlight_chance: float = HIGHLIGHT_CHANCE) -> None:
        self.rng = rng
        self.highlight_chance = highlight_chance
        self.items: List[Particle] = []

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __getitem__(self, index: int) -> Particle:
        return self.items[index]

    def resize(self, new_count: int, width: float, height: float) -> Tuple[int, int]:
        """Grow or truncate to ``new_count`` particles.

        New particles are spread over ``width`` x ``height``.  Returns the
        ``(added, removed)`` counts; existing particles are left untouched.
        """

        new_count = max(0, int(new_count))
        current = len(self.items)
        if current < new_count:
            add = new_count - current
            for _ in range(add):
                self.items.append(Particle.spawn(self.rng, width, height, self.highlight_chance))
            return add, 0
        if current > new_count:
            del self.items[new_count:]
            return 0, current - new_count
        return 0, 0
