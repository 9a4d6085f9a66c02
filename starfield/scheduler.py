"""Simulation context and the frame scheduler driving it.

The scheduler is deliberately toolkit-agnostic: the host widget calls
:meth:`FrameScheduler.tick` from its refresh timer and paints whatever
comes back.  Time and randomness are injected so a test can replay an exact
trajectory.
"""

from __future__ import annotations

import copy
import math
import random
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional

from .control.config import DEFAULTS
from .input_tracker import InputTracker
from .particles import MAX_DT, ParticlePool, target_count
from .renderer import RenderItem, particle_items
from .surface import SurfaceManager

__all__ = ["FrameScheduler", "StarfieldContext", "speed_factor_for_area"]

Clock = Callable[[], float]

# upper bound for configured particle counts
COUNT_CEILING = 100000


def _perf_clock_ms() -> float:
    return time.perf_counter() * 1000.0


def _coerce_float(value: object, default: float = 0.0) -> float:
    """Return ``value`` converted to a finite ``float``, else ``default``."""

    if value is None:
        return default
    if isinstance(value, bool):
        return float(value)
    try:
        number = float(value) if isinstance(value, (int, float)) else float(str(value))
    except (TypeError, ValueError, OverflowError):
        return default
    return number if math.isfinite(number) else default


def _default_state() -> Dict[str, dict]:
    return copy.deepcopy(DEFAULTS)


def speed_factor_for_area(area: float, scale: float = 0.65) -> float:
    """Forward speed; a little faster on large screens."""

    return (0.6 + area / (1400.0 * 1400.0)) * scale


@dataclass
class StarfieldContext:
    """Everything a frame reads or mutates, owned by one scheduler."""

    surface: SurfaceManager = field(default_factory=SurfaceManager)
    rng: random.Random = field(default_factory=random.Random)
    pointer: InputTracker = field(default_factory=InputTracker)
    pool: Optional[ParticlePool] = None

    def __post_init__(self) -> None:
        if self.pool is None:
            self.pool = ParticlePool(self.rng)

    @classmethod
    def seeded(cls, seed: Optional[int]) -> "StarfieldContext":
        return cls(rng=random.Random(seed))


class FrameScheduler:
    """Advances and composes one frame per refresh, pausing while hidden."""

    def __init__(
        self,
        context: Optional[StarfieldContext] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.context = context or StarfieldContext()
        self.state: Dict[str, dict] = _default_state()
        self._clock = clock or _perf_clock_ms
        self.running = True
        self.last_ms = self._clock()
        self.last_dt = 0.0
        self.frames = 0
        # the pool stays empty until the host reports its first size
        self._apply_appearance()

    # ------------------------------------------------------------------ helpers
    @property
    def now_ms(self) -> float:
        return self._clock()

    @property
    def surface(self) -> SurfaceManager:
        return self.context.surface

    @property
    def pool(self) -> ParticlePool:
        return self.context.pool  # type: ignore[return-value]

    @property
    def pointer(self) -> InputTracker:
        return self.context.pointer

    def _debug(self, message: str) -> None:
        print(f"[Starfield][DEBUG] {message}", flush=True)

    def setting(self, section: str, key: str) -> float:
        fallback = DEFAULTS[section][key]
        values = self.state.get(section)
        if not isinstance(values, Mapping):
            values = {}
        return _coerce_float(values.get(key, fallback), float(fallback))

    def merge_state(self, payload: Mapping[str, object]) -> None:
        for key, value in payload.items():
            if key in DEFAULTS and not isinstance(value, Mapping):
                # known sections only ever hold a dict
                continue
            if key not in self.state or not isinstance(self.state[key], dict) or not isinstance(value, Mapping):
                self.state[key] = value  # type: ignore[assignment]
                continue
            self.state[key].update(value)

    def set_params(self, payload: Mapping[str, object]) -> None:
        if not isinstance(payload, Mapping):
            return
        self.merge_state(payload)
        if "appearance" in payload:
            self._apply_appearance()
        if "pool" in payload and len(self.pool):
            self._resize_pool()

    def _apply_appearance(self) -> None:
        self.pool.highlight_chance = self.setting("appearance", "highlightChance")

    # ------------------------------------------------------------------ sizing
    def target_count(self) -> int:
        return target_count(
            self.surface.area,
            self.setting("pool", "areaPerParticle"),
            int(min(COUNT_CEILING, self.setting("pool", "minCount"))),
            int(min(COUNT_CEILING, self.setting("pool", "maxCount"))),
        )

    def _resize_pool(self) -> None:
        count = self.target_count()
        added, removed = self.pool.resize(count, self.surface.width, self.surface.height)
        if added or removed:
            self._debug(
                "pool %d particles (+%d/-%d) for %dx%d @%.2f"
                % (len(self.pool), added, removed, self.surface.width, self.surface.height, self.surface.ratio)
            )

    def resize(self, width: object, height: object, ratio: object = 1.0) -> bool:
        """Surface first, then the pool sized from the new area."""

        changed = self.surface.resize(width, height, ratio)
        self._resize_pool()
        return changed

    # ------------------------------------------------------------------ loop
    def set_visible(self, visible: bool) -> None:
        visible = bool(visible)
        if visible == self.running:
            return
        self.running = visible
        self.last_ms = self.now_ms
        self._debug("resumed" if visible else "paused")

    def speed_factor(self) -> float:
        return speed_factor_for_area(self.surface.area, self.setting("motion", "speedScale"))

    def tick(self, now_ms: Optional[float] = None) -> Optional[List[RenderItem]]:
        """Run one frame and return its discs, or ``None`` while paused.

        While paused the reference timestamp still follows ``now_ms`` so the
        first frame after resuming starts from a small ``dt``.
        """

        now = self.now_ms if now_ms is None else float(now_ms)
        if not self.running:
            self.last_ms = now
            return None

        max_dt = min(MAX_DT, max(0.0, self.setting("motion", "maxDt")))
        dt = min(max_dt, max(0.0, (now - self.last_ms) / 1000.0))
        self.last_ms = now
        self.last_dt = dt

        surface = self.surface
        width, height = surface.width, surface.height
        speed = self.speed_factor()
        influence = self.pointer.influence(width, height)
        strength = self.setting("motion", "pointerStrength")
        flare_chance = self.setting("appearance", "flareChance")
        rng = self.context.rng

        items: List[RenderItem] = []
        for particle in self.pool:
            particle.update(dt, speed, influence, width, height, strength)
            items.extend(particle_items(particle, rng, flare_chance))
        self.frames += 1
        return items
