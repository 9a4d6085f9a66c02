import math

from PyQt5 import QtGui

from starfield.particles import Particle
from starfield.renderer import CORE_COLOR, FLARE_COLOR, GLOW_COLOR, paint_frame, particle_items
from starfield.surface import SurfaceManager


class FixedRandom:
    def __init__(self, value):
        self.value = value
        self.calls = 0

    def random(self):
        self.calls += 1
        return self.value


def test_small_star_draws_core_only():
    star = Particle(x=10, y=20, depth=0.9, size=0.5, phase=0.0, highlight=False)
    items = particle_items(star, FixedRandom(0.0))
    assert [item.role for item in items] == ["core"]
    assert items[0].color == CORE_COLOR
    assert items[0].r == 0.5


def test_large_star_gets_faint_glow():
    star = Particle(x=10, y=20, depth=0.0, size=2.0, phase=math.pi / 2)
    core, glow = particle_items(star, FixedRandom(0.9))
    assert glow.role == "glow"
    assert glow.color == GLOW_COLOR
    assert glow.r == 6.0
    assert glow.alpha == core.alpha * 0.08
    assert core.alpha == star.alpha()


def test_highlight_flare_is_rerolled_every_frame():
    star = Particle(x=0, y=0, depth=0.1, size=2.0, highlight=True)
    rng = FixedRandom(0.01)
    flare, core, glow = particle_items(star, rng)
    assert (flare.role, core.role, glow.role) == ("flare", "core", "glow")
    assert flare.color == FLARE_COLOR
    assert flare.r == 2.0 * 1.6

    rng.value = 0.5
    assert [item.role for item in particle_items(star, rng)] == ["core", "glow"]
    assert rng.calls == 2


def test_plain_star_never_consumes_randomness():
    star = Particle(size=2.0, highlight=False)
    rng = FixedRandom(0.0)
    particle_items(star, rng)
    assert rng.calls == 0


def test_paint_frame_lays_veil_and_star(qapp):
    surface = SurfaceManager()
    surface.resize(300, 300, 2.0)
    image = surface.allocate_backing()
    star = Particle(x=150, y=150, depth=0.0, size=3.0, phase=math.pi / 2)
    painter = QtGui.QPainter(image)
    try:
        paint_frame(painter, surface, particle_items(star, FixedRandom(0.9)))
    finally:
        painter.end()

    corner = image.pixelColor(5, 5)
    assert 0 < corner.alpha() < 64
    centre = image.pixelColor(300, 300)
    assert centre.alpha() > 200
    assert centre.blue() > 200


def test_opaque_frame_clears_to_black(qapp):
    surface = SurfaceManager()
    surface.resize(300, 300, 1.0)
    image = surface.allocate_backing()
    painter = QtGui.QPainter(image)
    try:
        paint_frame(painter, surface, [], transparent=False)
    finally:
        painter.end()
    assert image.pixelColor(10, 10).alpha() == 255
