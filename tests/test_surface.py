import math

import pytest
from PyQt5 import QtCore

from starfield.surface import SurfaceManager, sanitize_ratio


@pytest.mark.parametrize("value", [0, -2, None, "abc", float("nan"), float("inf"), 0.5])
def test_invalid_ratio_defaults_to_one(value):
    assert sanitize_ratio(value) == 1.0


def test_resize_enforces_minimum_size():
    surface = SurfaceManager()
    surface.resize(120, 0, 0)
    assert (surface.width, surface.height, surface.ratio) == (300, 300, 1.0)
    assert surface.area == 90000


def test_backing_store_is_floored_ratio_scale():
    surface = SurfaceManager()
    surface.resize(1001, 777, 1.25)
    assert surface.backing_size() == (math.floor(1001 * 1.25), math.floor(777 * 1.25))


def test_resize_is_idempotent():
    surface = SurfaceManager()
    assert surface.resize(1920, 1080, 2.0) is True
    assert surface.resize(1920, 1080, 2.0) is False
    assert (surface.width, surface.height, surface.ratio) == (1920, 1080, 2.0)


def test_transform_maps_logical_to_device_pixels():
    surface = SurfaceManager()
    surface.resize(800, 600, 2.0)
    mapped = surface.transform().map(QtCore.QPointF(100.0, 50.0))
    assert (mapped.x(), mapped.y()) == (200.0, 100.0)
    assert surface.center() == (400.0, 300.0)


def test_backing_image_is_reused_when_size_matches(qapp):
    surface = SurfaceManager()
    surface.resize(400, 300, 1.5)
    image = surface.allocate_backing()
    assert (image.width(), image.height()) == (600, 450)
    assert surface.allocate_backing(image) is image
    surface.resize(500, 300, 1.5)
    assert surface.allocate_backing(image) is not image
