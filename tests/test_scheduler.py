import random

import pytest

from starfield.particles import target_count
from starfield.scheduler import FrameScheduler, StarfieldContext, speed_factor_for_area


@pytest.fixture
def engine(clock):
    scheduler = FrameScheduler(StarfieldContext.seeded(21), clock=clock)
    scheduler.resize(800, 600, 1.0)
    return scheduler


def test_initial_pool_matches_surface(engine):
    assert len(engine.pool) == target_count(800 * 600) == 80


def test_resize_updates_surface_then_pool(engine):
    engine.resize(1920, 1080, 2.0)
    assert engine.surface.area == 1920 * 1080
    assert len(engine.pool) == 138
    engine.resize(100, 100, 0)
    assert (engine.surface.width, engine.surface.height, engine.surface.ratio) == (300, 300, 1.0)
    assert len(engine.pool) == 80


def test_repeated_resize_keeps_particles(engine):
    engine.resize(1920, 1080, 1.0)
    before = list(engine.pool.items)
    engine.resize(1920, 1080, 1.0)
    assert all(a is b for a, b in zip(engine.pool.items, before))
    assert len(engine.pool) == len(before)


def test_five_second_gap_is_clamped(engine, clock):
    engine.tick()
    clock.advance(5000)
    engine.tick()
    assert engine.last_dt == 0.05


def test_regular_frame_uses_real_elapsed_time(engine, clock):
    engine.tick()
    clock.advance(16)
    engine.tick()
    assert engine.last_dt == pytest.approx(0.016)


def test_clock_going_backwards_gives_zero_dt(engine, clock):
    engine.tick()
    clock.advance(-40)
    engine.tick()
    assert engine.last_dt == 0.0


def test_paused_tick_skips_simulation(engine, clock):
    engine.tick()
    snapshot = [(p.x, p.y, p.phase) for p in engine.pool]
    engine.set_visible(False)
    for _ in range(10):
        clock.advance(1000)
        assert engine.tick() is None
    assert [(p.x, p.y, p.phase) for p in engine.pool] == snapshot
    assert engine.last_ms == clock.now


def test_resume_after_hidden_has_no_time_debt(engine, clock):
    engine.tick()
    engine.set_visible(False)
    clock.advance(30_000)
    engine.tick()
    clock.advance(2_000)
    engine.set_visible(True)
    clock.advance(16)
    assert engine.tick() is not None
    assert engine.last_dt == pytest.approx(0.016)


def test_resume_without_intermediate_tick_is_still_bounded(engine, clock):
    engine.tick()
    engine.set_visible(False)
    clock.advance(60_000)
    engine.set_visible(True)
    engine.tick()
    assert engine.last_dt <= 0.05


def test_tick_returns_items_in_pool_order(engine, clock):
    clock.advance(16)
    items = engine.tick()
    cores = [item for item in items if item.role == "core"]
    assert len(cores) == len(engine.pool)
    assert [(c.sx, c.sy) for c in cores] == [(p.x, p.y) for p in engine.pool]


def test_speed_factor_grows_with_area(engine):
    assert engine.speed_factor() == pytest.approx((0.6 + 800 * 600 / 1960000) * 0.65)
    assert speed_factor_for_area(1920 * 1080) > speed_factor_for_area(800 * 600)


def test_pointer_biases_motion(clock):
    def run(pointer):
        scheduler = FrameScheduler(StarfieldContext.seeded(5), clock=clock)
        scheduler.resize(800, 600, 1.0)
        if pointer:
            scheduler.pointer.move(800, 300)
        start = [p.x for p in scheduler.pool]
        clock.advance(16)
        scheduler.tick()
        return [p.x - s for p, s in zip(scheduler.pool, start)]

    still = run(False)
    pushed = run(True)
    assert all(b > a for a, b in zip(still, pushed) if abs(b - a) < 100)


def test_set_params_resizes_pool(engine):
    engine.set_params({"pool": {"areaPerParticle": 3000}})
    assert len(engine.pool) == 160
    engine.set_params({"pool": {"maxCount": 100}})
    assert len(engine.pool) == 100
    assert engine.state["pool"]["areaPerParticle"] == 3000


def test_set_params_tolerates_garbage(engine):
    engine.set_params({"pool": {"areaPerParticle": "n/a", "minCount": None}})
    assert len(engine.pool) == 80
    engine.set_params("not a mapping")  # type: ignore[arg-type]
    engine.set_params({"motion": {"speedScale": "fast"}})
    assert engine.speed_factor() == pytest.approx((0.6 + 800 * 600 / 1960000) * 0.65)


def test_set_params_ignores_non_finite_numbers(engine):
    engine.set_params({"pool": {"maxCount": "inf", "areaPerParticle": float("nan")}})
    assert engine.target_count() == 80
    assert len(engine.pool) == 80
    engine.set_params({"pool": {"minCount": 10 ** 400}})
    assert len(engine.pool) == 80


def test_set_params_keeps_known_sections_as_mappings(engine, clock):
    engine.set_params({"appearance": None, "pool": 5, "motion": "fast"})
    assert engine.state["appearance"]["trailAlpha"] == 0.12
    assert engine.state["pool"]["minCount"] == 80
    clock.advance(16)
    assert engine.tick() is not None


def test_highlight_chance_applies_to_new_particles(engine):
    engine.set_params({"appearance": {"highlightChance": 1.0}})
    engine.resize(1920, 1080, 1.0)
    assert all(p.highlight for p in engine.pool.items[80:])


def test_context_uses_injected_generator():
    rng = random.Random(0)
    context = StarfieldContext(rng=rng)
    assert context.pool.rng is rng
