import math

from particle_scenes.context import InputState, Viewport
from particle_scenes.scenes.forces import (
    AntigravityScene,
    Body,
    FlowFieldScene,
    GravityScene,
    QuantumFieldScene,
    SineWavesScene,
    Swirler,
    VortexScene,
)
from particle_scenes.surface import RecordingSurface


def _dist(x, y, px, py):
    return math.hypot(x - px, y - py)


# ---------------------------------------------
# Antigravity
# ---------------------------------------------


def test_antigravity_population_scales_with_area(rng):
    scene = AntigravityScene(rng)
    scene.init(Viewport(900, 100))
    assert len(scene.particles) == 10


def test_antigravity_pointer_term_is_exactly_zero_without_pointer(rng, viewport, no_pointer):
    scene = AntigravityScene(rng)
    scene.init(viewport)
    speeds = [(abs(p.vx), abs(p.vy)) for p in scene.particles]

    for _ in range(50):
        for p in scene.particles:
            assert scene.pointer_push(p, no_pointer) == (0.0, 0.0)
        scene.update(no_pointer, viewport)

    # only bounces touch the velocity, and they only flip its sign
    assert [(abs(p.vx), abs(p.vy)) for p in scene.particles] == speeds


def test_antigravity_pushes_away_inside_radius_only(rng, viewport):
    scene = AntigravityScene(rng)
    scene.init(viewport)
    p = scene.particles[0]
    p.x, p.y, p.density = 400.0, 300.0, 10.0

    push = scene.pointer_push(p, InputState(500.0, 300.0))
    # (200 - 100) / 200 * 10 along +x, subtracted from position
    assert math.isclose(push[0], 5.0)
    assert push[1] == 0.0

    assert scene.pointer_push(p, InputState(700.0, 300.0)) == (0.0, 0.0)
    assert scene.pointer_push(p, InputState(400.0, 300.0)) == (0.0, 0.0)


def test_antigravity_bounces_off_bounds(rng):
    viewport = Viewport(100, 100)
    scene = AntigravityScene(rng)
    scene.init(viewport)
    p = scene.particles[0]
    p.x, p.y, p.vx, p.vy = 99.5, 50.0, 1.0, 0.0
    scene.update(InputState(), viewport)
    assert p.vx == -1.0


# ---------------------------------------------
# Gravity
# ---------------------------------------------


def test_gravity_distance_to_a_fixed_pointer_never_grows(rng, viewport):
    scene = GravityScene(rng)
    scene.init(viewport)
    scene.particles = [Body(100.0, 300.0, 0.0, 0.0, 1.0), Body(400.0, 100.0, 0.0, 0.0, 1.0)]
    pointer = InputState(400.0, 300.0)

    last = [_dist(p.x, p.y, 400.0, 300.0) for p in scene.particles]
    for _ in range(60):
        scene.update(pointer, viewport)
        now = [_dist(p.x, p.y, 400.0, 300.0) for p in scene.particles]
        assert all(n <= l + 1e-9 for n, l in zip(now, last))
        last = now


def test_gravity_uses_softened_inverse_square(rng):
    scene = GravityScene(rng)
    p = Body(0.0, 0.0, 0.0, 0.0, 1.0)
    ax, ay = scene.pointer_pull(p, InputState(30.0, 40.0))
    assert math.isclose(ax, 500.0 / (2500.0 + 100.0) * 0.6)
    assert math.isclose(ay, 500.0 / (2500.0 + 100.0) * 0.8)

    # coincident pointer stays finite
    assert all(math.isfinite(v) for v in scene.pointer_pull(p, InputState(0.0, 0.0)))
    assert scene.pointer_pull(p, InputState()) == (0.0, 0.0)


def test_gravity_applies_friction_and_wraps(rng):
    viewport = Viewport(100, 100)
    scene = GravityScene(rng)
    scene.init(viewport)
    scene.particles = [Body(99.0, 50.0, 4.0, 0.0, 1.0)]
    scene.update(InputState(), viewport)
    p = scene.particles[0]
    assert math.isclose(p.vx, 3.8)
    assert p.x == 0.0


# ---------------------------------------------
# Vortex
# ---------------------------------------------


def test_vortex_distance_shrinks_until_event_horizon_respawn(rng, viewport):
    scene = VortexScene(rng)
    scene.init(viewport)
    cx, cy = 400.0, 300.0
    pointer = InputState(cx, cy)
    ring = viewport.max_side * scene.respawn_ring

    last = [_dist(p.x, p.y, cx, cy) for p in scene.particles]
    respawns = 0
    for _ in range(100):
        scene.update(pointer, viewport)
        now = [_dist(p.x, p.y, cx, cy) for p in scene.particles]
        for n, l in zip(now, last):
            if math.isclose(n, ring, rel_tol=1e-9):
                respawns += 1
            else:
                assert n < l
                assert n >= scene.event_horizon
        last = now
    assert respawns > 0


def test_vortex_resets_instead_of_clamping(rng, viewport):
    scene = VortexScene(rng)
    scene.init(viewport)
    scene.particles = [Swirler(406.0, 300.0, 1.0, (0, 0, 0))]
    scene.update(InputState(400.0, 300.0), viewport)
    p = scene.particles[0]
    assert math.isclose(_dist(p.x, p.y, 400.0, 300.0), 640.0)


def test_vortex_orbits_the_centre_without_pointer(rng, viewport, no_pointer):
    scene = VortexScene(rng)
    scene.init(viewport)
    scene.particles = [Swirler(600.0, 300.0, 1.0, (0, 0, 0))]
    scene.update(no_pointer, viewport)
    p = scene.particles[0]
    expected = 200.0 - (1.0 + 200.0 / 201.0)
    assert math.isclose(_dist(p.x, p.y, 400.0, 300.0), expected)


# ---------------------------------------------
# Flow field
# ---------------------------------------------


def test_flow_field_history_is_capped(rng, viewport, no_pointer):
    scene = FlowFieldScene(rng)
    scene.init(viewport)
    for _ in range(60):
        scene.update(no_pointer, viewport)
    for p in scene.particles:
        assert len(p.history) <= p.history.maxlen
        assert scene.min_trail <= p.history.maxlen < scene.min_trail + scene.trail_spread


def test_flow_field_wrap_clears_history(rng, no_pointer):
    viewport = Viewport(200, 200)
    scene = FlowFieldScene(rng)
    scene.init(viewport)
    p = scene.particles[0]
    p.history.extend([(1.0, 1.0), (2.0, 2.0)])
    p.x, p.y, p.vx, p.vy = 199.0, 100.0, 50.0, 0.0
    scene.update(no_pointer, viewport)
    assert p.x == 0.0
    assert len(p.history) == 0


def test_flow_field_pointer_overrides_angle_and_hue(rng, viewport):
    scene = FlowFieldScene(rng)
    scene.init(viewport)
    p = scene.particles[0]
    p.x, p.y = 300.0, 300.0

    angle, boost = scene.pointer_steer(p, InputState(300.0, 400.0))
    assert math.isclose(angle, -math.pi / 2 + math.pi / 2)
    assert boost == scene.pointer_boost
    assert scene.pointer_steer(p, InputState(300.0, 500.0)) is None
    assert scene.pointer_steer(p, InputState()) is None

    scene.update(InputState(300.0, 400.0), viewport)
    assert p.hue == 0.0


# ---------------------------------------------
# Quantum field
# ---------------------------------------------


def test_quantum_jitter_is_bounded(rng, viewport, no_pointer):
    scene = QuantumFieldScene(rng)
    scene.init(viewport)
    before = [(p.x, p.y, p.base_x, p.base_y) for p in scene.particles]
    scene.update(no_pointer, viewport)
    for (x, y, bx, by), p in zip(before, scene.particles):
        assert abs(p.x - x) <= 10.0 and abs(p.y - y) <= 10.0
        assert (p.base_x, p.base_y) == (bx, by)


def test_quantum_anchor_drifts_when_observer_is_far(rng):
    viewport = Viewport(800, 600)
    scene = QuantumFieldScene(rng)
    scene.init(viewport)
    p = scene.particles[0]
    p.x, p.y, p.base_x, p.base_y, p.vx, p.vy = 400.0, 300.0, 400.0, 300.0, 3.0, -2.0
    scene.particles = [p]
    scene.update(InputState(5000.0, 5000.0), viewport)
    assert math.isclose(p.base_x, 400.3)
    assert math.isclose(p.base_y, 299.8)


def test_quantum_collapses_toward_anchor_near_observer(rng):
    viewport = Viewport(800, 600)
    scene = QuantumFieldScene(rng)
    scene.init(viewport)
    p = scene.particles[0]
    p.x, p.y, p.base_x, p.base_y = 150.0, 100.0, 300.0, 100.0
    scene.particles = [p]
    for _ in range(40):
        scene.update(InputState(250.0, 100.0), viewport)
    # the anchor holds still and the particle ends up near it
    assert (p.base_x, p.base_y) == (300.0, 100.0)
    assert _dist(p.x, p.y, 300.0, 100.0) < 100.0


# ---------------------------------------------
# Sine waves
# ---------------------------------------------


def test_sine_waves_lattice_never_moves(rng, viewport):
    scene = SineWavesScene(rng)
    scene.init(viewport)
    assert len(scene.points) == 20 * 15
    before = scene.positions()
    for i in range(20):
        scene.update(InputState(float(i * 30), 200.0), viewport)
    assert scene.positions() == before


def test_sine_waves_field_drives_size_and_lightness(rng, viewport, no_pointer):
    scene = SineWavesScene(rng)
    scene.init(viewport)
    scene.update(no_pointer, viewport)
    for p in scene.points:
        assert 1.0 <= p.size <= 7.0
        assert 20.0 <= p.lightness <= 100.0

    centre = next(p for p in scene.points if (p.base_x, p.base_y) == (400.0, 280.0))
    z = math.sin(20.0 * 0.03 - 0.05)
    assert math.isclose(centre.size, (z + 1.0) * 3.0 + 1.0)

    surface = RecordingSurface(800, 600)
    scene.draw(surface, no_pointer, viewport)
    assert surface.count("fill_circle") == len(scene.points)
