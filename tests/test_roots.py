from particle_scenes.context import InputState, Viewport
from particle_scenes.scenes.roots import Root, RootsScene
from particle_scenes.surface import RecordingSurface


def _scene_with_root(rng, viewport, x, y):
    scene = RootsScene(rng)
    scene.init(viewport)
    scene.roots = [Root(x, y, scene.max_length)]
    return scene


def test_initial_roots_start_on_an_edge(rng, viewport):
    scene = RootsScene(rng)
    scene.init(viewport)
    assert len(scene.roots) == 20
    for root in scene.roots:
        x, y = root.head
        assert x in (0.0, 800.0) or y in (0.0, 600.0)


def test_roots_grow_one_step_toward_the_target(rng, viewport, no_pointer):
    scene = _scene_with_root(rng, viewport, 0.0, 300.0)
    scene.update(no_pointer, viewport)
    root = scene.roots[0]
    assert len(root.history) == 2
    x, y = root.head
    assert 0.0 < x <= 5.0
    assert abs((x - 0.0) ** 2 + (y - 300.0) ** 2 - 25.0) < 1e-9


def test_arrived_root_stops_and_respawns_after_delay(rng, viewport, no_pointer):
    scene = _scene_with_root(rng, viewport, 395.0, 300.0)
    scene.update(no_pointer, viewport)
    root = scene.roots[0]
    assert not root.active
    assert scene.pending == [scene.tick + scene.respawn_delay]
    assert len(scene.roots) == 1

    for _ in range(scene.respawn_delay - 1):
        scene.update(no_pointer, viewport)
    assert len(scene.roots) == 1

    scene.update(no_pointer, viewport)
    assert len(scene.roots) == 2
    assert scene.pending == []
    # the arrived root stays visible and frozen
    assert scene.roots[0] is root
    assert len(root.history) == 1


def test_init_drops_pending_respawns(rng, viewport, no_pointer):
    scene = _scene_with_root(rng, viewport, 395.0, 300.0)
    scene.update(no_pointer, viewport)
    assert scene.pending

    scene.init(viewport)
    assert scene.pending == []
    for _ in range(scene.respawn_delay + 2):
        scene.update(InputState(-1000.0, -1000.0), viewport)
    assert len(scene.roots) == scene.initial_roots


def test_history_is_capped(rng, viewport):
    scene = RootsScene(rng)
    scene.init(viewport)
    far = InputState(-5000.0, -5000.0)
    for _ in range(150):
        scene.update(far, viewport)
    assert all(len(root.history) <= scene.max_length for root in scene.roots)
    assert any(len(root.history) == scene.max_length for root in scene.roots)


def test_inactive_roots_are_retired_past_the_cap(rng, viewport, no_pointer):
    scene = RootsScene(rng)
    scene.init(viewport)
    scene.roots = []
    for i in range(scene.max_roots + 10):
        root = Root(float(i), 0.0, scene.max_length)
        root.active = False
        scene.roots.append(root)

    scene.update(no_pointer, viewport)
    assert len(scene.roots) == scene.max_roots
    assert scene.roots[0].head == (10.0, 0.0)


def test_draw_skips_single_point_roots(rng, viewport, no_pointer):
    scene = RootsScene(rng)
    scene.init(viewport)
    surface = RecordingSurface(*viewport.size)
    scene.draw(surface, no_pointer, viewport)
    assert surface.count() == 0

    scene.update(no_pointer, viewport)
    scene.draw(surface, no_pointer, viewport)
    assert surface.count("polyline") == 20
