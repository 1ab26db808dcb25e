import pytest

from particle_scenes.context import Viewport
from particle_scenes.headless import HeadlessResult, circling_pointer, run_headless
from particle_scenes.scenes import SCENE_CLASSES, build_scenes


@pytest.mark.parametrize("index", range(len(SCENE_CLASSES)))
def test_every_scene_runs_headless_and_stays_finite(index):
    viewport = Viewport(400, 300)
    result = run_headless(
        frames=30,
        width=400,
        height=300,
        scene=index,
        seed=7,
        pointer_path=circling_pointer(viewport, radius=100.0, period=30),
    )
    assert result.scene == SCENE_CLASSES[index].display_name
    assert result.frames == 30
    assert result.draw_calls > 0
    assert result.finite


def test_headless_without_pointer():
    result = run_headless(frames=10, width=320, height=240, scene="Boids (Flocking)", seed=1)
    assert result.entities == 150
    assert result.finite


def test_same_seed_same_result():
    viewport = Viewport(400, 300)
    path = circling_pointer(viewport)
    first = run_headless(frames=20, width=400, height=300, scene="Matrix Rain", seed=42, pointer_path=path)
    second = run_headless(frames=20, width=400, height=300, scene="Matrix Rain", seed=42, pointer_path=path)
    assert first == second
    assert isinstance(first, HeadlessResult)


def test_same_seed_same_populations():
    viewport = Viewport(640, 480)
    a = build_scenes(3)
    b = build_scenes(3)
    for left, right in zip(a, b):
        left.init(viewport)
        right.init(viewport)
        assert left.positions() == right.positions()


def test_circling_pointer_stays_on_its_circle():
    viewport = Viewport(400, 300)
    path = circling_pointer(viewport, radius=50.0, period=4)
    assert path(0) == (250.0, 150.0)
    x, y = path(2)
    assert abs(x - 150.0) < 1e-9
    assert abs(y - 150.0) < 1e-9
