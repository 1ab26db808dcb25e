import pytest

from particle_scenes.context import InputState, Viewport
from particle_scenes.manager import Direction, SceneManager
from particle_scenes.scenes import SCENE_CLASSES, build_scenes
from particle_scenes.scenes.base import Scene
from particle_scenes.surface import RecordingSurface


class CountingScene(Scene):
    def __init__(self, name):
        super().__init__()
        self.display_name = name
        self.inits = 0
        self.updates = 0
        self.draws = 0
        self.last_viewport = None

    def init(self, viewport):
        self.inits += 1
        self.last_viewport = (viewport.width, viewport.height)

    def update(self, input_state, viewport):
        self.updates += 1

    def draw(self, surface, input_state, viewport):
        self.draws += 1


def _manager(n=5):
    scenes = [CountingScene(f"scene {i}") for i in range(n)]
    return SceneManager(scenes, Viewport(640, 480)), scenes


def test_full_cycle_of_next_returns_to_start_with_one_init_per_switch():
    manager, scenes = _manager(5)
    start = manager.current_index

    for _ in range(len(scenes)):
        manager.switch(Direction.NEXT)

    assert manager.current_index == start
    assert sum(s.inits for s in scenes) == len(scenes)
    assert all(s.inits == 1 for s in scenes)


def test_previous_wraps_to_the_last_scene():
    manager, scenes = _manager(4)
    manager.switch(Direction.PREVIOUS)
    assert manager.current_index == 3
    assert scenes[3].inits == 1


def test_switch_accepts_direction_strings():
    manager, _ = _manager(3)
    manager.switch("next")
    assert manager.current_index == 1
    manager.switch("prev")
    assert manager.current_index == 0
    manager.switch("previous")
    assert manager.current_index == 2


def test_unknown_direction_is_rejected():
    manager, _ = _manager(3)
    with pytest.raises(ValueError):
        manager.switch("sideways")


def test_empty_scene_list_is_rejected():
    with pytest.raises(ValueError):
        SceneManager([], Viewport(10, 10))


def test_switch_publishes_the_new_display_name():
    manager, _ = _manager(3)
    names = []
    manager.add_listener(names.append)
    manager.start()
    manager.next()
    manager.next()
    manager.next()
    assert names == ["scene 0", "scene 1", "scene 2", "scene 0"]


def test_resize_reinitializes_only_the_current_scene():
    manager, scenes = _manager(3)
    manager.start()
    manager.on_resize(Viewport(320, 200))
    assert scenes[0].inits == 2
    assert scenes[0].last_viewport == (320.0, 200.0)
    assert scenes[1].inits == 0 and scenes[2].inits == 0


def test_select_wraps_any_integer():
    manager, scenes = _manager(4)
    manager.select(-1)
    assert manager.current_index == 3
    manager.select(9)
    assert manager.current_index == 1


def test_tick_updates_then_draws_the_live_scene_only():
    manager, scenes = _manager(2)
    manager.start()
    surface = RecordingSurface(640, 480)
    manager.tick(surface, InputState())
    manager.tick(surface, InputState())
    assert (scenes[0].updates, scenes[0].draws) == (2, 2)
    assert (scenes[1].updates, scenes[1].draws) == (0, 0)


def test_index_of_matches_display_names_case_insensitively():
    manager = SceneManager(build_scenes(seed=3), Viewport(100, 100))
    assert manager.index_of("vortex") == 2
    assert manager.index_of("Game of Life") == 10
    with pytest.raises(ValueError):
        manager.index_of("nope")


def test_real_scene_cycle():
    manager = SceneManager(build_scenes(seed=7), Viewport(300, 200))
    manager.start()
    surface = RecordingSurface(300, 200)
    for _ in range(len(SCENE_CLASSES)):
        manager.tick(surface, InputState(150.0, 100.0))
        manager.next()
    assert manager.current_index == 0
