from particle_scenes.gestures import SwipeTracker
from particle_scenes.manager import Direction


def test_swipe_left_means_next():
    swipe = SwipeTracker(50)
    swipe.begin(300)
    assert swipe.end(200) is Direction.NEXT


def test_swipe_right_means_previous():
    swipe = SwipeTracker(50)
    swipe.begin(100)
    assert swipe.end(151) is Direction.PREVIOUS


def test_short_swipes_are_ignored():
    swipe = SwipeTracker(50)
    swipe.begin(100)
    assert swipe.end(150) is None
    swipe.begin(100)
    assert swipe.end(50) is None


def test_end_without_begin_is_ignored():
    swipe = SwipeTracker(50)
    assert swipe.end(0) is None
    swipe.begin(400)
    swipe.end(0)
    assert swipe.end(0) is None
