import os
import random

import pytest

# Never open a real window
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from particle_scenes.context import InputState, Viewport  # noqa: E402


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def viewport():
    return Viewport(800, 600)


@pytest.fixture
def no_pointer():
    return InputState()


