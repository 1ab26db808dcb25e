"""Pointer-reactive particle and field scenes rendered with pygame."""

from .context import InputState, Viewport
from .manager import Direction, SceneManager
from .scenes import SCENE_CLASSES, Scene, build_scenes
from .surface import PygameSurface, RecordingSurface, Surface

__version__ = "0.1.0"

__all__ = [
    "Direction",
    "InputState",
    "PygameSurface",
    "RecordingSurface",
    "SCENE_CLASSES",
    "Scene",
    "SceneManager",
    "Surface",
    "Viewport",
    "build_scenes",
]
