from __future__ import annotations

import random
from typing import List, Optional, Type

from .base import Scene
from .flocking import BoidsScene
from .forces import (
    AntigravityScene,
    FlowFieldScene,
    GravityScene,
    QuantumFieldScene,
    SineWavesScene,
    VortexScene,
)
from .geometry import GalaxyScene, HyperspaceScene, KaleidoscopeScene, MoireScene
from .grids import LifeScene, RippleScene
from .matrix import MatrixScene
from .networks import NeuralScene, VoronoiScene
from .roots import RootsScene

# Display order; arrow keys and swipes walk this list with wrap-around.
SCENE_CLASSES: List[Type[Scene]] = [
    AntigravityScene,
    GravityScene,
    VortexScene,
    RippleScene,
    GalaxyScene,
    MatrixScene,
    FlowFieldScene,
    VoronoiScene,
    SineWavesScene,
    BoidsScene,
    LifeScene,
    KaleidoscopeScene,
    HyperspaceScene,
    MoireScene,
    QuantumFieldScene,
    NeuralScene,
    RootsScene,
]


def build_scenes(seed: Optional[int] = None) -> List[Scene]:
    """Instantiate every scene, each with its own RNG.

    With a ``seed`` every scene's RNG is derived from it, so the same seed
    reproduces the same populations and stochastic terms.
    """
    master = random.Random(seed)
    scenes: List[Scene] = []
    for cls in SCENE_CLASSES:
        rng = random.Random(master.getrandbits(64)) if seed is not None else random.Random()
        scenes.append(cls(rng))
    return scenes


__all__ = [
    "SCENE_CLASSES",
    "Scene",
    "build_scenes",
    "AntigravityScene",
    "BoidsScene",
    "FlowFieldScene",
    "GalaxyScene",
    "GravityScene",
    "HyperspaceScene",
    "KaleidoscopeScene",
    "LifeScene",
    "MatrixScene",
    "MoireScene",
    "NeuralScene",
    "QuantumFieldScene",
    "RippleScene",
    "RootsScene",
    "SineWavesScene",
    "VoronoiScene",
    "VortexScene",
]
