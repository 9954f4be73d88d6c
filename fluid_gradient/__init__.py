"""Procedural fluid gradient engine.

Soft radial blobs drift to new random positions, sizes and opacities at
independent intervals, springing between states. The engine is headless: it
produces per-frame blob state for a renderer and never draws anything itself.
"""

from fluid_gradient.animator import AnimatorState, BlobAnimator
from fluid_gradient.blob import Blob
from fluid_gradient.colors import ColorStops, color_stops
from fluid_gradient.config import GradientConfig, load_config, save_config
from fluid_gradient.errors import FluidGradientError, InvalidRange, InvalidState
from fluid_gradient.geometry import (
    BlobGeometry,
    Point2D,
    random_offset,
    random_opacity,
    random_position,
)
from fluid_gradient.random_source import SeededRandom
from fluid_gradient.scene import (
    BlobFrame,
    GradientScene,
    Layer,
    LayerFrame,
    SceneFrame,
    create_scene,
)
from fluid_gradient.spring import SpringInterpolator, SpringTrajectory

__all__ = [
    "AnimatorState",
    "Blob",
    "BlobAnimator",
    "BlobFrame",
    "BlobGeometry",
    "ColorStops",
    "FluidGradientError",
    "GradientConfig",
    "GradientScene",
    "InvalidRange",
    "InvalidState",
    "Layer",
    "LayerFrame",
    "Point2D",
    "SceneFrame",
    "SeededRandom",
    "SpringInterpolator",
    "SpringTrajectory",
    "color_stops",
    "create_scene",
    "load_config",
    "random_offset",
    "random_opacity",
    "random_position",
    "save_config",
]
