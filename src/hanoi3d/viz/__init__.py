"""Visualization subpackage for rendering playback frames."""

from .scene_viz import (
    SceneRecorder,
    camera_angles,
    draw_scene,
    render_scene,
    torus_mesh,
)

__all__ = [
    "SceneRecorder",
    "camera_angles",
    "draw_scene",
    "render_scene",
    "torus_mesh",
]
