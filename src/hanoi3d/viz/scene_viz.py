"""Scene rendering for the Hanoi playback.

Draws the base, the rods and every disk as a torus with matplotlib's 3D
axes, one PNG per call. Scene coordinates are y-up (rods stand along +y,
camera on +z); they are mapped to matplotlib's z-up axes as (x, -z, y).

Usage:
    from hanoi3d.viz.scene_viz import render_scene

    path = render_scene(
        disks=app.scheduler.towers.disks(),
        layout=app.scheduler.layout,
        output_path=Path("frames/frame_0000.png"),
    )
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Iterable, List, Optional

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.pyplot as plt
import numpy as np

from ..layout import BASE_COLOR, ROD_COLOR, Layout


def hex_color(value: int) -> str:
    """0x59b5d9 -> '#59b5d9'."""
    return f"#{value:06x}"


def _to_plot(x, y, z):
    return x, -np.asarray(z), y


def torus_mesh(center, radius: float, tube: float, segments: int = 32, rings: int = 12):
    """Surface grids for a torus lying flat (hole along the scene's y axis)."""
    u = np.linspace(0.0, 2.0 * math.pi, segments)
    v = np.linspace(0.0, 2.0 * math.pi, rings)
    u, v = np.meshgrid(u, v)
    cx, cy, cz = center
    x = cx + (radius + tube * np.cos(v)) * np.cos(u)
    z = cz + (radius + tube * np.cos(v)) * np.sin(u)
    y = cy + tube * np.sin(v)
    return _to_plot(x, y, z)


def camera_angles(layout: Layout):
    """(elev, azim) in degrees looking from the layout's camera toward the origin."""
    cx, cy, cz = layout.camera_position
    elev = math.degrees(math.atan2(cy, math.hypot(cx, cz)))
    # camera on +z in scene space sits on -y in plot space
    azim = math.degrees(math.atan2(-cz, cx))
    return elev, azim


def draw_scene(ax, disks: Iterable, layout: Layout) -> None:
    """Draw base, rods and disks onto an existing 3D axes."""
    w, h, d = layout.base_size
    bx, by, bz = layout.base_center
    ax.bar3d(bx - w / 2, -(bz + d / 2), by - h / 2, w, d, h, color=hex_color(BASE_COLOR), alpha=0.35, shade=True)

    for col in range(3):
        rx, _, rz = layout.rod_position(col)
        px, py, _ = _to_plot(rx, 0.0, rz)
        ax.plot([px, px], [py, py], [0.0, layout.rod_height], color=hex_color(ROD_COLOR), linewidth=3)

    for disk in disks:
        X, Y, Z = torus_mesh(
            disk.get_position(),
            getattr(disk, "radius", layout.disk_radius(disk.rank)),
            getattr(disk, "tube", 1.0),
        )
        ax.plot_surface(X, Y, Z, color=hex_color(getattr(disk, "color", 0xF8DF35)), linewidth=0, shade=True)

    span = w / 2
    ax.set_xlim(-span, span)
    ax.set_ylim(-span, span)
    ax.set_zlim(-2.0, max(layout.lift_height + 1.0, span))
    ax.set_axis_off()
    elev, azim = camera_angles(layout)
    ax.view_init(elev=elev, azim=azim)


def render_scene(
    disks: Iterable,
    layout: Layout,
    output_path: Path,
    title: Optional[str] = None,
    size: float = 6.0,
    dpi: int = 80,
) -> Path:
    """Render one frame to ``output_path`` and return the path."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    fig = plt.figure(figsize=(size, size * 0.75))
    try:
        ax = fig.add_subplot(111, projection="3d")
        draw_scene(ax, disks, layout)
        if title:
            ax.set_title(title)
        fig.savefig(output_path, dpi=dpi)
    finally:
        plt.close(fig)
    return output_path


class SceneRecorder:
    """Writes every ``every``-th frame of a playback as numbered PNGs."""

    def __init__(self, output_dir: Path, every: int = 1, dpi: int = 80):
        if every < 1:
            raise ValueError(f"every must be >= 1, got {every}")
        self.output_dir = Path(output_dir)
        self.every = every
        self.dpi = dpi
        self.paths: List[Path] = []
        self._frame = 0

    def capture(self, scheduler, title: Optional[str] = None) -> Optional[Path]:
        frame = self._frame
        self._frame += 1
        if frame % self.every or scheduler.layout is None:
            return None
        path = render_scene(
            scheduler.towers.disks(),
            scheduler.layout,
            self.output_dir / f"frame_{len(self.paths):05d}.png",
            title=title,
            dpi=self.dpi,
        )
        self.paths.append(path)
        return path
