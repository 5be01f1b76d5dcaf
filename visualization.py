"""Rendering surface and frame loop for the interactive visibility demo."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Sequence

import numpy as np
import numpy.typing as npt
from matplotlib.animation import FuncAnimation
from matplotlib.artist import Artist
from matplotlib.axes import Axes
from matplotlib.backend_bases import MouseEvent
from matplotlib.figure import Figure
from matplotlib.patches import Circle
from matplotlib.patches import Polygon as MplPolygon

from config import ViewConfig
from observer import MouseObserver, ObserverSource
from scene import Point2D, Scene, Wall
from visibility import VisibilityResult, sweep

log = logging.getLogger(__name__)

RAY_COLOR: str = "white"
HIT_COLOR: str = "magenta"
POLYGON_POINT_COLOR: str = "yellow"
POLYGON_FILL_COLOR: str = "white"
OBSERVER_COLOR: str = "yellow"

HIT_RADIUS: float = 5.0
POLYGON_POINT_RADIUS: float = 5.0
OBSERVER_RADIUS: float = 3.0


class RenderSurface(ABC):
    """Minimal set of draw commands the visibility demo needs."""

    @abstractmethod
    def draw_line(self, p1: Point2D, p2: Point2D, color: str) -> None: ...

    @abstractmethod
    def draw_circle(self, radius: float, center: Point2D, color: str) -> None: ...

    @abstractmethod
    def draw_filled_polygon(self, points: Sequence[Point2D], color: str) -> None: ...

    def clear(self) -> None:
        """Forget everything drawn since the previous clear."""


class MatplotlibSurface(RenderSurface):
    """``RenderSurface`` backed by a matplotlib ``Axes``.

    Every draw call adds an artist; ``clear`` removes them again so the
    same surface can be reused frame after frame.
    """

    def __init__(self, ax: Axes, zorder: float = 2.0) -> None:
        self._ax: Axes = ax
        self._zorder: float = zorder
        self._artists: list[Artist] = []

    @property
    def artists(self) -> list[Artist]:
        return self._artists

    def draw_line(self, p1: Point2D, p2: Point2D, color: str) -> None:
        line, = self._ax.plot(
            [p1.x, p2.x], [p1.y, p2.y], color=color, linewidth=0.8, zorder=self._zorder,
        )
        self._artists.append(line)

    def draw_circle(self, radius: float, center: Point2D, color: str) -> None:
        circle: Circle = Circle(
            (center.x, center.y), radius, facecolor=color, edgecolor="none",
            zorder=self._zorder + 1,
        )
        self._ax.add_patch(circle)
        self._artists.append(circle)

    def draw_filled_polygon(self, points: Sequence[Point2D], color: str) -> None:
        if len(points) < 3:
            return
        coords: npt.NDArray[np.float64] = np.asarray(points, dtype=np.float64)
        patch: MplPolygon = MplPolygon(
            coords, closed=True, facecolor=color, edgecolor="none",
            alpha=0.35, zorder=self._zorder - 0.5,
        )
        self._ax.add_patch(patch)
        self._artists.append(patch)

    def clear(self) -> None:
        for artist in self._artists:
            artist.remove()
        self._artists.clear()


# ------------------------------------------------------------------
# Static drawing
# ------------------------------------------------------------------


def setup_axes(ax: Axes, scene: Scene, view: ViewConfig) -> None:
    """Match the axes to the scene viewport, y growing downwards."""
    ax.set_xlim(0, scene.width)
    ax.set_ylim(scene.height, 0)
    ax.set_aspect("equal")
    ax.set_facecolor(view.background)
    ax.set_xticks([])
    ax.set_yticks([])


def draw_walls(surface: RenderSurface, walls: Sequence[Wall]) -> None:
    for wall in walls:
        wall.debug_draw(surface)


def render_frame(
    surface: RenderSurface,
    scene: Scene,
    observer: Point2D,
    view: ViewConfig,
) -> VisibilityResult:
    """Clear *surface*, run the sweep from *observer* and draw the result."""
    surface.clear()

    inside: Wall | None = scene.wall_containing(observer)
    if inside is not None:
        log.debug("Observer (%.1f, %.1f) is inside %r.", observer.x, observer.y, inside)

    result: VisibilityResult = sweep(
        observer, scene.walls, scene.max_ray_length, view.tolerance,
    )

    if view.fill:
        surface.draw_filled_polygon(result.polygon, POLYGON_FILL_COLOR)

    for ray, hits in zip(result.rays, result.hits):
        if view.show_rays:
            surface.draw_line(ray.start, ray.end, RAY_COLOR)
        if view.show_hits:
            for hit in hits:
                surface.draw_circle(HIT_RADIUS, hit.point, HIT_COLOR)

    for point in result.polygon:
        surface.draw_circle(POLYGON_POINT_RADIUS, point, POLYGON_POINT_COLOR)

    surface.draw_circle(OBSERVER_RADIUS, observer, OBSERVER_COLOR)
    return result


def plot_scene(
    ax: Axes,
    scene: Scene,
    observer: Point2D,
    view: ViewConfig,
) -> VisibilityResult:
    """Draw the walls and a single visibility frame seen from *observer*."""
    setup_axes(ax, scene, view)
    draw_walls(MatplotlibSurface(ax, zorder=1.0), scene.walls)
    return render_frame(MatplotlibSurface(ax, zorder=3.0), scene, observer, view)


# ------------------------------------------------------------------
# Animation
# ------------------------------------------------------------------


def animate_scene(
    fig: Figure,
    ax: Axes,
    scene: Scene,
    source: ObserverSource,
    view: ViewConfig,
) -> FuncAnimation:
    """Recompute and redraw the visibility polygon on every frame.

    A ``MouseObserver`` is wired to the figure's pointer-motion events;
    any other source is advanced by the frame interval instead.
    """
    setup_axes(ax, scene, view)
    draw_walls(MatplotlibSurface(ax, zorder=1.0), scene.walls)
    frame_surface: MatplotlibSurface = MatplotlibSurface(ax, zorder=3.0)

    if isinstance(source, MouseObserver):
        def _on_motion(event: MouseEvent) -> None:
            if event.inaxes is ax:
                source.update(event.xdata, event.ydata)

        fig.canvas.mpl_connect("motion_notify_event", _on_motion)

    dt: float = 1.0 / view.fps

    def _update(frame: int):
        source.advance(dt)
        observer: Point2D = source.current_position()
        render_frame(frame_surface, scene, observer, view)
        return tuple(frame_surface.artists)

    anim: FuncAnimation = FuncAnimation(
        fig,
        _update,
        frames=None,
        interval=view.interval_ms,
        blit=False,
        cache_frame_data=False,
    )
    return anim
