"""Scene geometry: points, segments, rectangular walls and their container."""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

import numpy as np
from shapely.geometry import Point, Polygon, box

if TYPE_CHECKING:
    from visualization import RenderSurface

# Slack added to the bounds diagonal so probe rays always leave the scene.
RAY_LENGTH_SLACK: float = 1.0

WALL_LINE_COLOR: str = "green"
WALL_VERTEX_COLOR: str = "blue"
WALL_VERTEX_RADIUS: float = 2.0


class Point2D(NamedTuple):
    """A point (or vector) in continuous 2-D space."""

    x: float
    y: float

    def __add__(self, other: Point2D) -> Point2D:  # type: ignore[override]
        return Point2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point2D) -> Point2D:
        return Point2D(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Point2D:  # type: ignore[override]
        return Point2D(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__


class Segment(NamedTuple):
    """Directed segment ``p1 -> p2``."""

    p1: Point2D
    p2: Point2D


class Ray(NamedTuple):
    """Bounded probe from the observer (``start``) to ``end``."""

    start: Point2D
    end: Point2D


# ----------------------------------------------------------------------
# Vector helpers
# ----------------------------------------------------------------------


def dot(a: Point2D, b: Point2D) -> float:
    """Scalar product ``a.x * b.x + a.y * b.y``."""
    return a.x * b.x + a.y * b.y


def perp_dot(a: Point2D, b: Point2D) -> float:
    """Signed 2-D cross product ``a.y * b.x - a.x * b.y``."""
    return a.y * b.x - a.x * b.y


def distance(p1: Point2D, p2: Point2D) -> float:
    """Euclidean distance between two points."""
    dx: float = p1.x - p2.x
    dy: float = p1.y - p2.y
    return float(np.sqrt(dx * dx + dy * dy))


# ----------------------------------------------------------------------
# Walls
# ----------------------------------------------------------------------


class Wall:
    """Axis-aligned rectangular occluder.

    The four segments run top, right, bottom, left, so that
    ``segments[i].p1 == vertices[i]`` and
    ``segments[i].p2 == vertices[(i + 1) % 4]``.  The silhouette
    classifier relies on this side ordering.
    """

    def __init__(self, x: float, y: float, width: float, height: float) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(
                f"Wall dimensions must be positive, got width={width}, height={height}."
            )

        self.x: float = float(x)
        self.y: float = float(y)
        self.width: float = float(width)
        self.height: float = float(height)

        top_left: Point2D = Point2D(self.x, self.y)
        top_right: Point2D = Point2D(self.x + self.width, self.y)
        bottom_right: Point2D = Point2D(self.x + self.width, self.y + self.height)
        bottom_left: Point2D = Point2D(self.x, self.y + self.height)

        self._segments: tuple[Segment, ...] = (
            Segment(top_left, top_right),
            Segment(top_right, bottom_right),
            Segment(bottom_right, bottom_left),
            Segment(bottom_left, top_left),
        )
        self._vertices: tuple[Point2D, ...] = tuple(s.p1 for s in self._segments)

    @classmethod
    def from_rect(cls, x: float, y: float, width: float, height: float) -> Wall:
        return cls(x, y, width, height)

    def __repr__(self) -> str:
        return f"Wall({self.x:g}, {self.y:g}, {self.width:g}, {self.height:g})"

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def segments(self) -> tuple[Segment, ...]:
        return self._segments

    @property
    def vertices(self) -> tuple[Point2D, ...]:
        return self._vertices

    @property
    def polygon(self) -> Polygon:
        """Shapely polygon covering the wall's rectangle."""
        return box(self.x, self.y, self.x + self.width, self.y + self.height)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def contains(self, point: Point2D) -> bool:
        """Return whether *point* lies strictly inside the rectangle."""
        return self.polygon.contains(Point(point.x, point.y))

    def debug_draw(self, surface: RenderSurface) -> None:
        """Draw every segment as a line and every vertex as a small marker."""
        for segment, vertex in zip(self._segments, self._vertices):
            surface.draw_line(segment.p1, segment.p2, WALL_LINE_COLOR)
            surface.draw_circle(WALL_VERTEX_RADIUS, vertex, WALL_VERTEX_COLOR)


# ----------------------------------------------------------------------
# Scene
# ----------------------------------------------------------------------


class Scene:
    """Static set of walls inside a ``width`` x ``height`` viewport.

    With ``enclose=True`` a wall covering the whole viewport is placed
    first, so that every probe ray hits something.
    """

    def __init__(
        self,
        width: float,
        height: float,
        walls: list[Wall] | None = None,
        enclose: bool = True,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(
                f"Scene dimensions must be positive, got width={width}, height={height}."
            )

        self.width: float = float(width)
        self.height: float = float(height)

        self._enclosure: Wall | None = None
        scene_walls: list[Wall] = []
        if enclose:
            self._enclosure = Wall(0.0, 0.0, self.width, self.height)
            scene_walls.append(self._enclosure)
        scene_walls.extend(walls or [])
        self._walls: tuple[Wall, ...] = tuple(scene_walls)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def walls(self) -> tuple[Wall, ...]:
        return self._walls

    @property
    def segments(self) -> list[Segment]:
        return [s for wall in self._walls for s in wall.segments]

    @property
    def vertices(self) -> list[Point2D]:
        return [v for wall in self._walls for v in wall.vertices]

    @property
    def max_ray_length(self) -> float:
        """Length that reaches every point of the viewport from any other."""
        return float(np.hypot(self.width, self.height)) + RAY_LENGTH_SLACK

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def wall_containing(self, point: Point2D) -> Wall | None:
        """Return the first non-enclosing wall that contains *point*."""
        for wall in self._walls:
            if wall is self._enclosure:
                continue
            if wall.contains(point):
                return wall
        return None


# ----------------------------------------------------------------------
# Sample scene factory
# ----------------------------------------------------------------------


def create_sample_scene() -> Scene:
    """Return an 800x600 enclosed scene with a single tall wall."""
    walls: list[Wall] = [
        Wall(120, 100, 150, 250),
    ]
    return Scene(width=800.0, height=600.0, walls=walls, enclose=True)
