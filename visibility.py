"""2-D visibility polygon computation via a radial sweep over wall vertices."""

from __future__ import annotations

import logging
import math
from typing import Iterable, NamedTuple, Sequence

from shapely.geometry import Polygon

from scene import Point2D, Ray, Segment, Wall, distance, perp_dot

log = logging.getLogger(__name__)

# Absolute tolerance for deciding that an intersection *is* the probed vertex.
DEFAULT_TOLERANCE: float = 1e-6


class RayEvent(NamedTuple):
    """A single probe of the sweep, generated by a wall vertex."""

    point: Point2D
    angle: float
    boundary: bool


class Hit(NamedTuple):
    """A successful ray/segment intersection and its distance to the observer."""

    point: Point2D
    distance: float


class VisibilityResult(NamedTuple):
    """Full output of one sweep, including the debug overlay data."""

    polygon: list[Point2D]
    events: list[RayEvent]
    rays: list[Ray]
    hits: list[list[Hit]]


# ----------------------------------------------------------------------
# Intersection engine
# ----------------------------------------------------------------------


def intersect(ray: Ray, segment: Segment) -> Point2D | None:
    """Return the point where *ray* crosses *segment*, or None.

    Both are treated as bounded segments.  Parallel and collinear pairs
    never intersect.
    """
    a: Point2D = ray.end - ray.start
    b: Point2D = segment.p2 - segment.p1

    f: float = perp_dot(a, b)
    if f == 0:
        return None

    c: Point2D = segment.p2 - ray.end
    aa: float = perp_dot(a, c)
    bb: float = perp_dot(b, c)

    if f < 0:
        if aa > 0 or aa < f:
            return None
        if bb > 0 or bb < f:
            return None
    else:
        if aa < 0 or aa > f:
            return None
        if bb < 0 or bb > f:
            return None

    t: float = 1.0 - (aa / f)
    return segment.p1 + (segment.p2 - segment.p1) * t


def cast_probe(observer: Point2D, angle: float, max_length: float) -> Ray:
    """Build a ray of length *max_length* from *observer* toward *angle*."""
    end: Point2D = Point2D(
        observer.x + max_length * math.cos(angle),
        observer.y + max_length * math.sin(angle),
    )
    return Ray(observer, end)


def collect_intersections(ray: Ray, segments: Iterable[Segment]) -> list[Hit]:
    """Intersect *ray* with every segment; nearest first, stable on ties."""
    hits: list[Hit] = []
    for segment in segments:
        point: Point2D | None = intersect(ray, segment)
        if point is None:
            continue
        hits.append(Hit(point, distance(point, ray.start)))
    hits.sort(key=lambda h: h.distance)
    return hits


def probe_event(
    observer: Point2D,
    event: RayEvent,
    segments: Iterable[Segment],
    max_length: float,
) -> tuple[Ray, list[Hit]]:
    """Cast the probe for *event* and return it with its sorted hits.

    The generating vertex lies on its own wall, so it is always one of
    the hits even when rounding in the probe direction lets the ray slip
    past both edges meeting there.
    """
    ray: Ray = cast_probe(observer, event.angle, max_length)
    hits: list[Hit] = collect_intersections(ray, segments)
    hits.append(Hit(event.point, distance(event.point, observer)))
    hits.sort(key=lambda h: h.distance)
    return ray, hits


# ----------------------------------------------------------------------
# Silhouette classifier
# ----------------------------------------------------------------------


def is_segment_facing(observer: Point2D, segment: Segment, side: int) -> bool:
    """Return whether *observer* sees the front of side *side* of a wall.

    Sides are indexed 0=top, 1=right, 2=bottom, 3=left.
    """
    if side == 0:
        return observer.y < segment.p1.y
    if side == 1:
        return observer.x > segment.p1.x
    if side == 2:
        return observer.y > segment.p1.y
    if side == 3:
        return observer.x < segment.p1.x
    raise ValueError(f"Side index must be in 0..3, got {side}.")


def is_point_boundary(observer: Point2D, wall: Wall, index: int) -> bool:
    """Return whether vertex *index* of *wall* is a silhouette vertex.

    The vertex joins side ``index - 1`` and side ``index``; it is a
    silhouette vertex when exactly one of them faces the observer.
    """
    prev: int = 3 if index == 0 else index - 1
    facing_prev: bool = is_segment_facing(observer, wall.segments[prev], prev)
    facing_next: bool = is_segment_facing(observer, wall.segments[index], index)
    return facing_prev != facing_next


# ----------------------------------------------------------------------
# Radial sweep
# ----------------------------------------------------------------------


def build_ray_events(observer: Point2D, walls: Sequence[Wall]) -> list[RayEvent]:
    """One probe per wall vertex, sorted by angle around *observer*.

    ``list.sort`` is stable, so vertices at the same angle keep wall order.
    """
    events: list[RayEvent] = []
    for wall in walls:
        for i, vertex in enumerate(wall.vertices):
            angle: float = math.atan2(vertex.y - observer.y, vertex.x - observer.x)
            events.append(RayEvent(vertex, angle, is_point_boundary(observer, wall, i)))
    events.sort(key=lambda e: e.angle)
    return events


def resolve_hits(
    observer: Point2D,
    event: RayEvent,
    hits: Sequence[Hit],
    tolerance: float = DEFAULT_TOLERANCE,
) -> list[Point2D]:
    """Turn the sorted hits of one probe into 1 or 2 polygon points.

    Non-boundary vertices contribute the nearest hit.  A boundary vertex
    hidden behind a nearer occluder contributes the nearest hit too;
    otherwise it contributes the hit just past it (or the nearest hit
    when the vertex itself was not hit) followed by the vertex.
    """
    if not hits:
        log.debug("Probe at angle %.6f toward %s hit nothing.", event.angle, event.point)
        return []

    nearest: Hit = hits[0]
    if not event.boundary:
        return [nearest.point]

    vertex_distance: float = distance(event.point, observer)
    if nearest.distance < vertex_distance - tolerance:
        return [nearest.point]

    if distance(nearest.point, event.point) <= tolerance:
        beyond: list[Hit] = [
            h for h in hits[1:] if distance(h.point, event.point) > tolerance
        ]
        if not beyond:
            return [event.point]
        return [beyond[0].point, event.point]

    return [nearest.point, event.point]


def resolve_ray_event(
    observer: Point2D,
    event: RayEvent,
    segments: Sequence[Segment],
    max_length: float,
    tolerance: float = DEFAULT_TOLERANCE,
) -> list[Point2D]:
    """Cast the probe for *event* against *segments* and resolve it."""
    _, hits = probe_event(observer, event, segments, max_length)
    return resolve_hits(observer, event, hits, tolerance)


def sweep(
    observer: Point2D,
    walls: Sequence[Wall],
    max_length: float,
    tolerance: float = DEFAULT_TOLERANCE,
) -> VisibilityResult:
    """Run the radial sweep and keep every probe and hit for inspection."""
    segments: list[Segment] = [s for wall in walls for s in wall.segments]
    events: list[RayEvent] = build_ray_events(observer, walls)

    polygon: list[Point2D] = []
    rays: list[Ray] = []
    all_hits: list[list[Hit]] = []

    for event in events:
        ray, hits = probe_event(observer, event, segments, max_length)
        polygon.extend(resolve_hits(observer, event, hits, tolerance))
        rays.append(ray)
        all_hits.append(hits)

    log.debug(
        "Sweep from (%.1f, %.1f): %d probes, %d polygon vertices.",
        observer.x, observer.y, len(events), len(polygon),
    )
    return VisibilityResult(polygon, events, rays, all_hits)


def compute_visibility_polygon(
    observer: Point2D,
    walls: Sequence[Wall],
    max_length: float,
    tolerance: float = DEFAULT_TOLERANCE,
) -> list[Point2D]:
    """Compute the ordered vertex list of the visibility polygon.

    Parameters
    ----------
    observer:
        The viewpoint in scene coordinates.
    walls:
        Rectangular occluders.  An empty sequence gives an empty polygon.
    max_length:
        Probe length; must reach every point of the scene from the
        observer (see ``Scene.max_ray_length``).
    tolerance:
        Absolute distance under which an intersection counts as the
        probed vertex itself.

    Returns
    -------
    list[Point2D]
        Polygon vertices in ascending probe-angle order.
    """
    return sweep(observer, walls, max_length, tolerance).polygon


# ----------------------------------------------------------------------
# Shapely helpers
# ----------------------------------------------------------------------


def to_shapely(points: Sequence[Point2D]) -> Polygon:
    """Return *points* as a Shapely polygon (empty below three vertices)."""
    if len(points) < 3:
        return Polygon()
    return Polygon([(p.x, p.y) for p in points])


def polygon_area(points: Sequence[Point2D]) -> float:
    """Area enclosed by the visibility polygon."""
    return float(to_shapely(points).area)


def visible_area(points: Sequence[Point2D]) -> float | None:
    """Area of the visibility polygon, or None when it self-intersects."""
    shape: Polygon = to_shapely(points)
    if not shape.is_valid:
        return None
    return float(shape.area)
