"""Observer position sources sampled once per frame."""

from __future__ import annotations

import bisect
import math
from abc import ABC, abstractmethod

from scene import Point2D


class ObserverSource(ABC):
    """Supplies the observer position for the current frame."""

    @abstractmethod
    def current_position(self) -> Point2D:
        """Return the observer position for the frame being rendered."""
        ...

    def advance(self, dt: float) -> None:
        """Move the frame clock forward by *dt* seconds."""


# ---------------------------------------------------------------------------
# Mouse-driven observer
# ---------------------------------------------------------------------------


class MouseObserver(ObserverSource):
    """Observer that sits wherever the pointer was last seen.

    Pointer events outside the drawing area (``None`` coordinates) are
    ignored, so the observer stays at its last valid position.
    """

    def __init__(self, initial: Point2D) -> None:
        self._position: Point2D = initial

    def update(self, x: float | None, y: float | None) -> None:
        if x is None or y is None:
            return
        self._position = Point2D(float(x), float(y))

    def current_position(self) -> Point2D:
        return self._position


# ---------------------------------------------------------------------------
# Scripted observer
# ---------------------------------------------------------------------------


class PathObserver(ObserverSource):
    """Observer that moves along a polyline at constant speed.

    The position linearly interpolates between consecutive waypoints.
    With ``loop=True`` the walk restarts from the first waypoint after
    reaching the last one.
    """

    def __init__(self, path: list[Point2D], speed: float = 100.0, loop: bool = True) -> None:
        if len(path) < 2:
            raise ValueError("Path must contain at least 2 waypoints.")
        if speed <= 0:
            raise ValueError(f"Speed must be positive, got {speed}.")

        self._path: list[Point2D] = path
        self._speed: float = speed
        self._loop: bool = loop

        # Pre-compute cumulative arc-length distances along the path.
        self._cumulative_dist: list[float] = [0.0]
        for i in range(1, len(path)):
            seg_len: float = math.hypot(path[i].x - path[i - 1].x, path[i].y - path[i - 1].y)
            self._cumulative_dist.append(self._cumulative_dist[-1] + seg_len)

        self._total_length: float = self._cumulative_dist[-1]
        if self._total_length <= 0:
            raise ValueError("Path must have non-zero length.")
        self._elapsed: float = 0.0

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def path(self) -> list[Point2D]:
        return self._path

    @property
    def total_time(self) -> float:
        """Time needed to traverse the path once."""
        return self._total_length / self._speed

    @property
    def elapsed(self) -> float:
        return self._elapsed

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def reset(self) -> None:
        self._elapsed = 0.0

    def advance(self, dt: float) -> None:
        self._elapsed += dt
        if not self._loop:
            self._elapsed = min(self._elapsed, self.total_time)

    def current_position(self) -> Point2D:
        return self.position_at(self._elapsed)

    def position_at(self, t: float) -> Point2D:
        """Return the interpolated position at time *t* (seconds)."""
        dist: float = t * self._speed
        if self._loop:
            dist = math.fmod(dist, self._total_length)
        dist = max(0.0, min(dist, self._total_length))

        hi: int = bisect.bisect_right(self._cumulative_dist, dist)
        hi = min(max(hi, 1), len(self._path) - 1)
        lo: int = hi - 1

        seg_start_dist: float = self._cumulative_dist[lo]
        seg_length: float = self._cumulative_dist[hi] - seg_start_dist
        if seg_length < 1e-12:
            return self._path[lo]

        alpha: float = (dist - seg_start_dist) / seg_length
        alpha = max(0.0, min(1.0, alpha))
        return self._path[lo] + (self._path[hi] - self._path[lo]) * alpha
