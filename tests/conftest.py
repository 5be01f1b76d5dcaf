# tests/conftest.py

import sys
from pathlib import Path

import matplotlib
import pytest

matplotlib.use("Agg")

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from scene import Point2D, Scene, Wall, create_sample_scene  # noqa: E402
from visualization import RenderSurface  # noqa: E402


class RecordingSurface(RenderSurface):
    """Collects draw commands instead of rendering them."""

    def __init__(self):
        self.lines = []
        self.circles = []
        self.polygons = []
        self.clears = 0

    def draw_line(self, p1, p2, color):
        self.lines.append((p1, p2, color))

    def draw_circle(self, radius, center, color):
        self.circles.append((radius, center, color))

    def draw_filled_polygon(self, points, color):
        self.polygons.append((list(points), color))

    def clear(self):
        self.lines.clear()
        self.circles.clear()
        self.polygons.clear()
        self.clears += 1


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def sample_scene() -> Scene:
    """800x600 enclosed scene with one wall at (120, 100, 150, 250)."""
    return create_sample_scene()


@pytest.fixture
def occlusion_scene() -> Scene:
    """A thin near wall hiding the right-hand corners of a farther wall."""
    return Scene(
        width=800,
        height=600,
        walls=[Wall(100, 280, 50, 40), Wall(300, 250, 20, 100)],
        enclose=True,
    )


@pytest.fixture
def observer() -> Point2D:
    return Point2D(400.0, 300.0)
