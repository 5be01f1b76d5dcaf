import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation

from config import ViewConfig
from main import main
from observer import MouseObserver, PathObserver
from scene import Point2D
from visualization import (
    HIT_COLOR,
    OBSERVER_COLOR,
    POLYGON_POINT_COLOR,
    RAY_COLOR,
    MatplotlibSurface,
    animate_scene,
    plot_scene,
    render_frame,
)


def test_render_frame_draws_probes_hits_and_polygon(surface, sample_scene, observer):
    result = render_frame(surface, sample_scene, observer, ViewConfig())

    assert surface.clears == 1
    assert len(surface.lines) == 8
    assert all(color == RAY_COLOR for _, _, color in surface.lines)

    hit_markers = [c for _, c, color in surface.circles if color == HIT_COLOR]
    assert len(hit_markers) == sum(len(h) for h in result.hits)

    yellow = [c for _, c, color in surface.circles if color == POLYGON_POINT_COLOR]
    assert POLYGON_POINT_COLOR == OBSERVER_COLOR
    assert yellow == result.polygon + [observer]
    assert surface.polygons == []


def test_render_frame_fill_without_rays(surface, sample_scene, observer):
    view = ViewConfig(fill=True, show_rays=False, show_hits=False)
    result = render_frame(surface, sample_scene, observer, view)

    assert surface.lines == []
    assert len(surface.polygons) == 1
    assert surface.polygons[0][0] == result.polygon


def test_render_frame_reuses_surface(surface, sample_scene, observer):
    render_frame(surface, sample_scene, observer, ViewConfig())
    render_frame(surface, sample_scene, Point2D(600, 500), ViewConfig())
    assert surface.clears == 2
    assert len(surface.lines) == 8


def test_matplotlib_surface_clear_removes_artists():
    fig, ax = plt.subplots()
    try:
        surface = MatplotlibSurface(ax)
        surface.draw_line(Point2D(0, 0), Point2D(1, 1), "white")
        surface.draw_circle(2.0, Point2D(0, 0), "yellow")
        surface.draw_filled_polygon([Point2D(0, 0), Point2D(1, 0), Point2D(0, 1)], "white")
        surface.draw_filled_polygon([Point2D(0, 0)], "white")
        assert len(surface.artists) == 3
        assert len(ax.lines) == 1
        assert len(ax.patches) == 2

        surface.clear()
        assert surface.artists == []
        assert len(ax.lines) == 0
        assert len(ax.patches) == 0
    finally:
        plt.close(fig)


def test_plot_scene_sets_screen_axes(sample_scene, observer):
    fig, ax = plt.subplots()
    try:
        result = plot_scene(ax, sample_scene, observer, ViewConfig(fill=True))
        assert len(result.polygon) == 10
        assert ax.get_xlim() == (0.0, 800.0)
        assert ax.get_ylim() == (600.0, 0.0)
    finally:
        plt.close(fig)


def test_animate_scene_builds_animation(sample_scene):
    for source in (
        MouseObserver(Point2D(400, 300)),
        PathObserver([Point2D(50, 50), Point2D(700, 50)], speed=200.0),
    ):
        fig, ax = plt.subplots()
        try:
            anim = animate_scene(fig, ax, sample_scene, source, ViewConfig(fps=30))
            assert isinstance(anim, FuncAnimation)
        finally:
            plt.close(fig)


def test_main_saves_single_frame(tmp_path):
    out = tmp_path / "frame.png"
    assert main(["--save", str(out), "--observer", "400", "300", "--fill"]) == 0
    assert out.exists()
    assert out.stat().st_size > 0
