import pytest

from scene import Point2D, Scene, Segment, Wall, distance, dot, perp_dot


def test_point_arithmetic():
    a = Point2D(1.0, 2.0)
    b = Point2D(3.0, 5.0)

    assert a + b == Point2D(4.0, 7.0)
    assert b - a == Point2D(2.0, 3.0)
    assert a * 2.0 == Point2D(2.0, 4.0)
    assert 0.5 * b == Point2D(1.5, 2.5)
    assert Point2D(1, 2) == (1, 2)


def test_dot_and_perp_dot():
    assert dot(Point2D(1, 2), Point2D(3, 4)) == 11
    assert perp_dot(Point2D(1, 0), Point2D(0, 1)) == -1
    assert perp_dot(Point2D(0, 1), Point2D(1, 0)) == 1
    assert perp_dot(Point2D(2, 4), Point2D(1, 2)) == 0


def test_distance_uses_both_axes():
    assert distance(Point2D(0, 0), Point2D(3, 4)) == pytest.approx(5.0)
    assert distance(Point2D(1, 5), Point2D(4, 1)) == pytest.approx(5.0)
    assert distance(Point2D(7, 7), Point2D(7, 7)) == 0.0


def test_wall_segments_run_top_right_bottom_left():
    wall = Wall(120, 100, 150, 250)

    assert wall.vertices == (
        Point2D(120, 100),
        Point2D(270, 100),
        Point2D(270, 350),
        Point2D(120, 350),
    )
    for i, segment in enumerate(wall.segments):
        assert isinstance(segment, Segment)
        assert segment.p1 == wall.vertices[i]
        assert segment.p2 == wall.vertices[(i + 1) % 4]

    top, right, bottom, left = wall.segments
    assert top.p1.y == top.p2.y == 100
    assert right.p1.x == right.p2.x == 270
    assert bottom.p1.y == bottom.p2.y == 350
    assert left.p1.x == left.p2.x == 120


def test_wall_from_rect_matches_constructor():
    assert Wall.from_rect(1, 2, 3, 4).segments == Wall(1, 2, 3, 4).segments


@pytest.mark.parametrize("width,height", [(0, 10), (10, 0), (-5, 10)])
def test_wall_rejects_degenerate_rectangles(width, height):
    with pytest.raises(ValueError):
        Wall(0, 0, width, height)


def test_wall_contains_is_strict():
    wall = Wall(0, 0, 10, 10)
    assert wall.contains(Point2D(5, 5))
    assert not wall.contains(Point2D(0, 5))
    assert not wall.contains(Point2D(11, 5))


def test_wall_debug_draw(surface):
    wall = Wall(0, 0, 10, 20)
    wall.debug_draw(surface)

    assert [(p1, p2) for p1, p2, _ in surface.lines] == list(wall.segments)
    assert [c for _, c, _ in surface.circles] == list(wall.vertices)


def test_scene_encloses_viewport_first(sample_scene):
    assert len(sample_scene.walls) == 2
    enclosure = sample_scene.walls[0]
    assert enclosure.vertices == (
        Point2D(0, 0), Point2D(800, 0), Point2D(800, 600), Point2D(0, 600),
    )
    assert len(sample_scene.segments) == 8
    assert len(sample_scene.vertices) == 8


def test_scene_without_enclosure():
    scene = Scene(100, 100, walls=[Wall(10, 10, 5, 5)], enclose=False)
    assert len(scene.walls) == 1
    assert Scene(100, 100, enclose=False).walls == ()


def test_scene_max_ray_length_covers_diagonal(sample_scene):
    assert sample_scene.max_ray_length == pytest.approx(1001.0)


def test_scene_rejects_empty_viewport():
    with pytest.raises(ValueError):
        Scene(0, 600)


def test_wall_containing_ignores_enclosure(sample_scene):
    assert sample_scene.wall_containing(Point2D(400, 300)) is None
    assert sample_scene.wall_containing(Point2D(200, 200)) is sample_scene.walls[1]
