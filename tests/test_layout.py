import pytest

from xsubkit.format import Align, Placement, Point, SubEntry
from xsubkit.layout import DefaultOverride, fade_alpha, place, scale_factors


def _placement(align=Align.NONE, vertical=0, horizontal=0, width=20, height=10,
               fadein=0.0, fadeout=0.0):
    return Placement(Point(align, vertical, horizontal), fadein, fadeout, 0, 0, width, height)


def test_override_disabled_keeps_point():
    point = Point(Align.LEFT, 3, 4)
    default = Point(Align.RIGHT, 7, 8)
    assert DefaultOverride().apply(point, default) == point


def test_override_replaces_align():
    point = Point(Align.LEFT, 3, 4)
    default = Point(Align.RIGHT, 7, 8)
    result = DefaultOverride(align=True).apply(point, default)
    assert result.align == Align.RIGHT
    assert (result.vertical, result.horizontal) == (3, 4)


def test_override_mix_unites_align():
    point = Point(Align.BOTTOM, 0, 0)
    default = Point(Align.RIGHT, 0, 0)
    result = DefaultOverride(align=True, mix=True).apply(point, default)
    assert result.align == Align.BOTTOM | Align.RIGHT


def test_mix_without_align_changes_nothing():
    point = Point(Align.BOTTOM, 1, 2)
    default = Point(Align.RIGHT, 5, 6)
    assert DefaultOverride(mix=True).apply(point, default) == point


def test_override_offsets():
    point = Point(Align.LEFT, 3, 4)
    default = Point(Align.RIGHT, 7, 8)
    result = DefaultOverride(vertical=True, horizontal=True).apply(point, default)
    assert result == Point(Align.LEFT, 7, 8)


def test_scale_same_aspect_is_proportional():
    sx, sy = scale_factors((400, 200), 200, 100)
    assert sx == pytest.approx(2.0)
    assert sy == pytest.approx(sx)


def test_scale_wider_canvas_keeps_aspect():
    sx, sy = scale_factors((400, 100), 200, 100)
    assert sx == pytest.approx(sy)
    assert 200 * sx <= 400


def test_scale_taller_canvas_keeps_aspect():
    sx, sy = scale_factors((100, 400), 200, 100)
    assert sx == pytest.approx(sy)
    assert 100 * sy <= 400


@pytest.mark.parametrize("canvas, w, h", [((0, 10), 10, 10), ((10, 10), 10, 0), ((10, -1), 5, 5)])
def test_scale_rejects_bad_sizes(canvas, w, h):
    with pytest.raises(ValueError):
        scale_factors(canvas, w, h)


def test_place_top_left_uses_offsets():
    p = _placement(vertical=5, horizontal=10)
    x, y, w, h = place(p, p.point, (100, 50), 1.0, 1.0)
    assert (x, y) == (10, 5)
    assert (w, h) == (20, 10)


def test_place_scales_size():
    p = _placement(width=20, height=10)
    _, _, w, h = place(p, p.point, (100, 50), 2.0, 2.0)
    assert w == 20 * 2
    assert h == 10 * 2


def test_place_right_bottom():
    p = _placement(Align.RIGHT | Align.BOTTOM, vertical=4, horizontal=6)
    x, y, w, h = place(p, p.point, (100, 50), 1.0, 1.0)
    assert x + w + 6 == 100
    assert y + h + 4 == 50


def test_place_center_middle():
    p = _placement(Align.CENTER | Align.MIDDLE, width=20, height=10)
    x, y, w, h = place(p, p.point, (100, 50), 1.0, 1.0)
    assert 2 * x + w == 100
    assert 2 * y + h == 50


def test_place_anchor_comes_from_point_argument():
    p = _placement(Align.NONE)
    x, _, w, _ = place(p, Point(Align.RIGHT, 0, 0), (100, 50), 1.0, 1.0)
    assert x + w == 100


def test_place_zero_sized_region():
    p = _placement(width=0, height=0)
    _, _, w, h = place(p, p.point, (100, 50), 1.0, 1.0)
    assert (w, h) == (0, 0)


def test_fade_alpha_bounds():
    p = _placement(fadein=1.0, fadeout=1.0)
    entry = SubEntry(0.0, 10.0, [p])
    assert fade_alpha(entry, p, 0.0) == 0
    assert fade_alpha(entry, p, 5.0) == 255
    assert fade_alpha(entry, p, 10.0) == 0


def test_fade_in_is_monotonic():
    p = _placement(fadein=2.0, fadeout=2.0)
    entry = SubEntry(1.0, 10.0, [p])
    values = [fade_alpha(entry, p, 1.0 + step * 0.25) for step in range(9)]
    assert values == sorted(values)
    assert 0 < values[4] < 255


def test_no_fade_is_opaque_at_edges():
    p = _placement()
    entry = SubEntry(2.0, 4.0, [p])
    assert fade_alpha(entry, p, 2.0) == 255
    assert fade_alpha(entry, p, 4.0) == 255