from undercroft.types import Bounds
from undercroft.util.coordinates import Rect, Vec, bounds_of, include_rect, sign


def test_sign():
    assert sign(-3) == -1
    assert sign(0) == 0
    assert sign(0.5) == 1


def test_vec_arithmetic():
    assert Vec(1, 2) + Vec(3, -4) == Vec(4, -2)
    assert Vec(1, 2) - Vec(3, -4) == Vec(-2, 6)
    assert -Vec(1, -2) == Vec(-1, 2)
    assert Vec(-7, 0).sign() == Vec(-1, 0)


def test_rect_edges_are_exclusive():
    r = Rect(-2, 3, 4, 5)
    assert r.right == 2
    assert r.bottom == 8
    assert r.area == 20
    assert r.contains_point(-2, 3)
    assert not r.contains_point(2, 3)
    assert Rect.from_bounds(-2, 3, 2, 8) == r


def test_centroid_rounds_toward_the_top_left():
    assert Rect(-3, -3, 7, 7).centroid() == Vec(0, 0)
    assert Rect(0, 0, 4, 4).centroid() == Vec(2, 2)
    assert Rect(-4, -4, 3, 3).centroid() == Vec(-3, -3)


def test_touching_rects_do_not_intersect():
    a = Rect(0, 0, 4, 4)
    b = Rect(4, 0, 4, 4)
    assert not a.intersects(b)
    assert a.intersection(b) is None


def test_overlapping_rects_intersect():
    a = Rect(0, 0, 4, 4)
    b = Rect(3, 2, 4, 4)
    assert a.intersects(b)
    assert b.intersects(a)
    assert a.intersection(b) == Rect(3, 2, 1, 2)


def test_rects_are_values():
    assert Rect(1, 2, 3, 4) == Rect(1, 2, 3, 4)
    assert len({Rect(1, 2, 3, 4), Rect(1, 2, 3, 4)}) == 1


def test_rect_ordering_is_top_then_left():
    rects = [Rect(5, 0, 3, 3), Rect(0, 1, 3, 3), Rect(0, 0, 3, 3), Rect(0, 0, 3, 4)]
    assert sorted(rects) == [
        Rect(0, 0, 3, 3),
        Rect(0, 0, 3, 4),
        Rect(5, 0, 3, 3),
        Rect(0, 1, 3, 3),
    ]


def test_translate_expand_union():
    r = Rect(0, 0, 3, 3)
    assert r.translated(-1, 2) == Rect(-1, 2, 3, 3)
    assert r.expanded(1) == Rect(-1, -1, 5, 5)
    assert r.union(Rect(5, 5, 1, 1)) == Rect(0, 0, 6, 6)


def test_bounds_helpers():
    assert bounds_of([]) == Bounds()
    b = bounds_of([Rect(-3, -3, 7, 7), Rect(7, -3, 7, 7)])
    assert b == Bounds(top=-3, bottom=4, left=-3, right=14)
    assert (b.width, b.height) == (17, 7)
    assert include_rect(Bounds(), Rect(2, 2, 1, 1)) == Bounds(0, 3, 0, 3)
