import math

import pytest

from robonav.vector2 import Vector2


def test_unit_direction_constructors():
    assert Vector2.zero() == Vector2(0.0, 0.0)
    assert Vector2.up() == Vector2(0.0, 1.0)
    assert Vector2.down() == -Vector2.up()
    assert Vector2.left() == -Vector2.right()


def test_dot_and_cross_of_axes():
    r, u = Vector2.right(), Vector2.up()
    assert r.dot(u) == 0.0
    assert r.cross(u) == 1.0
    assert u.cross(r) == -1.0


def test_norm_relations():
    v = Vector2(3.0, 4.0)
    assert v.norm_sq() == v.dot(v)
    assert v.norm() == pytest.approx(math.sqrt(v.norm_sq()))


def test_from_polar_round_trip():
    v = Vector2.from_polar(2.5, 0.7)
    assert v.norm() == pytest.approx(2.5)
    assert v.angle() == pytest.approx(0.7)


def test_angle_of_up_is_half_pi():
    assert Vector2.up().angle() == pytest.approx(math.pi / 2)


def test_normalized_has_unit_length_and_same_direction():
    v = Vector2(-2.0, 5.0)
    n = v.normalized()
    assert n.norm() == pytest.approx(1.0)
    assert n.angle() == pytest.approx(v.angle())


def test_normalized_zero_vector_raises():
    with pytest.raises(ZeroDivisionError):
        Vector2.zero().normalized()


def test_rotated_preserves_norm_and_adds_angle():
    v = Vector2(1.2, -0.4)
    r = v.rotated(0.5)
    assert r.norm() == pytest.approx(v.norm())
    assert r.angle() == pytest.approx(v.angle() + 0.5)


def test_rotate_right_by_quarter_turn_gives_up():
    r = Vector2.right().rotated(math.pi / 2)
    assert r.x == pytest.approx(0.0, abs=1e-12)
    assert r.y == pytest.approx(1.0)


def test_swizzles():
    v = Vector2(1.0, 2.0)
    assert v.yx() == Vector2(2.0, 1.0)
    assert v.nyx() == Vector2(-2.0, 1.0)
    assert v.ynx() == Vector2(2.0, -1.0)
    assert v.nxy() == Vector2(-1.0, 2.0)
    assert v.xny() == Vector2(1.0, -2.0)


def test_is_zero_and_has_nan():
    assert Vector2(1e-13, -1e-13).is_zero() is True
    assert Vector2(1e-6, 0.0).is_zero() is False
    assert Vector2(float("nan"), 0.0).has_nan() is True
    assert Vector2(1.0, 2.0).has_nan() is False


def test_lerp_endpoints():
    a, b = Vector2(1.0, -1.0), Vector2(3.0, 5.0)
    assert a.lerp(b, 0.0) == a
    assert a.lerp(b, 1.0) == b
    mid = a.lerp(b, 0.5)
    assert Vector2.distance(a, mid) == pytest.approx(Vector2.distance(mid, b))


def test_angle_between_axes():
    assert Vector2.angle_between(Vector2.right(), Vector2.up()) == pytest.approx(math.pi / 2)
    assert Vector2.angle_between(Vector2.right(), Vector2.left()) == pytest.approx(math.pi)


def test_distance_is_symmetric():
    a, b = Vector2(1.0, 2.0), Vector2(-3.0, 0.5)
    assert Vector2.distance(a, b) == pytest.approx(Vector2.distance(b, a))
    assert Vector2.distance(a, b) == pytest.approx((b - a).norm())


def test_arithmetic_operators():
    a, b = Vector2(1.0, 2.0), Vector2(0.5, -1.0)
    assert (a + b) - b == a
    assert 2 * a == a * 2
    assert (a * 2) / 2 == a
    assert +a == a
    assert -(-a) == a


def test_indexing_and_iteration():
    v = Vector2(7.0, 8.0)
    assert (v[0], v[1]) == (7.0, 8.0)
    assert tuple(v) == (7.0, 8.0)
    with pytest.raises(IndexError):
        v[2]


def test_unsupported_operand_raises_type_error():
    with pytest.raises(TypeError):
        Vector2(1.0, 1.0) + 1.0