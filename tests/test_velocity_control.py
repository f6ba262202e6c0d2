import numpy as np
import pytest

from robonav.geometry import Twist
from robonav.velocity_control import VelocityController


def test_matching_velocity_passes_target_through():
    controller = VelocityController(xy_ki=1.0, yaw_ki=1.0)
    result = controller.command((0.8, -0.2, 0.3), (0.8, -0.2, 0.3))
    assert result == Twist(0.8, -0.2, 0.3)
    assert np.allclose(controller.integral_error, 0.0)


def test_proportional_term():
    controller = VelocityController(xy_kp=0.5, yaw_kp=0.5)
    result = controller.command((1.0, 0.0, 0.5), (0.5, 0.0, 0.0))
    assert result.linear_x == pytest.approx(1.25)
    assert result.linear_y == pytest.approx(0.0)
    assert result.angular_z == pytest.approx(0.75)


def test_integral_accumulates_linearly():
    controller = VelocityController(dt=0.1, xy_kp=0.0, xy_ki=1.0, yaw_kp=0.0)
    target = (1.0, 0.0, 0.0)
    first = controller.command(target, (0.0, 0.0, 0.0))
    second = controller.command(target, (0.0, 0.0, 0.0))
    assert second.linear_x - 1.0 == pytest.approx(2 * (first.linear_x - 1.0))
    assert first.linear_x > 1.0


def test_small_target_resets_integral():
    controller = VelocityController(dt=0.1, xy_ki=1.0)
    fresh = VelocityController(dt=0.1, xy_ki=1.0)
    controller.command((1.0, 0.0, 0.0), (0.0, 0.0, 0.0))
    stop = controller.command((0.001, 0.0, 0.0), (0.5, 0.0, 0.0))
    assert stop == Twist(0.001, 0.0, 0.0)
    assert np.allclose(controller.integral_error, 0.0)
    again = controller.command((1.0, 0.0, 0.0), (0.0, 0.0, 0.0))
    assert again == fresh.command((1.0, 0.0, 0.0), (0.0, 0.0, 0.0))


def test_reset_clears_integral():
    controller = VelocityController(xy_ki=1.0)
    controller.command((1.0, 1.0, 1.0), (0.0, 0.0, 0.0))
    controller.reset()
    assert np.allclose(controller.integral_error, 0.0)


def test_twist_and_sequence_inputs_agree():
    a = VelocityController(xy_ki=0.3, yaw_ki=0.2)
    b = VelocityController(xy_ki=0.3, yaw_ki=0.2)
    from_twist = a.command(Twist(0.5, 0.1, 0.2), Twist(0.2, 0.0, 0.1))
    from_seq = b.command((0.5, 0.1, 0.2), np.array([0.2, 0.0, 0.1]))
    assert from_twist == from_seq


def test_bad_shape_raises():
    with pytest.raises(ValueError):
        VelocityController().command((1.0, 0.0), (0.0, 0.0, 0.0))