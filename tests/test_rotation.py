import math

import pytest

from urdf_scene.rotation import clamp, euler_to_quaternion, quaternion_multiply, quaternion_to_euler


@pytest.mark.parametrize("order", ["XYZ", "ZYX"])
@pytest.mark.parametrize(
    "angles",
    [
        (0.0, 0.0, 0.0),
        (0.1, -0.4, 0.7),
        (1.2, 0.3, -2.0),
        (-3.0, 1.4, 2.9),
        (math.pi / 2, 0.0, 0.0),
    ],
)
def test_euler_round_trip(angles: tuple[float, float, float], order: str) -> None:
    """Test that Euler -> quaternion -> Euler recovers the angles away from gimbal lock"""
    result = quaternion_to_euler(euler_to_quaternion(angles, order), order)
    assert result == pytest.approx(angles, abs=1e-6)


@pytest.mark.parametrize("order", ["XYZ", "ZYX"])
def test_euler_to_quaternion_is_unit(order: str) -> None:
    """Test that generated quaternions have unit norm"""
    quat = euler_to_quaternion((0.3, -1.1, 2.2), order)
    assert math.sqrt(sum(q * q for q in quat)) == pytest.approx(1.0)


def test_zyx_matches_roll_pitch_yaw() -> None:
    """Test ZYX order against the roll-pitch-yaw quaternion formula"""
    roll, pitch, yaw = 0.2, -0.5, 1.3
    cr, cp, cy = math.cos(0.5 * roll), math.cos(0.5 * pitch), math.cos(0.5 * yaw)
    sr, sp, sy = math.sin(0.5 * roll), math.sin(0.5 * pitch), math.sin(0.5 * yaw)
    expected = (
        cr * cp * cy + sr * sp * sy,
        sr * cp * cy - cr * sp * sy,
        cr * sp * cy + sr * cp * sy,
        cr * cp * sy - sr * sp * cy,
    )

    assert euler_to_quaternion((roll, pitch, yaw), "ZYX") == pytest.approx(expected)


def test_single_axis_orders_agree() -> None:
    """Test that rotations about a single axis do not depend on the order"""
    for angles in [(0.7, 0.0, 0.0), (0.0, 0.7, 0.0), (0.0, 0.0, 0.7)]:
        assert euler_to_quaternion(angles, "XYZ") == pytest.approx(euler_to_quaternion(angles, "ZYX"))


def test_gimbal_lock_xyz() -> None:
    """Test that the z angle collapses to zero at pitch = ±pi/2 for XYZ"""
    for pitch in (math.pi / 2, -math.pi / 2):
        x, y, z = quaternion_to_euler(euler_to_quaternion((0.3, pitch, 0.0), "XYZ"), "XYZ")

        assert z == 0
        assert not math.isnan(x)
        assert y == pytest.approx(pitch)
        assert x == pytest.approx(0.3)


def test_gimbal_lock_zyx() -> None:
    """Test that the x angle collapses to zero at pitch = ±pi/2 for ZYX"""
    for pitch in (math.pi / 2, -math.pi / 2):
        x, y, z = quaternion_to_euler(euler_to_quaternion((0.0, pitch, 0.4), "ZYX"), "ZYX")

        assert x == 0
        assert not math.isnan(z)
        assert y == pytest.approx(pitch)
        assert z == pytest.approx(0.4)


def test_quaternion_to_euler_clamps_overshoot() -> None:
    """Test that slightly non-unit quaternions do not produce NaN"""
    s = math.sqrt(0.5) * (1 + 1e-9)
    x, y, z = quaternion_to_euler((s, 0.0, s, 0.0), "XYZ")

    assert y == pytest.approx(math.pi / 2)
    assert not any(math.isnan(v) for v in (x, y, z))


def test_quaternion_multiply() -> None:
    """Test Hamilton product"""
    identity = (1.0, 0.0, 0.0, 0.0)
    q = euler_to_quaternion((0.1, 0.2, 0.3), "XYZ")

    assert quaternion_multiply(identity, q) == pytest.approx(q)
    assert quaternion_multiply(q, identity) == pytest.approx(q)

    # i * j = k
    assert quaternion_multiply((0.0, 1.0, 0.0, 0.0), (0.0, 0.0, 1.0, 0.0)) == (0.0, 0.0, 0.0, 1.0)

    # two quarter turns about z make a half turn
    quarter = euler_to_quaternion((0.0, 0.0, math.pi / 2), "XYZ")
    half = euler_to_quaternion((0.0, 0.0, math.pi), "XYZ")
    assert quaternion_multiply(quarter, quarter) == pytest.approx(half)


def test_multiply_composes_xyz_order() -> None:
    """Test that XYZ order is the product of single-axis rotations x * y * z"""
    qx = euler_to_quaternion((0.4, 0.0, 0.0), "XYZ")
    qy = euler_to_quaternion((0.0, -0.8, 0.0), "XYZ")
    qz = euler_to_quaternion((0.0, 0.0, 1.1), "XYZ")

    expected = euler_to_quaternion((0.4, -0.8, 1.1), "XYZ")
    assert quaternion_multiply(quaternion_multiply(qx, qy), qz) == pytest.approx(expected)


def test_unsupported_order() -> None:
    with pytest.raises(ValueError, match="Unsupported Euler order"):
        euler_to_quaternion((0.0, 0.0, 0.0), "YXZ")


def test_clamp() -> None:
    assert clamp(1.0000001, -1, 1) == 1
    assert clamp(-2.0, -1, 1) == -1
    assert clamp(0.5, -1, 1) == 0.5
