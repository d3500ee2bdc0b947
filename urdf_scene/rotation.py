"""Euler angle and quaternion conversions.

Quaternions are (w, x, y, z). Euler angles are always given as rotations
about (x, y, z); the order names the sequence in which the axes are
composed, following three.js: "XYZ" is R = Rx @ Ry @ Rz and "ZYX" is
R = Rz @ Ry @ Rx (URDF roll-pitch-yaw).
"""

import math
from typing import Literal

from .model import Vector3, Vector4

__all__ = [
    "Quaternion",
    "EulerOrder",
    "clamp",
    "euler_to_quaternion",
    "quaternion_multiply",
    "quaternion_to_euler",
]

Quaternion = Vector4

EulerOrder = Literal["XYZ", "ZYX"]

# |sin(pitch)| at or above this is treated as gimbal lock
GIMBAL_LOCK_THRESHOLD = 0.9999999


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(value, upper))


def euler_to_quaternion(angles: Vector3, order: EulerOrder) -> Quaternion:
    """Convert Euler angles to a unit quaternion

    Args:
        angles: Rotation about (x, y, z) in radians
        order: Axis composition order, "XYZ" or "ZYX"

    Returns:
        (w, x, y, z) unit quaternion

    Raises:
        ValueError: If order is not supported
    """
    x, y, z = angles
    c1, c2, c3 = math.cos(0.5 * x), math.cos(0.5 * y), math.cos(0.5 * z)
    s1, s2, s3 = math.sin(0.5 * x), math.sin(0.5 * y), math.sin(0.5 * z)

    if order == "XYZ":
        return (
            c1 * c2 * c3 - s1 * s2 * s3,
            s1 * c2 * c3 + c1 * s2 * s3,
            c1 * s2 * c3 - s1 * c2 * s3,
            c1 * c2 * s3 + s1 * s2 * c3,
        )
    elif order == "ZYX":
        return (
            c1 * c2 * c3 + s1 * s2 * s3,
            s1 * c2 * c3 - c1 * s2 * s3,
            c1 * s2 * c3 + s1 * c2 * s3,
            c1 * c2 * s3 - s1 * s2 * c3,
        )
    else:
        raise ValueError(f"Unsupported Euler order: {order}")


def quaternion_multiply(q1: Quaternion, q2: Quaternion) -> Quaternion:
    """Hamilton product q1 * q2 (rotation q2 applied first, then q1)"""
    w1, x1, y1, z1 = q1
    w2, x2, y2, z2 = q2
    return (
        w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
        w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
        w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
        w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
    )


def quaternion_to_euler(quat: Quaternion, order: EulerOrder) -> Vector3:
    """Convert a unit quaternion to Euler angles

    At gimbal lock the rotation is described with two axes only: the z angle is
    zeroed for "XYZ" and the x angle for "ZYX".

    Args:
        quat: (w, x, y, z) unit quaternion
        order: Axis composition order, "XYZ" or "ZYX"

    Returns:
        Rotation about (x, y, z) in radians

    Raises:
        ValueError: If order is not supported
    """
    qw, qx, qy, qz = quat
    wx, wy, wz = qw * qx, qw * qy, qw * qz
    xx, xy, xz = qx * qx, qx * qy, qx * qz
    yy, yz, zz = qy * qy, qy * qz, qz * qz

    if order == "XYZ":
        t = 2 * (xz + wy)
        y = math.asin(clamp(t, -1.0, 1.0))
        if abs(t) < GIMBAL_LOCK_THRESHOLD:
            return (
                math.atan2(2 * (wx - yz), 1 - 2 * (xx + yy)),
                y,
                math.atan2(2 * (wz - xy), 1 - 2 * (yy + zz)),
            )
        return (math.atan2(2 * (yz + wx), 1 - 2 * (xx + zz)), y, 0.0)
    elif order == "ZYX":
        t = 2 * (wy - xz)
        y = math.asin(clamp(t, -1.0, 1.0))
        if abs(t) < GIMBAL_LOCK_THRESHOLD:
            return (
                math.atan2(2 * (yz + wx), 1 - 2 * (xx + yy)),
                y,
                math.atan2(2 * (xy + wz), 1 - 2 * (yy + zz)),
            )
        return (0.0, y, math.atan2(2 * (wz - xy), 1 - 2 * (xx + zz)))
    else:
        raise ValueError(f"Unsupported Euler order: {order}")
