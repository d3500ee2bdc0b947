from dataclasses import dataclass
from typing import Literal, Union

__all__ = [
    "Vector3",
    "Vector4",
    "Color",
    "JointType",
    "JOINT_TYPES",
    "LIMITED_JOINT_TYPES",
    "Origin",
    "Limit",
    "Joint",
    "Material",
    "NamedMaterial",
    "ColorMaterial",
    "KnownMaterial",
    "Geometry",
    "Box",
    "Cylinder",
    "Sphere",
    "Mesh",
    "Visual",
    "Collision",
    "Link",
    "Robot",
]

Vector3 = tuple[float, float, float]
Vector4 = tuple[float, float, float, float]
Color = Vector4

JointType = Literal["revolute", "continuous", "prismatic", "fixed", "floating", "planar"]

JOINT_TYPES: tuple[JointType, ...] = ("revolute", "continuous", "prismatic", "fixed", "floating", "planar")
LIMITED_JOINT_TYPES: tuple[JointType, ...] = ("revolute", "prismatic")


@dataclass(frozen=True)
class Origin:
    """Position and orientation of a frame w.r.t. its parent frame

    Attributes:
        xyz: (x, y, z) position in meters, None if not specified
        rpy: (roll, pitch, yaw) fixed-axis rotation in radians, None if not specified
    """

    xyz: Vector3 | None = None
    rpy: Vector3 | None = None


@dataclass(frozen=True)
class Limit:
    """Joint limits

    Attributes:
        lower: Lower joint limit (radians for revolute, meters for prismatic)
        upper: Upper joint limit (radians for revolute, meters for prismatic)
    """

    lower: float
    upper: float


@dataclass(frozen=True)
class Joint:
    """Joint connecting two links

    Attributes:
        name: Name of the joint
        type: Type of joint (revolute, continuous, prismatic, fixed, floating, planar)
        parent: Name of the parent link
        child: Name of the child link
        origin: Pose of child link frame w.r.t. parent link frame, None if not specified
        axis: (x, y, z) axis of actuation expressed in the joint frame, defaults to (1.0, 0.0, 0.0)
        limit: Joint limits, required for revolute and prismatic joints
    """

    name: str
    type: JointType
    parent: str
    child: str
    origin: Origin | None = None
    axis: Vector3 = (1.0, 0.0, 0.0)
    limit: Limit | None = None


@dataclass(frozen=True)
class Material:
    """Material as declared in the source

    Attributes:
        name: Name of the material, defaults to None if not specified
        color: (r, g, b, a) color values from 0-1, defaults to None if not specified
        texture: URI to texture file, defaults to None if not specified
    """

    name: str | None = None
    color: Color | None = None
    texture: str | None = None


@dataclass(frozen=True)
class NamedMaterial:
    """Resolved material referring to a texture by its key in the texture map"""

    name: str


@dataclass(frozen=True)
class ColorMaterial:
    """Resolved plain color material"""

    color: Color


KnownMaterial = Union[NamedMaterial, ColorMaterial]


@dataclass(frozen=True)
class Box:
    """Box geometry

    Attributes:
        size: (x, y, z) dimensions in meters
    """

    size: Vector3


@dataclass(frozen=True)
class Cylinder:
    """Cylinder geometry, aligned with the z-axis

    Attributes:
        radius: Radius in meters
        length: Length in meters
    """

    radius: float
    length: float


@dataclass(frozen=True)
class Sphere:
    """Sphere geometry

    Attributes:
        radius: Radius in meters
    """

    radius: float


@dataclass(frozen=True)
class Mesh:
    """Mesh geometry

    Attributes:
        filename: URI to mesh file
        scale: (x, y, z) scale factors, None if not specified
    """

    filename: str
    scale: Vector3 | None = None


Geometry = Union[Box, Cylinder, Sphere, Mesh]


@dataclass(frozen=True)
class Visual:
    """Visual geometry of a link

    Attributes:
        geometry: Geometric shape for visualization
        origin: Pose of visual geometry w.r.t. link frame, None if not specified
        material: Declared Material, or a KnownMaterial once resolved, None if not specified
    """

    geometry: Geometry
    origin: Origin | None = None
    material: Material | KnownMaterial | None = None


@dataclass(frozen=True)
class Collision:
    """Collision geometry of a link

    Attributes:
        geometry: Geometric shape for collision checking
        origin: Pose of collision geometry w.r.t. link frame, None if not specified
    """

    geometry: Geometry
    origin: Origin | None = None


@dataclass(frozen=True)
class Link:
    """Robot link

    Attributes:
        name: Name of the link
        type: Optional link type attribute
        visual: Visual elements in declaration order
        collision: Collision elements in declaration order
    """

    name: str
    type: str | None = None
    visual: tuple[Visual, ...] = ()
    collision: tuple[Collision, ...] = ()


@dataclass(frozen=True)
class Robot:
    """Robot description

    Attributes:
        name: Name of the robot
        link: Links in declaration order
        joint: Joints in declaration order
        material: Robot-level materials in declaration order
    """

    name: str
    link: tuple[Link, ...] = ()
    joint: tuple[Joint, ...] = ()
    material: tuple[Material, ...] = ()
