import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Literal

from .config import SceneConfig
from .errors import TransformError
from .model import (
    Box,
    ColorMaterial,
    Cylinder,
    Joint,
    JointType,
    KnownMaterial,
    Link,
    Mesh,
    NamedMaterial,
    Robot,
    Sphere,
    Vector3,
    Visual,
)
from .rotation import EulerOrder, Quaternion, euler_to_quaternion, quaternion_multiply, quaternion_to_euler

__all__ = [
    "MeshKind",
    "MeshNode",
    "JointNode",
    "LinkNode",
    "JointSchema",
    "get_root_link",
    "joint_schema",
    "resolve_url",
    "make_mesh",
    "assemble_scene",
]

logger = logging.getLogger(__name__)

MeshKind = Literal["box", "cylinder", "sphere", "stl", "collada"]

ZERO: Vector3 = (0.0, 0.0, 0.0)

# cylinders are aligned with the z-axis in URDF but with the y-axis in the rendered scene
CYLINDER_ALIGNMENT: Quaternion = euler_to_quaternion((math.pi / 2, 0.0, 0.0), "XYZ")


@dataclass
class MeshNode:
    """Renderable shape of a visual

    Attributes:
        kind: Shape kind (box, cylinder, sphere, stl, collada)
        args: Shape constructor arguments, empty for file meshes
        position: (x, y, z) offset w.r.t. the link frame, None if not specified
        rotation: Euler angles about (x, y, z) in radians, None if not specified
        rotation_order: Axis composition order of rotation
        scale: (x, y, z) scale factors of file meshes, None if not specified
        url: Resource path of file meshes, None for primitives
        material: Resolved material, None for collada meshes which carry their own
    """

    kind: MeshKind
    args: tuple[float, ...] = ()
    position: Vector3 | None = None
    rotation: Vector3 | None = None
    rotation_order: EulerOrder = "ZYX"
    scale: Vector3 | None = None
    url: str | None = None
    material: KnownMaterial | None = None


@dataclass
class JointNode:
    """Joint frame holding its child link

    Attributes:
        name: Name of the joint
        position: (x, y, z) offset w.r.t. the parent link frame, None if not specified
        rotation: (roll, pitch, yaw) w.r.t. the parent link frame in ZYX order, None if not specified
        child: Node of the child link, None until attached
    """

    name: str
    position: Vector3 | None = None
    rotation: Vector3 | None = None
    child: "LinkNode | None" = None


@dataclass
class LinkNode:
    """Link frame holding its meshes and outgoing joints

    Attributes:
        name: Name of the link
        meshes: One node per visual, in declaration order
        joints: Outgoing joints, in joint declaration order
    """

    name: str
    meshes: list[MeshNode] = field(default_factory=list)
    joints: list[JointNode] = field(default_factory=list)


@dataclass(frozen=True)
class JointSchema:
    """Actuation parameters of a joint

    Attributes:
        name: Name of the joint
        type: Type of joint
        axis: (x, y, z) axis of actuation, None for non-actuated types
        offset: (w, x, y, z) rest orientation for rotational joints, (x, y, z) rest position
            for prismatic joints, None otherwise
        lower: Lower limit, None unless the type is limited
        upper: Upper limit, None unless the type is limited
    """

    name: str
    type: JointType
    axis: Vector3 | None = None
    offset: tuple[float, ...] | None = None
    lower: float | None = None
    upper: float | None = None


def get_root_link(robot: Robot) -> str:
    """Find the single link that is not the child of any joint

    Args:
        robot: Robot model

    Returns:
        Name of the root link

    Raises:
        TransformError: If there is no root link or more than one
    """
    child_links = {joint.child for joint in robot.joint}
    root_links = [link.name for link in robot.link if link.name not in child_links]
    if len(root_links) != 1:
        raise TransformError(f"URDF must have only one root, found: {root_links}")
    return root_links[0]


def _make_joint_schema(joint: Joint) -> JointSchema:
    if joint.type in ("fixed", "floating", "planar"):
        return JointSchema(name=joint.name, type=joint.type)

    origin_rpy = joint.origin.rpy if joint.origin and joint.origin.rpy else ZERO
    origin_xyz = joint.origin.xyz if joint.origin and joint.origin.xyz else ZERO
    limited = joint.type in ("revolute", "prismatic")

    if joint.type == "prismatic":
        offset: tuple[float, ...] = origin_xyz
    else:
        offset = euler_to_quaternion(origin_rpy, "ZYX")

    return JointSchema(
        name=joint.name,
        type=joint.type,
        axis=joint.axis,
        offset=offset,
        lower=joint.limit.lower if limited else None,
        upper=joint.limit.upper if limited else None,
    )


def joint_schema(joints: Iterable[Joint]) -> tuple[JointSchema, ...]:
    """Actuation parameters of every joint, in declaration order"""
    return tuple(_make_joint_schema(joint) for joint in joints)


def resolve_url(url: str) -> str:
    """Strip the ROS 'package:/' scheme prefix from a resource URL"""
    return url.removeprefix("package:/")


def make_mesh(visual: Visual, config: SceneConfig | None = None) -> MeshNode:
    """Build the renderable shape of a resolved visual

    Args:
        visual: Visual whose material is a KnownMaterial or None
        config: Transform settings, defaults to SceneConfig()

    Returns:
        MeshNode for the visual geometry
    """
    config = config or SceneConfig()
    geometry = visual.geometry
    xyz = visual.origin.xyz if visual.origin else None
    rpy = visual.origin.rpy if visual.origin else None

    material = visual.material
    if not isinstance(material, (NamedMaterial, ColorMaterial)):
        material = ColorMaterial(config.default_color)

    if isinstance(geometry, Box):
        return MeshNode("box", args=geometry.size, position=xyz, rotation=rpy, material=material)

    elif isinstance(geometry, Cylinder):
        quat = quaternion_multiply(euler_to_quaternion(rpy or ZERO, "ZYX"), CYLINDER_ALIGNMENT)
        rotation = tuple(round(angle, config.precision) for angle in quaternion_to_euler(quat, "XYZ"))
        return MeshNode(
            "cylinder",
            args=(geometry.radius, geometry.radius, geometry.length),
            position=xyz,
            rotation=rotation,
            rotation_order="XYZ",
            material=material,
        )

    elif isinstance(geometry, Sphere):
        return MeshNode("sphere", args=(geometry.radius,), position=xyz, rotation=rpy, material=material)

    elif isinstance(geometry, Mesh):
        if geometry.filename.endswith(".dae"):
            kind, material = "collada", None
        else:
            kind = "stl"
        return MeshNode(
            kind,
            position=xyz,
            rotation=rpy,
            scale=geometry.scale,
            url=resolve_url(geometry.filename),
            material=material,
        )

    raise TypeError(f"Unsupported geometry: {type(geometry).__name__}")


def _make_link_node(link: Link, config: SceneConfig) -> LinkNode:
    return LinkNode(name=link.name, meshes=[make_mesh(visual, config) for visual in link.visual])


def assemble_scene(robot: Robot, config: SceneConfig | None = None) -> LinkNode:
    """Assemble the kinematic tree of a resolved robot

    Joints are attached in declaration order, each one under the node of its
    parent link, and hold the node of their child link. Link nodes are shared,
    so subtrees attached before or after their own parent joint end up in the tree.

    Args:
        robot: Robot whose visual materials are resolved
        config: Transform settings, defaults to SceneConfig()

    Returns:
        Node of the root link

    Raises:
        TransformError: If a joint references an unknown link, a link has more than one parent joint
            or the robot does not have exactly one root
    """
    config = config or SceneConfig()
    link_nodes = {link.name: _make_link_node(link, config) for link in robot.link}
    parent_joints: dict[str, str] = {}

    for joint in robot.joint:
        for name in (joint.parent, joint.child):
            if name not in link_nodes:
                raise TransformError(f"unknown link: {name} (joint {joint.name})")

        # a single parent joint per link also keeps cycles out of the tree
        if joint.child in parent_joints:
            raise TransformError(
                f"link {joint.child} has more than one parent joint: {parent_joints[joint.child]}, {joint.name}"
            )
        parent_joints[joint.child] = joint.name

        origin = joint.origin
        joint_node = JointNode(
            name=joint.name,
            position=origin.xyz if origin else None,
            rotation=origin.rpy if origin else None,
            child=link_nodes[joint.child],
        )
        link_nodes[joint.parent].joints.append(joint_node)
        logger.debug("Attached %s -> %s via %s", joint.parent, joint.child, joint.name)

    return link_nodes[get_root_link(robot)]
