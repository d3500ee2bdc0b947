import logging
from dataclasses import dataclass, replace

from .config import SceneConfig
from .kinematics import JointSchema, LinkNode, assemble_scene, get_root_link, joint_schema
from .material import global_textures, material_lookup, populate_material
from .model import Robot

__all__ = ["Scene", "transform"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Scene:
    """Resolved robot ready for code generation

    Attributes:
        robot: Robot whose visuals only carry KnownMaterial (or no material)
        texture: Dict mapping texture keys to URLs, robot-level texture materials first
        root: Name of the root link
        root_node: Kinematic tree starting at the root link
        joints: Actuation parameters of every joint, in declaration order
    """

    robot: Robot
    texture: dict[str, str]
    root: str
    root_node: LinkNode
    joints: tuple[JointSchema, ...]


def transform(robot: Robot, config: SceneConfig | None = None) -> Scene:
    """Resolve materials and assemble the kinematic tree of a decoded robot

    Args:
        robot: Decoded robot model, left unchanged
        config: Transform settings, defaults to SceneConfig()

    Returns:
        Scene for the robot

    Raises:
        TransformError: On unknown material or link references, or if the robot does not have exactly one root
    """
    config = config or SceneConfig()

    global_material = material_lookup(robot.material)
    links, local_texture = populate_material(robot.link, global_material, config)
    texture = {**global_textures(global_material), **local_texture}

    resolved = replace(robot, link=links)
    root = get_root_link(resolved)
    root_node = assemble_scene(resolved, config)

    logger.info("Transformed robot '%s': root '%s', %d textures", robot.name, root, len(texture))
    return Scene(robot=resolved, texture=texture, root=root, root_node=root_node, joints=joint_schema(robot.joint))
