import logging
from pathlib import Path

from lxml import etree

from .element import Element, parse_xml, prune
from .errors import ParseError
from .extractors import (
    Extractor,
    attribute,
    check,
    child,
    children,
    combine,
    enum,
    float_,
    into,
    many,
    one,
    one_of,
    only,
    optional,
    string,
    tag,
    vector3,
    vector4,
)
from .model import (
    JOINT_TYPES,
    LIMITED_JOINT_TYPES,
    Box,
    Collision,
    Cylinder,
    Joint,
    Limit,
    Link,
    Material,
    Mesh,
    Origin,
    Robot,
    Sphere,
    Visual,
)

__all__ = ["ROBOT", "GEOMETRY", "URDFParser", "decode_robot", "parse_urdf"]

logger = logging.getLogger(__name__)

# mostly follows https://github.com/ros/urdfdom/blob/master/xsd/urdf.xsd

joint_type = enum("joint type", JOINT_TYPES)

ORIGIN: Extractor = into(Origin, attribute(xyz=optional(vector3), rpy=optional(vector3)))

AXIS: Extractor = only(attribute(xyz=vector3))

LIMIT: Extractor = into(Limit, attribute(lower=float_, upper=float_))

LINK_REF: Extractor = only(attribute(link=string))

JOINT: Extractor = check(
    into(
        Joint,
        combine(
            attribute(name=string, type=joint_type),
            children(
                origin=optional(ORIGIN),
                parent=one(LINK_REF),
                child=one(LINK_REF),
                axis=optional(AXIS),
                limit=optional(LIMIT),
            ),
        ),
    ),
    lambda joint: joint.type not in LIMITED_JOINT_TYPES or joint.limit is not None,
    lambda joint: f"Joint type {joint.type} requires limit: {joint.name}",
)

COLOR: Extractor = only(attribute(rgba=vector4))

TEXTURE: Extractor = only(attribute(filename=string))

MATERIAL: Extractor = into(
    Material,
    combine(
        attribute(name=optional(string)),
        children(color=optional(COLOR), texture=optional(TEXTURE)),
    ),
)

BOX: Extractor = into(Box, combine(tag("box"), attribute(size=vector3)))

CYLINDER: Extractor = into(Cylinder, combine(tag("cylinder"), attribute(radius=float_, length=float_)))

SPHERE: Extractor = into(Sphere, combine(tag("sphere"), attribute(radius=float_)))

MESH: Extractor = into(Mesh, combine(tag("mesh"), attribute(filename=string, scale=optional(vector3))))

GEOMETRY: Extractor = child(one_of(BOX, CYLINDER, SPHERE, MESH))

VISUAL: Extractor = into(
    Visual,
    children(origin=optional(ORIGIN), geometry=one(GEOMETRY), material=optional(MATERIAL)),
)

COLLISION: Extractor = into(Collision, children(origin=optional(ORIGIN), geometry=one(GEOMETRY)))

LINK: Extractor = into(
    Link,
    combine(
        attribute(name=string, type=optional(string)),
        children(visual=many(VISUAL), collision=many(COLLISION)),
    ),
)

ROBOT: Extractor = into(
    Robot,
    combine(
        attribute(name=string),
        children(link=many(LINK), joint=many(JOINT), material=many(MATERIAL)),
    ),
)


def decode_robot(element: Element) -> Robot:
    """Decode a robot element tree

    Args:
        element: Root element, unknown descendants are pruned before decoding

    Returns:
        Robot model

    Raises:
        ParseError: If the tree does not match the supported URDF subset
    """
    result = ROBOT(prune(element))
    if not result.success:
        raise ParseError(result)

    robot = result.value
    logger.info(
        "Decoded robot '%s': %d links, %d joints, %d materials",
        robot.name,
        len(robot.link),
        len(robot.joint),
        len(robot.material),
    )
    return robot


def parse_urdf(text: str | bytes) -> Robot:
    """Parse URDF text into Robot model

    Args:
        text: URDF document

    Returns:
        Robot model

    Raises:
        etree.XMLSyntaxError: If XML is malformed
        ParseError: If the document does not match the supported URDF subset
    """
    return decode_robot(parse_xml(text))


class URDFParser:
    """Parser for URDF files

    Attributes:
        xml_path: Path to URDF file
    """

    def __init__(self, xml_path: Path | str):
        """Initialize parser

        Args:
            xml_path: Path to URDF file
        """
        self.xml_path = Path(xml_path)

    def _load(self) -> Element:
        """Load URDF file into an element tree

        Raises:
            FileNotFoundError: If URDF file doesn't exist
            etree.XMLSyntaxError: If XML is malformed
        """
        if not self.xml_path.exists():
            raise FileNotFoundError(f"URDF file not found: {self.xml_path}")

        logger.debug("Loading %s", self.xml_path)
        tree = etree.parse(str(self.xml_path))
        return Element.from_lxml(tree.getroot())

    def parse(self) -> Robot:
        """Parse URDF file into Robot model

        Returns:
            Robot model

        Raises:
            ParseError: If the file does not match the supported URDF subset
        """
        return decode_robot(self._load())
