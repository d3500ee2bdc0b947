from pathlib import Path

import pytest
from lxml import etree

from urdf_scene.errors import ParseError
from urdf_scene.model import Box, Cylinder, Joint, Limit, Link, Material, Mesh, Origin, Robot, Sphere, Visual
from urdf_scene.parsers import URDFParser, parse_urdf


@pytest.fixture
def data_dir() -> Path:
    """Path to test data directory"""
    return Path(__file__).parent / "urdf_data"


def make_urdf(body: str, name: str = "test_robot") -> str:
    return f'<?xml version="1.0"?>\n<robot name="{name}">\n{body}\n</robot>'


def test_simple_robot(data_dir: Path) -> None:
    """Test parsing a robot with a single link and no joints"""
    robot = URDFParser(data_dir / "ver_simple_robot.urdf").parse()

    assert robot == Robot(
        name="simple_robot",
        link=(Link(name="base_link", visual=(Visual(geometry=Box(size=(1.0, 2.0, 3.0))),)),),
        joint=(),
        material=(),
    )


def test_complex_robot(data_dir: Path) -> None:
    """Test parsing a robot with materials, several joint types and geometries"""
    robot = URDFParser(data_dir / "ver_r2d2.urdf").parse()

    assert robot.name == "r2d2"
    assert [link.name for link in robot.link] == ["base_link", "right_leg", "head", "gripper_pole", "box"]
    assert [joint.name for joint in robot.joint] == [
        "base_to_right_leg",
        "head_swivel",
        "gripper_extension",
        "tobox",
    ]
    assert [material.name for material in robot.material] == ["blue", "white", "face"]

    assert robot.material[0] == Material(name="blue", color=(0.0, 0.0, 0.8, 1.0))
    assert robot.material[2] == Material(name="face", texture="package://r2d2/textures/face.png")

    base_link = robot.link[0]
    assert base_link.visual[0].geometry == Cylinder(radius=0.2, length=0.6)
    assert base_link.visual[0].material == Material(name="blue")
    assert base_link.collision[0].geometry == Cylinder(radius=0.2, length=0.6)

    head = robot.link[2]
    assert head.visual[0].geometry == Sphere(radius=0.2)
    assert head.visual[1].geometry == Mesh(filename="package://r2d2/meshes/eye.stl", scale=(0.1, 0.1, 0.1))
    assert head.visual[1].material == Material(texture="package://r2d2/textures/eye.png")


def test_joint_fields(data_dir: Path) -> None:
    """Test decoding of joint origin, axis and limit"""
    robot = URDFParser(data_dir / "ver_r2d2.urdf").parse()
    joints = {joint.name: joint for joint in robot.joint}

    assert joints["base_to_right_leg"] == Joint(
        name="base_to_right_leg",
        type="fixed",
        parent="base_link",
        child="right_leg",
        origin=Origin(xyz=(0.0, -0.22, 0.25)),
    )
    assert joints["head_swivel"].axis == (0.0, 0.0, 1.0)
    assert joints["gripper_extension"].limit == Limit(lower=-0.38, upper=0.0)
    assert joints["tobox"].origin == Origin(xyz=(0.1814, 0.0, 0.1414), rpy=(0.0, 0.0, 1.5708))


def test_default_axis() -> None:
    """Test that joints without axis element use (1, 0, 0)"""
    robot = parse_urdf(
        make_urdf(
            """
            <link name="a"/><link name="b"/>
            <joint name="joint1" type="continuous"><parent link="a"/><child link="b"/></joint>
            """
        )
    )

    joint = robot.joint[0]
    assert joint.axis == (1.0, 0.0, 0.0)
    assert joint.origin is None
    assert joint.limit is None


def test_partial_origin() -> None:
    """Test that missing xyz/rpy stay absent instead of defaulting to zero"""
    robot = parse_urdf(
        make_urdf(
            """
            <link name="a">
              <visual><origin xyz="1 2 3"/><geometry><sphere radius="1"/></geometry></visual>
              <visual><origin/><geometry><sphere radius="1"/></geometry></visual>
            </link>
            """
        )
    )

    assert robot.link[0].visual[0].origin == Origin(xyz=(1.0, 2.0, 3.0), rpy=None)
    assert robot.link[0].visual[1].origin == Origin()


def test_missing_joint_type(data_dir: Path) -> None:
    """Test that a missing joint type reports the joint and the attribute"""
    with pytest.raises(ParseError) as exc_info:
        URDFParser(data_dir / "err_missing_joint_type.urdf").parse()

    message = str(exc_info.value)
    assert "joint" in message
    assert "type" in message
    assert message.splitlines() == [
        "Invalid robot children: joint",
        '  Invalid attribute: "type"',
        "    Missing",
    ]


def test_invalid_joint_type() -> None:
    """Test that joint types outside the closed set are rejected"""
    urdf = make_urdf(
        """
        <link name="a"/><link name="b"/>
        <joint name="j" type="hinge"><parent link="a"/><child link="b"/></joint>
        """
    )

    with pytest.raises(ParseError, match='Invalid joint type: "hinge"'):
        parse_urdf(urdf)


def test_revolute_joint_requires_limit() -> None:
    """Test that revolute joints without limit are rejected"""
    urdf = make_urdf(
        """
        <link name="a"/><link name="b"/>
        <joint name="j" type="revolute"><parent link="a"/><child link="b"/></joint>
        """
    )

    with pytest.raises(ParseError, match="Joint type revolute requires limit: j"):
        parse_urdf(urdf)


def test_joint_requires_single_parent() -> None:
    """Test cardinality errors on joint children"""
    urdf = make_urdf(
        """
        <link name="a"/><link name="b"/>
        <joint name="j" type="fixed"><parent link="a"/><parent link="b"/><child link="b"/></joint>
        """
    )

    with pytest.raises(ParseError) as exc_info:
        parse_urdf(urdf)

    assert str(exc_info.value).splitlines() == [
        "Invalid robot children: joint",
        "  Invalid joint children: parent",
        "    Expect elements to have length 1, received: 2",
    ]


def test_invalid_vec3(data_dir: Path) -> None:
    """Test that invalid vector3 format raises ParseError"""
    with pytest.raises(ParseError, match='Invalid vector3: "1 2"'):
        URDFParser(data_dir / "err_invalid_vec3.urdf").parse()


def test_invalid_vec4() -> None:
    """Test that invalid vector4 format raises ParseError"""
    urdf = make_urdf('<material name="m"><color rgba="1 0 0"/></material>')

    with pytest.raises(ParseError, match='Invalid vector4: "1 0 0"'):
        parse_urdf(urdf)


def test_parse_error_is_value_error() -> None:
    """Test that parse errors keep the ValueError contract and the failure value"""
    with pytest.raises(ValueError) as exc_info:
        parse_urdf("<robot/>")

    assert isinstance(exc_info.value, ParseError)
    assert not exc_info.value.failure.success


def test_geometry_requires_single_shape() -> None:
    """Test that an empty geometry is rejected"""
    urdf = make_urdf('<link name="a"><visual><geometry/></visual></link>')

    with pytest.raises(ParseError, match="Expect geometry element to have single child, received: 0"):
        parse_urdf(urdf)


def test_unknown_elements_are_ignored() -> None:
    """Test that elements outside the supported subset are dropped silently"""
    robot = parse_urdf(
        make_urdf(
            """
            <gazebo reference="a"><material>Gazebo/Blue</material></gazebo>
            <transmission name="t"/>
            <link name="a">
              <inertial><mass value="1"/></inertial>
              <visual><geometry><box size="1 1 1"/></geometry></visual>
            </link>
            """
        )
    )

    assert robot.link == (Link(name="a", visual=(Visual(geometry=Box(size=(1.0, 1.0, 1.0))),)),)


def test_missing_xml_file(data_dir: Path) -> None:
    """Test that missing URDF file raises FileNotFoundError"""
    parser = URDFParser(data_dir / "nonexistent.urdf")

    with pytest.raises(FileNotFoundError, match="URDF file not found"):
        parser.parse()


def test_invalid_xml(data_dir: Path) -> None:
    """Test that invalid XML raises XMLSyntaxError"""
    parser = URDFParser(data_dir / "err_invalid_xml.urdf")

    with pytest.raises(etree.XMLSyntaxError):
        parser.parse()
