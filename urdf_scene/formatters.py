from abc import ABC, abstractmethod
from typing import Any

from .kinematics import JointNode, LinkNode, MeshNode
from .model import ColorMaterial, NamedMaterial
from .transform import Scene

__all__ = ["StringFormatter", "TreeFormatter", "SchemaFormatter"]

# ANSI color codes
CYAN = "\033[36m"
YELLOW = "\033[33m"
RESET = "\033[0m"


class StringFormatter(ABC):
    """Base class for all string formatters

    Attributes:
        scene: Scene to format
        color: Whether to emit ANSI colors
    """

    def __init__(self, scene: Scene, color: bool = True):
        self.scene = scene
        self.color = color

    @abstractmethod
    def format(self) -> str:
        """Format the scene"""
        pass

    def _colorize(self, text: str, color: str) -> str:
        """Apply ANSI color to text

        Args:
            text: Text to colorize
            color: ANSI color code to apply

        Returns:
            Colorized string, or text unchanged if colors are disabled
        """
        return f"{color}{text}{RESET}" if self.color else text

    def _format_value(self, value: Any) -> str:
        """Format a single value for display

        Args:
            value: Value to format

        Returns:
            Formatted string of the value
        """
        if value is None:
            return "None"
        elif isinstance(value, str):
            return value
        elif isinstance(value, (tuple, list)):
            return f"({', '.join(self._format_value(v) for v in value)})"
        elif isinstance(value, float):
            return f"{value:g}"
        return str(value)

    def _wrap_bars(self, text: str) -> str:
        """Wrap text in horiztonal bars (━)

        Args:
            text: Text to wrap

        Returns:
            Formatted string
        """
        return f"━━━ {text} ━━━"

    def _format_texture_section(self) -> list[str]:
        """Format the texture table, empty if there are no textures"""
        if not self.scene.texture:
            return []

        lines = [self._wrap_bars("TEXTURES"), ""]
        for name, url in self.scene.texture.items():
            lines.append(f"{name}: {url}")
        lines.append("")
        return lines


class TreeFormatter(StringFormatter):
    """Formatter that prints the kinematic tree with the meshes of every link"""

    def format(self) -> str:
        """Format the scene as a tree

        Returns:
            Formatted string
        """
        lines = [self._wrap_bars("ROBOT"), "", self.scene.robot.name, ""]
        lines.append(self._wrap_bars("TREE"))
        lines.append("")
        lines.extend(self._format_link(self.scene.root_node, ""))
        lines.append("")
        lines.extend(self._format_texture_section())

        return "\n".join(lines).rstrip()

    def _format_link(self, node: LinkNode, prefix: str) -> list[str]:
        """Format a link node and its subtree

        Args:
            node: Link node to format
            prefix: Indentation of the node's descendants

        Returns:
            List of formatted lines
        """
        lines = [self._colorize(node.name, CYAN)]
        items: list[MeshNode | JointNode] = [*node.meshes, *node.joints]

        for i, item in enumerate(items):
            last = i == len(items) - 1
            branch = "└─ " if last else "├─ "
            child_prefix = prefix + ("   " if last else "│  ")

            if isinstance(item, MeshNode):
                lines.append(f"{prefix}{branch}{self._format_mesh(item)}")
            else:
                lines.append(f"{prefix}{branch}{self._colorize(item.name, YELLOW)}{self._format_frame(item)}")
                if item.child is not None:
                    child_lines = self._format_link(item.child, child_prefix + "   ")
                    lines.append(f"{child_prefix}└─ {child_lines[0]}")
                    lines.extend(child_lines[1:])

        return lines

    def _format_frame(self, node: JointNode) -> str:
        parts = []
        if node.position is not None:
            parts.append(f"xyz={self._format_value(node.position)}")
        if node.rotation is not None:
            parts.append(f"rpy={self._format_value(node.rotation)}")
        return f" [{' '.join(parts)}]" if parts else ""

    def _format_mesh(self, mesh: MeshNode) -> str:
        """Format a mesh node on a single line

        Args:
            mesh: Mesh node to format

        Returns:
            Formatted string
        """
        parts = [mesh.kind]
        if mesh.args:
            parts.append(f"args={self._format_value(mesh.args)}")
        if mesh.url is not None:
            parts.append(f"url={mesh.url}")
        if mesh.position is not None:
            parts.append(f"xyz={self._format_value(mesh.position)}")
        if mesh.rotation is not None:
            parts.append(f"rotation={self._format_value(mesh.rotation)} {mesh.rotation_order}")
        if mesh.scale is not None:
            parts.append(f"scale={self._format_value(mesh.scale)}")
        if isinstance(mesh.material, NamedMaterial):
            parts.append(f"texture={mesh.material.name}")
        elif isinstance(mesh.material, ColorMaterial):
            parts.append(f"color={self._format_value(mesh.material.color)}")
        return " ".join(parts)


class SchemaFormatter(StringFormatter):
    """Formatter that lists the actuation parameters of every joint"""

    def format(self) -> str:
        """Format the joint schema

        Returns:
            Formatted string
        """
        lines = [self._wrap_bars("JOINTS"), ""]

        for schema in self.scene.joints:
            lines.append(f"Joint: {self._colorize(schema.name, YELLOW)} ({schema.type})")
            for key in ("axis", "offset", "lower", "upper"):
                value = getattr(schema, key)
                if value is not None:
                    lines.append(f"  • {key}: {self._format_value(value)}")
            lines.append("")

        lines.extend(self._format_texture_section())
        return "\n".join(lines).rstrip()
