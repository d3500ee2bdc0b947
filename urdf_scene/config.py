from dataclasses import dataclass

from .model import Color

__all__ = ["SceneConfig"]


@dataclass(frozen=True)
class SceneConfig:
    """Settings of the scene transform

    Attributes:
        precision: Decimal digits kept in realigned cylinder rotations
        texture_prefix: Prefix of texture keys synthesized for inline textures
        default_color: (r, g, b, a) color of visuals without material
    """

    precision: int = 5
    texture_prefix: str = "_texture"
    default_color: Color = (1.0, 1.0, 1.0, 1.0)
