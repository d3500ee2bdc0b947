from .config import SceneConfig
from .errors import ParseError, TransformError, URDFError
from .parsers import URDFParser, decode_robot, parse_urdf
from .transform import Scene, transform

__all__ = [
    "URDFParser",
    "decode_robot",
    "parse_urdf",
    "transform",
    "Scene",
    "SceneConfig",
    "URDFError",
    "ParseError",
    "TransformError",
]
