import logging
import sys
from enum import Enum
from pathlib import Path

import tyro
from lxml import etree

from .config import SceneConfig
from .errors import URDFError
from .formatters import SchemaFormatter, TreeFormatter
from .parsers import URDFParser
from .transform import transform


class Format(Enum):
    tree = TreeFormatter
    schema = SchemaFormatter


def main(
    urdf: Path,
    /,
    format: Format = Format.tree,
    config: SceneConfig = SceneConfig(),
    color: bool = True,
    verbose: bool = False,
) -> None:
    """Resolve materials and the kinematic tree of a URDF file and print the result.

    Args:
        urdf: Path to the URDF file
        format: Output format
        config: Transform settings
        color: Colorize the output
        verbose: Log parsing and transform steps

    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        scene = transform(URDFParser(urdf).parse(), config)
    except (URDFError, FileNotFoundError, etree.XMLSyntaxError) as e:
        print(f"{type(e).__name__}:\n{e}", file=sys.stderr)
        sys.exit(1)

    print(format.value(scene, color=color).format())


def tyro_cli():
    tyro.cli(main, prog="urdf-scene")


if __name__ == "__main__":
    tyro_cli()
