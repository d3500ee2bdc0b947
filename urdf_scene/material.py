import logging
from collections.abc import Iterable
from dataclasses import replace

from .config import SceneConfig
from .errors import TransformError
from .model import Color, ColorMaterial, KnownMaterial, Link, Material, NamedMaterial, Visual

__all__ = ["material_lookup", "global_textures", "populate_material"]

logger = logging.getLogger(__name__)


def material_lookup(materials: Iterable[Material]) -> dict[str, Color | str]:
    """Build the robot-level material table

    Args:
        materials: Robot-level material declarations

    Returns:
        Dict mapping material names to their color, or to their texture URL when no color is given.
        Later declarations overwrite earlier ones with the same name.
    """
    lookup = {}
    for material in materials:
        value = material.color if material.color is not None else material.texture
        if material.name is None or value is None:
            logger.warning("Skipping robot-level material without name or content: %s", material)
            continue
        lookup[material.name] = value
    return lookup


def global_textures(lookup: dict[str, Color | str]) -> dict[str, str]:
    """Texture entries of a material table, keyed by the material name"""
    return {name: value for name, value in lookup.items() if isinstance(value, str)}


def _resolve(
    visual: Visual,
    global_material: dict[str, Color | str],
    texture: dict[str, str],
    config: SceneConfig,
) -> tuple[Visual, dict[str, str]]:
    """Resolve the material of a single visual

    Args:
        visual: Visual with a declared material
        global_material: Robot-level material table
        texture: Texture keys synthesized so far
        config: Transform settings

    Returns:
        Tuple of (visual with a KnownMaterial, texture keys synthesized by this visual)

    Raises:
        TransformError: If the material references an unknown name
    """
    material = visual.material
    if material is None or isinstance(material, (NamedMaterial, ColorMaterial)):
        return visual, {}

    if material.color is not None:
        known: KnownMaterial | None = ColorMaterial(material.color)
        new_texture = {}
    elif material.name is not None:
        if material.name not in global_material:
            raise TransformError(f"unknown material: {material.name}")
        value = global_material[material.name]
        known = NamedMaterial(material.name) if isinstance(value, str) else ColorMaterial(value)
        new_texture = {}
    elif material.texture is not None:
        key = f"{config.texture_prefix}{len(texture)}"
        logger.debug("Synthesized texture key %s for %s", key, material.texture)
        known = NamedMaterial(key)
        new_texture = {key: material.texture}
    else:
        known = None
        new_texture = {}

    return replace(visual, material=known), new_texture


def populate_material(
    links: Iterable[Link],
    global_material: dict[str, Color | str],
    config: SceneConfig | None = None,
) -> tuple[tuple[Link, ...], dict[str, str]]:
    """Replace every declared visual material with a KnownMaterial

    Inline colors are kept, names are resolved against the robot-level table
    (texture materials keep their name as texture key) and inline textures get
    a fresh key numbered across all links.

    Args:
        links: Links to resolve
        global_material: Robot-level material table from material_lookup
        config: Transform settings, defaults to SceneConfig()

    Returns:
        Tuple of (resolved links, dict mapping synthesized texture keys to URLs)

    Raises:
        TransformError: If a visual references an unknown material name
    """
    config = config or SceneConfig()

    updated_links = []
    texture: dict[str, str] = {}
    for link in links:
        visuals = []
        for visual in link.visual:
            resolved, new_texture = _resolve(visual, global_material, texture, config)
            visuals.append(resolved)
            texture = {**texture, **new_texture}
        updated_links.append(replace(link, visual=tuple(visuals)))

    return tuple(updated_links), texture
