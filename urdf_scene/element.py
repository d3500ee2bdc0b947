from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from lxml import etree

__all__ = ["Element", "CHILD_ELEMENTS", "parse_xml", "prune"]

# only a subset of urdf elements is processed, see http://wiki.ros.org/urdf/XML
CHILD_ELEMENTS: dict[str, tuple[str, ...]] = {
    "robot": ("link", "joint", "material"),
    "link": ("visual", "collision"),
    "joint": ("origin", "parent", "child", "axis", "limit"),
    "visual": ("origin", "geometry", "material"),
    "collision": ("origin", "geometry"),
    "geometry": ("box", "cylinder", "sphere", "mesh"),
    "material": ("color", "texture"),
}


@dataclass(frozen=True)
class Element:
    """Untyped XML element

    Attributes:
        tag: Tag name of the element
        attrib: Read-only mapping of attribute names to their raw string values
        children: Child elements in document order
    """

    tag: str
    attrib: Mapping[str, str] = field(default_factory=dict, hash=False)
    children: tuple["Element", ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "attrib", MappingProxyType(dict(self.attrib)))

    @classmethod
    def from_lxml(cls, elem: etree._Element) -> "Element":
        """Convert an lxml element, dropping comments, processing instructions and text

        Args:
            elem: Element produced by lxml

        Returns:
            Element tree rooted at elem
        """
        children = tuple(cls.from_lxml(child) for child in elem if isinstance(child.tag, str))
        return cls(tag=etree.QName(elem).localname, attrib=dict(elem.attrib), children=children)


def parse_xml(text: str | bytes) -> Element:
    """Tokenize an XML document

    Args:
        text: XML document

    Returns:
        Root element

    Raises:
        etree.XMLSyntaxError: If XML is malformed
    """
    if isinstance(text, str):
        text = text.encode("utf-8")
    return Element.from_lxml(etree.fromstring(text))


def prune(element: Element) -> Element:
    """Recursively drop child elements that are not legal for their parent tag

    Args:
        element: Element to prune

    Returns:
        New element holding only whitelisted descendants
    """
    allowed = CHILD_ELEMENTS.get(element.tag, ())
    return Element(
        tag=element.tag,
        attrib=element.attrib,
        children=tuple(prune(child) for child in element.children if child.tag in allowed),
    )
