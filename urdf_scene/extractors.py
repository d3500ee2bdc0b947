"""Combinators turning untyped elements into typed values.

Every extractor returns a Result instead of raising. Record-producing
extractors (attribute, children, combine) yield plain dicts which are later
turned into model objects with `into`.
"""

import math
from collections import defaultdict
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from .element import Element
from .result import Result, Success, failure

__all__ = [
    "Extractor",
    "string",
    "float_",
    "vector3",
    "vector4",
    "enum",
    "tag",
    "attribute",
    "children",
    "child",
    "only",
    "optional",
    "one",
    "many",
    "one_of",
    "combine",
    "into",
    "check",
]

T = TypeVar("T")

Extractor = Callable[[Element], Result]
ElementsExtractor = Callable[[Sequence[Element]], Result]
Decoder = Callable[[str | None], Result]

MISSING = "Missing"


def string(text: str | None) -> Result[str]:
    if text is None:
        return failure(MISSING)
    return Success(text)


def float_(text: str | None) -> Result[float]:
    if text is None:
        return failure(MISSING)

    try:
        value = float(text)
    except ValueError:
        return failure(f'Invalid number: "{text}"')

    if math.isnan(value):
        return failure(f'Invalid number: "{text}"')
    return Success(value)


def _vector(length: int) -> Decoder:
    def decode(text: str | None) -> Result[tuple[float, ...]]:
        if text is None:
            return failure(MISSING)

        try:
            numbers = tuple(float(x) for x in text.split())
        except ValueError:
            return failure(f'Invalid vector{length}: "{text}"')

        if len(numbers) != length or any(math.isnan(x) for x in numbers):
            return failure(f'Invalid vector{length}: "{text}"')
        return Success(numbers)

    decode.__name__ = f"vector{length}"
    return decode


vector3 = _vector(3)
vector4 = _vector(4)


def enum(name: str, values: Sequence[str]) -> Decoder:
    """Decoder accepting only one of a closed set of tokens

    Args:
        name: Human-readable name of the token kind, used in error messages
        values: Accepted tokens

    Returns:
        Decoder returning the token unchanged
    """

    def decode(text: str | None) -> Result[str]:
        if text is None:
            return failure(MISSING)
        if text not in values:
            return failure(f'Invalid {name}: "{text}"')
        return Success(text)

    return decode


def tag(expected: str) -> Extractor:
    """Match the element tag, contributing an empty record on success"""

    def extract(element: Element) -> Result[dict]:
        if element.tag != expected:
            return failure(f"Expected tag: {expected}, received: {element.tag}")
        return Success({})

    return extract


def attribute(**decoders: Decoder) -> Extractor:
    """Decode named attributes into a record

    All attributes are decoded; every invalid one is reported.

    Args:
        decoders: Attribute names mapped to decoders of their raw text (None when absent)

    Returns:
        Extractor producing a dict keyed by attribute name
    """

    def extract(element: Element) -> Result[dict]:
        record = {}
        errors = []
        for name, decoder in decoders.items():
            result = decoder(element.attrib.get(name))
            if result.success:
                record[name] = result.value
            else:
                errors.extend([f'Invalid attribute: "{name}"', result.errors])

        if errors:
            return failure(*errors)
        return Success(record)

    return extract


def children(**extractors: ElementsExtractor) -> Extractor:
    """Group child elements by tag and decode each group into a record field

    Stops at the first group that fails.

    Args:
        extractors: Child tag names mapped to extractors over the matching children
            (an empty sequence when there are none)

    Returns:
        Extractor producing a dict keyed by child tag
    """

    def extract(element: Element) -> Result[dict]:
        groups = defaultdict(list)
        for elem in element.children:
            groups[elem.tag].append(elem)

        record = {}
        for name, extractor in extractors.items():
            result = extractor(groups.get(name, []))
            if not result.success:
                return failure(f"Invalid {element.tag} children: {name}", result.errors)
            record[name] = result.value

        return Success(record)

    return extract


def child(extractor: Extractor) -> Extractor:
    """Apply extractor to the single child of an element"""

    def extract(element: Element) -> Result:
        if len(element.children) != 1:
            return failure(
                f"Expect {element.tag} element to have single child, received: {len(element.children)}"
            )
        return extractor(element.children[0])

    return extract


def only(extractor: Extractor) -> Extractor:
    """Unwrap a single-field record (or single-item sequence) into its value"""

    def extract(element: Element) -> Result:
        result = extractor(element)
        if not result.success:
            return result

        values = list(result.value.values()) if isinstance(result.value, dict) else list(result.value)
        if len(values) != 1:
            return failure(f"Expect single item, received: {values}")
        return Success(values[0])

    return extract


def optional(extractor: Callable[[Any], Result[T]]) -> Callable[[Any], Result[T | None]]:
    """Make an attribute decoder or element extractor optional

    Attribute text: None decodes to None, anything else is delegated.
    Element sequences: zero elements decode to None, one is delegated, more is a failure.
    """

    def extract(arg: str | Sequence[Element] | None) -> Result[T | None]:
        if arg is None:
            return Success(None)
        if isinstance(arg, str):
            return extractor(arg)
        if len(arg) == 0:
            return Success(None)
        if len(arg) > 1:
            return failure(f"Expect elements to have length 0 or 1, received: {len(arg)}")
        return extractor(arg[0])

    return extract


def one(extractor: Extractor) -> ElementsExtractor:
    """Require exactly one element"""

    def extract(elements: Sequence[Element]) -> Result:
        if len(elements) != 1:
            return failure(f"Expect elements to have length 1, received: {len(elements)}")
        return extractor(elements[0])

    return extract


def many(extractor: Extractor) -> ElementsExtractor:
    """Decode zero or more elements, stopping at the first failure"""

    def extract(elements: Sequence[Element] | None) -> Result[tuple]:
        values = []
        for element in elements or ():
            result = extractor(element)
            if not result.success:
                return result
            values.append(result.value)
        return Success(tuple(values))

    return extract


def one_of(*extractors: Extractor) -> Extractor:
    """Return the first successful alternative

    When every alternative fails, the failure lists each alternative's errors in order.
    """

    def extract(element: Element) -> Result:
        errors = []
        for extractor in extractors:
            result = extractor(element)
            if result.success:
                return result
            errors.append(result.errors)
        return failure("No match", *errors)

    return extract


def combine(*extractors: Extractor) -> Extractor:
    """Apply several record extractors to the same element and merge their records

    Stops at the first extractor that fails.
    """

    def extract(element: Element) -> Result[dict]:
        record = {}
        for extractor in extractors:
            result = extractor(element)
            if not result.success:
                return result
            record.update(result.value)
        return Success(record)

    return extract


def into(factory: Callable[..., T], extractor: Extractor) -> Extractor:
    """Build an object from a record, leaving absent (None) fields to their defaults

    Args:
        factory: Callable accepting the record fields as keyword arguments
        extractor: Record extractor

    Returns:
        Extractor producing factory(**record)
    """

    def extract(element: Element) -> Result[T]:
        result = extractor(element)
        if not result.success:
            return result
        return Success(factory(**{k: v for k, v in result.value.items() if v is not None}))

    return extract


def check(extractor: Extractor, predicate: Callable[[Any], bool], message: Callable[[Any], str]) -> Extractor:
    """Validate a decoded value

    Args:
        extractor: Extractor producing the value
        predicate: Returns True when the value is valid
        message: Builds the error message for an invalid value

    Returns:
        Extractor failing with message(value) when predicate(value) is False
    """

    def extract(element: Element) -> Result:
        result = extractor(element)
        if result.success and not predicate(result.value):
            return failure(message(result.value))
        return result

    return extract
