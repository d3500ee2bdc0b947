"""Success/failure values carrying decoded data or nested error messages."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

__all__ = [
    "ErrorLeaf",
    "ErrorGroup",
    "ErrorNode",
    "Success",
    "Failure",
    "Result",
    "failure",
    "format_error",
]

T = TypeVar("T")


@dataclass(frozen=True)
class ErrorLeaf:
    """Single error message"""

    message: str


@dataclass(frozen=True)
class ErrorGroup:
    """Errors one level deeper than their surrounding context"""

    errors: tuple["ErrorNode", ...]


ErrorNode = Union[ErrorLeaf, ErrorGroup]


@dataclass(frozen=True)
class Success(Generic[T]):
    """Decoded value

    Attributes:
        value: The decoded value
    """

    value: T
    success = True


@dataclass(frozen=True)
class Failure:
    """Decode failure

    Attributes:
        errors: Error tree, each group nested one level below its context message
    """

    errors: tuple[ErrorNode, ...]
    success = False


Result = Union[Success[T], Failure]


def _to_node(error: Any) -> ErrorNode:
    if isinstance(error, str):
        return ErrorLeaf(error)
    if isinstance(error, (ErrorLeaf, ErrorGroup)):
        return error
    return ErrorGroup(tuple(_to_node(e) for e in error))


def failure(*errors: str | ErrorNode | Iterable) -> Failure:
    """Build a Failure

    Strings become leaves, iterables (e.g. the errors of an inner failure) become nested groups.

    Args:
        errors: Messages and nested error sequences

    Returns:
        Failure holding the errors in order
    """
    return Failure(tuple(_to_node(e) for e in errors))


def format_error(errors: Iterable[ErrorNode], indent: int = 0) -> str:
    """Render an error tree as indented lines, one line per message

    Args:
        errors: Error tree to render
        indent: Nesting level of the top-level messages, defaults to 0

    Returns:
        Multi-line string, two spaces of indentation per nesting level
    """
    lines = []
    for error in errors:
        if isinstance(error, ErrorLeaf):
            lines.append(f"{'  ' * indent}{error.message}")
        else:
            nested = format_error(error.errors, indent + 1)
            if nested:
                lines.append(nested)
    return "\n".join(lines)
