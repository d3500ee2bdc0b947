from .result import Failure, format_error

__all__ = ["URDFError", "ParseError", "TransformError"]


class URDFError(ValueError):
    """Base class for errors raised while reading or transforming a robot description"""


class ParseError(URDFError):
    """Robot description does not match the supported URDF subset

    Attributes:
        failure: The failure returned by the extractor
    """

    def __init__(self, failure: Failure):
        self.failure = failure
        super().__init__(format_error(failure.errors))


class TransformError(URDFError):
    """Decoded robot violates a cross-element invariant (unknown reference, root count)"""
